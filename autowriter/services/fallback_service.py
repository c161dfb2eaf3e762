"""Deterministic stand-in results used whenever generation fails.

Every builder returns a fully populated, valid result derived from the request
alone, with the failure message written into the body text.
"""

from ..models.chapter import ChapterGenerationRequest
from ..models.generation import ArticleResult, GenerationRequest, NovelOutlineResult, OutlineChapter


def _tags(request: GenerationRequest, defaults: list[str]) -> list[str]:
    tags = [t.strip() for t in (request.tags or []) if t and t.strip()]
    return tags or list(defaults)


def _apology(kind: str, topic: str, error: str) -> str:
    return (
        f"I'm sorry, but I encountered an issue generating the {kind} about \"{topic}\". "
        "This might be due to API limits or content filtering.\n\n"
        "Please try again with a different topic or simplified request.\n\n"
        f"*Error: {error}*"
    )


def article_fallback(request: GenerationRequest, error: str) -> ArticleResult:
    topic = request.topic
    return ArticleResult(
        refined_tags=_tags(request, ["writing", "content", "article"]),
        title_selection=[
            f"{topic} - A Comprehensive Guide",
            f"Exploring {topic} in Depth",
            f"The Complete {topic} Handbook",
        ],
        subtitle_selection=[
            "Understanding the Fundamentals",
            "Practical Applications and Insights",
            "Expert Analysis and Perspectives",
        ],
        content=(
            f"## {topic} - A Comprehensive Guide\n\n"
            f"This is an article about \"{topic}\" written in the style of {request.author_style}.\n\n"
            + _apology("article", topic, error)
        ),
    )


def short_story_fallback(request: GenerationRequest, error: str) -> ArticleResult:
    topic = request.topic
    return ArticleResult(
        refined_tags=_tags(request, ["fiction", "short story", "narrative"]),
        title_selection=[
            f"The {topic}",
            f"Whispers of {topic}",
            f"Beyond {topic}",
        ],
        subtitle_selection=[
            "A Short Story",
            "A Tale of Discovery",
            "A Story of Change",
        ],
        content=(
            f"## The {topic}\n\n"
            f"A short story about \"{topic}\" in the style of {request.author_style}.\n\n"
            + _apology("short story", topic, error)
        ),
    )


def news_fallback(request: GenerationRequest, error: str) -> ArticleResult:
    topic = request.topic
    style = request.newspaper_style or request.author_style
    return ArticleResult(
        refined_tags=_tags(request, ["news", "current events", "journalism"]),
        title_selection=[
            f"Breaking: {topic} - Latest Developments",
            f"{topic} - Major Update in Ongoing Story",
            f"New Developments in {topic} Saga",
        ],
        subtitle_selection=[
            "Comprehensive coverage of the latest developments",
            "Breaking news and analysis from multiple sources",
            "In-depth reporting on current events",
        ],
        content=(
            f"## Breaking News: {topic}\n\n"
            f"A news report on \"{topic}\" in the style of {style}.\n\n"
            + _apology("news article", topic, error)
        ),
    )


def short_news_fallback(request: GenerationRequest, error: str) -> ArticleResult:
    topic = request.topic
    style = request.newspaper_style or request.author_style
    return ArticleResult(
        refined_tags=_tags(request, ["news", "brief", "update"]),
        title_selection=[
            f"{topic}: What We Know",
            f"Quick Update on {topic}",
            f"{topic} in Brief",
        ],
        subtitle_selection=[
            "The key facts at a glance",
            "A short summary of the latest news",
            "What happened and why it matters",
        ],
        content=(
            f"## {topic} in Brief\n\n"
            f"A short news brief on \"{topic}\" in the style of {style}.\n\n"
            + _apology("news brief", topic, error)
        ),
    )


def _outline_entry(number: int, total: int) -> OutlineChapter:
    if number == 1:
        title, subtitle = "Introduction", "Setting the stage and introducing main characters"
    elif number == total:
        title, subtitle = "Resolution", "Climax and satisfying conclusion"
    else:
        title = f"Development {number - 1}"
        subtitle = f"Building tension and character development in part {number - 1} of the story"
    return OutlineChapter(chapter_number=number, title=f"Chapter {number}: {title}", subtitle=subtitle)


def novel_outline_fallback(request: GenerationRequest, error: str) -> NovelOutlineResult:
    topic = request.topic
    total = request.chapter_count or 1
    themes = ", ".join(_tags(request, ["human experience"]))
    return NovelOutlineResult(
        title_selection=[
            f"{topic} - A Novel",
            f"The {topic} Chronicles",
            f"{topic}: A Story",
        ],
        synopsis=(
            f"A compelling story about {topic} that explores themes of {themes} through the "
            f"storytelling style of {request.author_style}.\n\n"
            f"I'm sorry, but I encountered an issue generating the novel outline for \"{topic}\". "
            "Please try regenerating for a more detailed outline.\n\n"
            f"Error: {error}"
        ),
        outline=[_outline_entry(n, total) for n in range(1, total + 1)],
    )


_PLACEHOLDER_NARRATIVE = """\
Dr. Elena Vasquez stared at the blinking console in the dimly lit control room. The signal had come from nowhere, or everywhere. It was unlike anything they had ever detected before.

"This can't be right," she muttered, her fingers flying across the keyboard. The waveform danced across multiple screens, a complex pattern that defied initial analysis.

Her colleague, Dr. Marcus Chen, rushed into the room. "Elena! Did you see this? The signal... it's repeating!"

As they worked through the night, the true nature of the message began to unfold. What they thought was a simple transmission was only the beginning.

Little did they know, this discovery would change everything."""


def chapter_fallback(request: ChapterGenerationRequest, error: str) -> str:
    heading = f"## Chapter {request.chapter_number}: {request.chapter_title}"
    if request.chapter_subtitle:
        heading += f"\n\n{request.chapter_subtitle}"
    return (
        f"{heading}\n\n"
        f"{_PLACEHOLDER_NARRATIVE}\n\n"
        "[This is a placeholder chapter. The AI generation encountered an issue. "
        "Please try regenerating this chapter.]\n\n"
        f"Error: {error}"
    )

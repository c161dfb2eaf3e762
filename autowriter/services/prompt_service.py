from ..models.chapter import ChapterGenerationRequest, PreviousChapter
from ..models.generation import GenerationRequest

# ---------------------------------------------------------------------------
# Shared fragments
# ---------------------------------------------------------------------------

_JSON_RULES = """\
CRITICAL REQUIREMENTS:
- Return ONLY the JSON object, nothing else
- Do not wrap in markdown code blocks (no ```json or ```)
- Do not add any explanatory text before or after
- Ensure all strings are properly quoted with double quotes
- Do not use trailing commas
- Make sure the JSON is valid and parseable"""

_ARTICLE_SHAPE = """\
Return ONLY a valid JSON object in this exact format (no markdown, no code blocks, just raw JSON):

{{
  "refinedTags": ["tag1", "tag2", "tag3", "tag4", "tag5"],
  "titleSelection": ["{title} Option 1", "{title} Option 2", "{title} Option 3"],
  "subtitleSelection": ["{subtitle} Option 1", "{subtitle} Option 2", "{subtitle} Option 3"],
  "content": "{content}"
}}"""

KEY_TEST_PROMPT = "Say 'success' in one word."

_PREVIOUS_CONTENT_EXCERPT = 600


def _language_name(language: str) -> str:
    return "Indonesian (Bahasa Indonesia)" if language == "indonesian" else "English"


def _context_lines(request: GenerationRequest, tags_label: str, keywords_label: str) -> str:
    lines = []
    if request.tags:
        lines.append(f"{tags_label}: {', '.join(request.tags)}")
    if request.keywords:
        lines.append(f"{keywords_label}: {', '.join(request.keywords)}")
    if request.main_idea:
        lines.append(f"Build upon this main idea/concept: {request.main_idea}")
    return "\n".join(lines)


def _assemble(*sections: str) -> str:
    return "\n\n".join(s.strip("\n") for s in sections if s and s.strip())


def _article_shape(title: str, subtitle: str, content: str) -> str:
    return _ARTICLE_SHAPE.format(title=title, subtitle=subtitle, content=content)


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------

def build_article_prompt(request: GenerationRequest) -> str:
    intro = (
        "You are a professional writer. Create a comprehensive, in-depth article of at least "
        f"1500-2000 words in {_language_name(request.language)} about \"{request.topic}\" "
        f"in the writing style of {request.author_style}."
    )
    guidance = """\
Make the article thorough and detailed with:
- Comprehensive introduction with historical/technical background
- Multiple detailed main sections (at least 4-5 sections)
- In-depth analysis with examples and case studies
- Practical applications and real-world implications
- Research-based insights and data where applicable
- Detailed conclusion with future outlook and recommendations

Use markdown headings (##, ###) for sections inside the content string."""
    shape = _article_shape(
        "Title",
        "Subtitle",
        "Write the complete 1500-2000 word article here with extensive sections and detailed analysis.",
    )
    return _assemble(
        intro,
        _context_lines(request, "Include these themes and tags", "Incorporate these keywords naturally throughout"),
        guidance,
        shape,
        _JSON_RULES,
    )


def build_short_story_prompt(request: GenerationRequest) -> str:
    intro = (
        f"You are a masterful storyteller. Create a complete short story in "
        f"{_language_name(request.language)} about \"{request.topic}\" in the writing style of "
        f"{request.author_style}."
    )
    guidance = """\
Write a comprehensive short story of at least 2250-3000 words that includes:
- A compelling beginning that hooks the reader
- Well-developed characters with depth and motivation
- Rich setting descriptions that enhance the atmosphere
- A clear conflict that drives the narrative
- Rising action with increasing tension
- A satisfying climax and resolution
- Natural dialogue that reveals character and advances plot

The story should have a complete narrative arc with a beginning, middle, and end."""
    shape = _article_shape(
        "Story Title",
        "Subtitle",
        "Write the complete 2250-3000 word short story here.",
    )
    return _assemble(
        intro,
        _context_lines(request, "Incorporate these themes", "Include these elements"),
        guidance,
        shape,
        _JSON_RULES,
    )


def build_news_prompt(request: GenerationRequest) -> str:
    style = request.newspaper_style or request.author_style
    intro = (
        "You are a professional news journalist. Create a comprehensive news article of at least "
        f"1200-1800 words in {_language_name(request.language)} about \"{request.topic}\" "
        f"in the writing style of {style}."
    )
    guidance = """\
Write a news article that includes:
- A compelling headline and lead paragraph
- Who, what, when, where, why, and how details
- Background information and context
- Multiple sources and perspectives
- Facts, quotes, and data where applicable
- Analysis of implications and impact
- Expert opinions and stakeholder reactions

The article should be journalistic, objective, and well-researched."""
    shape = _article_shape(
        "News Headline",
        "Lead Paragraph",
        "Write the complete 1200-1800 word news article here.",
    )
    return _assemble(
        intro,
        _context_lines(request, "Include these themes and tags", "Incorporate these keywords naturally throughout"),
        guidance,
        shape,
        _JSON_RULES,
    )


def build_short_news_prompt(request: GenerationRequest) -> str:
    style = request.newspaper_style or request.author_style
    intro = (
        "You are a professional news journalist. Write a concise news brief of 300-500 words in "
        f"{_language_name(request.language)} about \"{request.topic}\" in the writing style of {style}."
    )
    guidance = """\
The brief must:
- Open with a lead paragraph answering who, what, when and where
- Follow the inverted pyramid: most important facts first
- Include one short quote or attributed statement where plausible
- Stay objective and avoid speculation"""
    shape = _article_shape(
        "Headline",
        "Lead Sentence",
        "Write the complete 300-500 word news brief here.",
    )
    return _assemble(
        intro,
        _context_lines(request, "Include these themes and tags", "Incorporate these keywords"),
        guidance,
        shape,
        _JSON_RULES,
    )


def build_novel_outline_prompt(request: GenerationRequest) -> str:
    chapter_count = request.chapter_count or 1
    intro = (
        f"You are a creative novelist. Create a novel outline in {_language_name(request.language)} "
        f"about \"{request.topic}\" in the style of {request.author_style}."
    )
    shape = """\
Return ONLY a valid JSON object in this exact format (no markdown, no code blocks, just raw JSON):

{
  "titleSelection": ["First Novel Title", "Second Novel Title", "Third Novel Title"],
  "synopsis": "Write a 150-200 word synopsis of the novel here.",
  "outline": [
    {
      "chapterNumber": 1,
      "title": "Chapter 1 Title",
      "subtitle": "Brief description of chapter 1"
    },
    {
      "chapterNumber": 2,
      "title": "Chapter 2 Title",
      "subtitle": "Brief description of chapter 2"
    }
  ]
}"""
    return _assemble(
        intro,
        _context_lines(request, "Include these themes", "Incorporate these elements"),
        f"Create an outline for exactly {chapter_count} chapters.",
        shape,
        _JSON_RULES + f"\n- Ensure the outline array has exactly {chapter_count} chapters",
    )


def _previous_chapter_summary(chapter: PreviousChapter) -> str:
    header = f"Chapter {chapter.chapter_number}: {chapter.title}".rstrip(": ")
    if chapter.key_events:
        events = "\n".join(f"  - {event}" for event in chapter.key_events)
        return f"{header}\n  Key events:\n{events}"
    excerpt = chapter.content.strip()
    if len(excerpt) > _PREVIOUS_CONTENT_EXCERPT:
        excerpt = "..." + excerpt[-_PREVIOUS_CONTENT_EXCERPT:]
    return f"{header}\n  Ending: {excerpt}" if excerpt else header


def build_chapter_prompt(request: ChapterGenerationRequest) -> str:
    intro = f"Write a detailed chapter for the novel \"{request.novel_title}\"."
    synopsis = f"Novel Synopsis: {request.novel_synopsis}" if request.novel_synopsis else ""
    chapter = f"Chapter {request.chapter_number}: \"{request.chapter_title}\""
    if request.chapter_subtitle:
        chapter += f"\nChapter Description: {request.chapter_subtitle}"

    previous = ""
    if request.previous_chapters:
        ordered = sorted(request.previous_chapters, key=lambda c: c.chapter_number)
        summaries = "\n".join(_previous_chapter_summary(c) for c in ordered)
        previous = (
            "Previously in the novel:\n"
            f"{summaries}\n\n"
            "This chapter must stay consistent with these events, characters and facts. "
            "Do not repeat or contradict them; pick up where the story left off."
        )

    guidance = """\
Write a comprehensive chapter of 2000-3000 words that:
- Advances the plot in a meaningful way
- Develops characters and relationships
- Includes vivid descriptions and dialogue
- Maintains consistency with the novel's tone and style
- Builds tension or provides important revelations
- Ends in a way that leads naturally to the next chapter

Return only the chapter content without any JSON formatting or additional text."""
    return _assemble(intro, synopsis, chapter, previous, guidance)

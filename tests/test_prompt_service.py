"""Tests for prompt construction."""

import pytest

from autowriter.models.chapter import ChapterGenerationRequest
from autowriter.models.generation import GenerationRequest
from autowriter.services import prompt_service
from autowriter.services.generation_service import CONTENT_VARIANTS


def _request(content_type: str, **overrides) -> GenerationRequest:
    fields = {
        "topic": "Urban beekeeping",
        "author_style": "Mary Roach",
        "content_type": content_type,
        "language": "english",
        "chapter_count": 5 if content_type == "novel" else None,
    }
    fields.update(overrides)
    return GenerationRequest(**fields)


@pytest.mark.parametrize("content_type", sorted(CONTENT_VARIANTS))
def test_prompts_are_deterministic_and_ask_for_json(content_type):
    build = CONTENT_VARIANTS[content_type].build_prompt
    request = _request(content_type, tags=["bees"], keywords=["honey"], main_idea="Rooftop hives")

    first = build(request)

    assert first == build(request)
    assert "Urban beekeeping" in first
    assert "Return ONLY the JSON object" in first
    assert "bees" in first
    assert "honey" in first
    assert "Rooftop hives" in first


def test_article_prompt_lists_the_json_keys():
    prompt = prompt_service.build_article_prompt(_request("article"))

    for key in ("refinedTags", "titleSelection", "subtitleSelection", "content"):
        assert f'"{key}"' in prompt
    assert "Mary Roach" in prompt


def test_indonesian_language_is_named():
    prompt = prompt_service.build_article_prompt(_request("article", language="indonesian"))

    assert "Indonesian (Bahasa Indonesia)" in prompt


def test_news_prompt_prefers_newspaper_style():
    prompt = prompt_service.build_news_prompt(_request("news", newspaper_style="The Economist"))

    assert "writing style of The Economist" in prompt


def test_novel_prompt_fixes_chapter_count():
    prompt = prompt_service.build_novel_outline_prompt(_request("novel"))

    assert "exactly 5 chapters" in prompt
    assert '"outline"' in prompt


def test_chapter_prompt_without_history_is_free_text():
    request = ChapterGenerationRequest(chapter_number=1, chapter_title="Arrival", novel_title="Hive")

    prompt = prompt_service.build_chapter_prompt(request)

    assert 'Chapter 1: "Arrival"' in prompt
    assert "Previously in the novel" not in prompt
    assert "without any JSON formatting" in prompt


def test_chapter_prompt_uses_tail_of_long_previous_content():
    long_content = "x" * 1000 + "THE END"
    request = ChapterGenerationRequest(
        chapter_number=2,
        chapter_title="Swarm",
        novel_title="Hive",
        previous_chapters=[{"chapterNumber": 1, "title": "Arrival", "content": long_content}],
    )

    prompt = prompt_service.build_chapter_prompt(request)

    assert "THE END" in prompt
    assert "x" * 1000 not in prompt
    assert "consistent with these events" in prompt

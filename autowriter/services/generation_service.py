import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol, Union

from pydantic import ValidationError as PydanticValidationError

from ..errors import AutoWriterError, ValidationError
from ..models.chapter import ChapterGenerationRequest
from ..models.generation import ArticleResult, ContentType, GenerationRequest, NovelOutlineResult
from . import fallback_service, prompt_service
from .gemini_service import ModelTier
from .parser_service import clean_chapter_text, parse_json_response

logger = logging.getLogger(__name__)

GenerationResult = Union[ArticleResult, NovelOutlineResult]

CHAPTER_TIER = ModelTier.FAST
MIN_CHAPTER_LENGTH = 100


class TextGenerator(Protocol):
    async def generate(self, prompt: str, api_key: str, tier: ModelTier = ModelTier.FAST) -> str: ...


# ---------------------------------------------------------------------------
# Validation of parsed model output
# ---------------------------------------------------------------------------

def _describe(exc: PydanticValidationError) -> str:
    problems = [
        f"{'.'.join(str(part) for part in err['loc']) or 'response'}: {err['msg']}"
        for err in exc.errors()[:5]
    ]
    return "Invalid response structure from model: " + "; ".join(problems)


def _validate_article(data: dict[str, Any], request: GenerationRequest) -> ArticleResult:
    try:
        return ArticleResult.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc)) from exc


def _validate_outline(data: dict[str, Any], request: GenerationRequest) -> NovelOutlineResult:
    expected = request.chapter_count or 1
    outline = data.get("outline")
    if isinstance(outline, list):
        # List order is authoritative; models often misnumber or skip chapterNumber.
        data = {
            **data,
            "outline": [
                {**entry, "chapterNumber": number} if isinstance(entry, dict) else entry
                for number, entry in enumerate(outline, start=1)
            ],
        }
    try:
        result = NovelOutlineResult.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc)) from exc

    if len(result.outline) != expected:
        raise ValidationError(
            f"Outline has {len(result.outline)} chapters, expected {expected}",
            {"expected": expected, "actual": len(result.outline)},
        )
    return result


# ---------------------------------------------------------------------------
# Content variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ContentVariant:
    label: str
    build_prompt: Callable[[GenerationRequest], str]
    validate: Callable[[dict[str, Any], GenerationRequest], GenerationResult]
    build_fallback: Callable[[GenerationRequest, str], GenerationResult]
    tier: ModelTier = ModelTier.HIGH_QUALITY


CONTENT_VARIANTS: dict[ContentType, ContentVariant] = {
    "article": ContentVariant(
        label="article",
        build_prompt=prompt_service.build_article_prompt,
        validate=_validate_article,
        build_fallback=fallback_service.article_fallback,
    ),
    "shortstory": ContentVariant(
        label="short story",
        build_prompt=prompt_service.build_short_story_prompt,
        validate=_validate_article,
        build_fallback=fallback_service.short_story_fallback,
    ),
    "news": ContentVariant(
        label="news article",
        build_prompt=prompt_service.build_news_prompt,
        validate=_validate_article,
        build_fallback=fallback_service.news_fallback,
    ),
    "shortnews": ContentVariant(
        label="news brief",
        build_prompt=prompt_service.build_short_news_prompt,
        validate=_validate_article,
        build_fallback=fallback_service.short_news_fallback,
    ),
    "novel": ContentVariant(
        label="novel outline",
        build_prompt=prompt_service.build_novel_outline_prompt,
        validate=_validate_outline,
        build_fallback=fallback_service.novel_outline_fallback,
    ),
}


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------

async def generate_content(
    request: GenerationRequest,
    api_key: str,
    client: TextGenerator,
) -> GenerationResult:
    """
    Run prompt → model → parse → validate for the request's content type.

    Never raises: any failure along the way is logged and answered with the
    variant's fallback result, which carries the error message in its text.
    """
    variant = CONTENT_VARIANTS[request.content_type]
    try:
        prompt = variant.build_prompt(request)
        raw = await client.generate(prompt, api_key, tier=variant.tier)
        data = parse_json_response(raw)
        result = variant.validate(data, request)
        logger.info("Generated %s for topic %r.", variant.label, request.topic)
        return result
    except AutoWriterError as exc:
        logger.warning("%s generation failed (%s); using fallback.", variant.label.capitalize(), exc)
        return variant.build_fallback(request, str(exc))
    except Exception as exc:
        logger.exception("Unexpected error during %s generation; using fallback.", variant.label)
        return variant.build_fallback(request, str(exc) or type(exc).__name__)


async def generate_chapter(
    request: ChapterGenerationRequest,
    api_key: str,
    client: TextGenerator,
) -> str:
    """Chapter prose for one outline entry; a placeholder chapter on any failure."""
    try:
        prompt = prompt_service.build_chapter_prompt(request)
        raw = await client.generate(prompt, api_key, tier=CHAPTER_TIER)
        text = clean_chapter_text(raw)
        if len(text) < MIN_CHAPTER_LENGTH:
            raise ValidationError("Generated chapter is too short", {"length": len(text)})
        logger.info("Generated chapter %d of %r (%d chars).", request.chapter_number, request.novel_title, len(text))
        return text
    except AutoWriterError as exc:
        logger.warning("Chapter %d generation failed (%s); using placeholder.", request.chapter_number, exc)
        return fallback_service.chapter_fallback(request, str(exc))
    except Exception as exc:
        logger.exception("Unexpected error generating chapter %d; using placeholder.", request.chapter_number)
        return fallback_service.chapter_fallback(request, str(exc) or type(exc).__name__)

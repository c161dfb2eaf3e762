from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field, StringConstraints, model_validator
from pydantic.alias_generators import to_camel

ContentType = Literal["article", "shortstory", "novel", "news", "shortnews"]
Language = Literal["english", "indonesian"]

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


# Model-written prose; rejected when blank but never trimmed.
NonBlankText = Annotated[str, AfterValidator(_require_text)]

MAX_CHAPTERS = 200


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON keys (the browser UI speaks camelCase)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerationRequest(CamelModel):
    topic: NonBlankStr
    tags: Optional[list[str]] = None
    keywords: Optional[list[str]] = None
    author_style: NonBlankStr
    content_type: ContentType = Field(
        ...,
        validation_alias=AliasChoices("contentType", "type", "content_type"),
        description="Older clients send this under 'type'.",
    )
    newspaper_style: Optional[str] = None
    chapter_count: Optional[int] = Field(default=None, ge=1, le=MAX_CHAPTERS)
    language: Language
    main_idea: Optional[str] = None
    api_key: Optional[str] = None

    @model_validator(mode="after")
    def require_chapter_count_for_novels(self) -> "GenerationRequest":
        if self.content_type == "novel" and self.chapter_count is None:
            raise ValueError("chapterCount is required for novel type")
        return self


class ArticleResult(CamelModel):
    """
    Result shape for article, shortstory, news and shortnews.

    Prompts ask for three title and subtitle options and fallbacks always carry
    three, but any non-empty list from the model is accepted.
    """

    refined_tags: list[NonBlankStr] = Field(..., min_length=1)
    title_selection: list[NonBlankStr] = Field(..., min_length=1)
    subtitle_selection: list[NonBlankStr] = Field(..., min_length=1)
    content: NonBlankText


class OutlineChapter(CamelModel):
    chapter_number: int = Field(..., ge=1)
    title: NonBlankStr
    subtitle: NonBlankStr


class NovelOutlineResult(CamelModel):
    title_selection: list[NonBlankStr] = Field(..., min_length=1)
    synopsis: NonBlankText
    outline: list[OutlineChapter] = Field(..., min_length=1)


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None

from typing import Optional

from pydantic import Field

from .generation import CamelModel, NonBlankStr


class PreviousChapter(CamelModel):
    chapter_number: int = Field(..., ge=1)
    title: str = ""
    content: str = ""
    key_events: Optional[list[str]] = Field(
        default=None,
        description="Short plot points; preferred over content when building continuity context.",
    )


class ChapterGenerationRequest(CamelModel):
    chapter_number: int = Field(..., ge=1)
    chapter_title: NonBlankStr
    chapter_subtitle: str = ""
    novel_title: NonBlankStr
    novel_synopsis: str = ""
    previous_chapters: list[PreviousChapter] = Field(default_factory=list)
    api_key: Optional[str] = None


class ChapterResult(CamelModel):
    content: str

from typing import Optional

from pydantic import Field

from .generation import CamelModel, NonBlankStr


class ExportRequest(CamelModel):
    title: NonBlankStr
    subtitle: Optional[str] = None
    content: NonBlankStr


class ChapterExportRequest(CamelModel):
    chapter_number: int = Field(default=1, ge=1)
    chapter_title: NonBlankStr
    chapter_subtitle: Optional[str] = None
    content: NonBlankStr

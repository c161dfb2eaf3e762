import asyncio
import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import Response

from ..models.export import ChapterExportRequest, ExportRequest
from ..services.pdf_service import build_chapter_pdf, build_pdf
from ..services.rtf_service import build_chapter_rtf, build_rtf, slugify_filename

router = APIRouter(prefix="/api", tags=["Export"])
logger = logging.getLogger(__name__)

RTF_MEDIA_TYPE = "application/rtf"


def _attachment(content: bytes, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ─────────────────────────────────────────────
# RTF
# ─────────────────────────────────────────────

@router.post("/export-rtf", response_class=Response)
@router.post("/export-docx", response_class=Response, include_in_schema=False)
async def export_rtf_route(request: ExportRequest) -> Response:
    document = build_rtf(request.title, request.subtitle, request.content)
    return _attachment(document, RTF_MEDIA_TYPE, f"{slugify_filename(request.title)}.rtf")


@router.post("/export-chapter-rtf", response_class=Response)
@router.post("/export-chapter", response_class=Response, include_in_schema=False)
async def export_chapter_rtf_route(request: ChapterExportRequest) -> Response:
    document = build_chapter_rtf(
        request.chapter_number,
        request.chapter_title,
        request.chapter_subtitle,
        request.content,
    )
    filename = f"{slugify_filename(request.chapter_title)}_chapter_{request.chapter_number}.rtf"
    return _attachment(document, RTF_MEDIA_TYPE, filename)


# ─────────────────────────────────────────────
# PDF
# ─────────────────────────────────────────────

@router.post("/export-pdf", response_class=Response)
async def export_pdf_route(request: ExportRequest) -> Response:
    try:
        document = await asyncio.to_thread(build_pdf, request.title, request.subtitle, request.content)
    except Exception as exc:
        logger.exception("PDF export failed for %r", request.title)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"PDF generation failed: {exc}",
        )
    return _attachment(document, "application/pdf", f"{slugify_filename(request.title)}.pdf")


@router.post("/export-chapter-pdf", response_class=Response)
async def export_chapter_pdf_route(request: ChapterExportRequest) -> Response:
    try:
        document = await asyncio.to_thread(
            build_chapter_pdf,
            request.chapter_number,
            request.chapter_title,
            request.chapter_subtitle,
            request.content,
        )
    except Exception as exc:
        logger.exception("PDF export failed for chapter %d", request.chapter_number)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"PDF generation failed: {exc}",
        )
    filename = f"{slugify_filename(request.chapter_title)}_chapter_{request.chapter_number}.pdf"
    return _attachment(document, "application/pdf", filename)

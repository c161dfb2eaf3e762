from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

router = APIRouter(tags=["UI"])


@router.get("/", include_in_schema=False)
@router.get("/index.html", include_in_schema=False)
def main_page() -> FileResponse:
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


@router.get("/settings", include_in_schema=False)
def settings_page() -> FileResponse:
    return FileResponse(STATIC_DIR / "settings.html", media_type="text/html")


@router.get("/health")
def health():
    return {"ok": True}

from fastapi import APIRouter, Depends

from ..config import Settings, get_settings
from ..dependencies import get_gemini_client, resolve_api_key
from ..models.chapter import ChapterGenerationRequest, ChapterResult
from ..models.generation import ErrorResponse, GenerationRequest
from ..services.gemini_service import GeminiClient
from ..services.generation_service import GenerationResult, generate_chapter, generate_content

router = APIRouter(prefix="/api", tags=["Generate"])

_ERRORS = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


# ─────────────────────────────────────────────
# POST /api/generate
# Prompt → Gemini (pro, flash fallback) → parse → validate, fallback on failure
# ─────────────────────────────────────────────

@router.post(
    "/generate",
    response_model=GenerationResult,
    responses=_ERRORS,
    summary="Generate an article, story, news piece or novel outline",
    description=(
        "Always answers 200 with a well-formed result once the request is valid and a key is "
        "available. When generation fails, the result is a deterministic fallback whose text "
        "carries the error message."
    ),
)
async def generate_route(
    request: GenerationRequest,
    settings: Settings = Depends(get_settings),
    client: GeminiClient = Depends(get_gemini_client),
) -> GenerationResult:
    api_key = resolve_api_key(request.api_key, settings)
    return await generate_content(request, api_key, client)


# ─────────────────────────────────────────────
# POST /api/generate-chapter
# ─────────────────────────────────────────────

@router.post("/generate-chapter", response_model=ChapterResult, responses=_ERRORS)
async def generate_chapter_route(
    request: ChapterGenerationRequest,
    settings: Settings = Depends(get_settings),
    client: GeminiClient = Depends(get_gemini_client),
) -> ChapterResult:
    api_key = resolve_api_key(request.api_key, settings)
    content = await generate_chapter(request, api_key, client)
    return ChapterResult(content=content)

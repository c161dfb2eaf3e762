from typing import Optional

from fastapi import Depends

from .config import Settings, get_settings
from .errors import CredentialError
from .services.gemini_service import GeminiClient


def get_gemini_client(settings: Settings = Depends(get_settings)) -> GeminiClient:
    return GeminiClient(settings)


def resolve_api_key(body_key: Optional[str], settings: Settings) -> str:
    """Request body key first, then the configured GEMINI_API_KEY."""
    api_key = (body_key or "").strip() or settings.gemini_api_key.strip()
    if not api_key:
        raise CredentialError("Gemini API key is required. Please set it in settings or environment.")
    return api_key

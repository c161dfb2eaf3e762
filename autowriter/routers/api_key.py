import logging

from fastapi import APIRouter, Depends

from ..dependencies import get_gemini_client
from ..errors import CredentialError
from ..models.api_key import ApiKeyTestRequest, ApiKeyTestResult
from ..models.generation import ErrorResponse
from ..responses import error_response
from ..services.gemini_service import GeminiClient

router = APIRouter(prefix="/api", tags=["API Key"])
logger = logging.getLogger(__name__)


@router.post(
    "/test-key",
    response_model=ApiKeyTestResult,
    responses={400: {"model": ErrorResponse}},
    summary="Check that a Gemini API key can produce a completion",
)
async def check_api_key_route(
    request: ApiKeyTestRequest,
    client: GeminiClient = Depends(get_gemini_client),
):
    try:
        is_valid = await client.test_api_key(request.api_key)
    except CredentialError as exc:
        logger.warning("API key test rejected: %s", exc)
        return error_response(400, "API key test failed", str(exc))

    if not is_valid:
        return error_response(
            400,
            "Invalid API key or API access denied",
            "Please check that your API key is correct and has access to Gemini API",
        )

    return ApiKeyTestResult(success=True, message="API key is valid")

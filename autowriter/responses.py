from typing import Optional

from fastapi.responses import JSONResponse

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}

PREFLIGHT_HEADERS = {
    **CORS_HEADERS,
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def error_response(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    body = {"error": error}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body, headers=CORS_HEADERS)

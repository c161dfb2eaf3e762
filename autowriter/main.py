import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .errors import AutoWriterError, InternalError
from .responses import CORS_HEADERS, PREFLIGHT_HEADERS, error_response
from .routers.api_key import router as api_key_router
from .routers.export import router as export_router
from .routers.generate import router as generate_router
from .routers.ui import router as ui_router

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
logger = logging.getLogger(__name__)

app = FastAPI(title="AI Article Auto Writer")

app.include_router(ui_router)
app.include_router(generate_router)
app.include_router(api_key_router)
app.include_router(export_router)


@app.middleware("http")
async def allow_any_origin(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.options("/{path:path}", include_in_schema=False)
async def preflight(path: str) -> Response:
    return Response(status_code=200, headers=PREFLIGHT_HEADERS)


# ─────────────────────────────────────────────
# Error handlers
# ─────────────────────────────────────────────

def _field_name(loc: tuple) -> str:
    return ".".join(str(part) for part in loc[1:]) or str(loc[0])


def _error_message(error: dict) -> str:
    return error.get("msg", "").removeprefix("Value error, ")


def _is_unreadable_body(error: dict) -> bool:
    if error.get("type") == "json_invalid":
        return True
    # Missing body, or a JSON value that is not an object.
    return tuple(error.get("loc", ())) == ("body",) and error.get("type") in (
        "missing",
        "model_attributes_type",
        "dict_type",
    )


@app.exception_handler(AutoWriterError)
async def autowriter_error_handler(request: Request, exc: AutoWriterError):
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    details = ", ".join(f"{key}={value}" for key, value in exc.details.items()) or None
    return error_response(exc.status_code, exc.message, details)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()

    if any(_is_unreadable_body(err) for err in errors):
        logger.warning("Unreadable request body on %s: %s", request.url.path, errors)
        internal = InternalError()
        return error_response(internal.status_code, internal.message, "Request body must be a JSON object")

    missing = [_field_name(tuple(err["loc"])) for err in errors if err.get("type") == "missing"]
    if missing:
        message = f"Missing required fields: {', '.join(missing)}"
    else:
        message = _error_message(errors[0])
    details = "; ".join(f"{_field_name(tuple(err['loc']))}: {_error_message(err)}" for err in errors)
    return error_response(400, message, details)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not Found", status_code=404, headers=CORS_HEADERS)
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    internal = InternalError()
    return error_response(internal.status_code, internal.message)

"""Exception hierarchy shared by the services and the HTTP layer."""

from typing import Optional


class AutoWriterError(Exception):
    """Base exception; ``status_code`` is what the HTTP layer answers with."""

    status_code = 500

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# ---- Request errors ----

class ValidationError(AutoWriterError):
    """Missing or malformed request fields, or a model answer that fails validation."""

    status_code = 400


class CredentialError(AutoWriterError):
    """Missing or unusable API key."""

    status_code = 400


class QuotaExceededError(CredentialError):
    def __init__(self, message: str = "", details: Optional[dict] = None):
        super().__init__(
            message
            or "API quota exceeded. You have reached your free tier limit. "
            "Please upgrade your plan or wait for quota reset.",
            details,
        )


class AccessDeniedError(CredentialError):
    def __init__(self, message: str = "", details: Optional[dict] = None):
        super().__init__(
            message or "API access denied. Please check that your API key has Gemini API enabled.",
            details,
        )


# ---- Upstream errors ----

class UpstreamError(AutoWriterError):
    """Base class for failures talking to the Gemini API."""

    status_code = 502


class UpstreamTransportError(UpstreamError):
    """The request never produced an HTTP response."""


class UpstreamTimeoutError(UpstreamTransportError):
    def __init__(self, timeout: float):
        super().__init__(f"Request timed out after {timeout:g} seconds", {"timeout": timeout})
        self.timeout = timeout


class UpstreamAPIError(UpstreamError):
    def __init__(self, status: int, body: str = "", message: str = ""):
        super().__init__(
            message or f"Gemini API error: {status} - {body[:300]}",
            {"status": status},
        )
        self.status = status
        self.body = body


class UpstreamContentError(UpstreamError):
    """The API answered but the completion is unusable. Retrying will not help."""


class ContentBlockedError(UpstreamContentError):
    def __init__(self, finish_reason: str):
        super().__init__(
            "Response was blocked by safety filters. Please try a different prompt.",
            {"finish_reason": finish_reason},
        )
        self.finish_reason = finish_reason


class EmptyCompletionError(UpstreamContentError):
    def __init__(self, message: str = "Empty response from Gemini API"):
        super().__init__(message)


# ---- Parsing ----

class ParseError(AutoWriterError):
    status_code = 502

    def __init__(self, raw_text: str):
        self.raw_excerpt = raw_text[:300]
        super().__init__(
            f"Unable to parse Gemini response as JSON. Response start: {self.raw_excerpt}",
            {"raw_excerpt": self.raw_excerpt},
        )


class InternalError(AutoWriterError):
    status_code = 500

    def __init__(self, message: str = "Internal server error", details: Optional[dict] = None):
        super().__init__(message, details)

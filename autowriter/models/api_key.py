from .generation import CamelModel, NonBlankStr


class ApiKeyTestRequest(CamelModel):
    api_key: NonBlankStr


class ApiKeyTestResult(CamelModel):
    success: bool
    message: str

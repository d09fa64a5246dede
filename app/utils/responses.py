"""JSON error bodies in the shape each endpoint family answers with."""

from fastapi.responses import JSONResponse

from app.core.exceptions import MissingFieldError, RateLimitedError, RegistrationAppError


def error_response(exc: RegistrationAppError, flag: str = "success") -> JSONResponse:
    """
    Render ``exc`` as ``{flag: false, message}`` with the error's status code.

    ``flag`` is ``"success"`` for most endpoints and ``"verified"`` for OTP
    verification.
    """
    content = {flag: False, "message": exc.message}
    headers = None
    if isinstance(exc, MissingFieldError) and exc.fields:
        content["missing"] = exc.fields
    if isinstance(exc, RateLimitedError):
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


def unexpected_error_response(message: str, flag: str = "success") -> JSONResponse:
    return JSONResponse(status_code=500, content={flag: False, "message": message})

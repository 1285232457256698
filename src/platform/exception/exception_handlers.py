from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger

# Type alias for exception handlers (compatible with Starlette's expected signature)
ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


def _envelope(
    *, status_code: int, message: str, errors: list[dict[str, Any]] | None = None
) -> JSONResponse:
    content: dict[str, Any] = {'success': False, 'message': message}
    if errors:
        content['errors'] = errors
    return JSONResponse(status_code=status_code, content=content)


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc), 500)
    return _envelope(status_code=error.status_code, message=error.message, errors=error.errors)


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    errors = [
        # drop the leading 'body'/'query'/'path' segment so paths match the payload
        {'path': list(item.get('loc', ()))[1:], 'message': item.get('msg', '')}
        for item in error.errors()
    ]
    return _envelope(
        status_code=status.HTTP_400_BAD_REQUEST, message='Validation Error', errors=errors
    )


async def integrity_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Unique ticket link / unique payment per reservation lost a race
    Logger.base.warning(f'⚠️ [DB] Integrity conflict on {request.method} {request.url.path}')
    return _envelope(
        status_code=status.HTTP_409_CONFLICT,
        message='Request conflicts with the current state, please retry',
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.opt(exception=exc).error(
        f'❌ Unhandled {type(exc).__name__} on {request.method} {request.url.path}'
    )
    return _envelope(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, message='Internal Server Error'
    )


# Exception handler mapping
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    RequestValidationError: validation_error_handler,
    IntegrityError: integrity_error_handler,
    Exception: general_500_exception_handler,  # Catch-all for unhandled exceptions
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)

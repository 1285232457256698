from typing import Any, Optional


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(
        self, message: str, status_code: int, errors: Optional[list[dict[str, Any]]] = None
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(CustomBaseError):
    def __init__(
        self,
        message: str = 'Validation Error',
        errors: Optional[list[dict[str, Any]]] = None,
    ) -> None:
        super().__init__(message, 400, errors)

    @classmethod
    def for_field(cls, path: list[str | int], message: str) -> 'ValidationError':
        return cls(message, errors=[{'path': path, 'message': message}])


class UnauthorizedError(CustomBaseError):
    def __init__(self, message: str = 'User not authenticated') -> None:
        super().__init__(message, 401)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class PaymentFailedError(ConflictError):
    """Raised after a Failed payment attempt has been persisted."""

    def __init__(self, message: str = 'Payment failed, please retry') -> None:
        super().__init__(message)

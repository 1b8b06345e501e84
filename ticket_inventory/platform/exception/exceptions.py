from typing import Optional


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class UnavailableError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 503)


class LoadError(CustomBaseError):
    """Event or its tickets could not be fetched; fatal to initialization."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ValidationError(DomainError):
    """Draft failed a required-field or ticket invariant check before submit."""

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message, 400)
        self.field = field


class InvalidWindowError(ValidationError):
    def __init__(self, message: str = 'Sale start date must be on or before the sale end date') -> None:
        super().__init__(message, field='sale_start')


class PersistenceError(CustomBaseError):
    """A repository call was rejected, timed out or was cancelled."""

    def __init__(self, message: str, *, cause: Optional[CustomBaseError] = None) -> None:
        super().__init__(message, cause.status_code if cause else 503)
        self.cause = cause

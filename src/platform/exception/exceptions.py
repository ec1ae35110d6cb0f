class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    kind: str = 'internal_error'

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(CustomBaseError):
    kind = 'validation_error'

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    kind = 'not_found'

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    kind = 'conflict'

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class RepositoryError(CustomBaseError):
    kind = 'repository_error'

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message, status_code)


class StorageTimeoutError(RepositoryError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 504)


class ServiceUnavailableError(CustomBaseError):
    kind = 'service_unavailable'

    def __init__(self, message: str) -> None:
        super().__init__(message, 503)

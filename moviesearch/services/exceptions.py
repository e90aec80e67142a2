"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class MovieApiError(ServiceError):
    """Raised by the OMDb client when a request cannot produce a result."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

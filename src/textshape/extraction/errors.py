"""Extraction-related error classes."""

from ..utils.errors import TextshapeError


class ExtractionError(TextshapeError):
    """Base error for extraction failures."""

    pass


class RequestShapeError(ExtractionError):
    """Incoming request is missing ``data`` or ``format`` or has the wrong types."""

    pass


class SchemaError(ExtractionError):
    """Shape description cannot be compiled into a validator."""

    def __init__(self, message: str, path: str = "$") -> None:
        super().__init__(f"{message} (at {path})")
        self.path = path


class ParseError(ExtractionError):
    """Completion text is not valid JSON."""

    def __init__(self, message: str, raw: str | None = None) -> None:
        super().__init__(message)
        self.raw = raw


class ValidationError(ExtractionError):
    """Parsed JSON does not match the compiled template."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class ProviderError(ExtractionError):
    """Error from the completion provider (API error, rate limit, etc.)."""

    def __init__(self, message: str, provider: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class ExhaustedRetriesError(ExtractionError):
    """Retry budget consumed without an accepted completion."""

    def __init__(self, cause: Exception, attempts: int) -> None:
        super().__init__(
            f"Extraction failed after {attempts} attempts: {type(cause).__name__}: {cause}"
        )
        self.cause = cause
        self.attempts = attempts
        self.__cause__ = cause

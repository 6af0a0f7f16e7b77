"""Data models for extraction requests, attempts and results."""

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from .errors import ExhaustedRetriesError, ExtractionError

Role = Literal["system", "user", "assistant"]
AttemptOutcome = Literal["pending", "accepted", "parse_error", "validation_error", "error"]


class Message(BaseModel):
    """One role-tagged message sent to a completion provider."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class ExtractionRequest(BaseModel):
    """Outer request body: the text to convert and the expected shape."""

    data: StrictStr
    format: dict[str, Any] = Field(..., description="Shape description using marker values")


@dataclass
class Attempt:
    """State of a single try within one extraction."""

    number: int
    remaining: int
    raw_text: str | None = None
    parsed: Any = None
    outcome: AttemptOutcome = "pending"
    error: Exception | None = None


@dataclass
class ExtractionResult:
    """Terminal outcome of an extraction.

    Exactly one of ``data`` (on success) or ``error`` (on failure) is meaningful.
    ``data`` may legitimately be None when the template's top level allows null.
    """

    success: bool
    attempts: int
    data: Any = None
    error: ExhaustedRetriesError | None = None

    def unwrap(self) -> Any:
        """Return the validated data or raise the terminal error.

        Raises:
            ExhaustedRetriesError: If the extraction failed
            ExtractionError: If a failed result carries no error
        """
        if not self.success:
            raise self.error or ExtractionError("Extraction failed")
        return self.data

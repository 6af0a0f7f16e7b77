"""Extraction orchestrator: prompt, complete, parse, validate, retry.

Coordinates the compiled validator, the prompt builder, the completion
client and the retry combinator for one extraction at a time.
"""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..utils.json_utils import JSONParsingError, safe_json_loads
from ..utils.retry import DEFAULT_RETRY_CONFIG, RetryConfig, retry
from .clients import BaseCompletionClient
from .compiler import Validator, compile_template
from .errors import (
    ExhaustedRetriesError,
    ParseError,
    RequestShapeError,
    ValidationError,
)
from .models import Attempt, AttemptOutcome, ExtractionRequest, ExtractionResult
from .prompts import build_messages

logger = logging.getLogger(__name__)

# Extra attempts after the first one (6 tries in total)
DEFAULT_MAX_RETRIES = 5


def parse_completion(text: str | None) -> Any:
    """Parse completion text as a bare JSON document.

    Raises:
        ParseError: If the text is empty or not valid JSON
    """
    try:
        return safe_json_loads(text)
    except JSONParsingError as e:
        excerpt = (text or "")[:100]
        raise ParseError(f"Invalid JSON output: {e}", raw=excerpt) from e


class ExtractionOrchestrator:
    """Turns unstructured text into data matching a template.

    Example:
        >>> orchestrator = ExtractionOrchestrator(ClaudeCompletionClient())
        >>> result = await orchestrator.extract("Name: Jane, Age: 30", {"name": "", "age": 0})
        >>> result.unwrap()
        {'name': 'Jane', 'age': 30}
    """

    def __init__(
        self,
        client: BaseCompletionClient,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            client: Completion provider used for every attempt
            max_retries: Extra attempts after the first one
            retry_config: Optional wait settings between attempts
        """
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")

        self.client = client
        self.max_retries = max_retries
        self.retry_config = retry_config

    async def extract_request(self, payload: Any) -> ExtractionResult:
        """Validate a ``{data, format}`` request body and run the extraction.

        Args:
            payload: Decoded request body

        Returns:
            ExtractionResult for the request

        Raises:
            RequestShapeError: If ``data`` or ``format`` is missing or mistyped
            SchemaError: If ``format`` cannot be compiled
        """
        try:
            request = ExtractionRequest.model_validate(payload)
        except PydanticValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}"
                for err in e.errors()
            )
            raise RequestShapeError(f"Invalid request: {problems}") from e

        return await self.extract(request.data, request.format)

    async def extract(self, data: str, template: Any) -> ExtractionResult:
        """Extract structured data from ``data`` in the shape of ``template``.

        The template is compiled once, before any provider call, and the
        resulting validator is shared by every attempt.

        Args:
            data: Unstructured input text
            template: Template, or a raw shape description

        Returns:
            ExtractionResult with the validated data, or with an
            ExhaustedRetriesError wrapping the last failure

        Raises:
            RequestShapeError: If ``data`` is not a string
            SchemaError: If the template cannot be compiled
            Exception: Any attempt error outside ``retry_config.retry_on``
        """
        if not isinstance(data, str):
            raise RequestShapeError(f"'data' must be a string, got {type(data).__name__}")

        validator = compile_template(template)
        history: list[Attempt] = []

        async def run_attempt() -> Any:
            attempt = Attempt(
                number=len(history) + 1,
                remaining=self.max_retries - len(history),
            )
            history.append(attempt)
            return await self._run_attempt(attempt, data, validator)

        retry_on = (self.retry_config or DEFAULT_RETRY_CONFIG).retry_on
        try:
            value = await retry(self.max_retries, run_attempt, self.retry_config)
        except Exception as e:
            if not isinstance(e, retry_on):
                raise
            error = ExhaustedRetriesError(e, attempts=len(history))
            return ExtractionResult(success=False, attempts=len(history), error=error)

        logger.info(f"Extraction succeeded on attempt {len(history)} of {self.max_retries + 1}")
        return ExtractionResult(success=True, attempts=len(history), data=value)

    async def _run_attempt(self, attempt: Attempt, data: str, validator: Validator) -> Any:
        """Run one try: complete, parse, validate."""
        messages = build_messages(data, validator.template)

        try:
            attempt.raw_text = await self.client.complete(messages)
            attempt.parsed = parse_completion(attempt.raw_text)
            value = validator.validate(attempt.parsed)
        except ParseError as e:
            self._record_failure(attempt, "parse_error", e)
            raise
        except ValidationError as e:
            self._record_failure(attempt, "validation_error", e)
            raise
        except Exception as e:
            self._record_failure(attempt, "error", e)
            raise

        attempt.outcome = "accepted"
        logger.debug(f"Attempt {attempt.number} accepted")
        return value

    def _record_failure(self, attempt: Attempt, outcome: AttemptOutcome, error: Exception) -> None:
        attempt.outcome = outcome
        attempt.error = error
        logger.debug(
            f"Attempt {attempt.number} failed ({outcome}, {attempt.remaining} retries left): "
            f"{error}"
        )

"""Structured extraction from unstructured text.

This package compiles shape templates into validators and drives a
completion provider until it returns JSON that passes validation.
"""

from .compiler import Validator, compile_template
from .errors import (
    ExhaustedRetriesError,
    ExtractionError,
    ParseError,
    ProviderError,
    RequestShapeError,
    SchemaError,
    ValidationError,
)
from .models import Attempt, ExtractionRequest, ExtractionResult, Message
from .orchestrator import DEFAULT_MAX_RETRIES, ExtractionOrchestrator, parse_completion
from .template import (
    ArrayTemplate,
    ObjectTemplate,
    PrimitiveTemplate,
    Template,
    parse_template,
)

__all__ = [
    "Template",
    "PrimitiveTemplate",
    "ArrayTemplate",
    "ObjectTemplate",
    "parse_template",
    "Validator",
    "compile_template",
    "Message",
    "Attempt",
    "ExtractionRequest",
    "ExtractionResult",
    "ExtractionOrchestrator",
    "DEFAULT_MAX_RETRIES",
    "parse_completion",
    "ExtractionError",
    "RequestShapeError",
    "SchemaError",
    "ParseError",
    "ValidationError",
    "ProviderError",
    "ExhaustedRetriesError",
]

"""Compile shape templates into pydantic-backed validators."""

import itertools
import logging
from typing import Any, Union

from pydantic import ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic import create_model

from ..utils.json_utils import MAX_JSON_DEPTH
from .errors import SchemaError, ValidationError
from .template import ArrayTemplate, ObjectTemplate, PrimitiveTemplate, Template, parse_template

logger = logging.getLogger(__name__)

_PRIMITIVE_TYPES: dict[str, Any] = {
    "string": StrictStr,
    "number": Union[StrictInt, StrictFloat],
    "boolean": StrictBool,
}

# Extra keys are accepted on input and left out of the validated output
_OBJECT_CONFIG = ConfigDict(extra="ignore", populate_by_name=False)

_model_ids = itertools.count()


class Validator:
    """Compiled checker for a template.

    Holds no mutable state; one instance can be shared by every attempt of an
    extraction (and by concurrent extractions using the same template).
    """

    def __init__(self, template: Template, annotation: Any) -> None:
        self.template = template
        self._adapter: TypeAdapter[Any] = TypeAdapter(annotation)

    def validate(self, value: Any) -> Any:
        """Check a parsed JSON value and return the validated plain data.

        Args:
            value: Value produced by ``json.loads``

        Returns:
            Plain data (dicts, lists, scalars, None) mirroring the template

        Raises:
            ValidationError: If the value does not match the template
        """
        try:
            validated = self._adapter.validate_python(value)
        except PydanticValidationError as e:
            errors = [_format_error(err) for err in e.errors()]
            raise ValidationError(
                f"Output does not match expected format: {'; '.join(errors)}", errors=errors
            ) from e

        return self._adapter.dump_python(validated, by_alias=True)

    def is_valid(self, value: Any) -> bool:
        try:
            self.validate(value)
        except ValidationError:
            return False
        return True


def compile_template(template: Any) -> Validator:
    """Compile a template (or raw shape description) into a Validator.

    Args:
        template: Parsed template, or a raw description for ``parse_template``

    Returns:
        Validator for the template

    Raises:
        SchemaError: If the description contains an unsupported shape or
            nests deeper than replies may be parsed
    """
    template = parse_template(template)

    depth = _nesting_depth(template)
    if depth > MAX_JSON_DEPTH:
        raise SchemaError(
            f"Shape is nested too deeply: {depth} levels (max {MAX_JSON_DEPTH})"
        )

    annotation = _annotation_for(template, "$")
    logger.debug("Compiled template %s", template.describe())
    return Validator(template, annotation)


def _nesting_depth(template: Template) -> int:
    """Array/object nesting of a value matching ``template``."""
    if isinstance(template, ArrayTemplate):
        return 1 + _nesting_depth(template.items)
    if isinstance(template, ObjectTemplate):
        return 1 + max((_nesting_depth(child) for child in template.fields.values()), default=0)
    return 0


def _annotation_for(template: Template, path: str) -> Any:
    """Translate one template node into a type annotation."""
    if isinstance(template, PrimitiveTemplate) and template.kind in _PRIMITIVE_TYPES:
        return _PRIMITIVE_TYPES[template.kind] | None
    if isinstance(template, ArrayTemplate):
        return list[_annotation_for(template.items, f"{path}[]")] | None
    if isinstance(template, ObjectTemplate):
        return _object_model(template.fields, path)

    raise SchemaError(f"Unsupported data type: {template!r}", path)


def _object_model(fields: Any, path: str) -> type:
    # Field names may be arbitrary strings ("first name", "_id", "model_config"),
    # so the model uses positional attribute names and maps keys through aliases.
    definitions: dict[str, Any] = {}
    for index, (name, child) in enumerate(fields.items()):
        definitions[f"field_{index}"] = (
            _annotation_for(child, f"{path}.{name}"),
            Field(alias=name),
        )

    return create_model(
        f"Shape{next(_model_ids)}",
        __config__=_OBJECT_CONFIG,
        **definitions,
    )


def _format_error(error: Any) -> str:
    location = "".join(
        f"[{part}]" if isinstance(part, int) else f".{part}" for part in error["loc"]
    )
    return f"${location}: {error['msg']}"

"""Shape templates describing the structured output a caller expects.

A template is built once from the raw ``format`` value of a request. Marker
values stand in for types:

    {"name": "", "age": 0, "active": False, "tags": [""]}

describes an object with a string, a number, a boolean and an array of
strings. The raw value is inspected exactly once, in ``parse_template``; the
rest of the package works on the closed set of template classes below.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal

from .errors import SchemaError

PrimitiveKind = Literal["string", "number", "boolean"]


@dataclass(frozen=True)
class PrimitiveTemplate:
    """Leaf expecting a string, number or boolean."""

    kind: PrimitiveKind

    def describe(self) -> Any:
        return self.kind


@dataclass(frozen=True)
class ArrayTemplate:
    """List whose elements all share one template."""

    items: "Template"
    kind: Literal["array"] = field(default="array", init=False)

    def describe(self) -> Any:
        return [self.items.describe()]


@dataclass(frozen=True)
class ObjectTemplate:
    """Mapping of field name to nested template."""

    fields: Mapping[str, "Template"]
    kind: Literal["object"] = field(default="object", init=False)

    def __post_init__(self) -> None:
        # Copy so later changes to the caller's dict can't leak in
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __hash__(self) -> int:
        return hash(tuple(self.fields.items()))

    def describe(self) -> Any:
        return {name: child.describe() for name, child in self.fields.items()}


Template = PrimitiveTemplate | ArrayTemplate | ObjectTemplate

STRING = PrimitiveTemplate("string")
NUMBER = PrimitiveTemplate("number")
BOOLEAN = PrimitiveTemplate("boolean")


def parse_template(raw: Any, path: str = "$") -> Template:
    """Build a template from a raw shape description.

    Args:
        raw: Decoded JSON value using marker values for types
        path: Location of ``raw`` inside the outer description (for errors)

    Returns:
        Template tree mirroring ``raw``

    Raises:
        SchemaError: If any position holds an unsupported value

    Example:
        >>> parse_template({"name": "", "tags": [""]}).describe()
        {'name': 'string', 'tags': ['string']}
    """
    if isinstance(raw, (PrimitiveTemplate, ArrayTemplate, ObjectTemplate)):
        return raw

    # bool first: it is a subclass of int
    if isinstance(raw, bool):
        return BOOLEAN
    if isinstance(raw, str):
        return STRING
    if isinstance(raw, (int, float)):
        return NUMBER

    if isinstance(raw, list):
        if len(raw) != 1:
            raise SchemaError(
                f"Array shape must contain exactly one element describing its items, "
                f"got {len(raw)}",
                path,
            )
        return ArrayTemplate(parse_template(raw[0], f"{path}[]"))

    if isinstance(raw, Mapping):
        fields: dict[str, Template] = {}
        for key, value in raw.items():
            if not isinstance(key, str):
                raise SchemaError(f"Field names must be strings, got {key!r}", path)
            fields[key] = parse_template(value, f"{path}.{key}")
        return ObjectTemplate(fields)

    type_name = "null" if raw is None else type(raw).__name__
    raise SchemaError(f"Unsupported data type: {type_name}", path)

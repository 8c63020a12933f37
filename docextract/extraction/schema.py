"""Expected-schema shapes.

The shape of every top-level field is classified once, when the schema is
loaded, into a closed set of variants. The merger dispatches on these
variants instead of probing the runtime types of page values.
"""

import copy
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class StringShape:
    placeholder: str


@dataclass(frozen=True)
class NumberShape:
    placeholder: int | float


@dataclass(frozen=True)
class BooleanShape:
    placeholder: bool


@dataclass(frozen=True)
class NullShape:
    placeholder: None = None


@dataclass(frozen=True)
class ArrayShape:
    placeholder: list[Any]


@dataclass(frozen=True)
class ObjectShape:
    placeholder: dict[str, Any]


FieldShape = StringShape | NumberShape | BooleanShape | NullShape | ArrayShape | ObjectShape


def shape_of(value: Any) -> FieldShape:
    """Classify a schema example value. ``bool`` is checked before numbers."""
    if value is None:
        return NullShape()
    if isinstance(value, bool):
        return BooleanShape(value)
    if isinstance(value, (int, float)):
        return NumberShape(value)
    if isinstance(value, str):
        return StringShape(value)
    if isinstance(value, list):
        return ArrayShape(value)
    if isinstance(value, dict):
        return ObjectShape(value)
    raise TypeError(f"Unsupported schema value of type {type(value).__name__}")


@dataclass(frozen=True)
class ExpectedSchema:
    """A JSON example value whose shape defines extraction and merge rules."""

    value: Any
    fields: dict[str, FieldShape] = field(default_factory=dict)

    @classmethod
    def load(cls, value: Any) -> "ExpectedSchema":
        fields: dict[str, FieldShape] = {}
        if isinstance(value, dict):
            fields = {key: shape_of(item) for key, item in value.items()}
        return cls(value=value, fields=fields)

    def copy_value(self) -> Any:
        return copy.deepcopy(self.value)

"""Validation-schema nodes consumed by the translator.

A ``SchemaNode`` is the read-only description of one value accepted by a
route: its kind, constraints and nested children. Nodes can be built in
Python or validated from plain mappings (YAML/JSON route files).
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Kind(str, Enum):
    """Closed set of node kinds understood by the translator."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DATE = "date"
    OBJECT = "object"
    ARRAY = "array"
    ALTERNATIVES = "alternatives"
    ANY = "any"


class SchemaNode(BaseModel):
    """One node of a validation schema."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    kind: str
    description: str | None = None
    required: bool = False
    min: int | float | None = None  # minLength / minimum / minItems depending on kind
    max: int | float | None = None
    pattern: str | None = None
    enum: list[Any] | None = None
    format: str | None = None
    default: Any = None
    example: Any = None
    items: "SchemaNode | None" = None
    properties: "dict[str, SchemaNode] | None" = None
    alternatives: "list[SchemaNode] | None" = None
    additional_properties: bool | None = Field(default=None, alias="additionalProperties")
    ref: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, data: Any) -> Any:
        # A bare mapping of property name -> node is an object node.
        if isinstance(data, dict) and "kind" not in data:
            return {"kind": Kind.OBJECT.value, "properties": data}
        return data


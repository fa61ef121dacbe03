"""Route table models.

``RouterSource`` and ``RouteRecord`` mirror what a router exposes. ``Route``
is the normalized, one-method-per-entry form the generator works on.
"""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from router_docs.schema.node import SchemaNode

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")

CONTENT_TYPES = {
    "json": "application/json",
    "form": "application/x-www-form-urlencoded",
    "multipart": "multipart/form-data",
}


def _stringify_keys(value: Any) -> Any:
    # YAML turns `200:` into an int key.
    if isinstance(value, dict):
        return {str(k): v for k, v in value.items()}
    return value


class RouteMeta(BaseModel):
    """Documentation metadata copied onto the operation object."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    summary: str | None = None
    description: str | None = None
    tags: list[str] = []
    operation_id: str | None = Field(default=None, alias="operationId")
    deprecated: bool | None = None
    ignore: bool = False

    @model_validator(mode="before")
    @classmethod
    def _unwrap_swagger(cls, data: Any) -> Any:
        # Routers usually nest docs metadata as meta.swagger.
        if isinstance(data, dict) and isinstance(data.get("swagger"), dict):
            return data["swagger"]
        return data


class OutputSpec(BaseModel):
    """One declared response: body schema, optional ref override and headers."""

    model_config = ConfigDict(frozen=True)

    body: SchemaNode | None = None
    ref: str | None = None
    description: str | None = None
    headers: SchemaNode | None = None


class ValidateBlock(BaseModel):
    """Request schemas declared on a route, plus its ``output`` map."""

    model_config = ConfigDict(frozen=True)

    type: str | None = None
    body: SchemaNode | None = None
    query: SchemaNode | None = None
    params: SchemaNode | None = None
    headers: SchemaNode | None = None
    ref: str | None = None
    output: dict[str, OutputSpec] = {}

    @field_validator("output", mode="before")
    @classmethod
    def _output_keys(cls, value: Any) -> Any:
        return _stringify_keys(value)

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str | None) -> str | None:
        if value is not None and value not in CONTENT_TYPES:
            raise ValueError(f"type must be one of {sorted(CONTENT_TYPES)}, got {value!r}")
        return value


class RouteRecord(BaseModel):
    """A route as declared on a router. May cover several methods."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    method: list[str]
    path: str
    meta: RouteMeta = RouteMeta()
    validate_: ValidateBlock | None = Field(default=None, alias="validate")
    output: dict[str, OutputSpec] = {}

    @field_validator("output", mode="before")
    @classmethod
    def _output_keys(cls, value: Any) -> Any:
        return _stringify_keys(value)

    @field_validator("method", mode="before")
    @classmethod
    def _normalize_methods(cls, value: Any) -> Any:
        methods = [value] if isinstance(value, str) else list(value)
        methods = [m.lower() for m in methods]
        unknown = [m for m in methods if m not in HTTP_METHODS]
        if unknown:
            raise ValueError(f"Unsupported HTTP method(s): {', '.join(unknown)}")
        if not methods:
            raise ValueError("At least one HTTP method is required")
        return methods


class RouterSource(BaseModel):
    """A router: its own prefix and its ordered routes."""

    model_config = ConfigDict(frozen=True)

    prefix: str | None = None
    routes: list[RouteRecord] = []


class Route(BaseModel):
    """A single (method, path) pair ready for assembly."""

    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    prefix: str = ""
    meta: RouteMeta = RouteMeta()
    request: ValidateBlock | None = None
    outputs: dict[str, OutputSpec] = {}


RouteFilter = Callable[[RouteRecord], bool]

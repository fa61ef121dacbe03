"""Document-level and generation-level configuration."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from router_docs.errors import ConfigurationError
from router_docs.routes.models import OutputSpec
from router_docs.schema.node import SchemaNode

SWAGGER_VERSION = "2.0"

DEFAULT_RESPONSES = {"200": OutputSpec(description="Success")}


class DocumentConfig(BaseModel):
    """Top-level document fields supplied by the caller.

    Unknown keys (``host``, ``schemes``, ``securityDefinitions``...) are kept
    and copied into the output document as-is.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    info: dict[str, Any]
    base_path: str = Field(alias="basePath")
    swagger: str = SWAGGER_VERSION
    definitions: dict[str, SchemaNode] = {}
    tags: list[dict[str, Any]] = []

    @field_validator("tags", mode="before")
    @classmethod
    def _tag_names(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{"name": t} if isinstance(t, str) else t for t in value]
        return value


class GeneratorConfig(BaseModel):
    """Options for one generation call.

    ``default_responses`` has three states: left unset (the built-in 200
    response), explicitly ``None`` (no defaults), or a mapping.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    default_responses: dict[str, OutputSpec] | None = Field(default=None, alias="defaultResponses")

    @field_validator("default_responses", mode="before")
    @classmethod
    def _status_keys(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {str(k): v for k, v in value.items()}
        return value

    def effective_default_responses(self) -> dict[str, OutputSpec]:
        if "default_responses" not in self.model_fields_set:
            return dict(DEFAULT_RESPONSES)
        return dict(self.default_responses or {})


def as_document_config(value: DocumentConfig | dict[str, Any]) -> DocumentConfig:
    if isinstance(value, DocumentConfig):
        return value
    try:
        return DocumentConfig.model_validate(value)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid document configuration:\n{e}") from e


def as_generator_config(value: GeneratorConfig | dict[str, Any] | None) -> GeneratorConfig:
    if value is None:
        return GeneratorConfig()
    if isinstance(value, GeneratorConfig):
        return value
    try:
        return GeneratorConfig.model_validate(value)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid generator options:\n{e}") from e

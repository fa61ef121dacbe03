"""Assemble the final OpenAPI 2.0 document."""

import copy
import logging
from collections.abc import Iterable, Iterator
from typing import Any

from router_docs.config import (
    DocumentConfig,
    GeneratorConfig,
    as_document_config,
    as_generator_config,
)
from router_docs.errors import DefinitionReferenceError
from router_docs.generator.paths import PathAssembler
from router_docs.routes.models import Route
from router_docs.schema.refs import RefRegistry

logger = logging.getLogger(__name__)

DEFINITIONS_PREFIX = "#/definitions/"

# Keywords whose values are data, never references.
DATA_KEYWORDS = ("example", "default", "enum")

# Keywords whose values map user-chosen names to schemas or responses.
NAME_MAPS = ("properties", "definitions", "responses", "headers")


class DocumentBuilder:
    """Merges caller metadata with assembled paths and definitions."""

    def build(
        self,
        routes: Iterable[Route],
        document: DocumentConfig | dict[str, Any],
        options: GeneratorConfig | dict[str, Any] | None = None,
    ) -> dict:
        """Build the document for ``routes``.

        Configuration is validated before any route is touched. Raises
        ConfigurationError, TranslationError or DefinitionReferenceError;
        nothing is returned on failure.
        """
        config = as_document_config(document)
        generator = as_generator_config(options)

        refs = RefRegistry()
        definitions = {name: refs.inline(node) for name, node in config.definitions.items()}

        assembler = PathAssembler(refs, generator.effective_default_responses())
        paths: dict[str, dict] = {}
        route_tags: list[str] = []
        for route in routes:
            path, method, operation = assembler.assemble(route)
            methods = paths.setdefault(path, {})
            if method in methods:
                logger.warning("Duplicate route %s %s, keeping the last one", method.upper(), path)
            methods[method] = operation
            route_tags.extend(operation.get("tags", []))

        spec = {
            "swagger": config.swagger,
            "info": config.info,
            "basePath": config.base_path,
            "paths": paths,
            "definitions": definitions,
            "tags": _merge_tags(config.tags, route_tags),
        }
        for key, value in (config.model_extra or {}).items():
            spec.setdefault(key, value)

        check_references(spec, refs.referenced)
        logger.debug("Built document with %d paths and %d definitions", len(paths), len(definitions))
        return copy.deepcopy(spec)


def check_references(spec: dict, pointers: Iterable[str] = ()) -> None:
    """Raise DefinitionReferenceError for any local ``$ref`` without a definition.

    ``pointers`` are extra pointers to check, e.g. the ones a RefRegistry
    emitted into ``x-`` extensions that the walk skips. External refs (no
    leading ``#``) are not checked.
    """
    definitions = spec.get("definitions", {})
    found = [p for section in ("paths", "definitions") for p in _iter_refs(spec.get(section, {}), names=True)]
    for pointer in [*found, *pointers]:
        if not pointer.startswith("#"):
            continue
        if not pointer.startswith(DEFINITIONS_PREFIX):
            raise DefinitionReferenceError(pointer[2:], pointer)
        # Only the first segment names the definition: #/definitions/P/properties/n
        name = pointer[len(DEFINITIONS_PREFIX):].split("/", 1)[0]
        if name not in definitions:
            raise DefinitionReferenceError(name, pointer)


def _iter_refs(value: Any, names: bool = False) -> Iterator[str]:
    """Yield ``$ref`` strings, skipping data-valued keywords.

    ``names`` marks a mapping keyed by user names (properties, responses...),
    where keys like ``default`` are not keywords.
    """
    if isinstance(value, dict):
        for key, child in value.items():
            if not names:
                if key in DATA_KEYWORDS or key.startswith("x-"):
                    continue
                if key == "$ref" and isinstance(child, str):
                    yield child
                    continue
            yield from _iter_refs(child, names=not names and key in NAME_MAPS)
    elif isinstance(value, list):
        for child in value:
            yield from _iter_refs(child)


def _merge_tags(configured: list[dict], route_tags: list[str]) -> list[dict]:
    tags = [dict(t) for t in configured]
    known = {t.get("name") for t in tags}
    for name in route_tags:
        if name not in known:
            tags.append({"name": name})
            known.add(name)
    return tags

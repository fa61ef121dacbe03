"""Load route tables from YAML or JSON files."""

from pathlib import Path

import yaml

from router_docs.config import DocumentConfig, as_document_config
from router_docs.errors import ConfigurationError
from router_docs.routes.collector import as_router
from router_docs.routes.models import RouterSource


def load_route_file(file_path: Path) -> tuple[DocumentConfig, list[RouterSource]]:
    """Parse a route file with top-level ``document`` and ``routers`` keys.

    JSON is read through the YAML loader as well.
    """
    text = file_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Cannot parse {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{file_path} must contain a mapping at the top level")
    if "document" not in data:
        raise ConfigurationError(f"{file_path} has no 'document' section")

    document = as_document_config(data["document"])
    routers = [as_router(r) for r in data.get("routers") or []]
    return document, routers

"""Collect normalized routes from a router and resolve their path prefix."""

import logging
import re
from typing import Any

from pydantic import ValidationError

from router_docs.errors import ConfigurationError
from router_docs.routes.models import Route, RouteFilter, RouteRecord, RouterSource

logger = logging.getLogger(__name__)

_PATH_PARAM = re.compile(r":(\w+)")


def as_router(router: RouterSource | dict[str, Any]) -> RouterSource:
    if isinstance(router, RouterSource):
        return router
    try:
        return RouterSource.model_validate(router)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid router definition:\n{e}") from e


def resolve_prefix(router: RouterSource, prefix: str | None = None) -> str:
    """Pick the effective prefix: explicit option, then the router's own, then ''."""
    if prefix:
        return prefix
    return router.prefix or ""


def join_path(prefix: str, path: str) -> str:
    """Join prefix and path with a single '/', converting ``:name`` to ``{name}``."""
    joined = "/" + "/".join(part for part in f"{prefix}/{path}".split("/") if part)
    return _PATH_PARAM.sub(r"{\1}", joined)


def collect(
    router: RouterSource | dict[str, Any],
    prefix: str | None = None,
    filter: RouteFilter | None = None,
) -> list[Route]:
    """Normalize a router's records into one Route per method, in declaration order."""
    source = as_router(router)
    effective_prefix = resolve_prefix(source, prefix)

    routes: list[Route] = []
    for record in source.routes:
        if record.meta.ignore:
            logger.debug("Skipping ignored route %s", record.path)
            continue
        if filter is not None and not filter(record):
            continue

        outputs = _merge_outputs(record)
        for method in _methods(record):
            routes.append(
                Route(
                    method=method,
                    path=record.path,
                    prefix=effective_prefix,
                    meta=record.meta,
                    request=record.validate_,
                    outputs=outputs,
                )
            )

    logger.debug("Collected %d routes with prefix %r", len(routes), effective_prefix)
    return routes


def effective_path(route: Route) -> str:
    return join_path(route.prefix, route.path)


def _methods(record: RouteRecord) -> list[str]:
    methods = list(dict.fromkeys(record.method))
    # Routers add HEAD alongside GET automatically.
    if "get" in methods and "head" in methods:
        methods.remove("head")
    return methods


def _merge_outputs(record: RouteRecord) -> dict:
    """Route-level ``output`` first, then ``validate.output`` on top of it."""
    merged = dict(record.output)
    if record.validate_ is not None:
        merged.update(record.validate_.output)
    return merged

"""Public entry point: register routers, then generate the document."""

from typing import Any

from router_docs.config import DocumentConfig, GeneratorConfig
from router_docs.generator.document import DocumentBuilder
from router_docs.routes.collector import collect
from router_docs.routes.models import Route, RouteFilter, RouterSource


class SwaggerAPI:
    """Collects routes from any number of routers and builds OpenAPI 2.0 documents.

    Usage::

        api = SwaggerAPI()
        api.add_router(router, prefix="/v1")
        spec = api.generate_spec({"info": {...}, "basePath": "/"})
    """

    def __init__(self):
        self.routes: list[Route] = []

    def add_router(
        self,
        router: RouterSource | dict[str, Any],
        prefix: str | None = None,
        filter: RouteFilter | None = None,
    ) -> None:
        """Collect a router's routes. ``prefix`` overrides the router's own prefix."""
        self.routes.extend(collect(router, prefix=prefix, filter=filter))

    def generate_spec(
        self,
        document: DocumentConfig | dict[str, Any],
        options: GeneratorConfig | dict[str, Any] | None = None,
    ) -> dict:
        return DocumentBuilder().build(self.routes, document, options)

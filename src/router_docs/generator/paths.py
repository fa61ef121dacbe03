"""Build OpenAPI 2.0 operation objects from collected routes."""

import logging
import re
from http import HTTPStatus

from router_docs.errors import ConfigurationError
from router_docs.routes.collector import effective_path
from router_docs.routes.models import CONTENT_TYPES, OutputSpec, Route
from router_docs.schema.node import SchemaNode
from router_docs.schema.refs import RefRegistry

logger = logging.getLogger(__name__)

BODY_PARAM_NAME = "body"

# validate key -> parameter location
PARAM_LOCATIONS = (("params", "path"), ("query", "query"), ("headers", "header"))

# Fields OpenAPI 2.0 allows on a non-body parameter or a response header.
SIMPLE_SCHEMA_FIELDS = (
    "type", "format", "items", "default", "maximum", "minimum", "maxLength",
    "minLength", "pattern", "maxItems", "minItems", "enum", "description",
)

SIMPLE_TYPES = ("string", "number", "integer", "boolean", "array")

_TEMPLATE_PARAM = re.compile(r"{(\w+)}")
_STATUS_CODE = re.compile(r"^[1-5]\d\d$")


class PathAssembler:
    """Turns one Route into ``(path, method, operation)``."""

    def __init__(self, refs: RefRegistry, default_responses: dict[str, OutputSpec]):
        self.refs = refs
        self.default_responses = default_responses

    def assemble(self, route: Route) -> tuple[str, str, dict]:
        path = effective_path(route)
        operation: dict = {}

        meta = route.meta
        if meta.tags:
            operation["tags"] = list(meta.tags)
        for key, value in (
            ("summary", meta.summary),
            ("description", meta.description),
            ("operationId", meta.operation_id),
            ("deprecated", meta.deprecated),
        ):
            if value is not None:
                operation[key] = value

        request = route.request
        if request is not None and request.type is not None:
            operation["consumes"] = [CONTENT_TYPES[request.type]]

        operation["parameters"] = self._parameters(route, path)
        operation["responses"] = self._responses(route)
        logger.debug("Assembled %s %s", route.method.upper(), path)
        return path, route.method, operation

    # -- parameters -----------------------------------------------------------

    def _parameters(self, route: Route, path: str) -> list[dict]:
        params: list[dict] = []
        request = route.request

        if request is not None:
            for attr, location in PARAM_LOCATIONS:
                node = getattr(request, attr)
                if node is not None:
                    params.extend(self._simple_params(node, location))

        declared = {p["name"] for p in params if p["in"] == "path"}
        for name in _TEMPLATE_PARAM.findall(path):
            if name not in declared:
                params.append({"name": name, "in": "path", "required": True, "type": "string"})

        if request is not None and request.body is not None:
            params.append({
                "name": BODY_PARAM_NAME,
                "in": "body",
                "required": True,
                "schema": self.refs.resolve(request.body, request.ref),
            })
        return params

    def _simple_params(self, node: SchemaNode, location: str) -> list[dict]:
        params = []
        for name, child in (node.properties or {}).items():
            param = {"name": name, "in": location, "required": child.required or location == "path"}
            param.update(_simple_schema(self.refs.inline(child)))
            params.append(param)
        return params

    # -- responses ------------------------------------------------------------

    def _responses(self, route: Route) -> dict:
        responses: dict = {}
        for code, output in route.outputs.items():
            for status in _expand_status(code):
                responses[status] = self._response(status, output)

        for code, output in self.default_responses.items():
            for status in _expand_status(code):
                if status not in responses:
                    responses[status] = self._response(status, output)
        return responses

    def _response(self, status: str, output: OutputSpec) -> dict:
        response = {"description": output.description or _reason_phrase(status)}
        if output.body is not None:
            response["schema"] = self.refs.resolve(output.body, output.ref)
        elif output.ref:
            response["schema"] = self.refs.resolve(None, output.ref)
        if output.headers is not None:
            response["headers"] = {
                name: _simple_schema(self.refs.inline(child))
                for name, child in (output.headers.properties or {}).items()
            }
        return response


def _simple_schema(schema: dict) -> dict:
    result = {k: v for k, v in schema.items() if k in SIMPLE_SCHEMA_FIELDS or k.startswith("x-")}
    if result.get("type") not in SIMPLE_TYPES:
        result["type"] = "string"
    if "items" in result:
        items = _simple_schema(result["items"])
        items.pop("description", None)
        result["items"] = items
    return result


def _expand_status(code: str) -> list[str]:
    statuses = [c.strip() for c in code.split(",") if c.strip()]
    for status in statuses:
        if status != "default" and not _STATUS_CODE.match(status):
            raise ConfigurationError(f"Invalid response status code {status!r}")
    return statuses


def _reason_phrase(status: str) -> str:
    try:
        return HTTPStatus(int(status)).phrase
    except ValueError:
        return "Success"

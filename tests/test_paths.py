import pytest

from router_docs.config import DEFAULT_RESPONSES
from router_docs.errors import ConfigurationError
from router_docs.generator.paths import PathAssembler
from router_docs.routes.collector import collect
from router_docs.schema.refs import RefRegistry


def _assemble(record: dict, prefix: str | None = None, defaults=DEFAULT_RESPONSES):
    route = collect({"prefix": prefix, "routes": [record]})[0]
    return PathAssembler(RefRegistry(), dict(defaults)).assemble(route)


class TestParameters:
    def test_query_params_headers_become_parameters(self):
        _, _, op = _assemble({
            "method": "get",
            "path": "/users/:id",
            "validate": {
                "params": {"id": {"kind": "integer", "description": "User id"}},
                "query": {"limit": {"kind": "integer", "min": 1, "max": 100}},
                "headers": {"x-token": {"kind": "string", "required": True}},
            },
        })
        assert op["parameters"] == [
            {"name": "id", "in": "path", "required": True, "type": "integer", "description": "User id"},
            {"name": "limit", "in": "query", "required": False, "type": "integer", "minimum": 1, "maximum": 100},
            {"name": "x-token", "in": "header", "required": True, "type": "string"},
        ]

    def test_body_is_single_body_parameter(self):
        _, _, op = _assemble({
            "method": "post",
            "path": "/signup",
            "validate": {"type": "json", "body": {"username": {"kind": "string", "required": True}}},
        })
        assert op["consumes"] == ["application/json"]
        assert op["parameters"] == [{
            "name": "body",
            "in": "body",
            "required": True,
            "schema": {
                "type": "object",
                "properties": {"username": {"type": "string"}},
                "required": ["username"],
            },
        }]

    def test_body_ref_override(self):
        _, _, op = _assemble({
            "method": "post",
            "path": "/signup",
            "validate": {"body": {"name": {"kind": "string"}}, "ref": "#/definitions/Profile"},
        })
        assert op["parameters"][0]["schema"] == {"$ref": "#/definitions/Profile"}

    def test_undeclared_template_params_are_added(self):
        _, _, op = _assemble({"method": "get", "path": "/pets/{petId}"})
        assert op["parameters"] == [{"name": "petId", "in": "path", "required": True, "type": "string"}]

    def test_non_body_fields_are_filtered(self):
        _, _, op = _assemble({
            "method": "get",
            "path": "/search",
            "validate": {"query": {
                "q": {"kind": "string", "example": "cats"},
                "filter": {"kind": "object", "properties": {"a": {"kind": "string"}}},
                "ids": {"kind": "array", "items": {"kind": "integer", "description": "one id"}},
            }},
        })
        q, filter_, ids = op["parameters"]
        assert "example" not in q
        assert filter_["type"] == "string"
        assert "properties" not in filter_
        assert ids["items"] == {"type": "integer"}


class TestResponses:
    def test_declared_plus_default(self):
        _, _, op = _assemble({"method": "get", "path": "/x", "validate": {"output": {201: {}}}})
        assert set(op["responses"]) == {"200", "201"}
        assert op["responses"]["200"] == {"description": "Success"}
        assert op["responses"]["201"] == {"description": "Created"}

    def test_no_defaults(self):
        _, _, op = _assemble({"method": "get", "path": "/x", "validate": {"output": {201: {}}}}, defaults={})
        assert list(op["responses"]) == ["201"]

    def test_declared_code_not_overwritten_by_default(self):
        _, _, op = _assemble({
            "method": "get", "path": "/x",
            "validate": {"output": {200: {"description": "Mine"}}},
        })
        assert op["responses"]["200"] == {"description": "Mine"}

    def test_body_schema_and_ref_override(self):
        _, _, op = _assemble({
            "method": "get",
            "path": "/x",
            "validate": {"output": {
                200: {"body": {"id": {"kind": "string"}}, "ref": "Profile"},
                400: {"body": {"error": {"kind": "string"}}},
            }},
        })
        assert op["responses"]["200"]["schema"] == {"$ref": "#/definitions/Profile"}
        assert op["responses"]["400"]["schema"]["properties"] == {"error": {"type": "string"}}

    def test_comma_separated_codes(self):
        _, _, op = _assemble({
            "method": "get", "path": "/x",
            "validate": {"output": {"400,404": {"description": "Bad"}}},
        }, defaults={})
        assert op["responses"] == {"400": {"description": "Bad"}, "404": {"description": "Bad"}}

    def test_response_headers(self):
        _, _, op = _assemble({
            "method": "get", "path": "/x",
            "validate": {"output": {200: {"headers": {"x-rate-limit": {"kind": "integer", "required": True}}}}},
        })
        assert op["responses"]["200"]["headers"] == {"x-rate-limit": {"type": "integer"}}

    def test_invalid_status_code(self):
        with pytest.raises(ConfigurationError, match="status code"):
            _assemble({"method": "get", "path": "/x", "validate": {"output": {"2xx": {}}}})


class TestMetadata:
    def test_metadata_copied(self):
        path, method, op = _assemble({
            "method": "get",
            "path": "/signup",
            "meta": {"swagger": {
                "summary": "User Signup", "description": "Creates a user",
                "tags": ["users"], "operationId": "signup", "deprecated": True,
            }},
        }, prefix="/api")
        assert (path, method) == ("/api/signup", "get")
        assert op["summary"] == "User Signup"
        assert op["description"] == "Creates a user"
        assert op["tags"] == ["users"]
        assert op["operationId"] == "signup"
        assert op["deprecated"] is True

    def test_no_metadata_no_optional_keys(self):
        _, _, op = _assemble({"method": "get", "path": "/x"})
        assert set(op) == {"parameters", "responses"}

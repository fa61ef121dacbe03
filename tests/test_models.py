import pytest
from pydantic import ValidationError

from router_docs.routes.models import OutputSpec, RouteMeta, RouteRecord
from router_docs.schema.node import SchemaNode


class TestSchemaNode:
    def test_create_string_node(self):
        node = SchemaNode(kind="string", min=3, required=True)
        assert node.required is True
        assert node.description is None
        assert node.ref is None

    def test_shorthand_mapping_is_object(self):
        node = SchemaNode.model_validate({"username": {"kind": "string"}})
        assert node.kind == "object"
        assert node.properties["username"].kind == "string"

    def test_nodes_are_read_only(self):
        node = SchemaNode(kind="string")
        with pytest.raises(ValidationError):
            node.description = "changed"

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            SchemaNode.model_validate({"kind": "string", "minLength": 3})


class TestRouteRecord:
    def test_single_method_string(self):
        record = RouteRecord.model_validate({"method": "POST", "path": "/users"})
        assert record.method == ["post"]
        assert record.meta == RouteMeta()
        assert record.validate_ is None

    def test_output_keys_are_strings(self):
        record = RouteRecord.model_validate({"method": "get", "path": "/", "output": {204: {}}})
        assert record.output == {"204": OutputSpec()}

    def test_empty_method_list_rejected(self):
        with pytest.raises(ValidationError):
            RouteRecord.model_validate({"method": [], "path": "/"})

"""Translate validation-schema nodes into OpenAPI 2.0 schema objects."""

import re
from collections.abc import Callable

from router_docs.errors import TranslationError
from router_docs.schema.node import Kind, SchemaNode

RefResolver = Callable[[str], dict]


def ref_pointer(ref: str) -> str:
    """Normalise a definition name or pointer to ``#/definitions/<Name>``."""
    if ref.startswith("#/"):
        return ref
    return f"#/definitions/{ref}"


def _pointer_only(ref: str) -> dict:
    return {"$ref": ref_pointer(ref)}


class SchemaTranslator:
    """Converts SchemaNode trees into JSON-Schema-compatible dicts.

    Nodes carrying a ``ref`` tag are handed to ``resolve_ref`` instead of
    being inlined.
    """

    def __init__(self, resolve_ref: RefResolver | None = None):
        self.resolve_ref = resolve_ref or _pointer_only
        self._handlers: dict[Kind, Callable[[SchemaNode], dict]] = {
            Kind.STRING: self._string,
            Kind.NUMBER: self._number,
            Kind.INTEGER: self._number,
            Kind.BOOLEAN: self._boolean,
            Kind.DATE: self._date,
            Kind.OBJECT: self._object,
            Kind.ARRAY: self._array,
            Kind.ALTERNATIVES: self._alternatives,
            Kind.ANY: self._any,
        }

    def translate(self, node: SchemaNode) -> dict:
        if node.ref:
            return self.resolve_ref(node.ref)
        return self.translate_inline(node)

    def translate_inline(self, node: SchemaNode) -> dict:
        """Translate ``node`` itself, ignoring its own ref tag.

        Children are still translated through ``translate``.
        """
        try:
            kind = Kind(node.kind)
        except ValueError:
            raise TranslationError(f"Unknown schema kind {node.kind!r}") from None

        _check_bounds(node)
        result = self._handlers[kind](node)

        for key in ("description", "default", "example"):
            value = getattr(node, key)
            if value is not None:
                result[key] = value
        return result

    # -- kinds ----------------------------------------------------------------

    def _string(self, node: SchemaNode) -> dict:
        result = {"type": "string"}
        _put(result, "minLength", node.min)
        _put(result, "maxLength", node.max)
        if node.pattern is not None:
            try:
                re.compile(node.pattern)
            except re.error as e:
                raise TranslationError(f"Invalid pattern {node.pattern!r}: {e}") from e
            result["pattern"] = node.pattern
        _put(result, "format", node.format)
        _put_enum(result, node)
        return result

    def _number(self, node: SchemaNode) -> dict:
        result = {"type": "integer" if node.kind == Kind.INTEGER.value else "number"}
        _put(result, "format", node.format)
        _put(result, "minimum", node.min)
        _put(result, "maximum", node.max)
        _put_enum(result, node)
        return result

    def _boolean(self, node: SchemaNode) -> dict:
        return {"type": "boolean"}

    def _date(self, node: SchemaNode) -> dict:
        return {"type": "string", "format": node.format or "date-time"}

    def _object(self, node: SchemaNode) -> dict:
        result: dict = {"type": "object"}
        properties = node.properties or {}
        if properties:
            result["properties"] = {name: self.translate(child) for name, child in properties.items()}
        required = [name for name, child in properties.items() if child.required]
        if required:
            result["required"] = required
        _put(result, "additionalProperties", node.additional_properties)
        return result

    def _array(self, node: SchemaNode) -> dict:
        if node.items is None:
            raise TranslationError("Array node is missing 'items'")
        result = {"type": "array", "items": self.translate(node.items)}
        _put(result, "minItems", node.min)
        _put(result, "maxItems", node.max)
        return result

    def _alternatives(self, node: SchemaNode) -> dict:
        # OpenAPI 2.0 has no oneOf; the first branch is the base schema.
        if not node.alternatives:
            raise TranslationError("Alternatives node has no branches")
        branches = [self.translate(branch) for branch in node.alternatives]
        base = branches[0]
        # Keys beside a $ref are ignored by resolvers.
        result = {"allOf": [base]} if "$ref" in base else dict(base)
        result["x-alternatives"] = branches
        return result

    def _any(self, node: SchemaNode) -> dict:
        return {}


def _put(target: dict, key: str, value) -> None:
    if value is not None:
        target[key] = value


def _put_enum(target: dict, node: SchemaNode) -> None:
    if node.enum is None:
        return
    if not node.enum:
        raise TranslationError("Enum constraint must list at least one value")
    target["enum"] = list(node.enum)


def _check_bounds(node: SchemaNode) -> None:
    if node.min is not None and node.max is not None and node.min > node.max:
        raise TranslationError(f"min ({node.min}) is greater than max ({node.max})")

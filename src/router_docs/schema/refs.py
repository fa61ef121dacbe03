"""Reference handling for named schema definitions."""

import logging

from router_docs.schema.node import SchemaNode
from router_docs.schema.translator import SchemaTranslator, ref_pointer

logger = logging.getLogger(__name__)


class RefRegistry:
    """Emits ``$ref`` pointers for tagged nodes and inlines everything else.

    Only explicit tags produce references. Untagged nodes are never matched
    against definitions, not even when they are structurally identical.
    """

    def __init__(self):
        self.translator = SchemaTranslator(resolve_ref=self._record)
        self._referenced: list[str] = []

    @property
    def referenced(self) -> list[str]:
        """Pointers emitted so far, in first-use order."""
        return list(self._referenced)

    def resolve(self, node: SchemaNode, explicit_ref: str | None = None) -> dict:
        if explicit_ref:
            return self._record(explicit_ref)
        return self.translator.translate(node)

    def inline(self, node: SchemaNode) -> dict:
        return self.translator.translate_inline(node)

    def _record(self, ref: str) -> dict:
        pointer = ref_pointer(ref)
        if pointer not in self._referenced:
            logger.debug("Recorded reference %s", pointer)
            self._referenced.append(pointer)
        return {"$ref": pointer}

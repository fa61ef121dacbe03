"""Exceptions raised while generating an API document."""


class RouterDocsError(Exception):
    """Base class for all generation failures."""


class TranslationError(RouterDocsError):
    """A schema node has an unknown kind or structurally invalid constraints."""


class DefinitionReferenceError(RouterDocsError):
    """A ``$ref`` in the document points at a definition that does not exist."""

    def __init__(self, name: str, pointer: str):
        super().__init__(f"Reference {pointer!r} has no matching definition {name!r}")
        self.name = name
        self.pointer = pointer


class ConfigurationError(RouterDocsError):
    """Caller-supplied configuration or route tables are malformed."""

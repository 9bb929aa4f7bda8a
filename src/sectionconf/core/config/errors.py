"""
Exception hierarchy for sectionconf configuration documents.

Every error carries an optional ``source`` (the file or stream a document was
loaded from) and a ``path`` locating the offending node inside the document,
e.g. ``CustomSection2/element1Collection1/add[2]@e1property3``. Loaders extend
the path as an error propagates outwards so that the final message names the
file, section and field that caused the failure.
"""

from typing import Any, Dict, Optional


class ConfigError(Exception):
    """Base class for all configuration errors."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        path: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the configuration error.

        Args:
            message: Error message
            source: Name of the file or stream being processed
            path: Location of the offending node within the document
            context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.source = source
        self.path = path
        self.context = context or {}

    def add_path_segment(self, segment: str) -> "ConfigError":
        """Prefix the error location with the name of an enclosing node."""
        if not self.path:
            self.path = segment
        elif self.path.startswith("@"):
            self.path = f"{segment}{self.path}"
        else:
            self.path = f"{segment}/{self.path}"
        return self

    def __str__(self) -> str:
        location = []
        if self.source:
            location.append(f"in {self.source}")
        if self.path:
            location.append(f"at {self.path}")
        if location:
            return f"{self.message} ({' '.join(location)})"
        return self.message


class ParseError(ConfigError):
    """The input is not a well-formed configuration document."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.line = line
        self.column = column


class SchemaError(ConfigError):
    """The document does not match the declared schema."""


class MissingRequiredFieldError(SchemaError):
    """A required field or element is absent and has no default."""

    def __init__(self, field: str, kind: str = "attribute", **kwargs: Any):
        kwargs.setdefault("path", f"@{field}" if kind == "attribute" else field)
        super().__init__(f"Required {kind} '{field}' not found", **kwargs)
        self.field = field
        self.kind = kind


class MissingRequiredSectionError(SchemaError):
    """A section registered as mandatory is absent from the document."""

    def __init__(self, section: str, **kwargs: Any):
        kwargs.setdefault("path", section)
        super().__init__(f"Required section '{section}' not found", **kwargs)
        self.section = section


class DuplicateKeyError(SchemaError):
    """An element key is already present in its collection."""

    def __init__(self, key: Any, **kwargs: Any):
        super().__init__(f"The entry '{key}' has already been added", **kwargs)
        self.key = key


class DuplicateSectionError(SchemaError):
    """A section name is registered or supplied more than once."""

    def __init__(self, section: str, **kwargs: Any):
        super().__init__(f"Section '{section}' is already defined", **kwargs)
        self.section = section


class ValidationError(SchemaError):
    """A field value violates its declared type or validation rule."""

    def __init__(self, field: str, rule: str, message: str, value: Any = None, **kwargs: Any):
        kwargs.setdefault("path", f"@{field}")
        super().__init__(
            f"The value for the property '{field}' is not valid: {message}", **kwargs
        )
        self.field = field
        self.rule = rule
        self.value = value


class ReadOnlyError(ConfigError):
    """A mutation was attempted on a sealed document."""


class DocumentStateError(ConfigError):
    """An operation is not allowed in the document's current state."""


class SectionNotFoundError(ConfigError, LookupError):
    """No section with the requested name exists."""

    def __init__(self, section: str, **kwargs: Any):
        super().__init__(f"Section '{section}' not found", **kwargs)
        self.section = section


class KeyNotFoundError(ConfigError, LookupError):
    """No element with the requested key exists in a collection."""

    def __init__(self, key: Any, **kwargs: Any):
        super().__init__(f"No element with key '{key}'", **kwargs)
        self.key = key


class FieldNotFoundError(ConfigError, LookupError):
    """The node type declares no field, child or collection by that name."""

    def __init__(self, name: str, owner: str, **kwargs: Any):
        super().__init__(f"'{owner}' declares no member named '{name}'", **kwargs)
        self.name = name


class IndexOutOfRangeError(ConfigError, IndexError):
    """A positional lookup fell outside a collection's bounds."""

    def __init__(self, index: int, length: int, **kwargs: Any):
        super().__init__(
            f"Index {index} is out of range for a collection of {length} element(s)",
            **kwargs,
        )
        self.index = index
        self.length = length

"""Enumerations shared by the schema model."""

from enum import Enum


class FieldType(str, Enum):
    """Declared type of a configuration field."""

    STRING = "string"
    INTEGER = "integer"  # signed 32-bit
    LONG = "long"  # signed 64-bit
    DURATION = "duration"
    BOOLEAN = "boolean"


class CollectionShape(str, Enum):
    """Serialization style of an element collection."""

    GENERIC = "generic"  # <add .../> entries with remove/clear support
    NAMED = "named"  # fixed custom entry tag, no removal

"""Configuration schema model, documents and XML persistence."""

from .types import CollectionShape, FieldType
from .errors import (
    ConfigError,
    DocumentStateError,
    DuplicateKeyError,
    DuplicateSectionError,
    FieldNotFoundError,
    IndexOutOfRangeError,
    KeyNotFoundError,
    MissingRequiredFieldError,
    MissingRequiredSectionError,
    ParseError,
    ReadOnlyError,
    SchemaError,
    SectionNotFoundError,
    ValidationError,
)
from .coercion import format_duration, format_value, parse_duration, parse_value
from .validation import (
    DurationValidator,
    IntegerValidator,
    LongValidator,
    RegexStringValidator,
    StringValidator,
    Validator,
    Violation,
    validate,
)
from .schema import ChildSpec, CollectionSpec, FieldSpec
from .state import DocumentState, DocumentStateMachine
from .collection import (
    ElementCollection,
    GenericElementCollection,
    NamedElementCollection,
)
from .element import (
    ConfigNode,
    Element,
    child_property,
    collection_property,
    field_property,
)
from .section import Section
from .registry import (
    SectionRegistration,
    SectionRegistry,
    default_registry,
    register_section,
)
from .document import AppSettings, ConfigDocument, load_document, save_document

__all__ = [
    "AppSettings",
    "ChildSpec",
    "CollectionShape",
    "CollectionSpec",
    "ConfigDocument",
    "ConfigError",
    "ConfigNode",
    "DocumentState",
    "DocumentStateError",
    "DocumentStateMachine",
    "DuplicateKeyError",
    "DuplicateSectionError",
    "DurationValidator",
    "Element",
    "ElementCollection",
    "FieldNotFoundError",
    "FieldSpec",
    "FieldType",
    "GenericElementCollection",
    "IndexOutOfRangeError",
    "IntegerValidator",
    "KeyNotFoundError",
    "LongValidator",
    "MissingRequiredFieldError",
    "MissingRequiredSectionError",
    "NamedElementCollection",
    "ParseError",
    "ReadOnlyError",
    "RegexStringValidator",
    "SchemaError",
    "Section",
    "SectionNotFoundError",
    "SectionRegistration",
    "SectionRegistry",
    "StringValidator",
    "ValidationError",
    "Validator",
    "Violation",
    "child_property",
    "collection_property",
    "default_registry",
    "field_property",
    "format_duration",
    "format_value",
    "load_document",
    "parse_duration",
    "parse_value",
    "register_section",
    "save_document",
    "validate",
]

"""
sectionconf - Strongly-Typed Hierarchical Configuration Files

A library for declaring configuration schemas as typed trees of sections,
elements and keyed element collections, and for loading, validating, editing
and saving XML configuration documents against those schemas.

Key Features:
- Declarative field descriptors with defaults, required flags and keys
- String, integer, long, duration and boolean fields with validators
- Generic (add/remove/clear) and named element collections
- Explicit section registry instead of type-name lookup
- Per-document OPEN/SEALED edit state
- All-or-nothing loading with errors that name the file, section and field
- Round-trip XML serialization

Package Structure:
- core/config/: Schema model, document loading and serialization
- core/utils/: Logging and library settings
"""

__version__ = "0.1.0"

"""Schema descriptors declaring the fields, children and collections of a node."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from .coercion import parse_value
from .types import CollectionShape, FieldType
from .validation import Validator

GENERIC_ENTRY_NAME = "add"


@dataclass(frozen=True)
class FieldSpec:
    """Describes one attribute of an element or section."""

    name: str
    type: FieldType = FieldType.STRING
    default: Any = None
    required: bool = False
    is_key: bool = False
    validator: Optional[Validator] = None
    description: str = ""

    def __post_init__(self) -> None:
        # Defaults may be written as attribute text, e.g. "00:05:00".
        if isinstance(self.default, str) and self.type is not FieldType.STRING:
            object.__setattr__(self, "default", parse_value(self.default, self.type))


@dataclass(frozen=True)
class ChildSpec:
    """Describes a singleton nested element, e.g. ``<element1 .../>``."""

    name: str
    element_type: type
    required: bool = False


@dataclass(frozen=True)
class CollectionSpec:
    """
    Describes a nested element collection.

    Generic collections use ``add`` entries; named collections repeat
    ``entry_name``. ``seed`` lists field values for entries that exist before
    any parsed entries are appended.
    """

    name: str
    element_type: type
    shape: CollectionShape = CollectionShape.GENERIC
    entry_name: str = GENERIC_ENTRY_NAME
    seed: Tuple[Mapping[str, Any], ...] = ()
    required: bool = False

    def __post_init__(self) -> None:
        if self.shape is CollectionShape.NAMED:
            if self.entry_name == GENERIC_ENTRY_NAME:
                raise ValueError(
                    f"Named collection '{self.name}' needs a custom entry_name"
                )
            if self.seed:
                raise ValueError(
                    f"Named collection '{self.name}' cannot declare seed entries"
                )
        elif self.entry_name != GENERIC_ENTRY_NAME:
            raise ValueError(
                f"Generic collection '{self.name}' must use '{GENERIC_ENTRY_NAME}' entries"
            )

"""Ordered, key-unique element collections."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Any, Iterator, List, Optional, Union

from sectionconf.core.utils.logger import log_debug

from .coercion import parse_value
from .errors import (
    ConfigError,
    DuplicateKeyError,
    IndexOutOfRangeError,
    KeyNotFoundError,
    MissingRequiredFieldError,
    SchemaError,
    ValidationError,
)
from .schema import CollectionSpec
from .state import DocumentStateMachine
from .types import CollectionShape

if TYPE_CHECKING:
    from .element import Element

CLEAR_DIRECTIVE = "clear"
REMOVE_DIRECTIVE = "remove"


class ElementCollection:
    """
    Ordered set of elements whose keys are unique within the collection.

    Elements keep the order in which they were added or parsed, and that order
    is preserved when the collection is serialized. Use ``for_spec`` to build
    the variant matching a collection's shape.
    """

    def __init__(self, spec: CollectionSpec, state: Optional[DocumentStateMachine] = None):
        self.spec = spec
        self._state = state or DocumentStateMachine.standalone()
        self._items: List[Element] = []
        for values in spec.seed:
            self._append(spec.element_type(values, state=self._state))

    @classmethod
    def for_spec(
        cls, spec: CollectionSpec, state: Optional[DocumentStateMachine] = None
    ) -> "ElementCollection":
        if spec.shape is CollectionShape.GENERIC:
            return GenericElementCollection(spec, state)
        return NamedElementCollection(spec, state)

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def shape(self) -> CollectionShape:
        return self.spec.shape

    @property
    def entry_name(self) -> str:
        return self.spec.entry_name

    def __len__(self) -> int:
        return len(self._items)

    @property
    def length(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Element]:
        return iter(list(self._items))

    def __getitem__(self, index_or_key: Union[int, Any]) -> Element:
        return self.get(index_or_key)

    def __contains__(self, key: Any) -> bool:
        return any(item.key == key for item in self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ElementCollection):
            return NotImplemented
        return self.spec.name == other.spec.name and self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, keys={self.keys()!r})"

    def keys(self) -> List[Any]:
        return [item.key for item in self._items]

    def get(self, index_or_key: Union[int, Any]) -> Element:
        """
        Look up an element by position (int) or by key (anything else).

        Any ``int`` is treated as a position, so collections keyed by an
        integer or long field must use ``get_by_key`` for key lookups.
        """
        if isinstance(index_or_key, int) and not isinstance(index_or_key, bool):
            self._check_index(index_or_key)
            return self._items[index_or_key]
        return self._items[self.index_of(index_or_key)]

    def get_by_key(self, key: Any) -> Element:
        return self._items[self.index_of(key)]

    def index_of(self, key: Any) -> int:
        for index, item in enumerate(self._items):
            if item.key == key:
                return index
        raise KeyNotFoundError(key, path=self.name)

    def add(self, element: Element) -> None:
        self._state.ensure_writable(f"collection '{self.name}'")
        self._check_type(element)
        self._check_unowned(element)
        if element.key is not None and element.key in self:
            raise DuplicateKeyError(element.key, path=self.name)
        self._append(element)
        log_debug("collection", f"Added '{element.key}' to '{self.name}'")

    def remove_at(self, index: int) -> None:
        self._state.ensure_writable(f"collection '{self.name}'")
        self._check_index(index)
        self._items.pop(index)._detach()

    def replace_at(self, index: int, element: Element) -> None:
        """Remove the element at ``index`` and add ``element`` in its slot."""
        self._state.ensure_writable(f"collection '{self.name}'")
        self._check_index(index)
        self._check_type(element)
        if element is not self._items[index]:
            self._check_unowned(element)
        key = element.key
        if key is not None and any(
            item.key == key for position, item in enumerate(self._items) if position != index
        ):
            raise DuplicateKeyError(key, path=self.name)
        self._items[index]._detach()
        element._attach(self, self._state)
        self._items[index] = element

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._items):
            raise IndexOutOfRangeError(index, len(self._items), path=self.name)

    def _check_type(self, element: Any) -> None:
        if not isinstance(element, self.spec.element_type):
            raise TypeError(
                f"Collection '{self.name}' holds {self.spec.element_type.__name__} "
                f"elements, got {type(element).__name__}"
            )

    def _check_unowned(self, element: Element) -> None:
        # An element belongs to at most one collection.
        if element._owner is not None:
            raise SchemaError(
                f"The element '{element.key}' already belongs to collection "
                f"'{element._owner.name}'; remove it there first",
                path=self.name,
            )

    def _check_rekey(self, element: Element, new_key: Any) -> None:
        if new_key is None:
            return
        if any(item is not element and item.key == new_key for item in self._items):
            raise DuplicateKeyError(new_key, path=self.name)

    def _append(self, element: Element) -> None:
        key = element.key
        if key is not None and key in self:
            raise DuplicateKeyError(key)
        element._attach(self, self._state)
        self._items.append(element)

    def _adopt(self, state: DocumentStateMachine) -> None:
        self._state = state
        for item in self._items:
            item._adopt(state)

    def _load(self, block: ET.Element) -> None:
        if block.attrib:
            attr = next(iter(block.attrib))
            raise SchemaError(f"Unrecognized attribute '{attr}'", path=f"@{attr}")
        for position, entry in enumerate(block, start=1):
            try:
                self._load_entry(entry)
            except ConfigError as exc:
                exc.add_path_segment(f"{entry.tag}[{position}]")
                raise

    def _load_entry(self, entry: ET.Element) -> None:
        if entry.tag != self.entry_name:
            raise SchemaError(f"Unrecognized element '{entry.tag}'")
        self._append(self.spec.element_type.from_block(entry, self._state))

    def to_xml_element(self) -> ET.Element:
        block = ET.Element(self.name)
        for item in self._items:
            block.append(item.to_xml_element(self.entry_name))
        return block


class GenericElementCollection(ElementCollection):
    """
    Collection serialized as ``<add .../>`` entries.

    Supports removal by key and clearing, both through the API and through
    ``<remove .../>`` and ``<clear/>`` directives in the source document.
    """

    def remove(self, key: Any) -> None:
        self._state.ensure_writable(f"collection '{self.name}'")
        self._items.pop(self.index_of(key))._detach()

    def clear(self) -> None:
        self._state.ensure_writable(f"collection '{self.name}'")
        self._clear()

    def _clear(self) -> None:
        for item in self._items:
            item._detach()
        self._items = []

    def _load_entry(self, entry: ET.Element) -> None:
        if entry.tag == CLEAR_DIRECTIVE:
            if entry.attrib:
                raise SchemaError("The clear directive takes no attributes")
            self._clear()
        elif entry.tag == REMOVE_DIRECTIVE:
            self._load_remove(entry)
        else:
            super()._load_entry(entry)

    def _load_remove(self, entry: ET.Element) -> None:
        key_spec = self.spec.element_type.key_spec()
        if key_spec is None:
            raise SchemaError(
                f"Cannot remove from '{self.name}': its elements declare no key"
            )
        for attr in entry.attrib:
            if attr != key_spec.name:
                raise SchemaError(f"Unrecognized attribute '{attr}'", path=f"@{attr}")
        if key_spec.name not in entry.attrib:
            raise MissingRequiredFieldError(key_spec.name)
        raw = entry.attrib[key_spec.name]
        try:
            key = parse_value(raw, key_spec.type)
        except ValueError as exc:
            raise ValidationError(key_spec.name, "type", str(exc), value=raw) from exc
        for index, item in enumerate(self._items):
            if item.key == key:
                self._items.pop(index)._detach()
                return
        log_debug("collection", f"Nothing to remove for key '{key}' in '{self.name}'")

    def to_xml_element(self) -> ET.Element:
        block = ET.Element(self.name)
        if self.spec.seed:
            # Reloading re-creates the seed entries; clear them first.
            ET.SubElement(block, CLEAR_DIRECTIVE)
        for item in self._items:
            block.append(item.to_xml_element(self.entry_name))
        return block


class NamedElementCollection(ElementCollection):
    """Collection serialized as repeated entries with a fixed custom tag."""

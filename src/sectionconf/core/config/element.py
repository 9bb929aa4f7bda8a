"""
Configuration elements.

A node type declares its members as class-level descriptor tuples::

    class ServerElement(Element):
        fields = (
            FieldSpec("name", FieldType.STRING, required=True, is_key=True),
            FieldSpec("port", FieldType.INTEGER, default=80,
                      validator=IntegerValidator(1, 65535)),
        )
        children = (ChildSpec("tls", TlsElement),)
        collections = (CollectionSpec("aliases", AliasElement),)

        name = field_property("name")

The generic routines on ``ConfigNode`` build instances from those
descriptors, either programmatically or from a parsed XML block.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sectionconf.core.utils.logger import log_configuration_change

from .coercion import coerce, format_value
from .collection import ElementCollection
from .errors import ConfigError, FieldNotFoundError, MissingRequiredFieldError, SchemaError
from .schema import ChildSpec, CollectionSpec, FieldSpec
from .state import DocumentStateMachine
from .validation import ensure_valid


class ConfigNode:
    """Shared machinery for elements and sections."""

    fields: Tuple[FieldSpec, ...] = ()
    children: Tuple[ChildSpec, ...] = ()
    collections: Tuple[CollectionSpec, ...] = ()

    _field_index: Dict[str, FieldSpec] = {}
    _child_index: Dict[str, ChildSpec] = {}
    _collection_index: Dict[str, CollectionSpec] = {}
    _key_field: Optional[FieldSpec] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        names = [spec.name for spec in cls.fields]
        names += [spec.name for spec in cls.children]
        names += [spec.name for spec in cls.collections]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise TypeError(f"{cls.__name__} declares duplicate members: {duplicates}")
        keys = [spec for spec in cls.fields if spec.is_key]
        if len(keys) > 1:
            raise TypeError(f"{cls.__name__} declares more than one key field")
        cls._field_index = {spec.name: spec for spec in cls.fields}
        cls._child_index = {spec.name: spec for spec in cls.children}
        cls._collection_index = {spec.name: spec for spec in cls.collections}
        cls._key_field = keys[0] if keys else None

    def __init__(
        self,
        values: Optional[Mapping[str, Any]] = None,
        *,
        state: Optional[DocumentStateMachine] = None,
        **field_values: Any,
    ):
        """
        Build a node from declared defaults plus the supplied field values.

        Values may be typed or given as attribute text. Declared fields that
        are not supplied take their defaults; child elements are built from
        their own defaults.

        Raises:
            FieldNotFoundError: If a supplied name is not a declared field
            ValidationError: If a supplied value violates its field's rule
            MissingRequiredFieldError: If a required field ends up without a value
        """
        supplied = dict(values or {})
        supplied.update(field_values)
        self._setup(supplied, state)
        self._fill_default_children()

    def _setup(self, values: Mapping[str, Any], state: Optional[DocumentStateMachine]) -> None:
        self._state = state or DocumentStateMachine.standalone()
        self._owner: Optional[ElementCollection] = None
        self._values: Dict[str, Any] = {spec.name: spec.default for spec in self.fields}
        self._children: Dict[str, Element] = {}
        self._collections: Dict[str, ElementCollection] = {
            spec.name: ElementCollection.for_spec(spec, self._state)
            for spec in self.collections
        }

        for name, value in values.items():
            self._assign(self._field_spec(name), value)

        for spec in self.fields:
            if spec.required and self._values[spec.name] is None:
                raise MissingRequiredFieldError(spec.name)

    def _fill_default_children(self) -> None:
        for spec in self.children:
            if spec.name not in self._children:
                self._children[spec.name] = spec.element_type(state=self._state)

    @classmethod
    def key_spec(cls) -> Optional[FieldSpec]:
        return cls._key_field

    @classmethod
    def from_block(cls, block: ET.Element, state: DocumentStateMachine) -> "ConfigNode":
        """Build a node from a parsed XML block."""
        for attr in block.attrib:
            if attr not in cls._field_index:
                raise SchemaError(f"Unrecognized attribute '{attr}'", path=f"@{attr}")
        node = cls.__new__(cls)
        node._setup(dict(block.attrib), state)
        node._load_children(block)
        node._fill_default_children()
        return node

    def _load_children(self, block: ET.Element) -> None:
        seen = set()
        for child_block in block:
            tag = child_block.tag
            try:
                if tag in seen:
                    raise SchemaError(f"The element '{tag}' may only appear once")
                seen.add(tag)
                if tag in self._child_index:
                    element_type = self._child_index[tag].element_type
                    self._children[tag] = element_type.from_block(child_block, self._state)
                elif tag in self._collection_index:
                    self._collections[tag]._load(child_block)
                else:
                    raise SchemaError(f"Unrecognized element '{tag}'")
            except ConfigError as exc:
                exc.add_path_segment(tag)
                raise

        for spec in self.children + self.collections:
            if spec.required and spec.name not in seen:
                raise MissingRequiredFieldError(spec.name, kind="element")

    def _field_spec(self, name: str) -> FieldSpec:
        try:
            return self._field_index[name]
        except KeyError:
            raise FieldNotFoundError(name, type(self).__name__) from None

    def _assign(self, spec: FieldSpec, value: Any) -> None:
        value = coerce(value, spec)
        ensure_valid(value, spec)
        if spec.is_key and self._owner is not None:
            self._owner._check_rekey(self, value)
        self._values[spec.name] = value

    def get_field(self, name: str) -> Any:
        return self._values[self._field_spec(name).name]

    def set_field(self, name: str, value: Any) -> None:
        """
        Set a field after checking the read-only gate and the field's rule.

        Raises:
            ReadOnlyError: If the owning document is sealed
            ValidationError: If the value violates the field's type or validator
            DuplicateKeyError: If a key change collides within the owning collection
        """
        spec = self._field_spec(name)
        self._state.ensure_writable(f"property '{name}'")
        old_value = self._values[name]
        self._assign(spec, value)
        log_configuration_change(f"{type(self).__name__}.{name}", old_value, self._values[name])

    @property
    def key(self) -> Any:
        if self._key_field is None:
            return None
        return self._values[self._key_field.name]

    def child(self, name: str) -> "Element":
        try:
            return self._children[name]
        except KeyError:
            raise FieldNotFoundError(name, type(self).__name__) from None

    def collection(self, name: str) -> ElementCollection:
        try:
            return self._collections[name]
        except KeyError:
            raise FieldNotFoundError(name, type(self).__name__) from None

    def _attach(self, owner: ElementCollection, state: DocumentStateMachine) -> None:
        self._owner = owner
        self._adopt(state)

    def _detach(self) -> None:
        self._owner = None

    def _adopt(self, state: DocumentStateMachine) -> None:
        self._state = state
        for child in self._children.values():
            child._adopt(state)
        for collection in self._collections.values():
            collection._adopt(state)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self._values)
        for spec in self.children:
            data[spec.name] = self._children[spec.name].to_dict()
        for name, collection in self._collections.items():
            entries: List[Dict[str, Any]] = [item.to_dict() for item in collection]
            data[name] = entries
        return data

    def to_xml_element(self, tag: str) -> ET.Element:
        node = ET.Element(tag)
        for spec in self.fields:
            value = self._values[spec.name]
            if value is not None:
                node.set(spec.name, format_value(value, spec.type))
        for spec in self.children:
            node.append(self._children[spec.name].to_xml_element(spec.name))
        for collection in self._collections.values():
            if len(collection) or collection.spec.seed:
                node.append(collection.to_xml_element())
        return node

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigNode):
            return NotImplemented
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values!r})"


class Element(ConfigNode):
    """A single structured configuration entry with typed fields."""


def field_property(name: str, writable: bool = True, doc: Optional[str] = None) -> property:
    """Expose a declared field as a Python property on a node class."""

    def getter(self: ConfigNode) -> Any:
        return self.get_field(name)

    def setter(self: ConfigNode, value: Any) -> None:
        self.set_field(name, value)

    return property(getter, setter if writable else None, doc=doc or f"The '{name}' field.")


def child_property(name: str, doc: Optional[str] = None) -> property:
    """Expose a declared child element as a read-only property."""
    return property(lambda self: self.child(name), doc=doc or f"The '{name}' element.")


def collection_property(name: str, doc: Optional[str] = None) -> property:
    """Expose a declared collection as a read-only property."""
    return property(lambda self: self.collection(name), doc=doc or f"The '{name}' collection.")

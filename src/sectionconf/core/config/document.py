"""
Configuration documents.

A ``ConfigDocument`` is loaded once from XML shaped like::

    <configuration>
      <configSections>
        <section name="CustomSection1" type="..." />
      </configSections>
      <appSettings>
        <add key="Setting1" value="May 5, 2014" />
      </appSettings>
      <CustomSection1 fileName="default.txt" maxUsers="1000" />
    </configuration>

Each top-level block is matched against a ``SectionRegistry`` and built into
the registered ``Section`` type. Loading is all-or-nothing: any parse or
schema error leaves the document in the FAILED state with no sections.
"""

from __future__ import annotations

import io
import os
import xml.etree.ElementTree as ET
from collections.abc import MutableMapping
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from sectionconf.core.utils.logger import (
    log_debug,
    log_error,
    log_file_operation,
    log_info,
)

from .errors import (
    ConfigError,
    DocumentStateError,
    DuplicateSectionError,
    MissingRequiredFieldError,
    MissingRequiredSectionError,
    SchemaError,
    SectionNotFoundError,
)
from .persistence import (
    ROOT_TAG,
    ConfigSource,
    parse_config_tree,
    read_config_source,
    render_config_tree,
    save_text_atomic,
    source_label,
)
from .registry import SectionRegistry, default_registry
from .section import Section
from .state import DocumentEvent, DocumentState, DocumentStateMachine

CONFIG_SECTIONS_TAG = "configSections"
APP_SETTINGS_TAG = "appSettings"


class AppSettings(MutableMapping):
    """Ordered string-to-string application settings guarded by the document state."""

    def __init__(self, state: DocumentStateMachine):
        self._state = state
        self._items: Dict[str, str] = {}

    def __getitem__(self, key: str) -> str:
        return self._items[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._state.ensure_writable(f"application setting '{key}'")
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError("Application settings map strings to strings")
        self._items[key] = value

    def __delitem__(self, key: str) -> None:
        self._state.ensure_writable(f"application setting '{key}'")
        del self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"AppSettings({self._items!r})"

    def clear(self) -> None:
        self._state.ensure_writable("application settings")
        self._items.clear()

    def _load(self, block: ET.Element) -> Dict[str, str]:
        items: Dict[str, str] = {}
        for position, entry in enumerate(block, start=1):
            segment = f"{APP_SETTINGS_TAG}/{entry.tag}[{position}]"
            if entry.tag == "add":
                key, value = entry.attrib.get("key"), entry.attrib.get("value")
                if key is None:
                    raise MissingRequiredFieldError("key", path=f"{segment}@key")
                if value is None:
                    raise MissingRequiredFieldError("value", path=f"{segment}@value")
                # Last write wins, but the key keeps its first position.
                items[key] = value
            elif entry.tag == "remove":
                key = entry.attrib.get("key")
                if key is None:
                    raise MissingRequiredFieldError("key", path=f"{segment}@key")
                items.pop(key, None)
            elif entry.tag == "clear":
                items.clear()
            else:
                raise SchemaError(f"Unrecognized element '{entry.tag}'", path=segment)
        return items

    def to_xml_element(self) -> ET.Element:
        block = ET.Element(APP_SETTINGS_TAG)
        for key, value in self._items.items():
            ET.SubElement(block, "add", {"key": key, "value": value})
        return block


class ConfigDocument:
    """
    Root container mapping section names to sections, plus app settings.

    State machine: UNLOADED -> LOADING -> OPEN | FAILED, and OPEN -> SEALED.
    Fields can be changed only while the document is OPEN; changes stay in
    memory until ``save`` or ``to_xml`` is called.
    """

    def __init__(self, registry: Optional[SectionRegistry] = None):
        self.registry = registry if registry is not None else default_registry
        self._state = DocumentStateMachine(DocumentState.UNLOADED)
        self._sections: Dict[str, Section] = {}
        self.app_settings = AppSettings(self._state)
        self.source: Optional[str] = None

    @classmethod
    def from_file(
        cls, path: Union[str, os.PathLike], registry: Optional[SectionRegistry] = None
    ) -> "ConfigDocument":
        return cls(registry).load(path)

    @classmethod
    def from_string(
        cls, text: str, registry: Optional[SectionRegistry] = None
    ) -> "ConfigDocument":
        return cls(registry).load(io.StringIO(text))

    @property
    def state(self) -> DocumentState:
        return self._state.state

    @property
    def is_sealed(self) -> bool:
        return self._state.is_sealed

    def load(self, source: ConfigSource) -> "ConfigDocument":
        """
        Load the document from a path or an open stream.

        Raises:
            DocumentStateError: If the document was already loaded or failed
            ParseError: If the input is not well-formed
            SchemaError: If a section, element or field breaks its schema
            OSError: If the file cannot be read
        """
        self._state.transition(DocumentEvent.BEGIN_LOAD)
        label = "<string>" if isinstance(source, io.StringIO) else source_label(source)
        try:
            data = read_config_source(source)
            root = parse_config_tree(data)
            sections, settings = self._build(root)
        except ConfigError as exc:
            self._state.transition(DocumentEvent.LOAD_FAILED)
            if exc.source is None:
                exc.source = label
            log_error("document", f"Failed to load configuration: {exc}")
            raise
        except OSError as exc:
            self._state.transition(DocumentEvent.LOAD_FAILED)
            log_file_operation("read", label, success=False, error=str(exc))
            raise
        except Exception as exc:
            self._state.transition(DocumentEvent.LOAD_FAILED)
            log_error("document", "Unexpected failure while loading", context=label, exception=exc)
            raise

        self._sections = sections
        self.app_settings._items = settings
        self.source = label
        self._state.transition(DocumentEvent.LOAD_DONE)
        log_info(
            "document",
            f"Loaded configuration with {len(sections)} section(s)",
            context=label,
        )
        return self

    def _build(self, root: ET.Element) -> Tuple[Dict[str, Section], Dict[str, str]]:
        sections: Dict[str, Section] = {}
        settings: Dict[str, str] = {}
        seen_settings = False

        for block in root:
            tag = block.tag
            if tag == CONFIG_SECTIONS_TAG:
                self._check_declarations(block)
            elif tag == APP_SETTINGS_TAG:
                if seen_settings:
                    raise SchemaError(f"The element '{tag}' may only appear once", path=tag)
                seen_settings = True
                settings = self.app_settings._load(block)
            elif tag in self.registry:
                if tag in sections:
                    raise SchemaError(f"Section '{tag}' may only appear once", path=tag)
                sections[tag] = self._build_section(tag, block)
            else:
                raise SchemaError(f"Unrecognized configuration section '{tag}'", path=tag)

        for name in self.registry.required_names():
            if name not in sections:
                raise MissingRequiredSectionError(name)
        return sections, settings

    def _check_declarations(self, block: ET.Element) -> None:
        for position, entry in enumerate(block, start=1):
            segment = f"{CONFIG_SECTIONS_TAG}/{entry.tag}[{position}]"
            if entry.tag != "section":
                raise SchemaError(f"Unrecognized element '{entry.tag}'", path=segment)
            name = entry.attrib.get("name")
            if name is None:
                raise MissingRequiredFieldError("name", path=f"{segment}@name")
            if name not in self.registry:
                raise SchemaError(f"Declared section '{name}' is not registered", path=segment)

    def _build_section(self, name: str, block: ET.Element) -> Section:
        registration = self.registry.get(name)
        try:
            section = registration.section_type.from_block(block, self._state)
        except ConfigError as exc:
            exc.add_path_segment(name)
            raise
        section.section_name = name
        log_debug("document", f"Built section '{name}' as {registration.type_name}")
        return section

    def _ensure_loaded(self) -> None:
        if not self._state.is_loaded:
            raise DocumentStateError(
                f"Document is {self._state.state.name}; load it before querying"
            )

    def get_section(self, name: str) -> Section:
        self._ensure_loaded()
        try:
            return self._sections[name]
        except KeyError:
            raise SectionNotFoundError(name, source=self.source) from None

    def has_section(self, name: str) -> bool:
        return name in self._sections

    def section_names(self) -> List[str]:
        return list(self._sections)

    def add_section(self, name: str, section: Section) -> None:
        """Attach a programmatically built section under a registered name."""
        self._state.ensure_writable("document")
        registration = self.registry.get(name)
        if not isinstance(section, registration.section_type):
            raise TypeError(
                f"Section '{name}' must be a {registration.section_type.__name__}"
            )
        if name in self._sections:
            raise DuplicateSectionError(name)
        section.section_name = name
        section._adopt(self._state)
        self._sections[name] = section

    def seal(self) -> None:
        """Make the document read-only; queries keep working."""
        self._state.transition(DocumentEvent.SEAL)
        log_debug("document", "Document sealed", context=self.source or "")

    def to_xml(self) -> str:
        self._ensure_loaded()
        root = ET.Element(ROOT_TAG)
        if self._sections:
            declarations = ET.SubElement(root, CONFIG_SECTIONS_TAG)
            for name in self._sections:
                ET.SubElement(
                    declarations,
                    "section",
                    {"name": name, "type": self.registry.get(name).type_name},
                )
        if self.app_settings:
            root.append(self.app_settings.to_xml_element())
        for name, section in self._sections.items():
            root.append(section.to_xml_element(name))
        return render_config_tree(root)

    def save(self, path: Union[str, os.PathLike]) -> Path:
        """Serialize the document and write it atomically to ``path``."""
        target = save_text_atomic(self.to_xml(), path)
        log_file_operation("write", str(target), success=True)
        return target

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigDocument):
            return NotImplemented
        return (
            self._sections == other._sections
            and dict(self.app_settings) == dict(other.app_settings)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"ConfigDocument(state={self.state.name}, source={self.source!r}, "
            f"sections={self.section_names()!r})"
        )


def load_document(
    source: ConfigSource, registry: Optional[SectionRegistry] = None
) -> ConfigDocument:
    """Load a configuration document from a path or stream."""
    return ConfigDocument(registry).load(source)


def save_document(document: ConfigDocument, path: Union[str, os.PathLike]) -> Path:
    """Write a configuration document to ``path``."""
    return document.save(path)

"""Section registry mapping section names to section types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Type

from .errors import DuplicateSectionError, SectionNotFoundError
from .section import Section


@dataclass(frozen=True)
class SectionRegistration:
    """A section name bound to the type that parses it."""

    name: str
    section_type: Type[Section]
    required: bool = False

    @property
    def type_name(self) -> str:
        return f"{self.section_type.__module__}.{self.section_type.__qualname__}"


class SectionRegistry:
    """
    Explicit lookup table used while parsing a document.

    Populate it at startup, either directly or with the ``register_section``
    decorator, then hand it to ``ConfigDocument``.
    """

    def __init__(self):
        self._sections: Dict[str, SectionRegistration] = {}

    def register(
        self, name: str, section_type: Type[Section], required: bool = False
    ) -> SectionRegistration:
        if name in self._sections:
            raise DuplicateSectionError(name)
        if not (isinstance(section_type, type) and issubclass(section_type, Section)):
            raise TypeError(f"Section '{name}' must be registered with a Section subclass")
        registration = SectionRegistration(name, section_type, required)
        self._sections[name] = registration
        return registration

    def unregister(self, name: str) -> None:
        if name not in self._sections:
            raise SectionNotFoundError(name)
        del self._sections[name]

    def get(self, name: str) -> SectionRegistration:
        try:
            return self._sections[name]
        except KeyError:
            raise SectionNotFoundError(name) from None

    def names(self) -> List[str]:
        return list(self._sections)

    def required_names(self) -> List[str]:
        return [name for name, registration in self._sections.items() if registration.required]

    def __contains__(self, name: object) -> bool:
        return name in self._sections

    def __iter__(self) -> Iterator[SectionRegistration]:
        return iter(list(self._sections.values()))

    def __len__(self) -> int:
        return len(self._sections)


default_registry = SectionRegistry()


def register_section(
    name: str, required: bool = False, registry: Optional[SectionRegistry] = None
) -> Callable[[Type[Section]], Type[Section]]:
    """Class decorator registering a section type under ``name``."""

    def decorator(section_type: Type[Section]) -> Type[Section]:
        (registry if registry is not None else default_registry).register(
            name, section_type, required
        )
        return section_type

    return decorator

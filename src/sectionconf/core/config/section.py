"""Top-level configuration sections."""

from __future__ import annotations

from typing import Any, Optional

from .element import ConfigNode, Element


class Section(ConfigNode):
    """
    A named top-level configuration block.

    Declares scalar fields, at most one singleton child element and any
    number of element collections. The name is assigned when the section is
    registered in a document.
    """

    section_name: Optional[str] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if len(cls.children) > 1:
            raise TypeError(
                f"Section {cls.__name__} declares {len(cls.children)} child elements; "
                "a section may declare at most one"
            )

    @property
    def name(self) -> Optional[str]:
        return self.section_name

    @property
    def element(self) -> Optional[Element]:
        """The singleton child element, or None if the section declares none."""
        if not self.children:
            return None
        return self.child(self.children[0].name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.section_name!r}, {self._values!r})"

"""Reading, parsing and writing configuration files."""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import IO, Union

from .errors import ParseError

ConfigSource = Union[str, os.PathLike, IO[str], IO[bytes]]

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'
ROOT_TAG = "configuration"


def is_path(source: ConfigSource) -> bool:
    return isinstance(source, (str, os.PathLike))


def source_label(source: ConfigSource) -> str:
    """Human-readable name of a source, used in error messages."""
    if is_path(source):
        return str(Path(source))
    name = getattr(source, "name", None)
    if isinstance(name, str):
        return name
    return "<stream>"


def read_config_source(source: ConfigSource) -> Union[str, bytes]:
    """
    Read a configuration source fully.

    Paths are opened, read and closed here; streams are read but left open
    for the caller to close.
    """
    if is_path(source):
        with open(source, "rb") as handle:
            return handle.read()
    return source.read()


def parse_config_tree(data: Union[str, bytes]) -> ET.Element:
    """Parse document text into an XML tree rooted at ``<configuration>``."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        line, column = getattr(exc, "position", (None, None))
        raise ParseError(f"Malformed configuration document: {exc}", line=line, column=column) from exc
    if root.tag != ROOT_TAG:
        raise ParseError(
            f"Root element must be '<{ROOT_TAG}>', found '<{root.tag}>'", path=root.tag
        )
    return root


def render_config_tree(root: ET.Element) -> str:
    ET.indent(root, space="  ")
    return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def save_text_atomic(text: str, target_path: Union[str, os.PathLike]) -> Path:
    target_path = Path(target_path)
    target_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = target_path.with_suffix(target_path.suffix + ".tmp")
    try:
        temp_path.write_text(text, encoding="utf-8")
        temp_path.replace(target_path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
    return target_path

import io
from pathlib import Path

import pytest

import sectionconf.core.config.persistence as persistence
from sectionconf.core.config.errors import ParseError


def test_read_config_source_from_path(tmp_path):
    target = tmp_path / "app.xml"
    target.write_text("<configuration />", encoding="utf-8")
    assert persistence.read_config_source(target) == b"<configuration />"
    assert persistence.read_config_source(str(target)) == b"<configuration />"


def test_read_config_source_leaves_stream_open():
    stream = io.StringIO("<configuration />")
    assert persistence.read_config_source(stream) == "<configuration />"
    assert not stream.closed


def test_source_label():
    assert persistence.source_label(Path("a") / "b.xml") == str(Path("a") / "b.xml")
    assert persistence.source_label(io.BytesIO(b"")) == "<stream>"


def test_parse_config_tree_reports_position():
    with pytest.raises(ParseError) as excinfo:
        persistence.parse_config_tree("<configuration>\n  <a>\n</configuration>")
    assert excinfo.value.line == 3


def test_parse_config_tree_checks_root():
    with pytest.raises(ParseError) as excinfo:
        persistence.parse_config_tree(b"<settings />")
    assert "configuration" in str(excinfo.value)


def test_render_config_tree_indents_and_declares():
    root = persistence.parse_config_tree("<configuration><a><b /></a></configuration>")
    text = persistence.render_config_tree(root)
    assert text.startswith(persistence.XML_DECLARATION)
    assert "\n  <a>\n    <b />\n  </a>\n" in text


def test_save_text_atomic_creates_parents_and_replaces(tmp_path):
    target = tmp_path / "nested" / "dir" / "app.xml"
    persistence.save_text_atomic("first", target)
    persistence.save_text_atomic("second", target)
    assert target.read_text(encoding="utf-8") == "second"
    assert not (target.parent / "app.xml.tmp").exists()


def test_save_text_atomic_removes_temp_file_on_failure(tmp_path, monkeypatch):
    target = tmp_path / "app.xml"

    def fail_replace(self, other):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "replace", fail_replace)
    with pytest.raises(OSError):
        persistence.save_text_atomic("text", target)
    assert not (tmp_path / "app.xml.tmp").exists()
    assert not target.exists()

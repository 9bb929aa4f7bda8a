from __future__ import annotations

from datetime import timedelta
from typing import Any

from sectionconf.core.config import ConfigDocument, save_document
from sectionconf.core.config.persistence import XML_DECLARATION
from tests.fixtures.config_fixtures import CustomConfigElement1


def test_golden_document_roundtrip(sample_document: Any, sample_registry: Any) -> None:
    text = sample_document.to_xml()
    assert text.startswith(XML_DECLARATION)

    reloaded = ConfigDocument.from_string(text, sample_registry)
    assert reloaded == sample_document
    assert reloaded.section_names() == sample_document.section_names()
    # Seed entries are cleared before the saved entries are re-added.
    assert reloaded.get_section("CustomSection2").element1_collection1.keys() == [
        "default1",
        "k1",
        "k2",
    ]


def test_edits_survive_save_and_reload(
    sample_document: Any, sample_registry: Any, tmp_path: Any
) -> None:
    section1 = sample_document.get_section("CustomSection1")
    section1.max_users = 250
    section1.max_idle_time = timedelta(hours=1, seconds=30)

    section2 = sample_document.get_section("CustomSection2")
    section2.element1_collection1.remove("default1")
    section2.element1_collection2.add(CustomConfigElement1(e1property1="k3"))
    sample_document.app_settings["Setting3"] = "May 7, 2014"

    target = save_document(sample_document, tmp_path / "out" / "saved.xml")
    reloaded = ConfigDocument.from_file(target, sample_registry)

    assert reloaded == sample_document
    assert reloaded.get_section("CustomSection1").max_users == 250
    assert reloaded.get_section("CustomSection1").max_idle_time == timedelta(hours=1, seconds=30)
    assert reloaded.get_section("CustomSection2").element1_collection1.keys() == ["k1", "k2"]
    assert reloaded.get_section("CustomSection2").element1_collection2.keys() == [
        "k1",
        "k2",
        "k3",
    ]
    assert reloaded.app_settings["Setting3"] == "May 7, 2014"


def test_serialized_layout(sample_document: Any) -> None:
    text = sample_document.to_xml()
    assert text.index("<configSections>") < text.index("<appSettings>")
    assert text.index("<appSettings>") < text.index("<CustomSection1 ")
    assert 'maxIdleTime="00:15:00"' in text
    assert '<section name="CustomSection2" type="tests.fixtures.config_fixtures.CustomSection2" />' in text
    assert "<element1name " in text


def test_sealed_document_still_serializes(sample_document: Any, sample_registry: Any) -> None:
    sample_document.seal()
    reloaded = ConfigDocument.from_string(sample_document.to_xml(), sample_registry)
    assert reloaded == sample_document
    assert not reloaded.is_sealed

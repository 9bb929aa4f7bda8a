"""
Shared pytest fixtures and configuration for sectionconf tests.

This module provides the sample schema registry, the sample configuration
document (as text, as a file on disk and loaded), and isolation of the
library's own settings and logger between tests.
"""

import os
import sys
from pathlib import Path

import pytest

# Put `src/` first so `import sectionconf` uses workspace code.
_REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))
# Put repo root early so `import tests.*` resolves locally.
sys.path.insert(1, str(_REPO_ROOT))

import sectionconf.core.utils.config as library_config  # noqa: E402
from sectionconf.core.config import ConfigDocument, SectionRegistry  # noqa: E402
from sectionconf.core.utils.logger import reset_logging  # noqa: E402
from tests.fixtures.config_fixtures import (  # noqa: E402
    SAMPLE_CONFIG_XML,
    build_sample_registry,
)


# ============================================================================
# Isolation
# ============================================================================

@pytest.fixture(autouse=True)
def isolated_library_config(monkeypatch):
    """Clear SECTIONCONF_* variables and skip .env discovery for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("SECTIONCONF_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(library_config, "_env_loaded", True)
    library_config.reset_config()
    reset_logging()
    yield
    library_config.reset_config()
    reset_logging()


# ============================================================================
# Sample Document Fixtures
# ============================================================================

@pytest.fixture
def sample_registry() -> SectionRegistry:
    """Registry holding CustomSection1, CustomSection2 and CustomSection3."""
    return build_sample_registry()


@pytest.fixture
def sample_config_xml() -> str:
    return SAMPLE_CONFIG_XML


@pytest.fixture
def sample_config_path(tmp_path: Path) -> Path:
    """Write the sample document to a temporary directory, like a generated fixture file."""
    config_dir = tmp_path / "tmp"
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "testconfig.xml"
    config_path.write_text(SAMPLE_CONFIG_XML, encoding="utf-8")
    return config_path


@pytest.fixture
def sample_document(sample_config_path: Path, sample_registry: SectionRegistry) -> ConfigDocument:
    return ConfigDocument.from_file(sample_config_path, sample_registry)

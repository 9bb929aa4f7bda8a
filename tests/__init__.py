"""Test package marker for reliable intra-test imports."""
"""
Test package marker.

This file prevents Python from treating `tests` as a namespace package across multiple
checkouts on `sys.path`, which can cause pytest to import and execute the wrong test
modules when another `tests/` directory exists elsewhere on the machine.
"""

"""
Test suite for sectionconf.

Tests are organized by package:

- core/config/: Schema model, collections, documents and XML round-trips
- core/utils/: Logging and library settings
- fixtures/: The sample schema and configuration document

The sample schema types are referenced by module path from the sample
document, so `tests.fixtures.config_fixtures` must stay importable.
"""

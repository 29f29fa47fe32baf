"""Tests for uritemplates package imports.

These tests verify that the package structure is correct and all
modules are importable.
"""

from __future__ import annotations

import logging


def test_import_uritemplates() -> None:
    """Import uritemplates package succeeds."""
    import uritemplates

    assert hasattr(uritemplates, "__version__")
    assert uritemplates.__version__ == "0.1.0"


def test_import_core_module() -> None:
    """Import uritemplates.core submodule succeeds."""
    from uritemplates import core

    assert hasattr(core, "__all__")


def test_import_units_module() -> None:
    """Import uritemplates.units submodule succeeds."""
    from uritemplates import units

    assert hasattr(units, "__all__")


def test_import_format_module() -> None:
    """Import uritemplates.format submodule succeeds."""
    from uritemplates import format  # noqa: A004

    assert hasattr(format, "__all__")


def test_import_template_module() -> None:
    """Import uritemplates.template submodule succeeds."""
    from uritemplates import template

    assert hasattr(template, "__all__")


def test_import_internal_module() -> None:
    """Import uritemplates._internal submodule succeeds."""
    from uritemplates import _internal

    assert hasattr(_internal, "__all__")


def test_public_names_resolve() -> None:
    """Every name in __all__ is an attribute of the package."""
    import uritemplates

    for name in uritemplates.__all__:
        assert hasattr(uritemplates, name), name


def test_errors_share_base() -> None:
    """All exceptions derive from UriTemplatesError."""
    import uritemplates
    from uritemplates import errors

    for name in errors.__all__:
        assert issubclass(getattr(uritemplates, name), uritemplates.UriTemplatesError)


def test_package_logger_has_null_handler() -> None:
    """The package logger is silent unless the application configures logging."""
    import uritemplates  # noqa: F401

    handlers = logging.getLogger("uritemplates").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)

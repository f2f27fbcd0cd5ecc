"""Tests for lazy import system in groupbrotr.__init__."""

from __future__ import annotations

import importlib
import sys

import pytest


class TestLazyImports:
    """Test PEP 562 lazy loading in groupbrotr.__init__."""

    def test_lazy_import_does_not_eagerly_load(self) -> None:
        """Verify that importing groupbrotr does not eagerly load subpackages."""
        saved = {name: mod for name, mod in sys.modules.items() if name.startswith("groupbrotr")}
        for name in saved:
            del sys.modules[name]
        try:
            importlib.import_module("groupbrotr")
            assert "groupbrotr.core" not in sys.modules
            assert "groupbrotr.models" not in sys.modules
            assert "groupbrotr.utils" not in sys.modules
            assert "groupbrotr.nips" not in sys.modules
        finally:
            for name in [n for n in sys.modules if n.startswith("groupbrotr")]:
                del sys.modules[name]
            sys.modules.update(saved)

    def test_lazy_import_resolves_on_access(self) -> None:
        """Verify that lazy attributes resolve correctly."""
        from groupbrotr import Nip29
        from groupbrotr.nips.nip29.builders import Nip29 as DirectNip29

        assert Nip29 is DirectNip29

    def test_lazy_import_caches_after_first_access(self) -> None:
        """Verify that resolved attributes are cached in globals."""
        import groupbrotr

        _ = groupbrotr.Event
        assert "Event" in vars(groupbrotr)

    def test_lazy_import_invalid_attribute(self) -> None:
        """Verify that invalid attributes raise AttributeError."""
        import groupbrotr

        with pytest.raises(AttributeError, match="no_such_thing"):
            _ = getattr(groupbrotr, "no_such_thing")  # noqa: B009

    def test_all_exports_are_in_lazy_imports(self) -> None:
        """Verify that __all__ and _LAZY_IMPORTS are in sync."""
        import groupbrotr

        assert set(groupbrotr.__all__) == set(groupbrotr._LAZY_IMPORTS)

    def test_dir_returns_all(self) -> None:
        """Verify that dir(groupbrotr) returns __all__."""
        import groupbrotr

        assert dir(groupbrotr) == groupbrotr.__all__

    def test_version_is_accessible(self) -> None:
        """Verify that __version__ is set from package metadata."""
        import groupbrotr

        assert isinstance(groupbrotr.__version__, str)
        assert groupbrotr.__version__

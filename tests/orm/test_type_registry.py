"""Tests for typeref.orm.registry (named type table) and typeref.register."""

import pytest

import typeref
from typeref.core.errors import InvalidConfigError
from typeref.core.identifier import qualname_segments
from typeref.orm.registry import (
    build_type,
    get_type,
    list_types,
    register_type,
)
from typeref.orm.types import IdentifierType

from tests._support.entities import StrategyA


class TestRegisterType:
    def test_default_name(self):
        register_type()
        assert list_types() == ["active_module"]
        assert get_type("active_module") is IdentifierType

    def test_name_from_settings(self, monkeypatch):
        monkeypatch.setenv("TYPEREF_TYPE_NAME", "module_ref")
        register_type()
        assert list_types() == ["module_ref"]
        assert get_type() is IdentifierType

    def test_idempotent(self):
        register_type("active_module")
        register_type("active_module")
        assert list_types() == ["active_module"]

    def test_conflicting_factory(self):
        register_type("active_module")
        with pytest.raises(ValueError, match="already registered"):
            register_type("active_module", factory=lambda *a, **kw: None)

    def test_empty_name_rejected(self):
        with pytest.raises(InvalidConfigError):
            register_type("")

    def test_top_level_register(self):
        assert typeref.register() is IdentifierType
        assert "active_module" in list_types()


class TestGetType:
    def test_missing(self):
        with pytest.raises(KeyError, match="not found"):
            get_type("missing")

    def test_build_type(self):
        register_type()
        column_type = build_type("active_module", [StrategyA], segments_of=qualname_segments)
        assert isinstance(column_type, IdentifierType)
        assert column_type.registry.identifiers[0].name == "StrategyA"

    def test_build_type_tags_registered_name(self):
        register_type("module_ref")
        column_type = build_type("module_ref", [StrategyA])
        assert column_type.type_name == "module_ref"

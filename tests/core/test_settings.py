"""Tests for typeref.core.settings module.

Covers:
- TypeRefSettings instantiation with defaults
- Environment variable override
- Field validation
- Cached accessor
"""

import pytest
from pydantic import ValidationError

from typeref.core.settings import TypeRefSettings, get_settings, reset_settings


class TestTypeRefSettingsDefaults:
    def test_default_type_name(self):
        assert TypeRefSettings().type_name == "active_module"

    def test_default_compat_mode(self):
        assert TypeRefSettings().compat_mode is False

    def test_default_collision_policy(self):
        assert TypeRefSettings().collision_policy == "last_wins"

    def test_default_log_level(self):
        assert TypeRefSettings().log_level == "INFO"


class TestTypeRefSettingsEnvOverride:
    def test_type_name_from_env(self, monkeypatch):
        monkeypatch.setenv("TYPEREF_TYPE_NAME", "module_ref")
        assert TypeRefSettings().type_name == "module_ref"

    def test_compat_mode_from_env(self, monkeypatch):
        monkeypatch.setenv("TYPEREF_COMPAT_MODE", "true")
        assert TypeRefSettings().compat_mode is True

    def test_unprefixed_env_ignored(self, monkeypatch):
        monkeypatch.setenv("TYPE_NAME", "nope")
        assert TypeRefSettings().type_name == "active_module"


class TestTypeRefSettingsValidation:
    def test_invalid_policy(self):
        with pytest.raises(ValidationError):
            TypeRefSettings(collision_policy="random")

    def test_empty_type_name(self):
        with pytest.raises(ValidationError):
            TypeRefSettings(type_name="")


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_reset(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("TYPEREF_TYPE_NAME", "other")
        assert get_settings() is first
        reset_settings()
        assert get_settings().type_name == "other"


class TestCollectionMarkers:
    def test_unmarked_tests_marked_unit(self, request):
        assert request.node.get_closest_marker("unit") is not None

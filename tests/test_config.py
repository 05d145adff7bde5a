"""Tests for settings and YAML settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from cpow.common import CpowError
from cpow.config import (
    Settings,
    get_settings,
    load_settings,
    set_settings,
    use_settings,
    validate_settings_dict,
)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.mode == "native"
        assert settings.dps == 50
        assert settings.zero_tolerance == 1e-12

    def test_unknown_mode(self) -> None:
        with pytest.raises(CpowError, match="Unknown precision mode"):
            Settings(mode="decimal")  # type: ignore[arg-type]

    def test_invalid_dps(self) -> None:
        with pytest.raises(CpowError, match="dps must be a positive integer"):
            Settings(dps=0)

    def test_invalid_zero_tolerance(self) -> None:
        with pytest.raises(CpowError, match="zero_tolerance must be positive"):
            Settings(zero_tolerance=0.0)


class TestActiveSettings:
    def test_set_settings_returns_previous(self) -> None:
        original = get_settings()
        previous = set_settings(Settings(mode="arbitrary"))

        assert previous is original
        assert get_settings().mode == "arbitrary"

    def test_use_settings_restores(self) -> None:
        original = get_settings()

        with use_settings(mode="arbitrary", dps=80) as settings:
            assert settings.mode == "arbitrary"
            assert settings.dps == 80
            assert get_settings() is settings

        assert get_settings() is original

    def test_use_settings_restores_on_error(self) -> None:
        original = get_settings()

        with pytest.raises(RuntimeError):
            with use_settings(mode="arbitrary"):
                raise RuntimeError("boom")

        assert get_settings() is original

    def test_use_settings_validates(self) -> None:
        original = get_settings()

        with pytest.raises(CpowError):
            with use_settings(dps=-1):
                pass  # pragma: no cover

        assert get_settings() is original


class TestLoadSettings:
    def test_load_from_string(self) -> None:
        settings = load_settings("mode: arbitrary\ndps: 80\nzero_tolerance: 1.0e-30\n")
        assert settings == Settings(mode="arbitrary", dps=80, zero_tolerance=1e-30)

    def test_missing_keys_keep_defaults(self) -> None:
        settings = load_settings("mode: arbitrary\n")
        assert settings.dps == 50
        assert settings.zero_tolerance == 1e-12

    def test_empty_document(self) -> None:
        assert load_settings("\n") == Settings()

    def test_load_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "cpow.yaml"
        path.write_text("mode: arbitrary\ndps: 30\n", encoding="utf-8")

        assert load_settings(path) == Settings(mode="arbitrary", dps=30)
        assert load_settings(str(path)) == Settings(mode="arbitrary", dps=30)

    def test_invalid_mode(self) -> None:
        with pytest.raises(CpowError, match="mode"):
            load_settings("mode: decimal\n")

    def test_unknown_key(self) -> None:
        with pytest.raises(CpowError, match="Invalid settings"):
            load_settings("mode: native\nprecision: 10\n")

    def test_invalid_yaml(self) -> None:
        with pytest.raises(CpowError, match="Failed to parse YAML"):
            load_settings("mode: [native\n")


class TestValidateSettingsDict:
    def test_valid(self) -> None:
        assert validate_settings_dict({"mode": "native", "dps": 15}) == []

    def test_reports_every_error(self) -> None:
        errors = validate_settings_dict({"mode": "decimal", "dps": 0})
        assert len(errors) == 2
        assert any(e.startswith("dps:") for e in errors)
        assert any(e.startswith("mode:") for e in errors)

    def test_root_error(self) -> None:
        errors = validate_settings_dict(["native"])
        assert errors == ["<root>: ['native'] is not of type 'object'"]

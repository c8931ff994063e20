from __future__ import annotations

import pytest
from pydantic import ValidationError

from planimeter.core.settings import EllipsoidSettings, current_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("PLANIMETER_ELLIPSOID__NAME", "PLANIMETER_OUTPUT__PRECISION", "PLANIMETER_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)

    settings = current_settings()

    assert settings.ellipsoid.name == "WGS84"
    assert settings.ellipsoid.major_radius is None
    assert settings.output.precision == 3
    assert settings.log_level == "INFO"


def test_nested_environment_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLANIMETER_ELLIPSOID__NAME", "GRS80")
    monkeypatch.setenv("PLANIMETER_OUTPUT__PRECISION", "5")

    settings = current_settings()

    assert settings.ellipsoid.name == "GRS80"
    assert settings.output.precision == 5


def test_custom_ellipsoid_needs_both_parameters() -> None:
    with pytest.raises(ValidationError, match="Both major_radius and flattening have to be provided"):
        EllipsoidSettings(major_radius=6371000.0)

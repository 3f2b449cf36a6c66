# tests/conftest.py
"""
Pytest configuration for the astro-explorer suite.

- Registers Hypothesis profiles for local dev and CI.
- Isolates settings from the developer's `.env` files and environment.
"""

from __future__ import annotations

import os

import pytest
from hypothesis import HealthCheck, settings as hypothesis_settings

from core.config import AppSettings


hypothesis_settings.register_profile(
    "dev",
    hypothesis_settings(
        deadline=None,
        max_examples=60,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)
hypothesis_settings.register_profile(
    "ci",
    hypothesis_settings(
        deadline=None,
        max_examples=150,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)

_profile = (
    "ci"
    if (os.getenv("CI") or os.getenv("GITHUB_ACTIONS"))
    else os.getenv("HYPOTHESIS_PROFILE", "dev")
)
hypothesis_settings.load_profile(_profile)


def pytest_report_header(config: pytest.Config) -> str:
    return f"Hypothesis profile: '{_profile}'"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for key in list(os.environ):
        if key.upper().startswith("ASTRO_EXPLORER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, api_key="TEST_KEY")

from __future__ import annotations

import pytest

from access_core.core.config import AppSettings


@pytest.mark.parametrize(
    ("environment", "enforced"),
    [("local", False), ("test", False), ("staging", True), ("production", True)],
)
def test_enforcement_defaults_by_environment(monkeypatch, environment, enforced) -> None:
    monkeypatch.delenv("ACR_ENFORCE_AUTHORIZATION", raising=False)
    assert AppSettings(environment=environment, _env_file=None).enforce_authorization is enforced


def test_explicit_enforcement_wins(monkeypatch) -> None:
    monkeypatch.setenv("ACR_ENFORCE_AUTHORIZATION", "false")
    assert AppSettings(environment="production", _env_file=None).enforce_authorization is False

    monkeypatch.setenv("ACR_ENFORCE_AUTHORIZATION", "true")
    assert AppSettings(environment="local", _env_file=None).enforce_authorization is True


def test_default_resources_accepts_comma_list(monkeypatch) -> None:
    monkeypatch.setenv("ACR_DEFAULT_RESOURCES", "role, resource,,image")
    assert AppSettings(_env_file=None).default_resources == ["role", "resource", "image"]

import tomllib
from pathlib import Path

import pytest
from dynaconf.validator import ValidationError  # type: ignore[reportMissingTypeStubs]
from helpers import SECRET

from autocomplete.config import config, load_settings, valid_secret


@pytest.mark.parametrize(
    ("secret", "expected"),
    [(SECRET, True), ("x" * 32, True), ("x" * 31, False), ("", False)],
)
def test_valid_secret(secret: str, expected: bool) -> None:
    assert valid_secret(secret) is expected


def test_load_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTOCOMPLETE_SECRET_KEY", SECRET)
    monkeypatch.setenv("AUTOCOMPLETE_PORT", "9090")
    monkeypatch.setenv("AUTOCOMPLETE_CACHE_INVALIDATION", "precise")
    config.reload()  # type: ignore[reportUnknownMemberType]

    settings = load_settings()
    assert settings.secret_key == SECRET
    assert settings.port == 9090
    assert settings.cache_invalidation == "precise"
    assert settings.cache_ttl > 0


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("AUTOCOMPLETE_SECRET_KEY", "too-short"),
        ("AUTOCOMPLETE_PORT", "70000"),
        ("AUTOCOMPLETE_CACHE_INVALIDATION", "sometimes"),
        ("AUTOCOMPLETE_RATE_BURST", "0"),
    ],
)
def test_load_settings_rejects_bad_values(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv("AUTOCOMPLETE_SECRET_KEY", SECRET)
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        config.reload()  # type: ignore[reportUnknownMemberType]
        load_settings()


def test_committed_settings_hold_no_credentials() -> None:
    settings = tomllib.loads((Path(__file__).parents[1] / "settings.toml").read_text(encoding="utf-8"))
    assert "secret_key" not in settings
    assert "users" not in settings

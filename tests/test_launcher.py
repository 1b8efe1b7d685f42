import pytest
from click.testing import CliRunner
from helpers import SECRET

from autocomplete import launcher
from autocomplete.core import TokenIssuer
from autocomplete.typedefs import Settings

SETTINGS = Settings(secret_key=SECRET, users={"user1": "password123"})


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    monkeypatch.setattr(launcher, "load_settings", lambda: SETTINGS)
    return CliRunner()


def test_token_command(runner: CliRunner) -> None:
    result = runner.invoke(launcher.main, ["token", "user1"])
    assert result.exit_code == 0

    claims = TokenIssuer(SECRET, {}).verify(result.output.strip())
    assert claims["username"] == "user1"


def test_token_for_unknown_user_warns(runner: CliRunner) -> None:
    result = runner.invoke(launcher.main, ["token", "nobody"])
    assert result.exit_code == 0
    assert "'nobody' is not a configured user" in result.output


def test_config_command(runner: CliRunner) -> None:
    result = runner.invoke(launcher.main, ["config"])
    assert result.exit_code == 0
    assert "settings.toml" in result.output
    assert ".secrets.toml" in result.output


def test_help_command(runner: CliRunner) -> None:
    result = runner.invoke(launcher.main, ["help"])
    assert result.exit_code == 0
    assert "token" in result.output

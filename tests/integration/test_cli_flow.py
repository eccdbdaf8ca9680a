import pytest
from typer.testing import CliRunner

from fetchcache.infrastructure.config import settings
from fetchcache.main import app


@pytest.fixture(autouse=True)
def fast_source():
    """No simulated upstream latency during CLI runs."""
    settings.set_config_for_testing({"source.latency_seconds": 0})


def test_stats_shows_configured_settings(runner: CliRunner):
    settings.set_config_for_testing({"cache.max_size": 42, "cache.sweep_interval_seconds": 30})
    result = runner.invoke(app, ["stats", "--log-level", "warning"])

    assert result.exit_code == 0, result.output
    assert "0 / 42" in result.output
    assert "Sweep interval: 30s" in result.output


def test_shell_session_round_trip(runner: CliRunner):
    commands = "set greeting hello\nget greeting\nfetch report\nfetch report\nkeys\nexit\n"
    result = runner.invoke(app, ["shell", "--log-level", "warning"], input=commands)

    assert result.exit_code == 0, result.output
    assert "'hello'" in result.output
    assert "calls=1)" in result.output
    assert "calls=2)" not in result.output
    assert "Commands run" in result.output


def test_no_command_starts_shell(runner: CliRunner):
    result = runner.invoke(app, [], input="quit\n")
    assert result.exit_code == 0, result.output
    assert "Session Summary" in result.output


def test_shell_ends_cleanly_on_end_of_input(runner: CliRunner):
    result = runner.invoke(app, ["shell", "--log-level", "warning"], input="size\n")
    assert result.exit_code == 0, result.output
    assert "Session Summary" in result.output


def test_demo_walkthrough(runner: CliRunner):
    result = runner.invoke(app, ["demo", "--ttl", "0.05", "--key", "weekly", "--log-level", "warning"])

    assert result.exit_code == 0, result.output
    for step in ("cold fetch", "cached read", "after expiry", "forced refresh", "upstream failure"):
        assert step in result.output
    assert "last good value kept" in result.output


def test_invalid_cache_config_exits_with_error(runner: CliRunner):
    settings.set_config_for_testing({"cache.max_size": 0})
    result = runner.invoke(app, ["stats", "--log-level", "critical"])
    assert result.exit_code == 1

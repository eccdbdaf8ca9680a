import logging
import logging.handlers
import os

import pytest

from fetchcache.infrastructure.config import settings
from fetchcache.infrastructure.monitoring.logger_setup import resolve_level, setup_logging


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("cache:\n  ttl_seconds: 60\n  max_size: 10\nlogging:\n  level: DEBUG\n")
    return path


def test_defaults_when_nothing_configured():
    settings.load_configuration()
    options = settings.get_cache_options()
    assert options.ttl == 300
    assert options.max_size == 100
    assert settings.get_sweep_interval() == 300


def test_yaml_values_are_flattened(config_file):
    settings.load_configuration(config_file=config_file, reload=True)
    assert settings.get_config("cache.ttl_seconds") == 60
    assert settings.get_config("logging.level") == "DEBUG"
    assert settings.get_cache_options().max_size == 10


def test_environment_overrides_yaml(config_file, monkeypatch):
    settings.load_configuration(config_file=config_file, reload=True)
    monkeypatch.setenv("FETCHCACHE_CACHE_MAX_SIZE", "25")
    monkeypatch.setenv("FETCHCACHE_CACHE_TTL_SECONDS", "1.5")
    options = settings.get_cache_options()
    assert options.max_size == 25
    assert options.ttl == 1.5


def test_dotenv_file_is_loaded(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("FETCHCACHE_CACHE_SWEEP_INTERVAL_SECONDS=30\n")
    settings.load_configuration(env_file=env_file, reload=True)
    try:
        assert settings.get_sweep_interval() == 30
    finally:
        os.environ.pop("FETCHCACHE_CACHE_SWEEP_INTERVAL_SECONDS", None)


def test_test_config_has_highest_priority(monkeypatch):
    monkeypatch.setenv("FETCHCACHE_CACHE_MAX_SIZE", "25")
    settings.set_config_for_testing({"cache.max_size": 7})
    assert settings.get_config("cache.max_size") == 7
    settings.clear_test_config()
    assert settings.get_config("cache.max_size") == 25


def test_env_var_name():
    assert settings.env_var_name("cache.max_size") == "FETCHCACHE_CACHE_MAX_SIZE"


def test_invalid_yaml_is_logged_not_raised(tmp_path, caplog):
    bad = tmp_path / "bad.yaml"
    bad.write_text("cache: [unclosed\n")
    with caplog.at_level(logging.ERROR):
        settings.load_configuration(config_file=bad, reload=True)
    assert "Failed to load or parse YAML config" in caplog.text


def test_invalid_cache_settings_raise():
    settings.set_config_for_testing({"cache.max_size": 0})
    with pytest.raises(ValueError):
        settings.get_cache_options()


def test_resolve_level():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(logging.WARNING) == logging.WARNING
    assert resolve_level("nonsense") == logging.INFO


def test_setup_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "fetchcache.log"
    setup_logging(log_level="INFO", log_file=str(log_file))
    logging.getLogger("fetchcache.test").info("hello from test")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "hello from test" in log_file.read_text()


def test_setup_logging_rotates_when_max_bytes_set(tmp_path):
    log_file = tmp_path / "fetchcache.log"
    setup_logging(log_level="INFO", log_file=str(log_file), max_bytes=200, backup_count=2)

    rotating = [h for h in logging.getLogger().handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
    assert len(rotating) == 1
    assert rotating[0].maxBytes == 200
    assert rotating[0].backupCount == 2

    for i in range(20):
        logging.getLogger("fetchcache.test").info(f"line {i} padded to fill the log file quickly")
    rotating[0].flush()
    assert (tmp_path / "fetchcache.log.1").exists()
    assert not (tmp_path / "fetchcache.log.3").exists()

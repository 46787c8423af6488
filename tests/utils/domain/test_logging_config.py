"""Tests for log level resolution and logging setup."""

import logging

import pytest
from marketplace.utils.logging import current_environment, get_log_level, setup_stdlib_logging


@pytest.fixture()
def clean_env(monkeypatch):
    for var in ("ENVIRONMENT", "PROTEAN_ENV", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


class TestLogLevel:
    def test_defaults_to_development(self, clean_env):
        assert current_environment() == "development"
        assert get_log_level() == "DEBUG"

    @pytest.mark.parametrize("env, level", [("production", "INFO"), ("test", "WARNING"), ("unknown", "INFO")])
    def test_level_by_environment(self, clean_env, env, level):
        clean_env.setenv("ENVIRONMENT", env)
        assert get_log_level() == level

    def test_explicit_level_wins(self, clean_env):
        clean_env.setenv("ENVIRONMENT", "production")
        clean_env.setenv("LOG_LEVEL", "debug")
        assert get_log_level() == "DEBUG"


class TestStdlibSetup:
    def test_handlers_and_files(self, clean_env, tmp_path):
        clean_env.setenv("LOG_DIR", str(tmp_path))
        clean_env.setenv("LOG_LEVEL", "INFO")
        root = logging.getLogger()
        saved = (root.handlers[:], root.level)
        try:
            setup_stdlib_logging()
            assert len(root.handlers) == 3
            assert (tmp_path / "marketplace.log").exists()
            assert logging.getLogger("protean").level == logging.WARNING
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers, root.level = saved

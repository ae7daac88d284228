"""Tests for configuration and logging setup."""

import json
import logging

from jj_tui.config import DEFAULT_DIFF_FORMAT, Config
from jj_tui.logger import setup_logging


class TestConfig:
    """Test Config load and save."""

    def test_defaults_when_missing(self, tmp_path, monkeypatch):
        """A missing file should give the defaults."""
        monkeypatch.delenv("JJ_TUI_LOG", raising=False)
        config = Config.load(tmp_path / "config.json")
        assert config == Config()
        assert config.jj_bin == "jj"
        assert config.default_revset is None

    def test_load_values(self, tmp_path, monkeypatch):
        monkeypatch.delenv("JJ_TUI_LOG", raising=False)
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "jj_bin": "/opt/jj",
            "default_revset": "all()",
            "diff_format": "git",
            "show_command_log": False,
            "refresh_interval": 5,
        }))

        config = Config.load(path)
        assert config.jj_bin == "/opt/jj"
        assert config.default_revset == "all()"
        assert config.diff_format == "git"
        assert config.show_command_log is False
        assert config.refresh_interval == 5.0

    def test_malformed_file(self, tmp_path, monkeypatch):
        """Broken JSON should fall back to the defaults."""
        monkeypatch.delenv("JJ_TUI_LOG", raising=False)
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert Config.load(path) == Config()

    def test_unknown_diff_format(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"diff_format": "html"}))
        assert Config.load(path).diff_format == DEFAULT_DIFF_FORMAT

    def test_save_and_load(self, tmp_path, monkeypatch):
        monkeypatch.delenv("JJ_TUI_LOG", raising=False)
        path = tmp_path / "nested" / "config.json"
        config = Config(default_revset="@ | @-", refresh_interval=2.5)
        config.save(path)

        assert path.exists()
        assert Config.load(path) == config

    def test_log_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("JJ_TUI_LOG", str(tmp_path / "debug.log"))
        config = Config.load(tmp_path / "missing.json")
        assert config.log_file == str(tmp_path / "debug.log")


class TestLogging:
    """Test setup_logging."""

    def test_no_file_is_silent(self):
        logger = setup_logging(None)
        assert logger.name == "jj_tui"
        assert logger.propagate is False
        assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_file_handler(self, tmp_path):
        path = tmp_path / "jj-tui.log"
        logger = setup_logging(str(path))
        logging.getLogger("jj_tui.commander.runner").debug("hello from runner")
        for handler in logger.handlers:
            handler.flush()

        assert "hello from runner" in path.read_text()
        setup_logging(None)

    def test_repeated_setup_does_not_stack(self, tmp_path):
        setup_logging(str(tmp_path / "a.log"))
        logger = setup_logging(str(tmp_path / "b.log"))
        assert len(logger.handlers) == 1
        setup_logging(None)

"""Configuration management for jj-tui."""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


CONFIG_DIR = Path.home() / ".config" / "jj-tui"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULT_DIFF_FORMAT = "color-words"
DEFAULT_HIGHLIGHT_COLOR = "#323264"


@dataclass
class Config:
    """Application configuration."""

    jj_bin: str = "jj"
    default_revset: Optional[str] = None  # None uses jj's revsets.log
    diff_format: str = DEFAULT_DIFF_FORMAT  # "color-words" or "git"
    highlight_color: str = DEFAULT_HIGHLIGHT_COLOR
    show_command_log: bool = True
    refresh_interval: float = 0.0  # seconds between background refreshes, 0 = off
    log_file: Optional[str] = None

    @classmethod
    def load(cls, path: Path = CONFIG_FILE) -> "Config":
        """Load config from file, or return defaults."""
        config = cls()
        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
                config = cls(
                    jj_bin=data.get("jj_bin", "jj"),
                    default_revset=data.get("default_revset"),
                    diff_format=data.get("diff_format", DEFAULT_DIFF_FORMAT),
                    highlight_color=data.get("highlight_color", DEFAULT_HIGHLIGHT_COLOR),
                    show_command_log=data.get("show_command_log", True),
                    refresh_interval=float(data.get("refresh_interval", 0.0)),
                    log_file=data.get("log_file"),
                )
            except (json.JSONDecodeError, OSError, TypeError, ValueError, AttributeError):
                config = cls()

        if config.diff_format not in ("color-words", "git"):
            config.diff_format = DEFAULT_DIFF_FORMAT

        env_log = os.environ.get("JJ_TUI_LOG")
        if env_log:
            config.log_file = env_log
        return config

    def save(self, path: Path = CONFIG_FILE) -> None:
        """Save config to file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "jj_bin": self.jj_bin,
            "default_revset": self.default_revset,
            "diff_format": self.diff_format,
            "highlight_color": self.highlight_color,
            "show_command_log": self.show_command_log,
            "refresh_interval": self.refresh_interval,
            "log_file": self.log_file,
        }
        with open(path, "w") as f:
            json.dump(data, f, indent=2)


def get_config() -> Config:
    """Get the application config."""
    return Config.load()

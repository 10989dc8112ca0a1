"""Configuration for the zilo editor."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

TAB_STOP = 8


@dataclass
class EditorConfig:
    """Editor configuration.

    Values are fixed for the lifetime of a session.  ``from_env`` layers the
    ``ZILO_*`` environment variables over the defaults; CLI flags are applied
    on top of that by :mod:`zilo.cli`.
    """

    tab_stop: int = TAB_STOP
    message_timeout: float = 5.0
    status_message_max: int = 127
    status_filename_max: int = 20
    read_timeout: float = 0.1
    write_log_path: str = ""
    log_file: str = ""
    log_level: str = "info"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EditorConfig:
        env = os.environ if environ is None else environ
        config = cls()
        config.write_log_path = env.get("ZILO_WRITE_LOG", "")
        config.log_file = env.get("ZILO_LOG_FILE", "")
        level = env.get("ZILO_LOG_LEVEL", "").lower()
        if level in ("debug", "info", "warning", "error"):
            config.log_level = level
        return config

    @property
    def vtime(self) -> int:
        """Read timeout in deciseconds, as the termios ``VTIME`` slot wants it."""
        return max(1, min(255, round(self.read_timeout * 10)))

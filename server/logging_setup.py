"""Structured logging configuration shared by the CLI and the socket server.

Env-driven:
- MUD_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR|CRITICAL (default INFO for the
  server; the CLI passes WARNING so log lines don't interleave with play)
- MUD_LOG_FORMAT: 'json' or 'text' (default text)
"""

from __future__ import annotations

import json
import logging
import os

from constants import ENV_LOG_FORMAT, ENV_LOG_LEVEL
from safe_utils import safe_call


class JsonFormatter(logging.Formatter):
    """Minimal one-object-per-line JSON formatter."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = {
            'ts': self.formatTime(record, datefmt='%Y-%m-%dT%H:%M:%S'),
            'level': record.levelname,
            'name': record.name,
            'message': record.getMessage(),
        }
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(default_level: str = 'INFO') -> None:
    """Configure the root logger; a broken setting falls back to basic text logging."""
    def _configure_logging():
        level_name = (os.getenv(ENV_LOG_LEVEL) or default_level).strip().upper()
        level = getattr(logging, level_name, logging.INFO)
        fmt_mode = (os.getenv(ENV_LOG_FORMAT) or 'text').strip().lower()
        if fmt_mode == 'json':
            handler = logging.StreamHandler()
            handler.setFormatter(JsonFormatter())
            root = logging.getLogger()
            root.handlers = [handler]
            root.setLevel(level)
        else:
            logging.basicConfig(level=level, format='[%(levelname)s] %(name)s: %(message)s')

    safe_call(_configure_logging)

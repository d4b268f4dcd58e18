"""Structured logging helpers for the config builder."""

from __future__ import annotations

import logging
import sys
from enum import Enum
from io import StringIO
from typing import Any

import structlog
from rich.console import Console
from rich.text import Text

LOGGER_NAME = "mockoon_config_builder"


class LogFormat(str, Enum):
    """Log renderers selectable from the CLI."""

    AUTO = "auto"
    RICH = "rich"
    CONSOLE = "console"
    PLAIN = "plain"
    JSON = "json"

    def renderer_name(self) -> str:
        """Collapse the coloured aliases onto ``console``."""

        if self in (LogFormat.AUTO, LogFormat.RICH):
            return LogFormat.CONSOLE.value
        return self.value


class RichConsoleRenderer:
    """structlog renderer that colours events with rich."""

    def __init__(self) -> None:
        self.level_styles = {
            "debug": "dim cyan",
            "info": "cyan",
            "warning": "yellow",
            "error": "bold red",
            "critical": "bold white on red",
        }

    def __call__(self, logger: Any, name: str, event_dict: dict[str, Any]) -> str:
        timestamp = event_dict.pop("timestamp", "")
        level = event_dict.pop("level", "info")
        event = event_dict.pop("event", "")

        text = Text()
        text.append(timestamp, style="dim white")
        text.append(" ")
        text.append(f"[{level:<8}]", style=self.level_styles.get(level, "white"))
        text.append(" ")
        text.append(event, style="bold white")

        # Align key-value pairs after short event names
        padding = max(0, 32 - len(event))
        if padding > 0 and event_dict:
            text.append(" " * padding)

        items = [(key, value) for key, value in sorted(event_dict.items()) if key not in ("stack", "exception")]
        for i, (key, value) in enumerate(items):
            text.append(f"{key}=", style="dim white")
            text.append(str(value), style="bright_cyan")
            if i < len(items) - 1:
                text.append(" ")

        exception = event_dict.get("exception")
        if exception:
            text.append("\n")
            text.append(str(exception), style="red")

        buffer = StringIO()
        console = Console(file=buffer, force_terminal=True, width=200, legacy_windows=False)
        console.print(text, end="")
        return buffer.getvalue()


def configure_logging(log_level: str, log_format: LogFormat = LogFormat.AUTO) -> structlog.stdlib.BoundLogger:
    """Configure structlog on top of stdlib logging and return the builder logger."""

    normalized_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=normalized_level,
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        structlog.processors.format_exc_info,
    ]

    renderer = LogFormat(log_format).renderer_name()
    if renderer == "console":
        processors.append(RichConsoleRenderer())
    elif renderer == "plain":
        # No colours, for CI and redirected output
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:  # json
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(normalized_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    return structlog.get_logger(LOGGER_NAME)

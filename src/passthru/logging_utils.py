"""Runtime logging helpers."""

from __future__ import annotations

import sys
from logging import Handler
from typing import Literal

import loguru
from loguru import logger
from rich import get_console
from rich.logging import RichHandler

LogProfile = Literal["default", "chat"]

DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {extra[turn]} | {message}"
_CONFIGURED: tuple[LogProfile, str] | None = None


def _build_chat_handler() -> Handler:
    return RichHandler(
        console=get_console(),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def configure_logging(*, profile: LogProfile = "default", level: str = "INFO") -> None:
    """Configure process-level logging once per profile and level.

    ``level`` normally comes from ``DirectCommandSettings.log_level`` so that
    ``PASSTHRU_LOG_LEVEL`` works from the environment and from a workspace ``.env``.
    """
    from passthru.core.router import current_turn

    def inject_context(record: loguru.Record) -> None:
        record["extra"]["turn"] = current_turn()

    global _CONFIGURED
    resolved_level = level.upper()
    if _CONFIGURED == (profile, resolved_level):
        return

    logger.remove()
    logger.configure(patcher=inject_context)
    if profile == "chat":
        # Rich renders level and message; the turn id stays in record extras.
        logger.add(_build_chat_handler(), level=resolved_level, format="{message}", backtrace=False, diagnose=False)
    else:
        logger.add(sys.stderr, level=resolved_level, format=DEFAULT_FORMAT, backtrace=False, diagnose=False)
    _CONFIGURED = (profile, resolved_level)

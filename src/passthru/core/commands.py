"""Command parsing helpers."""

from __future__ import annotations

import shlex

from passthru.core.types import CommandRequest
from passthru.errors import ParseError


def parse_command_words(text: str) -> list[str]:
    """Split command text into words using shell rules."""

    try:
        return shlex.split(text, comments=False, posix=True)
    except ValueError as exc:
        raise ParseError(f"cannot parse command: {str(exc).lower()}") from exc


def parse_command(text: str) -> CommandRequest:
    """Parse the residual of a direct command line into a command request."""

    words = parse_command_words(text)
    if not words:
        raise ParseError("empty command")
    return CommandRequest(argv=tuple(words))

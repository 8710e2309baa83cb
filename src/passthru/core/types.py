"""Shared core dataclasses."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from enum import Enum


class PrefixKind(Enum):
    """How a line of user input is routed."""

    NONE = "none"
    SILENT = "silent"
    CONTEXT_ENRICHING = "context"


@dataclass(frozen=True)
class Classification:
    """Prefix classifier verdict for one raw line."""

    kind: PrefixKind
    raw: str
    prefix: str = ""
    residual: str = ""

    @property
    def is_direct(self) -> bool:
        return self.kind is not PrefixKind.NONE


@dataclass(frozen=True)
class CommandRequest:
    """Argument vector of one direct command."""

    argv: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.argv:
            raise ValueError("command request requires at least one argument")

    @property
    def name(self) -> str:
        return self.argv[0]

    @property
    def text(self) -> str:
        return shlex.join(self.argv)


class ApprovalVia(Enum):
    AUTO = "auto"
    INTERACTIVE = "interactive"


@dataclass(frozen=True)
class Approved:
    via: ApprovalVia


@dataclass(frozen=True)
class Denied:
    reason: str = "cancelled by user"


@dataclass(frozen=True)
class Modified:
    """The user edited the command before approving it."""

    command: CommandRequest


ApprovalDecision = Approved | Denied | Modified


@dataclass(frozen=True)
class ExecutionOutcome:
    """Result of one backend run. Failures are data, not exceptions."""

    success: bool
    output: str
    exit_code: int | None = None
    timed_out: bool = False
    elapsed_ms: int = 0


@dataclass(frozen=True)
class ContextEntry:
    """System message appended to the conversation context."""

    content: str
    role: str = "system"

    def as_message(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


class DisplayStatus(Enum):
    OK = "ok"
    FAILED = "failed"
    DENIED = "denied"
    PARSE_ERROR = "parse_error"


@dataclass(frozen=True)
class DisplayRecord:
    """What the transcript renderer shows for one direct command."""

    raw: str
    status: DisplayStatus
    kind: PrefixKind
    command: CommandRequest | None = None
    output: str = ""
    reason: str = ""
    exit_code: int | None = None


@dataclass(frozen=True)
class RouteResult:
    """Routing outcome for one line of user input."""

    handled: bool
    display: DisplayRecord | None = None
    context: ContextEntry | None = None

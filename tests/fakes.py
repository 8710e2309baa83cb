from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from passthru.config import DirectCommandSettings
from passthru.core.approval import ApproveReply, ConfirmReply
from passthru.core.execution import BackendResult, ExecutionPolicy
from passthru.core.types import CommandRequest


@dataclass
class FakeConfirmer:
    replies: list[ConfirmReply] = field(default_factory=lambda: [ApproveReply()])
    seen: list[CommandRequest] = field(default_factory=list)

    def confirm(self, command: CommandRequest) -> ConfirmReply:
        self.seen.append(command)
        return self.replies.pop(0)


@dataclass
class FakeBackend:
    output: str = "ok"
    exit_code: int | None = 0
    timed_out: bool = False
    error: Exception | None = None
    calls: list[tuple[tuple[str, ...], ExecutionPolicy, bool]] = field(default_factory=list)

    def run(self, argv: Sequence[str], *, policy: ExecutionPolicy, pre_approved: bool) -> BackendResult:
        self.calls.append((tuple(argv), policy, pre_approved))
        if self.error is not None:
            raise self.error
        return BackendResult(output=self.output, exit_code=self.exit_code, timed_out=self.timed_out)


def make_settings(**overrides: object) -> DirectCommandSettings:
    return DirectCommandSettings(_env_file=None, **overrides)  # type: ignore[arg-type]

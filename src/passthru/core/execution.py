"""Execution adapter and the local subprocess backend."""

from __future__ import annotations

import subprocess
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from loguru import logger

from passthru.config import DirectCommandSettings
from passthru.core.types import ApprovalDecision, CommandRequest, Denied, ExecutionOutcome, Modified
from passthru.errors import InvalidApprovalError


@dataclass(frozen=True)
class ExecutionPolicy:
    """Backend policy inherited unchanged from the surrounding session."""

    cwd: Path
    approval_mode: str = "on-request"
    writable_roots: tuple[Path, ...] = ()
    timeout_seconds: float | None = None

    @classmethod
    def from_settings(cls, settings: DirectCommandSettings, cwd: Path) -> ExecutionPolicy:
        return cls(
            cwd=cwd,
            approval_mode=settings.approval_mode,
            writable_roots=tuple(settings.writable_roots),
            timeout_seconds=settings.timeout_seconds,
        )


@dataclass(frozen=True)
class BackendResult:
    output: str
    exit_code: int | None
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.exit_code == 0 and not self.timed_out


class ExecutionBackend(Protocol):
    """External command runner."""

    def run(self, argv: Sequence[str], *, policy: ExecutionPolicy, pre_approved: bool) -> BackendResult: ...


class SubprocessBackend:
    """Run argv directly with :mod:`subprocess`, without a shell."""

    def run(self, argv: Sequence[str], *, policy: ExecutionPolicy, pre_approved: bool) -> BackendResult:
        _ = pre_approved
        try:
            # The user approved this exact argv.
            result = subprocess.run(  # noqa: S603
                list(argv),
                cwd=str(policy.cwd),
                capture_output=True,
                timeout=policy.timeout_seconds,
            )
        except subprocess.TimeoutExpired as exc:
            output = _decode(exc.stdout) + _decode(exc.stderr)
            return BackendResult(output=output.rstrip("\n"), exit_code=None, timed_out=True)
        except OSError as exc:
            return BackendResult(output=f"error: {exc!s}", exit_code=None)

        output = _decode(result.stdout) + _decode(result.stderr)
        return BackendResult(output=output.rstrip("\n"), exit_code=result.returncode)


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


class ExecutionAdapter:
    """Hand an approved command to the backend and turn any failure into data."""

    def __init__(self, backend: ExecutionBackend, policy: ExecutionPolicy) -> None:
        self._backend = backend
        self._policy = policy

    @property
    def policy(self) -> ExecutionPolicy:
        return self._policy

    def execute(self, command: CommandRequest, decision: ApprovalDecision) -> ExecutionOutcome:
        if isinstance(decision, Denied):
            raise InvalidApprovalError(f"refusing to execute denied command {command.text!r}")
        if isinstance(decision, Modified):
            command = decision.command

        start = time.time()
        try:
            result = self._backend.run(command.argv, policy=self._policy, pre_approved=True)
        except Exception as exc:
            elapsed_ms = int((time.time() - start) * 1000)
            logger.warning("direct.execute.error command={} error={!r}", command.text, exc)
            return ExecutionOutcome(success=False, output=f"error: {exc!s}", elapsed_ms=elapsed_ms)

        elapsed_ms = int((time.time() - start) * 1000)
        outcome = ExecutionOutcome(
            success=result.success,
            output=result.output,
            exit_code=result.exit_code,
            timed_out=result.timed_out,
            elapsed_ms=elapsed_ms,
        )
        if outcome.success:
            logger.info("direct.execute command={} elapsed_ms={}", command.text, elapsed_ms)
        else:
            logger.warning(
                "direct.execute.failed command={} exit_code={} timed_out={}",
                command.text,
                outcome.exit_code,
                outcome.timed_out,
            )
        return outcome

"""Routing of direct commands for one interactive session."""

from __future__ import annotations

import contextlib
from collections.abc import Generator
from contextvars import ContextVar

from loguru import logger

from passthru.config import DirectCommandSettings
from passthru.core.approval import ApprovalGate, Confirmer
from passthru.core.classifier import classify
from passthru.core.commands import parse_command
from passthru.core.context import ContextPolicy
from passthru.core.execution import ExecutionAdapter
from passthru.core.types import (
    Classification,
    CommandRequest,
    Denied,
    DisplayRecord,
    DisplayStatus,
    ExecutionOutcome,
    Modified,
    RouteResult,
)
from passthru.errors import ParseError, RouterBusyError
from passthru.tape import ContextSink

_turn_context: ContextVar[str] = ContextVar("turn")


def current_turn() -> str:
    """Get the id of the turn being routed, for log records."""
    return _turn_context.get("-")


class SessionRouter:
    """Route one line of user input through classify, parse, approve, execute and remember."""

    def __init__(
        self,
        settings: DirectCommandSettings,
        confirmer: Confirmer,
        adapter: ExecutionAdapter,
        sink: ContextSink,
        *,
        policy: ContextPolicy | None = None,
    ) -> None:
        self._settings = settings
        self._gate = ApprovalGate(settings, confirmer)
        self._adapter = adapter
        self._sink = sink
        self._policy = policy or ContextPolicy(max_chars=settings.context_max_chars)
        self._turns = 0
        self._in_flight = False

    @property
    def settings(self) -> DirectCommandSettings:
        return self._settings

    def route(self, raw: str) -> RouteResult:
        classification = classify(raw, self._settings)
        if not classification.is_direct:
            return RouteResult(handled=False)

        with self._turn():
            logger.debug("direct.classify kind={} prefix={!r}", classification.kind.value, classification.prefix)
            return self._route_direct(classification)

    def _route_direct(self, classification: Classification) -> RouteResult:
        try:
            command = parse_command(classification.residual)
        except ParseError as exc:
            logger.info("direct.parse.error error={}", exc)
            display = DisplayRecord(
                raw=classification.raw,
                status=DisplayStatus.PARSE_ERROR,
                kind=classification.kind,
                reason=str(exc),
            )
            return RouteResult(handled=True, display=display)

        decision = self._gate.decide(command)
        if isinstance(decision, Denied):
            display = DisplayRecord(
                raw=classification.raw,
                status=DisplayStatus.DENIED,
                kind=classification.kind,
                command=command,
                reason=decision.reason,
            )
            return RouteResult(handled=True, display=display)

        command_text = classification.residual
        if isinstance(decision, Modified):
            command = decision.command
            command_text = command.text

        outcome = self._adapter.execute(command, decision)
        display = self._display(classification, command, outcome)

        entry = self._policy.decide(classification.kind, command_text, outcome)
        if entry is not None:
            self._sink.append(entry)
            logger.info("direct.context appended command={}", command_text)
        return RouteResult(handled=True, display=display, context=entry)

    @staticmethod
    def _display(classification: Classification, command: CommandRequest, outcome: ExecutionOutcome) -> DisplayRecord:
        return DisplayRecord(
            raw=classification.raw,
            status=DisplayStatus.OK if outcome.success else DisplayStatus.FAILED,
            kind=classification.kind,
            command=command,
            output=outcome.output,
            exit_code=outcome.exit_code,
            reason="timed out" if outcome.timed_out else "",
        )

    @contextlib.contextmanager
    def _turn(self) -> Generator[None, None, None]:
        if self._in_flight:
            raise RouterBusyError("another direct command is still being routed")
        self._in_flight = True
        self._turns += 1
        reset_token = _turn_context.set(f"turn-{self._turns}")
        try:
            yield
        finally:
            _turn_context.reset(reset_token)
            self._in_flight = False

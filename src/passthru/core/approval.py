"""Approval gate for direct commands.

Every command request gets exactly one :class:`ApprovalTicket`. The ticket
starts ``PENDING`` and moves once to ``APPROVED``, ``DENIED`` or
``MODIFIED``. With ``auto_approve`` the gate never asks the confirmer;
otherwise it asks exactly once and never retries a denial.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from loguru import logger

from passthru.config import DirectCommandSettings
from passthru.core.commands import parse_command
from passthru.core.types import ApprovalDecision, ApprovalVia, Approved, CommandRequest, Denied, Modified
from passthru.errors import ApprovalStateError, ParseError

CANCELLED_REASON = "cancelled by user"


@dataclass(frozen=True)
class ApproveReply:
    pass


@dataclass(frozen=True)
class DenyReply:
    reason: str = CANCELLED_REASON


@dataclass(frozen=True)
class ModifyReply:
    text: str


ConfirmReply = ApproveReply | DenyReply | ModifyReply


class Confirmer(Protocol):
    """Interactive confirmation prompt."""

    def confirm(self, command: CommandRequest) -> ConfirmReply: ...


class ApprovalState(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"
    MODIFIED = "modified"


@dataclass
class ApprovalTicket:
    """Approval state of one command request."""

    command: CommandRequest
    state: ApprovalState = ApprovalState.PENDING
    decision: ApprovalDecision | None = field(default=None)

    def resolve(self, decision: ApprovalDecision) -> ApprovalDecision:
        if self.state is not ApprovalState.PENDING:
            raise ApprovalStateError(f"command {self.command.text!r} was already {self.state.value}")
        if isinstance(decision, Approved):
            self.state = ApprovalState.APPROVED
        elif isinstance(decision, Denied):
            self.state = ApprovalState.DENIED
        else:
            self.state = ApprovalState.MODIFIED
        self.decision = decision
        return decision


class ApprovalGate:
    """Decide whether a direct command may run."""

    def __init__(self, settings: DirectCommandSettings, confirmer: Confirmer) -> None:
        self._settings = settings
        self._confirmer = confirmer

    def open(self, command: CommandRequest) -> ApprovalTicket:
        return ApprovalTicket(command=command)

    def decide(self, command: CommandRequest) -> ApprovalDecision:
        return self.resolve(self.open(command))

    def resolve(self, ticket: ApprovalTicket) -> ApprovalDecision:
        if ticket.state is not ApprovalState.PENDING:
            raise ApprovalStateError(f"command {ticket.command.text!r} was already {ticket.state.value}")

        if self._settings.auto_approve:
            logger.debug("direct.approval auto command={}", ticket.command.text)
            return ticket.resolve(Approved(via=ApprovalVia.AUTO))

        try:
            reply: ConfirmReply = self._confirmer.confirm(ticket.command)
        except (KeyboardInterrupt, EOFError):
            reply = DenyReply(reason=CANCELLED_REASON)
        decision = self._decision_from_reply(reply)
        logger.info("direct.approval command={} decision={}", ticket.command.text, type(decision).__name__.lower())
        return ticket.resolve(decision)

    @staticmethod
    def _decision_from_reply(reply: ConfirmReply) -> ApprovalDecision:
        if isinstance(reply, ApproveReply):
            return Approved(via=ApprovalVia.INTERACTIVE)
        if isinstance(reply, DenyReply):
            return Denied(reason=reply.reason or CANCELLED_REASON)
        try:
            edited = parse_command(reply.text)
        except ParseError as exc:
            return Denied(reason=f"edited command rejected: {exc}")
        return Modified(command=edited)

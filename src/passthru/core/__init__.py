"""Direct command routing core."""

from .approval import ApprovalGate, ApproveReply, Confirmer, DenyReply, ModifyReply
from .classifier import classify
from .commands import parse_command
from .context import ContextPolicy
from .execution import ExecutionAdapter, ExecutionBackend, ExecutionPolicy, SubprocessBackend
from .router import SessionRouter
from .types import (
    ApprovalVia,
    Approved,
    CommandRequest,
    ContextEntry,
    Denied,
    DisplayRecord,
    DisplayStatus,
    ExecutionOutcome,
    Modified,
    PrefixKind,
    RouteResult,
)

__all__ = [
    "ApprovalGate",
    "ApprovalVia",
    "ApproveReply",
    "Approved",
    "CommandRequest",
    "Confirmer",
    "ContextEntry",
    "ContextPolicy",
    "Denied",
    "DenyReply",
    "DisplayRecord",
    "DisplayStatus",
    "ExecutionAdapter",
    "ExecutionBackend",
    "ExecutionOutcome",
    "ExecutionPolicy",
    "Modified",
    "ModifyReply",
    "PrefixKind",
    "RouteResult",
    "SessionRouter",
    "SubprocessBackend",
    "classify",
    "parse_command",
]

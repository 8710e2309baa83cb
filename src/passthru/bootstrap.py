"""Session bootstrap helpers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from passthru.config import DirectCommandSettings
from passthru.core.approval import Confirmer
from passthru.core.execution import ExecutionAdapter, ExecutionBackend, ExecutionPolicy, SubprocessBackend
from passthru.core.router import SessionRouter
from passthru.tape import ConversationTape


@dataclass(frozen=True)
class SessionRuntime:
    """Everything one interactive session needs."""

    workspace: Path
    settings: DirectCommandSettings
    router: SessionRouter
    tape: ConversationTape


def build_session(
    workspace: Path,
    settings: DirectCommandSettings,
    confirmer: Confirmer,
    *,
    backend: ExecutionBackend | None = None,
) -> SessionRuntime:
    """Wire the router for one workspace."""

    tape = ConversationTape()
    adapter = ExecutionAdapter(backend or SubprocessBackend(), ExecutionPolicy.from_settings(settings, workspace))
    router = SessionRouter(settings, confirmer, adapter, tape)
    return SessionRuntime(workspace=workspace, settings=settings, router=router, tape=tape)

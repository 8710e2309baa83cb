"""Terminal rendering and prompts for passthru."""

from __future__ import annotations

import threading

from prompt_toolkit import PromptSession
from prompt_toolkit.patch_stdout import patch_stdout
from rich.console import Console
from rich.markup import escape

from passthru.core.approval import CANCELLED_REASON, ApproveReply, ConfirmReply, DenyReply, ModifyReply
from passthru.core.types import CommandRequest, DisplayRecord, DisplayStatus, PrefixKind

_KIND_TAGS = {
    PrefixKind.SILENT: "direct",
    PrefixKind.CONTEXT_ENRICHING: "direct+context",
}


class Renderer:
    """CLI renderer using Rich for terminal output."""

    def __init__(self, console: Console | None = None) -> None:
        self.console: Console = console or Console()
        self._prompt_session: PromptSession[str] | None = None
        self._print_lock = threading.Lock()

    def info(self, message: str) -> None:
        self._print(message)

    def error(self, message: str) -> None:
        self._print(f"[bold red]Error:[/bold red] {escape(message)}")

    def welcome(self, workspace: str, prefix: str, auto_approve: bool) -> None:
        self._print("[bold blue]passthru[/bold blue] - run shell commands without leaving the conversation")
        self._print(f"[bold]Working directory:[/bold] [cyan]{escape(workspace)}[/cyan]")
        approval = "auto" if auto_approve else "ask"
        self._print(
            f"[dim]{escape(prefix)}cmd runs silently, $cmd adds output to context, approval: {approval}[/dim]"
        )

    def forwarded(self, message: str) -> None:
        self._print(f"[dim]forwarded to model:[/dim] {escape(message)}")

    def display(self, record: DisplayRecord) -> None:
        """Render one direct command result, tagged apart from model-issued commands."""
        tag = _KIND_TAGS.get(record.kind, "direct")
        self._print(f"[dim]\\[{tag}][/dim] [bold]{escape(record.raw.strip())}[/bold]")
        if record.status is DisplayStatus.PARSE_ERROR:
            self._print(f"[red]parse error: {escape(record.reason)}[/red]")
            return
        if record.status is DisplayStatus.DENIED:
            self._print(f"[yellow]{escape(record.reason)}[/yellow]")
            return
        if record.output.strip():
            style = "" if record.status is DisplayStatus.OK else "red"
            text = escape(record.output.rstrip())
            self._print(f"[{style}]{text}[/{style}]" if style else text)
        elif record.status is DisplayStatus.OK:
            self._print("[dim](no output)[/dim]")
        if record.status is DisplayStatus.FAILED:
            detail = record.reason or f"exit={record.exit_code}"
            self._print(f"[red]command failed ({escape(detail)})[/red]")

    def context(self, messages: list[dict[str, str]]) -> None:
        if not messages:
            self._print("[dim](context is empty)[/dim]")
            return
        for message in messages:
            self._print(f"[bold magenta]{message['role']}:[/bold magenta] {escape(message['content'])}")

    def get_user_input(self) -> str:
        """Prompt user for input."""
        return self.ask("> ")

    def ask(self, message: str, *, default: str = "") -> str:
        if self._prompt_session is None:
            self._prompt_session = PromptSession()
        with patch_stdout(raw=True):
            return self._prompt_session.prompt(message, default=default)

    def _print(self, message: str) -> None:
        with self._print_lock:
            self.console.print(message)


class PromptConfirmer:
    """Ask the user to approve, deny or edit a direct command."""

    def __init__(self, renderer: Renderer) -> None:
        self._renderer = renderer

    def confirm(self, command: CommandRequest) -> ConfirmReply:
        self._renderer.info(f"[bold]Run[/bold] [cyan]{escape(command.text)}[/cyan]?")
        try:
            answer = self._renderer.ask("[y]es / [n]o / [e]dit: ").strip().lower()
            if answer in {"y", "yes"}:
                return ApproveReply()
            if answer in {"e", "edit"}:
                edited = self._renderer.ask("edit> ", default=command.text)
                return ModifyReply(text=edited)
        except (KeyboardInterrupt, EOFError):
            return DenyReply(reason=CANCELLED_REASON)
        return DenyReply()

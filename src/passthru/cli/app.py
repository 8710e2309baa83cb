"""CLI main module for passthru."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from loguru import logger

from passthru.bootstrap import SessionRuntime, build_session
from passthru.cli.render import PromptConfirmer, Renderer
from passthru.config import load_settings
from passthru.core.types import DisplayStatus
from passthru.errors import ConfigurationError
from passthru.logging_utils import configure_logging

QUIT_COMMANDS = {",quit", ",exit"}
CONTEXT_COMMAND = ",context"

app = typer.Typer(
    name="passthru",
    help="Run shell commands straight from an AI chat session.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _build_runtime(
    renderer: Renderer,
    workspace: Optional[Path],
    *,
    auto_approve: Optional[bool],
    prefix: Optional[str],
    disable: bool,
) -> SessionRuntime:
    workspace_path = (workspace or Path.cwd()).resolve()
    try:
        settings = load_settings(
            workspace_path,
            auto_approve=auto_approve,
            prefix=prefix,
            enabled=False if disable else None,
        )
    except ConfigurationError as exc:
        renderer.error(f"Invalid configuration: {exc}")
        raise typer.Exit(2) from exc
    return build_session(workspace_path, settings, PromptConfirmer(renderer))


def _handle_line(runtime: SessionRuntime, renderer: Renderer, line: str) -> bool:
    """Handle one input line. Returns False when the loop should stop."""
    stripped = line.strip()
    if not stripped:
        return True
    if stripped in QUIT_COMMANDS:
        return False
    if stripped == CONTEXT_COMMAND:
        renderer.context(runtime.tape.messages())
        return True

    result = runtime.router.route(line)
    if not result.handled:
        runtime.tape.record_user(stripped)
        renderer.forwarded(stripped)
        return True
    if result.display is not None:
        renderer.display(result.display)
    return True


def _chat_loop(runtime: SessionRuntime, renderer: Renderer) -> None:
    while True:
        try:
            line = renderer.get_user_input()
        except (KeyboardInterrupt, EOFError):
            renderer.info("\nGoodbye!")
            break
        if not _handle_line(runtime, renderer, line):
            renderer.info("Goodbye!")
            break


@app.command()
def chat(
    workspace: Optional[Path] = typer.Option(None, "--workspace", "-w", help="Working directory for commands"),
    auto_approve: Optional[bool] = typer.Option(
        None, "--auto-approve/--no-auto-approve", help="Run direct commands without confirmation"
    ),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Prefix of silent direct commands"),
    disable: bool = typer.Option(False, "--disable", help="Turn direct commands off"),
) -> None:
    """Start an interactive session."""
    renderer = Renderer()
    runtime = _build_runtime(renderer, workspace, auto_approve=auto_approve, prefix=prefix, disable=disable)
    configure_logging(profile="chat", level=runtime.settings.log_level)
    logger.info("session.start workspace={}", runtime.workspace)
    renderer.welcome(str(runtime.workspace), runtime.settings.prefix, runtime.settings.auto_approve)
    _chat_loop(runtime, renderer)


@app.command()
def run(
    line: str = typer.Argument(..., help="One line of input, e.g. '!ls -la' or '$cat notes.md'"),
    workspace: Optional[Path] = typer.Option(None, "--workspace", "-w", help="Working directory for commands"),
    auto_approve: Optional[bool] = typer.Option(
        None, "--auto-approve/--no-auto-approve", help="Run direct commands without confirmation"
    ),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Prefix of silent direct commands"),
    show_context: bool = typer.Option(False, "--show-context", help="Print the context entry, if any"),
) -> None:
    """Route a single line and exit."""
    renderer = Renderer()
    runtime = _build_runtime(renderer, workspace, auto_approve=auto_approve, prefix=prefix, disable=False)
    configure_logging(level=runtime.settings.log_level)
    result = runtime.router.route(line)
    if not result.handled:
        renderer.forwarded(line.strip())
        return
    if result.display is not None:
        renderer.display(result.display)
    if show_context and result.context is not None:
        renderer.context([result.context.as_message()])
    if result.display is None or result.display.status is not DisplayStatus.OK:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()

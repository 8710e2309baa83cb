"""Context policy for direct command results."""

from __future__ import annotations

from passthru.core.types import ContextEntry, ExecutionOutcome, PrefixKind

TRUNCATION_MARKER = "[... {count} chars truncated]"


class ContextPolicy:
    """Decide whether a direct command result is remembered by the conversation.

    Context-enriching commands always produce one entry, whether the command
    succeeded or not. Silent commands never do.
    """

    def __init__(self, *, max_chars: int | None = None) -> None:
        self._max_chars = max_chars

    def decide(self, kind: PrefixKind, command_text: str, outcome: ExecutionOutcome) -> ContextEntry | None:
        if kind is PrefixKind.NONE:
            raise ValueError("context policy does not apply to conversational input")
        if kind is PrefixKind.SILENT:
            return None
        return ContextEntry(content=self.render(command_text, outcome))

    def render(self, command_text: str, outcome: ExecutionOutcome) -> str:
        status = "ok" if outcome.success else "error"
        attrs = [f'status="{status}"']
        if outcome.exit_code is not None:
            attrs.append(f'exit_code="{outcome.exit_code}"')
        if outcome.timed_out:
            attrs.append('timed_out="true"')
        return f"$ {command_text}\n<output {' '.join(attrs)}>\n{self._clip(outcome.output)}\n</output>"

    def _clip(self, output: str) -> str:
        if self._max_chars is None or len(output) <= self._max_chars:
            return output
        dropped = len(output) - self._max_chars
        return f"{output[: self._max_chars]}\n{TRUNCATION_MARKER.format(count=dropped)}"

import pytest

from passthru.core.context import ContextPolicy
from passthru.core.types import ExecutionOutcome, PrefixKind


def test_context_prefix_produces_entry_on_success() -> None:
    entry = ContextPolicy().decide(
        PrefixKind.CONTEXT_ENRICHING, "cat FUNCTIONS.md", ExecutionOutcome(success=True, output="def f(): ...", exit_code=0)
    )
    assert entry is not None
    assert entry.role == "system"
    assert entry.content == '$ cat FUNCTIONS.md\n<output status="ok" exit_code="0">\ndef f(): ...\n</output>'


def test_context_prefix_produces_entry_on_failure() -> None:
    entry = ContextPolicy().decide(
        PrefixKind.CONTEXT_ENRICHING, "cat missing.md", ExecutionOutcome(success=False, output="No such file", exit_code=1)
    )
    assert entry is not None
    assert 'status="error" exit_code="1"' in entry.content
    assert "No such file" in entry.content


def test_timeout_is_labelled() -> None:
    entry = ContextPolicy().decide(
        PrefixKind.CONTEXT_ENRICHING, "sleep 100", ExecutionOutcome(success=False, output="", timed_out=True)
    )
    assert entry is not None
    assert '<output status="error" timed_out="true">' in entry.content
    assert "exit_code" not in entry.content


def test_silent_prefix_never_produces_entry() -> None:
    policy = ContextPolicy()
    for outcome in (ExecutionOutcome(success=True, output="x"), ExecutionOutcome(success=False, output="y")):
        assert policy.decide(PrefixKind.SILENT, "ls", outcome) is None


def test_conversational_input_is_rejected() -> None:
    with pytest.raises(ValueError):
        ContextPolicy().decide(PrefixKind.NONE, "ls", ExecutionOutcome(success=True, output=""))


def test_policy_is_idempotent() -> None:
    policy = ContextPolicy()
    outcome = ExecutionOutcome(success=True, output="a\nb\n", exit_code=0, elapsed_ms=12)
    first = policy.decide(PrefixKind.CONTEXT_ENRICHING, "cat a", outcome)
    second = policy.decide(PrefixKind.CONTEXT_ENRICHING, "cat a", outcome)
    assert first == second


def test_output_is_kept_verbatim_by_default() -> None:
    output = "x" * 50_000
    entry = ContextPolicy().decide(PrefixKind.CONTEXT_ENRICHING, "big", ExecutionOutcome(success=True, output=output))
    assert entry is not None
    assert output in entry.content


def test_configured_truncation() -> None:
    entry = ContextPolicy(max_chars=4).decide(
        PrefixKind.CONTEXT_ENRICHING, "big", ExecutionOutcome(success=True, output="abcdefghij", exit_code=0)
    )
    assert entry is not None
    assert "abcd\n[... 6 chars truncated]" in entry.content
    assert "efghij" not in entry.content

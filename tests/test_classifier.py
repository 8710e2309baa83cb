from fakes import make_settings

from passthru.core.classifier import classify
from passthru.core.types import PrefixKind


def test_silent_prefix_is_classified() -> None:
    result = classify("!ls -la", make_settings())
    assert result.kind is PrefixKind.SILENT
    assert result.prefix == "!"
    assert result.residual == "ls -la"


def test_context_prefix_is_classified() -> None:
    result = classify("$cat FUNCTIONS.md", make_settings())
    assert result.kind is PrefixKind.CONTEXT_ENRICHING
    assert result.prefix == "$"
    assert result.residual == "cat FUNCTIONS.md"


def test_leading_whitespace_is_trimmed_before_matching() -> None:
    result = classify("   !  echo hi  ", make_settings())
    assert result.kind is PrefixKind.SILENT
    assert result.residual == "echo hi"


def test_plain_text_is_not_a_command() -> None:
    assert classify("please list the files", make_settings()).kind is PrefixKind.NONE
    assert classify("echo hi", make_settings()).kind is PrefixKind.NONE


def test_prefix_must_lead_the_line() -> None:
    assert classify("please run !ls", make_settings()).kind is PrefixKind.NONE
    assert classify("cost is $5", make_settings()).kind is PrefixKind.NONE


def test_bare_prefix_is_not_a_command() -> None:
    for text in ("!", "$", "  !   ", "$\t"):
        assert classify(text, make_settings()).kind is PrefixKind.NONE


def test_disabled_settings_never_classify() -> None:
    settings = make_settings(enabled=False)
    assert classify("!ls", settings).kind is PrefixKind.NONE
    assert classify("$ls", settings).kind is PrefixKind.NONE


def test_custom_silent_prefix() -> None:
    settings = make_settings(prefix=">>")
    assert classify(">>pwd", settings).kind is PrefixKind.SILENT
    assert classify(">>pwd", settings).residual == "pwd"
    assert classify("!pwd", settings).kind is PrefixKind.NONE
    assert classify("$pwd", settings).kind is PrefixKind.CONTEXT_ENRICHING


def test_matching_is_case_sensitive() -> None:
    settings = make_settings(prefix="x")
    assert classify("xls", settings).kind is PrefixKind.SILENT
    assert classify("Xls", settings).kind is PrefixKind.NONE


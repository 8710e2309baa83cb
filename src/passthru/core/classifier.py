"""Direct command prefix classification."""

from __future__ import annotations

from passthru.config import CONTEXT_PREFIX, DirectCommandSettings
from passthru.core.types import Classification, PrefixKind


def classify(raw: str, settings: DirectCommandSettings) -> Classification:
    """Decide whether one line is a direct command and which prefix triggered it."""

    if not settings.enabled:
        return Classification(kind=PrefixKind.NONE, raw=raw)

    stripped = raw.strip()
    for prefix, kind in _prefixes(settings):
        if not stripped.startswith(prefix):
            continue
        residual = stripped[len(prefix) :].strip()
        if not residual:
            # A bare prefix is not a command.
            return Classification(kind=PrefixKind.NONE, raw=raw)
        return Classification(kind=kind, raw=raw, prefix=prefix, residual=residual)

    return Classification(kind=PrefixKind.NONE, raw=raw)


def _prefixes(settings: DirectCommandSettings) -> tuple[tuple[str, PrefixKind], ...]:
    return (
        (settings.prefix, PrefixKind.SILENT),
        (CONTEXT_PREFIX, PrefixKind.CONTEXT_ENRICHING),
    )

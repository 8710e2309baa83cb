"""Application-level exception types for passthru."""

from __future__ import annotations


class PassthruError(Exception):
    """Base exception for passthru."""


class ConfigurationError(PassthruError):
    """Raised when settings fail validation."""


class ParseError(PassthruError):
    """Raised when a direct command cannot be tokenized."""


class ApprovalStateError(PassthruError):
    """Raised when an approval ticket is decided more than once."""


class InvalidApprovalError(PassthruError):
    """Raised when a denied command is handed to the execution adapter."""


class RouterBusyError(PassthruError):
    """Raised when a line is routed while another one is still in flight."""

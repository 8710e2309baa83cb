"""passthru - run shell commands straight from an AI chat session."""

from .config import DirectCommandSettings, load_settings
from .core import SessionRouter
from .tape import ConversationTape

__version__ = "0.1.0"

__all__ = ["ConversationTape", "DirectCommandSettings", "SessionRouter", "load_settings"]

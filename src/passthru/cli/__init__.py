"""Terminal front end for passthru."""

from .app import app
from .render import PromptConfirmer, Renderer

__all__ = ["PromptConfirmer", "Renderer", "app"]

"""Textual host for the buffer commands."""

from .controller import TextualBufferAdapter, TextualUIHooks

__all__ = ["TextualBufferAdapter", "TextualUIHooks"]

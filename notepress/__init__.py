"""Portable HTML export for vault notes."""

from notepress.rendering.pipeline import NoteRenderer

__all__ = ["NoteRenderer"]

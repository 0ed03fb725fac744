from typing import Protocol

from notepress.html.nodes import Fragment


class MarkdownRenderer(Protocol):
    def render(self, markdown: str, context_folder: str) -> Fragment:
        """Render note markdown to an HTML tree; links are relative to ``context_folder``."""
        ...

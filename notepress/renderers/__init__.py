from notepress.renderers.base import MarkdownRenderer
from notepress.renderers.markdown_renderer import ObsidianMarkdownRenderer

__all__ = ["MarkdownRenderer", "ObsidianMarkdownRenderer"]

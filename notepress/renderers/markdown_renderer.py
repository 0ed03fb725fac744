"""Markdown renderer producing the HTML shapes the vault application emits."""

import html
import re
from urllib.parse import quote

import markdown

from notepress.html.nodes import INTERNAL_LINK_PREFIX, RASTER_IMAGE_EXTENSIONS, Fragment, parse_html
from notepress.renderers.base import MarkdownRenderer

FRONTMATTER_PATTERN = re.compile(r"\A\s*---[ \t]*\n(.*?)\n---[ \t]*(?:\n|\Z)", re.DOTALL)
EMBED_PATTERN = re.compile(r"!\[\[([^\]|]+)(?:\|([^\]]*))?\]\]")
WIKILINK_PATTERN = re.compile(r"\[\[([^\]|]+)(?:\|([^\]]*))?\]\]")
SIZE_PATTERN = re.compile(r"^\s*(\d+)(?:x(\d+))?\s*$")


class ObsidianMarkdownRenderer(MarkdownRenderer):
    """Render markdown with Python-Markdown, turning wiki syntax into vault-style markup.

    ``![[target]]`` becomes ``<span class="internal-embed" src="target">`` and
    ``[[target|alias]]`` becomes an ``app://obsidian.md/`` link, which is what
    the rest of the pipeline rewrites.
    """

    def __init__(self, extensions: list[str] | None = None):
        self.extensions = extensions or ["extra", "sane_lists"]

    def render(self, markdown_text: str, context_folder: str) -> Fragment:
        body, frontmatter_html = self._split_frontmatter(markdown_text)
        body = EMBED_PATTERN.sub(self._embed_html, body)
        body = WIKILINK_PATTERN.sub(self._link_html, body)
        rendered = markdown.markdown(body, extensions=self.extensions)
        return parse_html(frontmatter_html + rendered)

    @staticmethod
    def _split_frontmatter(markdown_text: str) -> tuple[str, str]:
        match = FRONTMATTER_PATTERN.match(markdown_text)
        if not match:
            return markdown_text, ""
        frontmatter_html = f'<pre class="frontmatter">{html.escape(match.group(1))}</pre>\n'
        return markdown_text[match.end() :], frontmatter_html

    @staticmethod
    def _embed_html(match: re.Match[str]) -> str:
        target = match.group(1).strip()
        option = (match.group(2) or "").strip()
        src = html.escape(target, quote=True)

        if target.lower().endswith(RASTER_IMAGE_EXTENSIONS):
            attrs = f'class="internal-embed image-embed" src="{src}" alt="{src}"'
            size = SIZE_PATTERN.match(option)
            if size:
                attrs += f' width="{size.group(1)}"'
                if size.group(2):
                    attrs += f' height="{size.group(2)}"'
            return f"<span {attrs}></span>"

        alt = html.escape(option or target, quote=True)
        return f'<span class="internal-embed" src="{src}" alt="{alt}"></span>'

    @staticmethod
    def _link_html(match: re.Match[str]) -> str:
        target = match.group(1).strip()
        text = html.escape((match.group(2) or target).strip())
        href = INTERNAL_LINK_PREFIX + quote(target, safe="/#")
        return (
            f'<a class="internal-link" data-href="{html.escape(target, quote=True)}" '
            f'href="{html.escape(href, quote=True)}">{text}</a>'
        )

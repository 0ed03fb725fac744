"""Inlining of embedded notes."""

from typing import Callable
from urllib.parse import quote

from loguru import logger

from notepress.domain.context import RenderContext
from notepress.domain.files import NotFound, ResolvedFile
from notepress.errors import EmbedExpansionError
from notepress.html.nodes import INTERNAL_LINK_PREFIX, Element, ElementKind, Fragment, Parent, Text
from notepress.html.visitor import ElementVisitor, replace_node
from notepress.rendering.link_resolver import LinkResolver, split_anchor
from notepress.vault.base import VaultIndex

NestedRender = Callable[[RenderContext, str], Fragment]


class EmbedExpander(ElementVisitor[RenderContext]):
    """Replace embedded-note placeholders with the rendered content of the note.

    Embeds are expanded one at a time in document order. An embed of a note
    that is already being expanded further up the chain becomes a plain link
    instead, which keeps self-referencing notes from recursing forever.
    """

    kinds = (ElementKind.NOTE_EMBED,)

    def __init__(self, *, resolver: LinkResolver, vault: VaultIndex, render_nested: NestedRender):
        """Initialize the expander.

        Args:
            resolver: Resolver used to find the embedded notes
            vault: Vault the embedded notes are read from
            render_nested: Runs the full render pipeline on a note's markdown for a given context
        """
        self.resolver = resolver
        self.vault = vault
        self.render_nested = render_nested

    def visit_element(self, parent: Parent, element: Element, context: RenderContext) -> None:
        src = element.attrs.get("src", "")
        target, _ = split_anchor(src)

        resolution = self.resolver.resolve(target, context.note_path)
        if isinstance(resolution, NotFound):
            logger.warning(f"Could not resolve embedded note: {src}")
            return

        if context.is_expanding(resolution.vault_path):
            logger.info(f"Embedded note {resolution.vault_path} is already being expanded, linking")
            replace_node(parent, element, [self._cycle_link(element, resolution)])
            return

        try:
            fragment = self._expand(resolution, context)
        except EmbedExpansionError:
            logger.exception(f"Error trying to load embedded note {src}")
            return

        replace_node(parent, element, fragment.children)

    def _expand(self, resolution: ResolvedFile, context: RenderContext) -> Fragment:
        try:
            markdown = self.vault.read_file(resolution.vault_path)
            nested_context = context.descend(resolution.vault_path, resolution.absolute_path)
            return self.render_nested(nested_context, markdown)
        except Exception as e:
            raise EmbedExpansionError(resolution.vault_path, str(e)) from e

    @staticmethod
    def _cycle_link(element: Element, resolution: ResolvedFile) -> Element:
        children = element.children if element.text_content().strip() else [Text(resolution.basename)]
        return Element(
            tag="a",
            attrs={"href": INTERNAL_LINK_PREFIX + quote(resolution.vault_path, safe="/")},
            children=children,
        )

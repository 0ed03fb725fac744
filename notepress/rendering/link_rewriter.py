"""Rewriting of internal links between notes."""

import os
from urllib.parse import unquote

from loguru import logger

from notepress.domain.context import LinkPolicy, RenderContext
from notepress.domain.files import NotFound
from notepress.html.nodes import INTERNAL_LINK_PREFIX, Element, ElementKind, Parent, Text
from notepress.html.visitor import ElementVisitor, remove_node, replace_node
from notepress.rendering.link_resolver import LinkResolver, split_anchor


class LinkRewriter(ElementVisitor[RenderContext]):
    """Apply the configured link policy to links pointing at other notes.

    HTML exports always keep links, whatever the policy says.
    """

    kinds = (ElementKind.INTERNAL_LINK,)

    def __init__(self, *, resolver: LinkResolver, policy: LinkPolicy, extension: str = ""):
        """Initialize the rewriter.

        Args:
            resolver: Resolver used to find link targets
            policy: What to do with internal links in non-HTML exports
            extension: Extension (without dot) appended to link targets that have none
        """
        self.resolver = resolver
        self.policy = policy
        self.extension = extension.lstrip(".")

    def policy_for(self, context: RenderContext) -> LinkPolicy:
        if context.is_html:
            return LinkPolicy.KEEP_AS_LINK
        return self.policy

    def visit_element(self, parent: Parent, element: Element, context: RenderContext) -> None:
        # Literal links keep their internal href, so embedded notes must not wrap them again
        if element.attrs.get("data-touched") == "true":
            return

        policy = self.policy_for(context)
        if policy == LinkPolicy.KEEP_AS_LINK:
            element.attrs["href"] = self._href(element.attrs["href"], context)
        elif policy == LinkPolicy.STRIP:
            remove_node(parent, element)
        elif policy == LinkPolicy.TEXT_ONLY:
            replace_node(parent, element, [Text(element.text_content())])
        elif policy == LinkPolicy.LITERAL:
            element.attrs["data-touched"] = "true"
            replace_node(parent, element, [Text("[["), element, Text("]]")])

    def _href(self, href: str, context: RenderContext) -> str:
        link_target = unquote(href[len(INTERNAL_LINK_PREFIX) :])
        target, anchor = split_anchor(link_target)
        if not target:
            # Heading in the same note
            return anchor

        resolution = self.resolver.resolve(target, context.note_path)
        if isinstance(resolution, NotFound):
            folder = os.path.dirname(context.absolute_path)
            fallback = self._with_extension(os.path.normpath(os.path.join(folder, target))) + anchor
            logger.warning(f"Could not resolve link {link_target}, using relative path {fallback}")
            return fallback

        resolved = self._with_extension(resolution.absolute_path) + anchor
        logger.info(f"Resolved link {link_target} -> {resolution.vault_path} -> {resolved}")
        return resolved

    def _with_extension(self, path: str) -> str:
        if self.extension and not os.path.splitext(path)[1]:
            return f"{path}.{self.extension}"
        return path

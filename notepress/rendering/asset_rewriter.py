"""Rewriting of image and attachment references into absolute, converter-readable URIs."""

import re
from urllib.parse import unquote

from loguru import logger

from notepress.domain.context import RenderContext
from notepress.domain.files import NotFound
from notepress.html.nodes import INTERNAL_LINK_PREFIX, Element, ElementKind, Parent
from notepress.html.visitor import ElementVisitor
from notepress.rendering.link_resolver import LinkResolver
from notepress.vault.base import VaultIndex

# ![[filename]], ![[filename|width]] or ![[filename|widthxheight]]
WIKI_IMAGE_PATTERN = re.compile(r"!\[\[([^\]|]+)(\|(\d+)(x(\d+))?)?\]\]")
URI_SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


def to_file_uri(absolute_path: str) -> str:
    """``file://`` URI for an absolute path, with forward slashes on every platform."""
    return "file://" + absolute_path.replace("\\", "/")


def preprocess_markdown_images(markdown: str, source_path: str, resolver: LinkResolver) -> str:
    """Convert wiki image embeds into standard markdown images with absolute file URIs.

    Used when exporting markdown directly, where the converter does not understand
    ``![[image.png|300]]``. Unresolvable embeds are left exactly as written.

    Args:
        markdown: Raw note markdown
        source_path: Vault-relative path of the note
        resolver: Resolver used to find the embedded files

    Returns:
        Markdown with every resolvable image embed rewritten
    """
    result = markdown
    for match in WIKI_IMAGE_PATTERN.finditer(markdown):
        full_match = match.group(0)
        filename = match.group(1).strip()
        width = match.group(3)
        height = match.group(5)

        resolution = resolver.resolve(filename, source_path)
        if isinstance(resolution, NotFound):
            continue

        logger.info(f"Resolved {filename} -> {resolution.vault_path} -> {resolution.absolute_path}")
        replacement = f"![{filename}]({to_file_uri(resolution.absolute_path)})"

        dimensions = []
        if width:
            dimensions.append(f"width={width}px")
        if height:
            dimensions.append(f"height={height}px")
        if dimensions:
            replacement += "{" + " ".join(dimensions) + "}"

        # Only the first remaining occurrence: each match is replaced exactly once
        result = result.replace(full_match, replacement, 1)

    return result


class ImageEmbedPromoter(ElementVisitor[RenderContext]):
    """Turn ``<span src="image.png">`` embeds into real ``<img>`` elements."""

    kinds = (ElementKind.IMAGE_EMBED,)

    def visit_element(self, parent: Parent, element: Element, context: RenderContext) -> None:
        element.tag = "img"
        element.children = []


class ImageSourceRewriter(ElementVisitor[RenderContext]):
    """Point ``<img>`` sources at absolute ``file://`` URIs for non-HTML exports.

    Handles internal ``app://obsidian.md/`` sources and bare vault references
    such as images promoted from embeds. Each image is rewritten at most once.
    """

    kinds = (ElementKind.IMAGE,)

    def __init__(self, resolver: LinkResolver, vault: VaultIndex):
        self.resolver = resolver
        self.vault = vault

    def visit(self, root: Parent, context: RenderContext) -> None:
        if context.is_html:
            return
        super().visit(root, context)

    def visit_element(self, parent: Parent, element: Element, context: RenderContext) -> None:
        src = element.attrs.get("src", "")
        if not src or element.attrs.get("data-touched") == "true":
            return

        if src.startswith(INTERNAL_LINK_PREFIX):
            decoded = unquote(src[len(INTERNAL_LINK_PREFIX) :])
            resolution = self.resolver.resolve(decoded, context.note_path)
            if isinstance(resolution, NotFound):
                absolute_path = self.vault.absolute_path(decoded)
                logger.warning(f"Could not resolve image {decoded}, using path as-is")
            else:
                absolute_path = resolution.absolute_path
        elif URI_SCHEME_PATTERN.match(src) or src.startswith("/"):
            return
        else:
            decoded = unquote(src)
            resolution = self.resolver.resolve(decoded, context.note_path)
            if isinstance(resolution, NotFound):
                return
            absolute_path = resolution.absolute_path

        logger.info(f"Resolved image {src} -> {absolute_path}")
        element.attrs["src"] = to_file_uri(absolute_path)
        element.attrs["data-touched"] = "true"

"""Node model for the HTML tree produced by the markdown renderer.

The tree is a plain, owned data structure: a ``Fragment`` holding ``Text``,
``Comment`` and ``Element`` nodes. Elements are classified by ``ElementKind``
so that post-processing steps can match on what an element *is* (an embedded
note, an internal link, a diagram) instead of on tag names and CSS selectors.
"""

import html
from dataclasses import dataclass, field
from enum import Enum
from posixpath import splitext
from typing import Union

from bs4 import BeautifulSoup
from bs4.element import Comment as SoupComment
from bs4.element import NavigableString, PreformattedString, Tag

INTERNAL_LINK_PREFIX = "app://obsidian.md/"

RASTER_IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif")

# Embeds with these extensions are attachments, never notes to inline
MEDIA_EXTENSIONS = frozenset(
    {
        *RASTER_IMAGE_EXTENSIONS,
        ".svg",
        ".webp",
        ".bmp",
        ".tiff",
        ".pdf",
        ".mp3",
        ".wav",
        ".m4a",
        ".ogg",
        ".flac",
        ".mp4",
        ".webm",
        ".mov",
        ".mkv",
        ".canvas",
        ".excalidraw",
    }
)

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)

RAW_TEXT_ELEMENTS = frozenset({"style", "script"})

FRONTMATTER_CLASSES = frozenset({"frontmatter", "frontmatter-container"})


class ElementKind(Enum):
    INTERNAL_LINK = "internal-link"
    LINK = "link"
    IMAGE = "image"
    IMAGE_EMBED = "image-embed"
    NOTE_EMBED = "note-embed"
    DIAGRAM = "diagram"
    STYLE = "style"
    FRONTMATTER = "frontmatter"
    GENERIC = "generic"


@dataclass
class Text:
    text: str

    def to_html(self) -> str:
        return html.escape(self.text, quote=False)

    def text_content(self) -> str:
        return self.text


@dataclass
class Comment:
    text: str

    def to_html(self) -> str:
        return f"<!--{self.text}-->"

    def text_content(self) -> str:
        return ""


@dataclass
class Element:
    """An HTML or SVG element with its attributes and children."""

    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list["Node"] = field(default_factory=list)

    @property
    def classes(self) -> list[str]:
        return self.attrs.get("class", "").split()

    @property
    def kind(self) -> ElementKind:
        """Semantic kind of the element, derived from its tag and attributes."""
        tag = self.tag.lower()
        if tag == "a":
            if self.attrs.get("href", "").startswith(INTERNAL_LINK_PREFIX):
                return ElementKind.INTERNAL_LINK
            return ElementKind.LINK
        if tag == "img":
            return ElementKind.IMAGE
        if tag == "svg":
            return ElementKind.DIAGRAM
        if tag == "style":
            return ElementKind.STYLE

        src = self.attrs.get("src", "")
        if tag == "span" and src:
            if src.lower().endswith(RASTER_IMAGE_EXTENSIONS):
                return ElementKind.IMAGE_EMBED
            if "internal-embed" in self.classes and not _is_media(src):
                return ElementKind.NOTE_EMBED

        if FRONTMATTER_CLASSES.intersection(self.classes):
            return ElementKind.FRONTMATTER
        return ElementKind.GENERIC

    def text_content(self) -> str:
        return "".join(child.text_content() for child in self.children)

    def inner_html(self) -> str:
        if self.tag.lower() in RAW_TEXT_ELEMENTS:
            return "".join(
                child.text if isinstance(child, Text) else child.to_html()
                for child in self.children
            )
        return "".join(child.to_html() for child in self.children)

    def to_html(self) -> str:
        attrs = "".join(
            f' {name}="{html.escape(value, quote=True)}"' for name, value in self.attrs.items()
        )
        if self.tag.lower() in VOID_ELEMENTS:
            return f"<{self.tag}{attrs}>"
        return f"<{self.tag}{attrs}>{self.inner_html()}</{self.tag}>"


Node = Union[Text, Comment, Element]


@dataclass
class Fragment:
    """Root of a rendered note's HTML tree."""

    children: list[Node] = field(default_factory=list)

    def to_html(self) -> str:
        return "".join(child.to_html() for child in self.children)

    def text_content(self) -> str:
        return "".join(child.text_content() for child in self.children)


Parent = Union[Element, Fragment]


def _is_media(src: str) -> bool:
    target = src.split("#", 1)[0]
    return splitext(target)[1].lower() in MEDIA_EXTENSIONS


def parse_html(markup: str) -> Fragment:
    """Parse an HTML fragment into a ``Fragment``.

    html5lib is used as the tree builder because it keeps the case of SVG
    tags and attributes (``viewBox``, ``foreignObject``), which diagrams need.
    """
    soup = BeautifulSoup(
        f"<!DOCTYPE html><html><head></head><body>{markup}</body></html>",
        "html5lib",
        multi_valued_attributes=None,
    )
    body = soup.body
    if body is None:
        return Fragment()
    return Fragment(children=_convert_children(body))


def parse_element(markup: str) -> Element:
    """Parse markup holding a single element and return that element."""
    for node in parse_html(markup).children:
        if isinstance(node, Element):
            return node
    raise ValueError(f"No element found in markup: {markup!r}")


def _convert_children(tag: Tag) -> list[Node]:
    children = []
    for child in tag.children:
        node = _convert(child)
        if node is not None:
            children.append(node)
    return children


def _convert(soup_node: object) -> Node | None:
    if isinstance(soup_node, Tag):
        return Element(
            tag=soup_node.name,
            attrs={str(name): str(value) for name, value in soup_node.attrs.items()},
            children=_convert_children(soup_node),
        )
    if isinstance(soup_node, SoupComment):
        return Comment(str(soup_node))
    if isinstance(soup_node, PreformattedString):
        # Doctypes, CDATA and processing instructions carry no content
        return None
    if isinstance(soup_node, NavigableString):
        return Text(str(soup_node))
    return None

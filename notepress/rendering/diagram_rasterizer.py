"""Styling and rasterization of inline SVG diagrams."""

import base64
import math
import re

from loguru import logger

from notepress.domain.context import RenderContext
from notepress.errors import RasterizationError
from notepress.html.nodes import Element, ElementKind, Parent, Text, parse_element
from notepress.html.visitor import ElementVisitor, iter_elements, replace_node
from notepress.rasterizers.base import Rasterizer

ARROWHEAD_ID = "mermaid_arrowhead"
ARROWHEAD_REFERENCE_PATTERN = re.compile(r"app://obsidian\.md/index\.html#arrowhead\d*")
ARROWHEAD_MARKER = (
    f'<svg><marker id="{ARROWHEAD_ID}" viewBox="0 0 10 10" refX="9" refY="5" '
    'markerUnits="strokeWidth" markerWidth="8" markerHeight="6" orient="auto">'
    '<path d="M 0 0 L 10 5 L 0 10 z" class="arrowheadPath" '
    'style="stroke-width: 1; stroke-dasharray: 1, 0;"></path></marker></svg>'
)
LENGTH_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(?:px)?\s*$")


class DiagramRasterizer(ElementVisitor[RenderContext]):
    """Make SVG diagrams self-contained, and replace them with PNGs outside HTML exports.

    Theme CSS is always injected into the diagram, even when no CSS is injected
    into the document, since unstyled diagrams are illegible.
    """

    kinds = (ElementKind.DIAGRAM,)

    def __init__(self, *, css: str, rasterizer: Rasterizer | None, high_dpi: bool = False):
        self.css = css
        self.rasterizer = rasterizer
        self.scale = 2 if high_dpi else 1

    def visit_element(self, parent: Parent, element: Element, context: RenderContext) -> None:
        self._inject_css(element)
        self._normalize_markers(element)

        if context.is_html:
            return

        try:
            image = self._rasterize(element)
        except RasterizationError as e:
            logger.error(f"Failed to rasterize diagram in {context.note_path}, keeping SVG: {e}")
            return

        replace_node(parent, element, [image])

    def _inject_css(self, svg: Element) -> None:
        style = next(
            (element for _, element in iter_elements(svg) if element.kind == ElementKind.STYLE),
            None,
        )
        if style is None:
            style = Element(tag="style")
            svg.children.append(style)
        if self.css and self.css not in style.inner_html():
            style.children.append(Text(self.css))

    @staticmethod
    def _normalize_markers(svg: Element) -> None:
        if not any(element.attrs.get("id") == ARROWHEAD_ID for _, element in iter_elements(svg)):
            svg.children.append(parse_element(ARROWHEAD_MARKER).children[0])

        for element in [svg, *(element for _, element in iter_elements(svg))]:
            for name, value in element.attrs.items():
                element.attrs[name] = ARROWHEAD_REFERENCE_PATTERN.sub(f"#{ARROWHEAD_ID}", value)
            if element.kind == ElementKind.STYLE:
                for child in element.children:
                    if isinstance(child, Text):
                        child.text = ARROWHEAD_REFERENCE_PATTERN.sub(f"#{ARROWHEAD_ID}", child.text)

    def _rasterize(self, svg: Element) -> Element:
        if self.rasterizer is None:
            raise RasterizationError("No rasterizer configured")

        width, height = diagram_size(svg)
        try:
            png = self.rasterizer.rasterize(svg.to_html(), width, height, self.scale)
        except RasterizationError:
            raise
        except Exception as e:
            raise RasterizationError(f"Rasterizer failed: {e}") from e
        if not png:
            raise RasterizationError("Rasterizer returned no image data")

        # The <img> keeps the logical size; only the pixel density changes with the scale
        return Element(
            tag="img",
            attrs={
                "src": "data:image/png;base64," + base64.b64encode(png).decode(),
                "width": str(width),
                "height": str(height),
            },
        )


def diagram_size(svg: Element) -> tuple[int, int]:
    """Logical size of a diagram in pixels, from its attributes, style or viewBox.

    Raises:
        RasterizationError: If no size can be determined
    """
    view_width, view_height = _viewbox_size(svg.attrs.get("viewBox", ""))
    width = _length(svg.attrs.get("width")) or _style_length(svg, "max-width") or view_width
    height = _length(svg.attrs.get("height")) or _style_length(svg, "max-height")

    if not height and width and view_width and view_height:
        height = width * view_height / view_width
    height = height or view_height

    if not width or not height:
        raise RasterizationError("Diagram has no usable width and height")
    return math.ceil(width), math.ceil(height)


def _length(value: str | None) -> float | None:
    if not value:
        return None
    match = LENGTH_PATTERN.match(value)
    return float(match.group(1)) if match else None


def _style_length(svg: Element, prop: str) -> float | None:
    for declaration in svg.attrs.get("style", "").split(";"):
        name, _, value = declaration.partition(":")
        if name.strip().lower() == prop:
            return _length(value)
    return None


def _viewbox_size(viewbox: str) -> tuple[float | None, float | None]:
    parts = viewbox.replace(",", " ").split()
    if len(parts) != 4:
        return None, None
    try:
        return float(parts[2]), float(parts[3])
    except ValueError:
        return None, None

"""Tests for diagram styling and rasterization."""

import base64

import pytest

from notepress.domain.context import RenderContext
from notepress.errors import RasterizationError
from notepress.html import ElementKind, parse_element, parse_html, select
from notepress.rendering.diagram_rasterizer import ARROWHEAD_ID, DiagramRasterizer, diagram_size
from tests.fakes import FakeRasterizer

DIAGRAM = (
    '<p><svg id="graph" width="120.5" height="80" viewBox="0 0 120.5 80">'
    "<style>.node { fill: red; }</style>"
    '<path marker-end="url(app://obsidian.md/index.html#arrowhead42)"></path>'
    "</svg></p>"
)


def test_diagram_replaced_with_png_for_documents(pdf_context: RenderContext) -> None:
    rasterizer = FakeRasterizer(png=b"png-bytes")
    fragment = parse_html(DIAGRAM)
    DiagramRasterizer(css=":root { --x: 1; }", rasterizer=rasterizer).visit(fragment, pdf_context)

    assert select(fragment, ElementKind.DIAGRAM) == []
    [(parent, image)] = select(fragment, ElementKind.IMAGE)
    assert parent.tag == "p"  # type: ignore[union-attr]
    assert image.attrs["src"] == "data:image/png;base64," + base64.b64encode(b"png-bytes").decode()
    assert image.attrs["width"] == "121"
    assert image.attrs["height"] == "80"

    [(svg, width, height, scale)] = rasterizer.calls
    assert (width, height, scale) == (121, 80, 1)
    assert ":root { --x: 1; }" in svg


def test_high_dpi_doubles_scale_not_size(pdf_context: RenderContext) -> None:
    rasterizer = FakeRasterizer()
    fragment = parse_html(DIAGRAM)
    DiagramRasterizer(css="", rasterizer=rasterizer, high_dpi=True).visit(fragment, pdf_context)

    [(_, width, height, scale)] = rasterizer.calls
    assert (width, height, scale) == (121, 80, 2)
    [(_, image)] = select(fragment, ElementKind.IMAGE)
    assert image.attrs["width"] == "121"


def test_html_keeps_svg_with_css_and_markers(html_context: RenderContext) -> None:
    rasterizer = FakeRasterizer()
    fragment = parse_html(DIAGRAM)
    DiagramRasterizer(css=".theme { color: blue; }", rasterizer=rasterizer).visit(
        fragment, html_context
    )

    assert rasterizer.calls == []
    [(_, svg)] = select(fragment, ElementKind.DIAGRAM)
    markup = svg.to_html()
    assert ".node { fill: red; }.theme { color: blue; }" in markup
    assert f'marker-end="url(#{ARROWHEAD_ID})"' in markup
    assert "app://obsidian.md/index.html" not in markup
    assert f'<marker id="{ARROWHEAD_ID}"' in markup
    assert 'viewBox="0 0 10 10"' in markup


def test_style_element_created_when_missing(html_context: RenderContext) -> None:
    fragment = parse_html('<svg width="10" height="10"><circle r="4"></circle></svg>')
    DiagramRasterizer(css=".a { b: c; }", rasterizer=None).visit(fragment, html_context)

    [(_, svg)] = select(fragment, ElementKind.DIAGRAM)
    assert "<style>.a { b: c; }</style>" in svg.to_html()


def test_processing_twice_does_not_duplicate(html_context: RenderContext) -> None:
    fragment = parse_html(DIAGRAM)
    step = DiagramRasterizer(css=".theme { color: blue; }", rasterizer=None)
    step.visit(fragment, html_context)
    step.visit(fragment, html_context)

    markup = fragment.to_html()
    assert markup.count(".theme { color: blue; }") == 1
    assert markup.count(f'id="{ARROWHEAD_ID}"') == 1


def test_failed_rasterization_keeps_svg(pdf_context: RenderContext) -> None:
    fragment = parse_html(DIAGRAM + "<p>after</p>")
    DiagramRasterizer(css="", rasterizer=FakeRasterizer(fail=True)).visit(fragment, pdf_context)

    assert len(select(fragment, ElementKind.DIAGRAM)) == 1
    assert select(fragment, ElementKind.IMAGE) == []
    assert "<p>after</p>" in fragment.to_html()


def test_missing_rasterizer_keeps_svg(pdf_context: RenderContext) -> None:
    fragment = parse_html(DIAGRAM)
    DiagramRasterizer(css="", rasterizer=None).visit(fragment, pdf_context)
    assert len(select(fragment, ElementKind.DIAGRAM)) == 1


def test_each_diagram_replaced_in_place(pdf_context: RenderContext) -> None:
    fragment = parse_html(
        '<svg width="10" height="10"></svg><p>between</p><svg width="20" height="30"></svg>'
    )
    rasterizer = FakeRasterizer()
    DiagramRasterizer(css="", rasterizer=rasterizer).visit(fragment, pdf_context)

    tags = [getattr(child, "tag", None) for child in fragment.children]
    assert tags == ["img", "p", "img"]
    assert [(w, h) for _, w, h, _ in rasterizer.calls] == [(10, 10), (20, 30)]


@pytest.mark.parametrize(
    ("markup", "size"),
    [
        ('<svg width="100" height="50"></svg>', (100, 50)),
        ('<svg width="100px" height="50px"></svg>', (100, 50)),
        ('<svg viewBox="0 0 300 150"></svg>', (300, 150)),
        ('<svg width="100%" style="max-width: 400px;" viewBox="0 0 200 100"></svg>', (400, 200)),
        ('<svg width="99.2" viewBox="0,0,10,20"></svg>', (100, 199)),
    ],
)
def test_diagram_size(markup: str, size: tuple[int, int]) -> None:
    assert diagram_size(parse_element(markup)) == size


@pytest.mark.parametrize(
    "markup", ['<svg width="100%"></svg>', "<svg></svg>", '<svg viewBox="broken"></svg>']
)
def test_diagram_without_size(markup: str) -> None:
    with pytest.raises(RasterizationError):
        diagram_size(parse_element(markup))


class BrokenRasterizer(FakeRasterizer):
    def rasterize(self, svg: str, width: int, height: int, scale: int) -> bytes:
        raise OSError("browser binary missing")


def test_unexpected_rasterizer_error_is_contained(pdf_context: RenderContext) -> None:
    fragment = parse_html(DIAGRAM + "<p>after</p>")
    DiagramRasterizer(css="", rasterizer=BrokenRasterizer()).visit(fragment, pdf_context)

    assert len(select(fragment, ElementKind.DIAGRAM)) == 1
    assert "<p>after</p>" in fragment.to_html()

"""Tests for the HTML node model and tree walking."""

import pytest

from notepress.html import (
    Element,
    ElementKind,
    Fragment,
    Text,
    iter_elements,
    parse_element,
    parse_html,
    remove_node,
    replace_node,
    select,
)


def test_parse_and_serialize_simple_fragment() -> None:
    markup = '<p>Hello <a href="https://example.com">world</a> &amp; friends</p>'
    fragment = parse_html(markup)

    assert fragment.to_html() == markup
    assert fragment.text_content() == "Hello world & friends"


def test_leading_style_stays_in_fragment() -> None:
    fragment = parse_html("<style>p { color: red; }</style><p>x</p>")

    first = fragment.children[0]
    assert isinstance(first, Element)
    assert first.kind == ElementKind.STYLE
    # Style contents are raw text, not escaped
    assert fragment.to_html() == "<style>p { color: red; }</style><p>x</p>"


def test_svg_keeps_camel_case_attributes() -> None:
    svg = parse_element('<svg viewBox="0 0 10 10" width="10"><foreignObject></foreignObject></svg>')

    assert svg.attrs["viewBox"] == "0 0 10 10"
    assert isinstance(svg.children[0], Element)
    assert svg.children[0].tag == "foreignObject"


def test_void_elements_have_no_closing_tag() -> None:
    assert Element(tag="img", attrs={"src": "a.png"}).to_html() == '<img src="a.png">'
    assert Element(tag="br").to_html() == "<br>"


def test_attribute_values_are_escaped() -> None:
    element = Element(tag="a", attrs={"title": 'say "hi" & <go>'}, children=[Text("x")])
    assert element.to_html() == '<a title="say &quot;hi&quot; &amp; &lt;go&gt;">x</a>'


def test_comments_survive_round_trip() -> None:
    fragment = parse_html("<p>a</p><!-- note -->")
    assert fragment.to_html() == "<p>a</p><!-- note -->"


@pytest.mark.parametrize(
    ("markup", "kind"),
    [
        ('<a href="app://obsidian.md/Note">Note</a>', ElementKind.INTERNAL_LINK),
        ('<a href="https://example.com">web</a>', ElementKind.LINK),
        ('<img src="a.png">', ElementKind.IMAGE),
        ('<span src="pic.PNG"></span>', ElementKind.IMAGE_EMBED),
        ('<span class="internal-embed image-embed" src="photo.jpeg"></span>', ElementKind.IMAGE_EMBED),
        ('<span class="internal-embed" src="Other Note"></span>', ElementKind.NOTE_EMBED),
        ('<span class="internal-embed" src="Other Note#Heading"></span>', ElementKind.NOTE_EMBED),
        ('<span class="internal-embed" src="clip.mp4"></span>', ElementKind.GENERIC),
        ('<span src="Other Note"></span>', ElementKind.GENERIC),
        ('<svg width="10" height="10"></svg>', ElementKind.DIAGRAM),
        ('<div class="frontmatter-container"></div>', ElementKind.FRONTMATTER),
        ("<p>text</p>", ElementKind.GENERIC),
    ],
)
def test_element_kind(markup: str, kind: ElementKind) -> None:
    assert parse_element(markup).kind == kind


def test_kind_follows_attribute_changes() -> None:
    element = parse_element('<a href="app://obsidian.md/Note">Note</a>')
    element.attrs["href"] = "/vault/Note.md"
    assert element.kind == ElementKind.LINK


def test_iter_elements_is_document_order() -> None:
    fragment = parse_html("<div><p><em>a</em></p><span>b</span></div><hr>")
    tags = [element.tag for _, element in iter_elements(fragment)]
    assert tags == ["div", "p", "em", "span", "hr"]


def test_select_returns_parents() -> None:
    fragment = parse_html('<p>see <a href="app://obsidian.md/X">X</a></p>')
    [(parent, link)] = select(fragment, ElementKind.INTERNAL_LINK)

    assert isinstance(parent, Element)
    assert parent.tag == "p"
    assert link.text_content() == "X"


def test_replace_and_remove_node() -> None:
    fragment = parse_html("<p>a<b>b</b>c</p>")
    paragraph = fragment.children[0]
    assert isinstance(paragraph, Element)
    bold = paragraph.children[1]

    replace_node(paragraph, bold, [Text("B1"), Element(tag="i", children=[Text("B2")])])
    assert fragment.to_html() == "<p>aB1<i>B2</i>c</p>"

    remove_node(fragment, paragraph)
    assert fragment.to_html() == ""


def test_replace_node_requires_child() -> None:
    with pytest.raises(ValueError):
        replace_node(Fragment(), Text("orphan"), [])

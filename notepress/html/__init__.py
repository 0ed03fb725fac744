from notepress.html.nodes import (
    INTERNAL_LINK_PREFIX,
    Comment,
    Element,
    ElementKind,
    Fragment,
    Node,
    Parent,
    Text,
    parse_element,
    parse_html,
)
from notepress.html.visitor import ElementVisitor, iter_elements, remove_node, replace_node, select

__all__ = [
    "INTERNAL_LINK_PREFIX",
    "Comment",
    "Element",
    "ElementKind",
    "ElementVisitor",
    "Fragment",
    "Node",
    "Parent",
    "Text",
    "iter_elements",
    "parse_element",
    "parse_html",
    "remove_node",
    "replace_node",
    "select",
]

"""Walking and editing the rendered HTML tree."""

from typing import Generic, Iterator, Sequence, TypeVar

from notepress.html.nodes import Element, ElementKind, Node, Parent

C = TypeVar("C")


def iter_elements(root: Parent) -> Iterator[tuple[Parent, Element]]:
    """Yield ``(parent, element)`` pairs in document order (depth-first, pre-order)."""
    for child in list(root.children):
        if isinstance(child, Element):
            yield root, child
            yield from iter_elements(child)


def select(root: Parent, *kinds: ElementKind) -> list[tuple[Parent, Element]]:
    """Snapshot of all elements of the given kinds, in document order.

    The snapshot is taken up front so callers can replace or remove the
    returned elements while iterating.
    """
    return [(parent, element) for parent, element in iter_elements(root) if element.kind in kinds]


def replace_node(parent: Parent, old: Node, replacement: Sequence[Node]) -> None:
    """Replace ``old`` (matched by identity) with the ``replacement`` nodes in place."""
    for index, child in enumerate(parent.children):
        if child is old:
            parent.children[index : index + 1] = list(replacement)
            return
    raise ValueError(f"Node is not a child of the given parent: {old!r}")


def remove_node(parent: Parent, node: Node) -> None:
    replace_node(parent, node, [])


class ElementVisitor(Generic[C]):
    """Base class for a post-processing step that handles elements of some kinds.

    Subclasses set ``kinds`` and implement ``visit_element``. ``visit`` takes a
    snapshot of the matching elements and handles them one at a time, in
    document order, so each element is settled before the next is looked at.
    """

    kinds: tuple[ElementKind, ...] = ()

    def visit(self, root: Parent, context: C) -> None:
        for parent, element in select(root, *self.kinds):
            self.visit_element(parent, element, context)

    def visit_element(self, parent: Parent, element: Element, context: C) -> None:
        raise NotImplementedError

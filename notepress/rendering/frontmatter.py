"""Front-matter metadata of notes."""

import re

import yaml
from loguru import logger

from notepress.domain.context import RenderContext
from notepress.html.nodes import Element, ElementKind, Parent
from notepress.html.visitor import ElementVisitor, remove_node

FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\n(.*?)^---[ \t]*$", re.DOTALL | re.MULTILINE)


def get_yaml_metadata(markdown: str) -> dict[str, str]:
    """Parse the YAML front matter of a note into a flat string mapping.

    Args:
        markdown: Raw note markdown

    Returns:
        Front-matter keys mapped to their values as strings; lists are joined with
        ", " and empty values are dropped. Empty if there is no (valid) front matter.
    """
    match = FRONTMATTER_PATTERN.match(markdown.strip())
    if not match:
        return {}

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring invalid YAML front matter: {e}")
        return {}

    if not isinstance(data, dict):
        return {}

    metadata = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            metadata[str(key)] = ", ".join(str(item) for item in value)
        else:
            metadata[str(key)] = str(value)
    return metadata


class FrontmatterRemover(ElementVisitor[RenderContext]):
    """Drop the rendered front-matter block from the output."""

    kinds = (ElementKind.FRONTMATTER,)

    def visit_element(self, parent: Parent, element: Element, context: RenderContext) -> None:
        remove_node(parent, element)

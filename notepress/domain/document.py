"""Rendered document domain models."""

from pydantic import BaseModel


class RenderResult(BaseModel):
    """Output of rendering one note.

    Attributes:
        html: Standalone document for top-level renders, a bare fragment otherwise
        metadata: Front-matter values of the note, always including a title
        warnings: Problems the user should be told about, e.g. a missing stylesheet
    """

    html: str
    metadata: dict[str, str] = {}
    warnings: list[str] = []


class AssembledDocument(BaseModel):
    """A standalone HTML document built around a rendered note."""

    title: str
    css: str
    body: str

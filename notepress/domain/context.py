"""Render context domain models."""

from enum import Enum
from posixpath import dirname

from pydantic import BaseModel, ConfigDict


class OutputFormat(str, Enum):
    HTML = "html"
    PDF = "pdf"
    DOCX = "docx"
    ODT = "odt"
    RTF = "rtf"
    EPUB = "epub"
    LATEX = "latex"
    MARKDOWN = "markdown"
    PLAIN = "plain"


class LinkPolicy(str, Enum):
    KEEP_AS_LINK = "keep-as-link"
    STRIP = "strip"
    TEXT_ONLY = "text-only"
    LITERAL = "literal"


class CssInjection(str, Enum):
    NONE = "none"
    LIGHT = "light"
    DARK = "dark"
    CURRENT = "current"


class RenderContext(BaseModel):
    """State threaded through a single top-level render.

    Attributes:
        note_path: Vault-relative path of the note being rendered
        absolute_path: Absolute filesystem path of the note being rendered
        output_format: Target format of the export
        ancestors: Vault-relative paths of the notes currently embedding this one,
            outermost first
    """

    model_config = ConfigDict(frozen=True)

    note_path: str
    absolute_path: str
    output_format: OutputFormat
    ancestors: tuple[str, ...] = ()

    @property
    def is_top_level(self) -> bool:
        return not self.ancestors

    @property
    def is_html(self) -> bool:
        return self.output_format == OutputFormat.HTML

    @property
    def context_folder(self) -> str:
        return dirname(self.note_path)

    def is_expanding(self, path: str) -> bool:
        """Whether the note at ``path`` is already part of the current embed chain."""
        return path == self.note_path or path in self.ancestors

    def descend(self, note_path: str, absolute_path: str) -> "RenderContext":
        """Context for rendering a note embedded in the current one."""
        return RenderContext(
            note_path=note_path,
            absolute_path=absolute_path,
            output_format=self.output_format,
            ancestors=(*self.ancestors, self.note_path),
        )

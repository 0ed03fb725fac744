"""Orchestration of the note rendering pipeline."""

from pathlib import Path
from posixpath import basename, normpath, splitext
from typing import Sequence

from loguru import logger

from notepress.config import Settings
from notepress.domain.context import OutputFormat, RenderContext
from notepress.domain.document import RenderResult
from notepress.errors import NoteReadError
from notepress.html.nodes import Fragment
from notepress.rasterizers.base import Rasterizer
from notepress.renderers.base import MarkdownRenderer
from notepress.vault.base import VaultIndex

from .asset_rewriter import ImageEmbedPromoter, ImageSourceRewriter, preprocess_markdown_images
from .assembler import DocumentAssembler
from .diagram_rasterizer import DiagramRasterizer
from .embed_expander import EmbedExpander
from .frontmatter import FrontmatterRemover, get_yaml_metadata
from .link_resolver import LinkResolver
from .link_rewriter import LinkRewriter


class NoteRenderer:
    """Renders notes into portable HTML ready for a document converter.

    One instance can serve any number of renders; all per-render state lives in
    the ``RenderContext`` and the fragment being processed.
    """

    def __init__(
        self,
        *,
        vault: VaultIndex,
        renderer: MarkdownRenderer,
        settings: Settings,
        rasterizer: Rasterizer | None = None,
        loaded_stylesheets: Sequence[str] = (),
    ):
        """Initialize the renderer with its collaborators.

        Args:
            vault: Vault holding the notes and attachments
            renderer: Markdown renderer producing the raw HTML of a note
            settings: Export settings
            rasterizer: Converts diagrams to PNG for non-HTML exports
            loaded_stylesheets: CSS loaded by the host application, injected when CSS is enabled
        """
        self.vault = vault
        self.renderer = renderer
        self.settings = settings
        self.rasterizer = rasterizer

        self.resolver = LinkResolver(vault)
        self.assembler = DocumentAssembler(
            settings=settings, vault=vault, loaded_stylesheets=loaded_stylesheets
        )
        self.image_promoter = ImageEmbedPromoter()
        self.embed_expander = EmbedExpander(
            resolver=self.resolver, vault=vault, render_nested=self._render_fragment
        )
        self.link_rewriter = LinkRewriter(
            resolver=self.resolver,
            policy=settings.link_policy,
            extension=settings.add_extensions_to_internal_links,
        )
        self.image_rewriter = ImageSourceRewriter(self.resolver, vault)
        self.frontmatter_remover = FrontmatterRemover()

    def render(
        self,
        source_note: str,
        output_format: OutputFormat | str,
        ancestor_paths: Sequence[str] = (),
    ) -> RenderResult:
        """Render a note to HTML.

        Args:
            source_note: Vault-relative or absolute path of the note
            output_format: Format the HTML will be converted to
            ancestor_paths: Notes embedding this one; empty for a top-level render

        Returns:
            RenderResult with a standalone document for top-level renders and a bare
            fragment otherwise, plus the note's metadata

        Raises:
            NoteReadError: If the note cannot be read
        """
        context = self._context(source_note, OutputFormat(output_format), ancestor_paths)
        markdown = self._read_note(context)
        logger.info(f"Rendering {context.note_path} for {context.output_format.value} output")

        html = self._render_fragment(context, markdown).to_html()

        metadata = get_yaml_metadata(markdown)
        metadata.setdefault("title", splitext(basename(context.note_path))[0])

        warnings: list[str] = []
        if context.is_top_level:
            document = self.assembler.assemble(body=html, title=metadata["title"], warnings=warnings)
            html = self.assembler.to_html(document)

        return RenderResult(html=html, metadata=metadata, warnings=warnings)

    def export_markdown(self, source_note: str) -> str:
        """Note markdown with wiki image embeds rewritten for direct markdown conversion."""
        context = self._context(source_note, OutputFormat.MARKDOWN, ())
        markdown = self._read_note(context)
        return preprocess_markdown_images(markdown, context.note_path, self.resolver)

    def _render_fragment(self, context: RenderContext, markdown: str) -> Fragment:
        fragment = self.renderer.render(markdown, context.context_folder)

        self.image_promoter.visit(fragment, context)
        self.embed_expander.visit(fragment, context)
        self.link_rewriter.visit(fragment, context)
        self.image_rewriter.visit(fragment, context)
        if not self.settings.display_yaml_frontmatter:
            self.frontmatter_remover.visit(fragment, context)

        diagrams = DiagramRasterizer(
            css=self.assembler.diagram_css(),
            rasterizer=self.rasterizer,
            high_dpi=self.settings.high_dpi_diagrams,
        )
        diagrams.visit(fragment, context)
        return fragment

    def _context(
        self, source_note: str, output_format: OutputFormat, ancestor_paths: Sequence[str]
    ) -> RenderContext:
        note_path = self._vault_path(source_note)
        return RenderContext(
            note_path=note_path,
            absolute_path=self.vault.absolute_path(note_path),
            output_format=output_format,
            ancestors=tuple(self._vault_path(path) for path in ancestor_paths),
        )

    def _vault_path(self, path: str) -> str:
        if not Path(path).is_absolute():
            relative = normpath(path.replace("\\", "/"))
            if relative == ".." or relative.startswith("../"):
                raise NoteReadError(path, "note is outside the vault")
            return relative
        vault_path = self.vault.vault_path(path)
        if vault_path is None:
            raise NoteReadError(path, "note is outside the vault")
        return vault_path

    def _read_note(self, context: RenderContext) -> str:
        try:
            return self.vault.read_file(context.note_path)
        except (OSError, UnicodeDecodeError) as e:
            raise NoteReadError(context.note_path, str(e)) from e

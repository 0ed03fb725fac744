"""CLI for exporting a vault note as portable HTML (or converter-ready markdown)"""

import argparse
import sys
from pathlib import Path

from loguru import logger

from notepress.config import Settings, settings
from notepress.domain.context import CssInjection, LinkPolicy, OutputFormat
from notepress.rasterizers.base import Rasterizer
from notepress.renderers.markdown_renderer import ObsidianMarkdownRenderer
from notepress.rendering.pipeline import NoteRenderer
from notepress.vault.local import LocalVault


def build_rasterizer(output_format: OutputFormat, export_settings: Settings) -> Rasterizer | None:
    if output_format in (OutputFormat.HTML, OutputFormat.MARKDOWN):
        return None
    from notepress.rasterizers.playwright_rasterizer import PlaywrightRasterizer

    return PlaywrightRasterizer(timeout=export_settings.rasterize_timeout)


def main(
    *,
    vault: str,
    note: str,
    output_format: OutputFormat,
    output: str | None,
    export_settings: Settings,
) -> int:
    renderer = NoteRenderer(
        vault=LocalVault(vault),
        renderer=ObsidianMarkdownRenderer(),
        settings=export_settings,
        rasterizer=build_rasterizer(output_format, export_settings),
    )

    if output_format == OutputFormat.MARKDOWN:
        text = renderer.export_markdown(note)
    else:
        result = renderer.render(note, output_format)
        for warning in result.warnings:
            logger.warning(warning)
        text = result.html

    if output:
        Path(output).write_text(text, encoding="utf-8")
        logger.info(f"Wrote {output}")
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--vault",
        type=str,
        required=False,
        help="Folder containing the vault",
        default=str(settings.vault_path),
    )
    parser.add_argument(
        "--note", type=str, required=True, help="Note to export, relative to the vault or absolute"
    )
    parser.add_argument(
        "--format",
        type=OutputFormat,
        choices=list(OutputFormat),
        default=OutputFormat.HTML,
        help="Format the output will be converted to",
    )
    parser.add_argument("--output", type=str, required=False, help="Output file (default: stdout)")
    parser.add_argument(
        "--link-policy",
        type=LinkPolicy,
        choices=list(LinkPolicy),
        default=settings.link_policy,
        help="What to do with links to other notes in non-HTML exports",
    )
    parser.add_argument(
        "--inject-css",
        type=CssInjection,
        choices=list(CssInjection),
        default=settings.inject_app_css,
        help="Theme CSS to inject into the document",
    )
    parser.add_argument(
        "--extension",
        type=str,
        default=settings.add_extensions_to_internal_links,
        help="Extension to add to internal links without one, e.g. md",
    )
    parser.add_argument(
        "--high-dpi", action="store_true", default=settings.high_dpi_diagrams, help="2x diagrams"
    )
    parser.add_argument(
        "--custom-css",
        type=str,
        default=settings.custom_css_file,
        help="Custom stylesheet, absolute or relative to the vault",
    )
    parser.add_argument(
        "--show-frontmatter",
        action="store_true",
        default=settings.display_yaml_frontmatter,
        help="Keep the YAML front matter block in the output",
    )

    args = parser.parse_args()

    logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

    export_settings = settings.model_copy(
        update={
            "vault_path": Path(args.vault),
            "link_policy": args.link_policy,
            "inject_app_css": args.inject_css,
            "add_extensions_to_internal_links": args.extension,
            "high_dpi_diagrams": args.high_dpi,
            "custom_css_file": args.custom_css,
            "display_yaml_frontmatter": args.show_frontmatter,
        }
    )

    sys.exit(
        main(
            vault=args.vault,
            note=args.note,
            output_format=args.format,
            output=args.output,
            export_settings=export_settings,
        )
    )

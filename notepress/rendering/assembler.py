"""Assembly of standalone HTML documents around rendered notes."""

import json
from pathlib import Path
from typing import Sequence

from jinja2 import Environment, PackageLoader, select_autoescape
from loguru import logger

from notepress.config import Settings
from notepress.domain.context import CssInjection
from notepress.domain.document import AssembledDocument
from notepress.errors import AssetLoadError
from notepress.rendering import styles
from notepress.vault.base import VaultIndex

templates = Environment(
    loader=PackageLoader("notepress", "templates"),
    autoescape=select_autoescape(["html"]),
)


class DocumentAssembler:
    """Wraps a rendered note in a complete document with a title and stylesheet."""

    def __init__(
        self,
        *,
        settings: Settings,
        vault: VaultIndex,
        loaded_stylesheets: Sequence[str] = (),
    ):
        """Initialize the assembler.

        Args:
            settings: Export settings (CSS injection mode, custom stylesheet)
            vault: Vault the note lives in, used for the theme config and relative CSS paths
            loaded_stylesheets: CSS currently loaded by the host application, if any
        """
        self.settings = settings
        self.vault = vault
        self.loaded_stylesheets = list(loaded_stylesheets)

    def assemble(self, *, body: str, title: str, warnings: list[str]) -> AssembledDocument:
        """Build the document; problems loading CSS are appended to ``warnings``."""
        return AssembledDocument(title=title, css=self.document_css(body, warnings), body=body)

    @staticmethod
    def to_html(document: AssembledDocument) -> str:
        template = templates.get_template("standalone.html")
        return template.render(title=document.title, css=document.css, body=document.body)

    def document_css(self, body: str, warnings: list[str]) -> str:
        css = self.theme_css()
        if self.settings.inject_app_css != CssInjection.NONE:
            css += " " + " ".join(self.loaded_stylesheets)
        # Embedded notes are already inlined at this point, so this is added once
        if styles.MATHJAX_MARKER in body:
            css += " " + styles.MATHJAX_FONT_CSS
        try:
            css += self.custom_css()
        except AssetLoadError as e:
            message = f"Failed to load custom CSS file: {self.settings.custom_css_file}"
            logger.warning(f"{message} ({e})")
            warnings.append(message)
        return css

    def theme_css(self) -> str:
        """Theme stylesheet for the document, empty when CSS injection is off."""
        if self.settings.inject_app_css == CssInjection.NONE:
            return ""
        return styles.app_css(self.theme_is_light())

    def diagram_css(self) -> str:
        """Theme variables for diagrams; never empty, light unless a dark theme applies."""
        return styles.theme_variables(self.theme_is_light())

    def theme_is_light(self) -> bool:
        mode = self.settings.inject_app_css
        if mode == CssInjection.DARK:
            return False
        if mode == CssInjection.CURRENT:
            return self._current_theme_is_light()
        return True

    def _current_theme_is_light(self) -> bool:
        config_path = Path(self.vault.absolute_path(".obsidian/config"))
        try:
            config = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.debug(f"No readable app config at {config_path}, assuming light theme")
            return True
        if not isinstance(config, dict):
            return True
        return config.get("theme") != "obsidian"

    def custom_css(self) -> str:
        """Contents of the custom stylesheet, tried as an absolute then vault-relative path.

        Raises:
            AssetLoadError: If a custom stylesheet is configured but cannot be read
        """
        css_file = self.settings.custom_css_file
        if not css_file:
            return ""

        candidates = [Path(css_file), Path(self.vault.absolute_path(css_file))]
        for candidate in candidates:
            if not candidate.is_absolute() or not candidate.is_file():
                continue
            try:
                return candidate.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise AssetLoadError(f"Could not read {candidate}: {e}") from e

        raise AssetLoadError(f"No such file: {css_file}")

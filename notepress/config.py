from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from notepress.domain.context import CssInjection, LinkPolicy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="NOTEPRESS_", env_file=".env", extra="ignore")

    # Vault settings
    vault_path: Path = Path(".")

    # Styling
    inject_app_css: CssInjection = CssInjection.LIGHT
    custom_css_file: str | None = None
    display_yaml_frontmatter: bool = False

    # Internal links
    link_policy: LinkPolicy = LinkPolicy.KEEP_AS_LINK
    add_extensions_to_internal_links: str = ""  # e.g. "md", without the dot

    # Diagrams
    high_dpi_diagrams: bool = False
    rasterize_timeout: float = 30.0  # seconds

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL


settings = Settings()

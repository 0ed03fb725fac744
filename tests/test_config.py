import pytest

from notepress.config import Settings
from notepress.domain.context import CssInjection, LinkPolicy


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NOTEPRESS_LINK_POLICY", "text-only")
    monkeypatch.setenv("NOTEPRESS_INJECT_APP_CSS", "dark")
    monkeypatch.setenv("NOTEPRESS_HIGH_DPI_DIAGRAMS", "true")
    monkeypatch.setenv("NOTEPRESS_ADD_EXTENSIONS_TO_INTERNAL_LINKS", "md")

    settings = Settings(_env_file=None)

    assert settings.link_policy == LinkPolicy.TEXT_ONLY
    assert settings.inject_app_css == CssInjection.DARK
    assert settings.high_dpi_diagrams is True
    assert settings.add_extensions_to_internal_links == "md"


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("NOTEPRESS_LINK_POLICY", "NOTEPRESS_INJECT_APP_CSS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.link_policy == LinkPolicy.KEEP_AS_LINK
    assert settings.inject_app_css == CssInjection.LIGHT
    assert settings.custom_css_file is None
    assert settings.rasterize_timeout == 30.0

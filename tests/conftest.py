import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from notepress.config import Settings
from notepress.domain.context import CssInjection, LinkPolicy, OutputFormat, RenderContext
from notepress.rendering.link_resolver import LinkResolver
from notepress.rendering.pipeline import NoteRenderer
from notepress.vault.local import LocalVault
from tests.fakes import FakeRasterizer, FakeRenderer, FakeVault


@pytest.fixture
def export_settings() -> Settings:
    """Settings with defaults that do not depend on the environment."""
    return Settings(
        inject_app_css=CssInjection.LIGHT,
        link_policy=LinkPolicy.KEEP_AS_LINK,
        add_extensions_to_internal_links="",
        high_dpi_diagrams=False,
        custom_css_file=None,
        display_yaml_frontmatter=False,
    )


@pytest.fixture
def fake_vault() -> FakeVault:
    return FakeVault(
        {
            "A.md": '<p>Note A</p><span class="internal-embed" src="B"></span>',
            "notes/B.md": '<p>Note B</p><span class="internal-embed" src="A"></span>',
            "assets/diagram.png": "",
            "projects/Plan.md": "<p>The plan</p>",
        }
    )


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def fake_rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def resolver(fake_vault: FakeVault) -> LinkResolver:
    return LinkResolver(fake_vault)


@pytest.fixture
def note_renderer(
    fake_vault: FakeVault,
    fake_renderer: FakeRenderer,
    fake_rasterizer: FakeRasterizer,
    export_settings: Settings,
) -> NoteRenderer:
    return NoteRenderer(
        vault=fake_vault,
        renderer=fake_renderer,
        settings=export_settings,
        rasterizer=fake_rasterizer,
    )


@pytest.fixture
def pdf_context() -> RenderContext:
    return RenderContext(
        note_path="projects/Plan.md",
        absolute_path="/vault/projects/Plan.md",
        output_format=OutputFormat.PDF,
    )


@pytest.fixture
def html_context() -> RenderContext:
    return RenderContext(
        note_path="projects/Plan.md",
        absolute_path="/vault/projects/Plan.md",
        output_format=OutputFormat.HTML,
    )


@pytest.fixture
def temp_vault_base() -> Generator[Path, None, None]:
    """Create a temporary directory holding a vault on disk."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def vault_directory(temp_vault_base: Path) -> Path:
    vault_dir = temp_vault_base / "vault"
    vault_dir.mkdir()
    return vault_dir


@pytest.fixture
def write_file(vault_directory: Path) -> Callable[[str, str], Path]:
    """Write a file at a vault-relative path, creating folders as needed."""

    def _write(relative_path: str, content: str = "") -> Path:
        path = vault_directory / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def local_vault(vault_directory: Path) -> LocalVault:
    return LocalVault(vault_directory)

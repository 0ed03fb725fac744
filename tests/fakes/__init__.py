from tests.fakes.fake_rasterizer import FakeRasterizer
from tests.fakes.fake_renderer import FakeRenderer
from tests.fakes.fake_vault import FakeVault

__all__ = ["FakeRasterizer", "FakeRenderer", "FakeVault"]

from notepress.rasterizers.base import Rasterizer

__all__ = ["Rasterizer"]

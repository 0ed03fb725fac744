from typing import Protocol


class Rasterizer(Protocol):
    def rasterize(self, svg: str, width: int, height: int, scale: int) -> bytes:
        """Draw SVG markup into a PNG of ``width * scale`` by ``height * scale`` pixels.

        Implementations either return the PNG bytes or raise ``RasterizationError``;
        they never leave the caller waiting indefinitely.
        """
        ...

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from notepress.errors import RasterizationError
from notepress.rasterizers.base import Rasterizer

PAGE_TEMPLATE = (
    "<!doctype html><html><head><meta charset='utf-8'/>"
    "<style>html, body {{ margin: 0; padding: 0; background: transparent; }}"
    " svg {{ display: block; }}</style></head><body>{svg}</body></html>"
)


class PlaywrightRasterizer(Rasterizer):
    """Rasterize diagrams by screenshotting them in headless Chromium."""

    def __init__(self, timeout: float = 30.0):
        """Initialize PlaywrightRasterizer.

        Args:
            timeout: Seconds a single page load or screenshot may take before failing
        """
        self.timeout_ms = timeout * 1000

    def rasterize(self, svg: str, width: int, height: int, scale: int) -> bytes:
        try:
            with sync_playwright() as playwright:
                browser = playwright.chromium.launch(headless=True)
                try:
                    page = browser.new_page(
                        viewport={"width": width, "height": height},
                        device_scale_factor=scale,
                    )
                    page.set_default_timeout(self.timeout_ms)
                    page.set_content(PAGE_TEMPLATE.format(svg=svg), wait_until="load")
                    return page.screenshot(
                        type="png",
                        omit_background=True,
                        clip={"x": 0, "y": 0, "width": width, "height": height},
                    )
                finally:
                    browser.close()
        except PlaywrightError as e:
            raise RasterizationError(f"Headless browser failed to draw diagram: {e}") from e

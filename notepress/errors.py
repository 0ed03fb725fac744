"""Exceptions raised while rendering notes."""


class NotepressError(Exception):
    """Base class for all notepress errors."""


class NoteReadError(NotepressError):
    """The note being rendered at the top level could not be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not read note {path}: {reason}")
        self.path = path


class EmbedExpansionError(NotepressError):
    """An embedded note could not be read or rendered."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not expand embedded note {path}: {reason}")
        self.path = path


class AssetLoadError(NotepressError):
    """A stylesheet or other asset could not be loaded."""


class RasterizationError(NotepressError):
    """A diagram could not be converted to a raster image."""

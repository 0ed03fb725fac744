"""File domain models."""

from posixpath import basename, dirname, splitext

from pydantic import BaseModel


class VaultFile(BaseModel):
    """A file known to the vault index.

    Attributes:
        path: Path relative to the vault root, using forward slashes.
    """

    path: str

    @property
    def name(self) -> str:
        return basename(self.path)

    @property
    def basename(self) -> str:
        return splitext(self.name)[0]

    @property
    def extension(self) -> str:
        return splitext(self.name)[1]

    @property
    def folder(self) -> str:
        return dirname(self.path)


class ResolvedFile(BaseModel):
    """The file a note reference points to.

    Attributes:
        absolute_path: Absolute filesystem path of the file.
        vault_path: Path of the file relative to the vault root.
        basename: File name without its extension.
        name: File name as displayed to the user.
    """

    absolute_path: str
    vault_path: str
    basename: str
    name: str


class NotFound(BaseModel):
    """A reference that could not be matched to any file."""

    reference: str
    source_path: str


Resolution = ResolvedFile | NotFound

from typing import List, Optional, Protocol

from notepress.domain.files import VaultFile


class VaultIndex(Protocol):
    """Protocol for the knowledge base holding the notes and their attachments."""

    def resolve_by_link_convention(self, name: str, source_path: str) -> Optional[VaultFile]:
        """Resolve a link the way the knowledge base itself does, relative to a source note."""
        ...

    def list_all_files(self) -> List[VaultFile]:
        """All files in the vault, sorted by vault-relative path."""
        ...

    def read_file(self, path: str) -> str:
        """Read the text of the file at a vault-relative path."""
        ...

    def absolute_path(self, path: str) -> str:
        """Absolute filesystem path for a vault-relative path."""
        ...

    def vault_path(self, absolute_path: str) -> Optional[str]:
        """Vault-relative path for an absolute path, or None if it lies outside the vault."""
        ...

import posixpath
from pathlib import Path
from typing import List, Optional

from loguru import logger

from notepress.domain.files import VaultFile
from notepress.vault.base import VaultIndex


class LocalVault(VaultIndex):
    """Vault backed by a directory on the local filesystem."""

    def __init__(self, root: str | Path) -> None:
        """Initialize LocalVault.

        Args:
            root: Directory holding the notes. Entries whose name starts with a dot
                  (such as the ``.obsidian`` settings folder) are not part of the index.
        """
        self.root = Path(root).resolve()

    def list_all_files(self) -> List[VaultFile]:
        files = []
        for path in self.root.rglob("*"):
            relative = path.relative_to(self.root)
            if any(part.startswith(".") for part in relative.parts):
                continue
            if path.is_file():
                files.append(VaultFile(path=relative.as_posix()))
        return sorted(files, key=lambda f: f.path)

    def read_file(self, path: str) -> str:
        return (self.root / path).read_text(encoding="utf-8")

    def absolute_path(self, path: str) -> str:
        return str(self.root / path)

    def vault_path(self, absolute_path: str) -> Optional[str]:
        try:
            relative = Path(absolute_path).resolve().relative_to(self.root)
        except ValueError:
            return None
        return relative.as_posix()

    def resolve_by_link_convention(self, name: str, source_path: str) -> Optional[VaultFile]:
        """Resolve a link path like the vault application does.

        Priority:
        1. Absolute path inside the vault
        2. Path-qualified link relative to the source note's folder, then the vault root
        3. Files whose name (or trailing path) matches, preferring the source note's
           folder, then the shortest path

        Args:
            name: Link path as written, without anchor, e.g. ``Note`` or ``sub/Note.md``
            source_path: Vault-relative path of the note containing the link

        Returns:
            The linked file if found, None otherwise
        """
        link = name.strip().replace("\\", "/")
        if not link:
            return None

        if Path(link).is_absolute():
            relative = self.vault_path(link)
            return self._existing(relative) if relative is not None else None

        candidates = self._candidate_names(link)
        source_folder = posixpath.dirname(source_path)

        if "/" in link.strip("/"):
            for base in (source_folder, ""):
                for candidate in candidates:
                    joined = posixpath.normpath(posixpath.join(base, candidate.lstrip("/")))
                    file = self._existing(joined)
                    if file:
                        return file
            matches = [
                f
                for f in self.list_all_files()
                if any(f"/{f.path}".endswith(f"/{candidate.lstrip('/')}") for candidate in candidates)
            ]
        else:
            matches = [f for f in self.list_all_files() if f.name in candidates]

        if not matches:
            logger.debug(f"No file matches link {link} by vault convention")
            return None

        return min(matches, key=lambda f: (f.folder != source_folder, f.path.count("/"), f.path))

    @staticmethod
    def _candidate_names(link: str) -> list[str]:
        with_md = f"{link}.md"
        if posixpath.splitext(link)[1]:
            return [link, with_md]
        return [with_md, link]

    def _existing(self, relative: str) -> Optional[VaultFile]:
        if relative.startswith("..") or relative in ("", "."):
            return None
        if (self.root / relative).is_file():
            return VaultFile(path=relative)
        return None

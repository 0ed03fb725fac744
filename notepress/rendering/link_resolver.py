"""Resolution of note references to files in the vault."""

from typing import Callable, Optional

from loguru import logger

from notepress.domain.files import NotFound, ResolvedFile, Resolution, VaultFile
from notepress.vault.base import VaultIndex

FileMatcher = Callable[[VaultFile, str, str], bool]


class LinkResolver:
    """Resolve note and asset references with clear precedence rules."""

    def __init__(self, vault: VaultIndex):
        self.vault = vault

    def resolve(self, reference: str, source_path: str) -> Resolution:
        """
        Resolve a reference as written in a note to the file it points to.

        Priority:
        1. The vault's own link convention, relative to the source note
        2. Vault-wide scan: exact file name
        3. Vault-wide scan: exact base name (without extension)
        4. Vault-wide scan: path ending with the full reference
        5. Vault-wide scan: case-insensitive file name

        Each scan goes over the whole vault in sorted path order before the next
        one is tried, so the first match of the highest-priority rule wins.

        Args:
            reference: Note or asset reference, without any ``#anchor``
            source_path: Vault-relative path of the note containing the reference

        Returns:
            ResolvedFile if a file was found, NotFound otherwise
        """
        clean_reference = reference.strip()
        if not clean_reference:
            return NotFound(reference=reference, source_path=source_path)

        logger.debug(f"Attempting to resolve reference: {clean_reference} (source: {source_path})")

        file = self.vault.resolve_by_link_convention(clean_reference, source_path)
        if file is not None:
            logger.debug(f"Resolved by vault link convention: {clean_reference} -> {file.path}")
            return self._resolved(file)

        logger.debug(f"Direct resolution failed for {clean_reference}, searching vault...")
        file = self._search_vault(clean_reference)
        if file is not None:
            logger.info(f"Found {clean_reference} via vault search -> {file.path}")
            return self._resolved(file)

        logger.warning(f"Could not resolve reference: {clean_reference} (source: {source_path})")
        return NotFound(reference=reference, source_path=source_path)

    def _search_vault(self, reference: str) -> Optional[VaultFile]:
        files = sorted(self.vault.list_all_files(), key=lambda f: f.path)
        normalized = reference.replace("\\", "/")
        target_name = normalized.rsplit("/", 1)[-1]

        search_strategies: list[tuple[str, FileMatcher]] = [
            ("exact file name", self._matches_name),
            ("exact base name", self._matches_basename),
            ("path suffix", self._matches_path_suffix),
            ("case-insensitive file name", self._matches_name_ignoring_case),
        ]

        for strategy_name, matcher in search_strategies:
            logger.debug(f"Trying {strategy_name}: {reference}")
            for file in files:
                if matcher(file, normalized, target_name):
                    return file
        return None

    @staticmethod
    def _matches_name(file: VaultFile, reference: str, target_name: str) -> bool:
        return file.name == target_name

    @staticmethod
    def _matches_basename(file: VaultFile, reference: str, target_name: str) -> bool:
        return file.basename == target_name

    @staticmethod
    def _matches_path_suffix(file: VaultFile, reference: str, target_name: str) -> bool:
        return file.path.endswith(reference)

    @staticmethod
    def _matches_name_ignoring_case(file: VaultFile, reference: str, target_name: str) -> bool:
        return file.name.lower() == target_name.lower()

    def _resolved(self, file: VaultFile) -> ResolvedFile:
        return ResolvedFile(
            absolute_path=self.vault.absolute_path(file.path),
            vault_path=file.path,
            basename=file.basename,
            name=file.name,
        )


def split_anchor(reference: str) -> tuple[str, str]:
    """Split ``note#heading`` into ``("note", "#heading")``; the anchor is empty if absent."""
    index = reference.find("#")
    if index == -1:
        return reference, ""
    return reference[:index], reference[index:]

from notepress.vault.base import VaultIndex
from notepress.vault.local import LocalVault

__all__ = ["LocalVault", "VaultIndex"]

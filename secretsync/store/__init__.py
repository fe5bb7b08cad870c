"""Secret store backends"""

from secretsync.store.base import SecretStore

__all__ = ["SecretStore"]

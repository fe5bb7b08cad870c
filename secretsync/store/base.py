"""Secret store interface"""

from abc import ABC, abstractmethod

from secretsync.models.secret import Secret


class SecretStore(ABC):
    """Abstract backing store for Secrets, addressed by namespaced name

    Implementations raise NotFoundError from get() when the Secret does not
    exist. Any other exception is treated by the reconciler as a store
    failure.
    """

    @abstractmethod
    async def get(self, name: str, namespace: str) -> Secret:
        """Fetch the persisted Secret

        Raises:
            NotFoundError: If no Secret with this name exists in namespace
        """
        pass

    @abstractmethod
    async def create(self, secret: Secret) -> None:
        """Create a new Secret"""
        pass

    @abstractmethod
    async def update(self, secret: Secret) -> None:
        """Overwrite annotations, labels and data of an existing Secret"""
        pass

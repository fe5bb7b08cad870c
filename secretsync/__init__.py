"""secretsync - 1Password item to Kubernetes Secret synchronization"""

__version__ = "0.1.0"

from secretsync.engine.reconciler import ReconcileAction, SecretReconciler
from secretsync.engine.synthesizer import SecretDataSynthesizer
from secretsync.models.item import Item, ItemField, ItemFile, ItemSection
from secretsync.models.secret import ImagePullSecretConfig, OwnerReference, Secret, SecretTemplate

__all__ = [
    "ReconcileAction",
    "SecretReconciler",
    "SecretDataSynthesizer",
    "Item",
    "ItemField",
    "ItemFile",
    "ItemSection",
    "ImagePullSecretConfig",
    "OwnerReference",
    "Secret",
    "SecretTemplate",
]

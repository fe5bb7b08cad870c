"""Reconcile a 1Password item into a Kubernetes Secret

Each reconcile is one sequence: synthesize data -> fetch the persisted
Secret -> compare -> write at most once. There is no locking and no
resourceVersion compare-and-swap, so two concurrent reconciles of the same
Secret race and the last writer wins. Callers serialize per Secret name.
"""

import asyncio
import logging
from enum import StrEnum
from typing import Dict, Mapping, Optional

from secretsync.config import SecretSpec
from secretsync.engine.annotations import (
    ITEM_PATH_ANNOTATION,
    RESTART_DEPLOYMENTS_ANNOTATION,
    VERSION_ANNOTATION,
)
from secretsync.engine.synthesizer import SecretDataSynthesizer
from secretsync.exceptions import (
    ImmutableTypeError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from secretsync.models.item import Item
from secretsync.models.secret import (
    ImagePullSecretConfig,
    OwnerReference,
    Secret,
    SecretTemplate,
    normalize_secret_type,
)
from secretsync.store.base import SecretStore
from secretsync.utils.naming import format_secret_name
from secretsync.utils.parsing import string_to_bool


class ReconcileAction(StrEnum):
    """What a reconcile did to the store"""
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


def same_entries(current: Optional[Mapping[str, str]], wanted: Optional[Mapping[str, str]]) -> bool:
    """Order-independent key/value equality; None counts as empty"""
    current = current or {}
    wanted = wanted or {}
    if len(current) != len(wanted):
        return False
    return all(key in current and current[key] == value for key, value in wanted.items())


def build_secret(
    name: str,
    namespace: str,
    annotations: Dict[str, str],
    labels: Dict[str, str],
    secret_type: str,
    data: Dict[str, bytes],
    owner_reference: Optional[OwnerReference] = None,
) -> Secret:
    """Assemble the desired Secret; the name is normalized to a DNS-1123 subdomain"""
    return Secret(
        name=format_secret_name(name),
        namespace=namespace,
        annotations=annotations,
        labels=labels,
        owner_references=[owner_reference] if owner_reference is not None else [],
        data=data,
        type=secret_type,
    )


class SecretReconciler:
    """Creates or updates the Secret backing a 1Password item

    State transitions against the store:
    - absent -> create
    - present, type changed -> ImmutableTypeError, no write
    - present, annotations or labels differ -> full overwrite of
      annotations, labels and data
    - present, annotations and labels equal -> no write
    """

    def __init__(
        self,
        store: SecretStore,
        synthesizer: Optional[SecretDataSynthesizer] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize reconciler

        Args:
            store: Backing Secret store
            synthesizer: Data synthesizer (default: shares this reconciler's logger)
            logger: Logger (default: module logger)
        """
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.synthesizer = synthesizer or SecretDataSynthesizer(logger=self.logger)

    def build_annotations(
        self,
        item: Item,
        secret_name: str,
        annotations: Optional[Dict[str, str]],
        auto_restart: str,
    ) -> Dict[str, str]:
        """Caller annotations plus item version, item path and auto-restart

        Raises:
            ValidationError: If auto_restart is set but not a boolean string
        """
        result = dict(annotations or {})
        result[VERSION_ANNOTATION] = str(item.version)
        result[ITEM_PATH_ANNOTATION] = item.path

        if auto_restart:
            try:
                string_to_bool(auto_restart)
            except ValueError as e:
                raise ValidationError(
                    f"Error parsing {RESTART_DEPLOYMENTS_ANNOTATION} annotation on Secret {secret_name}. "
                    f"Must be true or false",
                    field=RESTART_DEPLOYMENTS_ANNOTATION,
                ) from e
            result[RESTART_DEPLOYMENTS_ANNOTATION] = auto_restart

        return result

    async def reconcile(
        self,
        secret_name: str,
        namespace: str,
        item: Item,
        *,
        auto_restart: str = "",
        labels: Optional[Dict[str, str]] = None,
        annotations: Optional[Dict[str, str]] = None,
        secret_type: str = "",
        owner_reference: Optional[OwnerReference] = None,
        template: Optional[SecretTemplate] = None,
        image_pull_secret: Optional[ImagePullSecretConfig] = None,
        timeout: Optional[float] = None,
    ) -> ReconcileAction:
        """Create, update or leave alone the Secret for an item

        Args:
            secret_name: Requested Secret name (normalized before use)
            namespace: Target namespace
            item: Source item
            auto_restart: Optional boolean string for the auto-restart annotation
            labels: Secret labels
            annotations: Extra Secret annotations
            secret_type: Secret type ("" is equivalent to Opaque)
            owner_reference: Optional owner of the Secret
            template: Optional template set for the data
            image_pull_secret: Optional registry credential mapping
            timeout: Optional limit in seconds for the whole store sequence

        Returns:
            ReconcileAction describing the write performed

        Raises:
            ValidationError: If auto_restart is malformed (before any store call)
            ImmutableTypeError: If the persisted Secret has a different type
            StoreError: If fetching, creating or updating fails
            asyncio.TimeoutError: If timeout elapses
        """
        secret_annotations = self.build_annotations(item, secret_name, annotations, auto_restart)
        secret = build_secret(
            secret_name,
            namespace,
            secret_annotations,
            dict(labels or {}),
            secret_type,
            self.synthesizer.build(item, template, image_pull_secret),
            owner_reference,
        )

        if timeout is None:
            return await self._apply(secret)
        return await asyncio.wait_for(self._apply(secret), timeout=timeout)

    async def reconcile_spec(
        self,
        item: Item,
        spec: SecretSpec,
        owner_reference: Optional[OwnerReference] = None,
        timeout: Optional[float] = None,
    ) -> ReconcileAction:
        """Reconcile using a loaded SecretSpec"""
        return await self.reconcile(
            spec.name,
            spec.namespace,
            item,
            auto_restart=spec.auto_restart,
            labels=spec.labels,
            annotations=spec.annotations,
            secret_type=spec.type,
            owner_reference=owner_reference,
            template=spec.template,
            image_pull_secret=spec.image_pull_secret,
            timeout=timeout,
        )

    async def _apply(self, secret: Secret) -> ReconcileAction:
        try:
            current = await self.store.get(secret.name, secret.namespace)
        except NotFoundError:
            self.logger.info(f"Creating Secret {secret.name} at namespace '{secret.namespace}'")
            await self._write("create", self.store.create, secret)
            return ReconcileAction.CREATED
        except Exception as e:
            raise StoreError("get", secret.name, secret.namespace, str(e)) from e

        current_type = normalize_secret_type(current.type)
        wanted_type = normalize_secret_type(secret.type)
        if current_type != wanted_type:
            raise ImmutableTypeError(secret.name, current_type, wanted_type)

        if same_entries(current.annotations, secret.annotations) and same_entries(current.labels, secret.labels):
            self.logger.info(
                f"Secret with name {secret.name} and version "
                f"{secret.annotations[VERSION_ANNOTATION]} already exists"
            )
            return ReconcileAction.UNCHANGED

        self.logger.info(f"Updating Secret {secret.name} at namespace '{secret.namespace}'")
        updated = current.model_copy(update={
            "annotations": secret.annotations,
            "labels": secret.labels,
            "data": secret.data,
        })
        await self._write("update", self.store.update, updated)
        return ReconcileAction.UPDATED

    async def _write(self, operation: str, write, secret: Secret) -> None:
        try:
            await write(secret)
        except Exception as e:
            raise StoreError(operation, secret.name, secret.namespace, str(e)) from e

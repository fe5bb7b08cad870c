"""SecretStore backed by the Kubernetes CoreV1 API"""

import asyncio
import base64
from typing import Dict, Optional

from kubernetes import client
from kubernetes.client.rest import ApiException

from secretsync.exceptions import NotFoundError
from secretsync.models.secret import OwnerReference, Secret
from secretsync.store.base import SecretStore


def _encode_data(data: Dict[str, bytes]) -> Dict[str, str]:
    return {k: base64.b64encode(v).decode("ascii") for k, v in data.items()}


def to_v1_secret(secret: Secret) -> client.V1Secret:
    """Convert a Secret into a V1Secret body (data base64-encoded)"""
    owner_references = [
        client.V1OwnerReference(
            api_version=ref.api_version,
            kind=ref.kind,
            name=ref.name,
            uid=ref.uid,
            controller=ref.controller,
            block_owner_deletion=ref.block_owner_deletion,
        )
        for ref in secret.owner_references
    ] or None

    return client.V1Secret(
        api_version="v1",
        kind="Secret",
        metadata=client.V1ObjectMeta(
            name=secret.name,
            namespace=secret.namespace,
            annotations=secret.annotations,
            labels=secret.labels,
            owner_references=owner_references,
        ),
        type=secret.type or None,
        data=_encode_data(secret.data),
    )


def apply_to_v1_secret(body: client.V1Secret, secret: Secret) -> client.V1Secret:
    """Set annotations, labels and data of a fetched V1Secret from secret

    Everything else on body is left as stored, except resourceVersion which
    is cleared so the replace is unconditional.
    """
    body.metadata.annotations = dict(secret.annotations)
    body.metadata.labels = dict(secret.labels)
    body.metadata.resource_version = None
    body.data = _encode_data(secret.data)
    return body


def from_v1_secret(body: client.V1Secret) -> Secret:
    """Convert a V1Secret read from the API into a Secret"""
    metadata = body.metadata
    return Secret(
        name=metadata.name,
        namespace=metadata.namespace,
        annotations=metadata.annotations or {},
        labels=metadata.labels or {},
        owner_references=[
            OwnerReference(
                api_version=ref.api_version,
                kind=ref.kind,
                name=ref.name,
                uid=ref.uid,
                controller=ref.controller,
                block_owner_deletion=ref.block_owner_deletion,
            )
            for ref in metadata.owner_references or []
        ],
        data={k: base64.b64decode(v) for k, v in (body.data or {}).items()},
        type=body.type or "",
    )


class KubernetesSecretStore(SecretStore):
    """SecretStore over a configured CoreV1Api

    The client is blocking, so each call runs in a worker thread. Client
    construction and authentication are left to the caller.
    """

    def __init__(self, api: client.CoreV1Api, request_timeout: Optional[float] = None):
        """Initialize store

        Args:
            api: Authenticated CoreV1Api
            request_timeout: Optional per-request timeout in seconds
        """
        self.api = api
        self.request_timeout = request_timeout

    async def get(self, name: str, namespace: str) -> Secret:
        try:
            body = await asyncio.to_thread(
                self.api.read_namespaced_secret, name, namespace,
                _request_timeout=self.request_timeout,
            )
        except ApiException as e:
            if e.status == 404:
                raise NotFoundError(name, namespace) from e
            raise
        return from_v1_secret(body)

    async def create(self, secret: Secret) -> None:
        await asyncio.to_thread(
            self.api.create_namespaced_secret, secret.namespace, to_v1_secret(secret),
            _request_timeout=self.request_timeout,
        )

    async def update(self, secret: Secret) -> None:
        """Overwrite annotations, labels and data of the stored Secret

        The stored object is re-read so finalizers, immutability and any
        other metadata survive the replace. resourceVersion is not sent.
        """
        current = await asyncio.to_thread(
            self.api.read_namespaced_secret, secret.name, secret.namespace,
            _request_timeout=self.request_timeout,
        )
        await asyncio.to_thread(
            self.api.replace_namespaced_secret, secret.name, secret.namespace,
            apply_to_v1_secret(current, secret),
            _request_timeout=self.request_timeout,
        )

"""Kubernetes Secret model and secret shaping configuration"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

SECRET_TYPE_OPAQUE = "Opaque"
SECRET_TYPE_DOCKER_CONFIG_JSON = "kubernetes.io/dockerconfigjson"
DOCKER_CONFIG_JSON_KEY = ".dockerconfigjson"


def normalize_secret_type(secret_type: Optional[str]) -> str:
    """Kubernetes treats an empty Secret type as Opaque"""
    return secret_type or SECRET_TYPE_OPAQUE


class SecretTemplate(BaseModel):
    """Ordered mapping of output data key to template string"""

    data: Dict[str, str] = Field(default_factory=dict, description="Data key -> template string")


class ImagePullSecretConfig(BaseModel):
    """Maps the registry credential roles onto item field labels"""
    model_config = ConfigDict(populate_by_name=True)

    registry_field: str = Field(..., alias="registryField")
    username_field: str = Field(..., alias="usernameField")
    password_field: str = Field(..., alias="passwordField")
    email_field: str = Field("", alias="emailField")


class OwnerReference(BaseModel):
    """Owner of a Secret, used for garbage collection"""
    model_config = ConfigDict(populate_by_name=True)

    api_version: str = Field(..., alias="apiVersion")
    kind: str
    name: str
    uid: str
    controller: Optional[bool] = None
    block_owner_deletion: Optional[bool] = Field(None, alias="blockOwnerDeletion")


class Secret(BaseModel):
    """Kubernetes Secret with decoded (raw bytes) data"""

    name: str
    namespace: str
    annotations: Dict[str, str] = Field(default_factory=dict)
    labels: Dict[str, str] = Field(default_factory=dict)
    owner_references: List[OwnerReference] = Field(default_factory=list)
    data: Dict[str, bytes] = Field(default_factory=dict)
    type: str = ""

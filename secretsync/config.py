"""Secret sync configuration models and YAML loading."""

import re
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from secretsync.models.secret import ImagePullSecretConfig, SecretTemplate
from secretsync.utils.parsing import string_to_bool

ITEM_PATH_RE = re.compile(r"^vaults/([^/]+)/items/([^/]+)$")


def parse_item_path(path: str) -> Tuple[str, str]:
    """Split an item path into vault and item identifiers.

    Args:
        path: Path in the form vaults/<vault>/items/<item>

    Returns:
        (vault, item) tuple

    Raises:
        ValueError: If path is not in the expected form
    """
    match = ITEM_PATH_RE.match(path)
    if not match:
        raise ValueError(f"Invalid item path '{path}', expected vaults/<vault>/items/<item>")
    return match.group(1), match.group(2)


class SecretSpec(BaseModel):
    """Desired Secret for one 1Password item.

    Mirrors the fields of a OnePasswordItem resource so a spec can be
    loaded from YAML using either snake_case or camelCase keys.
    """
    model_config = ConfigDict(populate_by_name=True)

    item_path: str = Field(..., alias="itemPath", description="vaults/<vault>/items/<item>")
    name: str = Field(..., min_length=1, description="Secret name (normalized on reconcile)")
    namespace: str = Field("default", min_length=1)
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)
    type: str = Field("", description="Secret type; empty means Opaque")
    auto_restart: str = Field("", alias="autoRestart", description="Boolean string or empty")
    template: Optional[SecretTemplate] = None
    image_pull_secret: Optional[ImagePullSecretConfig] = Field(None, alias="imagePullSecret")

    @field_validator("item_path")
    @classmethod
    def validate_item_path(cls, v: str) -> str:
        """Validate item path format."""
        parse_item_path(v)
        return v

    @field_validator("auto_restart")
    @classmethod
    def validate_auto_restart(cls, v: str) -> str:
        """Validate auto restart is empty or a boolean string."""
        if v:
            string_to_bool(v)
        return v


def load_secret_spec(spec_path: Path) -> SecretSpec:
    """Load and validate a secret spec YAML file.

    Args:
        spec_path: Path to spec YAML file

    Returns:
        Validated SecretSpec

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file is not valid YAML
        pydantic.ValidationError: If the content doesn't match SecretSpec
    """
    if not spec_path.exists():
        raise FileNotFoundError(f"Secret spec not found: {spec_path}")

    with open(spec_path) as f:
        data = yaml.safe_load(f) or {}
    return SecretSpec.model_validate(data)

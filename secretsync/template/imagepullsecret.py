"""Registry credential (.dockerconfigjson) document builder"""

import base64
import json
from typing import Dict

from secretsync.exceptions import ValidationError


def build_docker_config_json(registry: str, username: str, password: str, email: str = "") -> bytes:
    """Generate the .dockerconfigjson document for an image pull secret

    The auth entry is base64("username:password"). The email key is left
    out entirely when email is empty.

    Args:
        registry: Registry host, e.g. "ghcr.io"
        username: Registry username
        password: Registry password or token
        email: Optional account email

    Returns:
        Compact JSON document as bytes

    Raises:
        ValidationError: If registry, username or password is empty
    """
    for field, value in (("registry", registry), ("username", username), ("password", password)):
        if not value:
            raise ValidationError(
                f"{field} cannot be empty",
                field=field,
                help_text=f"Point the image pull secret {field} field at a non-empty item field",
            )

    auth = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")

    entry: Dict[str, str] = {"username": username, "password": password}
    if email:
        entry["email"] = email
    entry["auth"] = auth

    config = {"auths": {registry: entry}}
    return json.dumps(config, separators=(",", ":")).encode("utf-8")

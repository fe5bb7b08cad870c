"""Unit tests for .dockerconfigjson generation"""

import base64
import json

import pytest

from secretsync.exceptions import ValidationError
from secretsync.template.imagepullsecret import build_docker_config_json


class TestBuildDockerConfigJSON:
    """Test registry credential document generation"""

    def test_basic_docker_config(self):
        """Test document without email"""
        result = build_docker_config_json("docker.io", "testuser", "testpass")

        config = json.loads(result)
        assert list(config["auths"]) == ["docker.io"]
        entry = config["auths"]["docker.io"]
        assert entry["username"] == "testuser"
        assert entry["password"] == "testpass"
        assert "email" not in entry
        assert entry["auth"] == base64.b64encode(b"testuser:testpass").decode()

    def test_with_email(self):
        """Test email is included when set"""
        result = build_docker_config_json("ghcr.io", "ghuser", "ghpass", "user@example.com")

        entry = json.loads(result)["auths"]["ghcr.io"]
        assert entry["email"] == "user@example.com"

    def test_short_credentials(self):
        """Test auth is base64 of username:password"""
        result = build_docker_config_json("docker.io", "u", "p", "")

        entry = json.loads(result)["auths"]["docker.io"]
        assert base64.b64decode(entry["auth"]) == b"u:p"
        assert "email" not in entry

    def test_compact_json_key_order(self):
        """Test the exact serialized document"""
        result = build_docker_config_json("r.io", "u", "p", "e@x.io")

        assert result == (
            b'{"auths":{"r.io":{"username":"u","password":"p","email":"e@x.io","auth":"dTpw"}}}'
        )

    @pytest.mark.parametrize("registry, username, password, missing", [
        ("", "user", "pass", "registry"),
        ("docker.io", "", "pass", "username"),
        ("docker.io", "user", "", "password"),
    ])
    def test_missing_required_field(self, registry, username, password, missing):
        """Test each required field raises a distinct validation error"""
        with pytest.raises(ValidationError) as exc_info:
            build_docker_config_json(registry, username, password, "")

        assert exc_info.value.field == missing
        assert f"{missing} cannot be empty" in str(exc_info.value)

    def test_registry_checked_first(self):
        """Test the first missing field is reported"""
        with pytest.raises(ValidationError) as exc_info:
            build_docker_config_json("", "", "", "")

        assert exc_info.value.field == "registry"

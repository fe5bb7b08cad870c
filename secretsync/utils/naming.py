"""Kubernetes identifier normalization for Secret names and data keys

Secret names must be DNS-1123 subdomains and data keys must be valid
ConfigMap keys:
https://kubernetes.io/docs/concepts/configuration/secret/#overview-of-secrets
"""

import re

DNS1123_SUBDOMAIN_MAX_LENGTH = 253

_DNS1123_LABEL = r"[a-z0-9]([-a-z0-9]*[a-z0-9])?"
_DNS1123_SUBDOMAIN_RE = re.compile(rf"{_DNS1123_LABEL}(\.{_DNS1123_LABEL})*")
_CONFIG_MAP_KEY_RE = re.compile(r"[-._a-zA-Z0-9]+")

_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9.-]+")
_INVALID_KEY_CHARS = re.compile(r"[^a-zA-Z0-9._-]+")
_INVALID_KEY_EDGES = re.compile(r"^[^a-zA-Z0-9._-]+|[^a-zA-Z0-9._-]+\Z")


def is_dns1123_subdomain(value: str) -> bool:
    """Check whether value is a valid Kubernetes object name"""
    return (
        len(value) <= DNS1123_SUBDOMAIN_MAX_LENGTH
        and _DNS1123_SUBDOMAIN_RE.fullmatch(value) is not None
    )


def is_config_map_key(value: str) -> bool:
    """Check whether value is a valid Secret/ConfigMap data key"""
    if len(value) > DNS1123_SUBDOMAIN_MAX_LENGTH:
        return False
    if _CONFIG_MAP_KEY_RE.fullmatch(value) is None:
        return False
    return value not in (".", "..") and not value.startswith("..")


def format_secret_name(value: str) -> str:
    """Rewrite value to be a valid Secret name

    Valid names are returned untouched. Otherwise the value is lowercased,
    every run of disallowed characters collapses to a single '-', the result
    is truncated and leading/trailing '-' and '.' are trimmed.

    Args:
        value: Arbitrary text, usually a user supplied name

    Returns:
        Name made of lowercase alphanumerics, '-' and '.'
    """
    if is_dns1123_subdomain(value):
        return value

    result = _INVALID_NAME_CHARS.sub("-", value.lower())
    result = result[:DNS1123_SUBDOMAIN_MAX_LENGTH]

    # first and last character must be alphanumeric
    return result.strip("-.")


def format_secret_data_key(value: str) -> str:
    """Rewrite value to be a valid Secret data key

    Unlike format_secret_name this never lowercases. Disallowed characters at
    either end are deleted outright, interior runs become a single '-', then
    the result is truncated.

    Args:
        value: Arbitrary text, usually an item field label

    Returns:
        Key made of alphanumerics, '-', '_' and '.'
    """
    if is_config_map_key(value):
        return value

    result = _INVALID_KEY_EDGES.sub("", value)
    result = _INVALID_KEY_CHARS.sub("-", result)
    return result[:DNS1123_SUBDOMAIN_MAX_LENGTH]

"""Pytest configuration, Hypothesis settings and shared fixtures"""
import pytest
from hypothesis import settings, Verbosity

from secretsync.models.item import Item, ItemField, ItemSection

# Configure Hypothesis for property-based testing
settings.register_profile("default", max_examples=100, verbosity=Verbosity.normal)
settings.register_profile("ci", max_examples=1000, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=10, verbosity=Verbosity.verbose)

# Load default profile
settings.load_profile("default")


@pytest.fixture
def credentials_item():
    """Item with one declared section and one unsectioned field"""
    return Item(
        id="test-item-id",
        vault_id="test-vault-id",
        version=3,
        fields=[
            ItemField(id="field-1", label="username", value="testuser",
                      section_id="section-1", field_type="STRING"),
            ItemField(id="field-2", label="password", value="testpass",
                      section_id="section-1", field_type="CONCEALED"),
            ItemField(id="field-3", label="api_key", value="key123", field_type="CONCEALED"),
        ],
        sections=[ItemSection(id="section-1", title="Credentials")],
    )

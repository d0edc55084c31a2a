"""Shared fixtures for message builder tests."""

from pathlib import Path

import pytest

from msgbuild.builder import PayloadTemplateMessageBuilder
from msgbuild.resources.loader import ResourceLoader
from msgbuild.variables.store import VariableStore


RESOURCES_DIR = Path(__file__).parent / "resources"


@pytest.fixture
def resource_loader():
    """Loader whose classpath is the bundled test resources."""
    return ResourceLoader(search_paths=[RESOURCES_DIR], base_dir=RESOURCES_DIR)


@pytest.fixture
def variables():
    return VariableStore()


@pytest.fixture
def message_builder(resource_loader):
    """Builder preconfigured with a literal payload."""
    builder = PayloadTemplateMessageBuilder(loader=resource_loader)
    builder.set_payload_data("TestMessagePayload")
    return builder

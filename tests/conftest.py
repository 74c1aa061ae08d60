"""Shared test fixtures for goterra-cli tests."""

import sys
from pathlib import Path
from typing import Any

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from goterra_cli.client import GoterraClient

# Constants for use in tests - pytest makes conftest.py fixtures available,
# but these constants need to be imported directly from tests
MOCK_GOTERRA_URL = "https://goterra.example.com"
MOCK_TOKEN = "test-token"


@pytest.fixture
def mock_client():
    """GoterraClient pointing at mock server, already logged in."""
    return GoterraClient(MOCK_GOTERRA_URL, "test-apikey", token=MOCK_TOKEN)


@pytest.fixture
def sample_namespace() -> dict[str, Any]:
    """Sample namespace API payload."""
    return {
        "id": "ns1",
        "name": "genouest",
        "owners": ["alice"],
        "members": ["bob"],
        "freeze": False,
    }


@pytest.fixture
def sample_app_inputs() -> dict[str, Any]:
    """Application inputs payload, as returned by /deploy/ns/{ns}/app/{id}/inputs."""
    return {
        "template": {"image": "VM image"},
        "recipes": {"ssh_key": "SSH public key"},
        "endpoints": {
            "openstack": {"flavor": "Instance flavor"},
            "aws": {"region": "AWS region"},
        },
        "defaults": {"image": ["debian-10"]},
    }


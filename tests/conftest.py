"""
Root conftest.py — sys.path, env vars, shared fixtures.

Sets up the test environment so all production code can be imported
without a storage account or a reachable RDP API.
"""

import os
import sys
import uuid

import pytest

# Add project root to sys.path so 'core', 'config', 'services', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from tests.factories.model_factories import TEST_CONNECTION_STRING  # noqa: E402


@pytest.fixture(autouse=True, scope="session")
def set_minimal_env_vars():
    """
    Set the required environment variables.

    Configuration is validated on every invocation, so every test that
    reaches load_config() needs a complete environment. Nothing here points
    at a real service.
    """
    defaults = {
        "ENV_STORAGE_CONNECTION_STRING": TEST_CONNECTION_STRING,
        "ENV_RDP_HOST": "rdp-api.test",
        "ENV_RDP_PORT": "8085",
        "ENV_CLIENT_ID": "testClient",
        "ENV_DEFAULT_USER_ID": "system",
        "ENV_DEFAULT_USER_ROLES": "admin",
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


@pytest.fixture
def invocation_id():
    """Random Functions invocation id."""
    return str(uuid.uuid4())

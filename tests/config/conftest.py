"""
Config test fixtures — clean environment via monkeypatch.
"""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "ENV_STORAGE_CONNECTION_STRING", "ENV_RDP_HOST", "ENV_RDP_PORT",
        "ENV_RDP_VERSION", "ENV_CLIENT_ID", "ENV_DEFAULT_USER_ID",
        "ENV_DEFAULT_USER_ROLES", "ENV_SUBJECT_FILTER_POLICY",
        "ENV_TASK_ID_LOOKUP", "DEBUG_MODE",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def full_env(clean_env):
    """Clean environment with every required variable set."""
    clean_env.setenv(
        "ENV_STORAGE_CONNECTION_STRING",
        "DefaultEndpointsProtocol=https;AccountName=cfgtest;AccountKey=dGVzdA==;EndpointSuffix=core.windows.net"
    )
    clean_env.setenv("ENV_RDP_HOST", "rdp.example.internal")
    clean_env.setenv("ENV_RDP_PORT", "9090")
    clean_env.setenv("ENV_CLIENT_ID", "cfgClient")
    clean_env.setenv("ENV_DEFAULT_USER_ID", "cfgUser")
    clean_env.setenv("ENV_DEFAULT_USER_ROLES", "cfgRole")
    return clean_env

# ============================================================================
# CONFIG PACKAGE INIT
# ============================================================================
# PURPOSE: Configuration package exports
# EXPORTS: NotifierConfig, SubjectFilterPolicy, TaskIdLookupMode, load_config,
#          load_subject_filter_policy, debug_config
# DEPENDENCIES: pydantic, domain config modules
# ============================================================================

"""
Configuration Package

Structure:
    config/
    ├── __init__.py              # This file - exports
    ├── defaults.py              # Constants and default values
    ├── env_validation.py        # Regex rules for environment variables
    └── notifier_config.py       # NotifierConfig (pydantic)

Usage:
    from config import load_config
    config = load_config()        # Fresh read of the environment
    host = config.rdp_host

    # Debug output
    from config import debug_config
    info = debug_config()  # Connection string masked

No cached singleton: every call re-reads the environment.
"""

from .defaults import RdpDefaults, MetadataDefaults, EventDefaults, AppDefaults
from .notifier_config import (
    NotifierConfig,
    SubjectFilterPolicy,
    TaskIdLookupMode,
    REQUIRED_ENV_VARS,
    load_subject_filter_policy,
)


def load_config() -> NotifierConfig:
    """
    Build configuration from the current environment.

    Raises:
        ConfigurationError: Required variable missing or malformed
    """
    return NotifierConfig.from_environment()


def debug_config() -> dict:
    """
    Get sanitized configuration for debugging (masks sensitive values).

    Returns:
        Dictionary with configuration values, connection string masked
    """
    try:
        return load_config().debug_dict()
    except Exception as e:
        return {'error': f'Configuration validation failed: {e}'}


__all__ = [
    'NotifierConfig',
    'SubjectFilterPolicy',
    'TaskIdLookupMode',
    'REQUIRED_ENV_VARS',
    'load_config',
    'load_subject_filter_policy',
    'debug_config',
    'RdpDefaults',
    'MetadataDefaults',
    'EventDefaults',
    'AppDefaults',
]

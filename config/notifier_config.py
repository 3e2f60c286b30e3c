# ============================================================================
# UPLOAD NOTIFIER CONFIGURATION
# ============================================================================
# STATUS: Configuration - Loaded fresh on every invocation
# PURPOSE: Storage connection, RDP API target, tenant defaults, behaviour switches
# EXPORTS: NotifierConfig, SubjectFilterPolicy, TaskIdLookupMode
# DEPENDENCIES: pydantic, config.env_validation, config.defaults
# ============================================================================
"""
Upload Notifier Configuration.

Every value comes from the environment; nothing is hard-coded. Required
variables are checked by config.env_validation before the model is built, so
a missing ENV_RDP_HOST raises ConfigurationError listing every problem at once
instead of failing on the first attribute access. A malformed optional
variable (DEBUG_MODE=on) is logged as a warning and its default is used.

Environment Variables:
    ENV_STORAGE_CONNECTION_STRING (required)
    ENV_RDP_HOST (required)
    ENV_RDP_PORT (required)
    ENV_CLIENT_ID (required)
    ENV_DEFAULT_USER_ID (required)
    ENV_DEFAULT_USER_ROLES (required)
    ENV_RDP_VERSION (default 8.1)
    ENV_SUBJECT_FILTER_POLICY (default segment_count)
    ENV_TASK_ID_LOOKUP (default literal)
    DEBUG_MODE (default false)
"""

import os
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from exceptions import ConfigurationError
from util_logger import LoggerFactory, ComponentType
from .defaults import AppDefaults, RdpDefaults
from .env_validation import ENV_VAR_RULES, resolve_optional_var, validate_environment

logger = LoggerFactory.create_logger(ComponentType.VALIDATOR, "NotifierConfig")


# Model field -> environment variable, for error reports
_FIELD_ENV_VARS = {
    "storage_connection_string": "ENV_STORAGE_CONNECTION_STRING",
    "rdp_host": "ENV_RDP_HOST",
    "rdp_port": "ENV_RDP_PORT",
    "rdp_version": "ENV_RDP_VERSION",
    "default_client_id": "ENV_CLIENT_ID",
    "default_user_id": "ENV_DEFAULT_USER_ID",
    "default_user_roles": "ENV_DEFAULT_USER_ROLES",
}


class SubjectFilterPolicy(str, Enum):
    """
    How Event Grid subjects are screened before any metadata lookup.

    SEGMENT_COUNT: only blobs directly under the container (7 subject segments)
    RESERVED_MARKER: everything except blobs under a /renditions/ path
    """
    SEGMENT_COUNT = "segment_count"
    RESERVED_MARKER = "reserved_marker"


class TaskIdLookupMode(str, Enum):
    """
    Which metadata key supplies the task id.

    LITERAL: key named TASK_ID_METADATA_PROPERTY, as the deployed handler reads it
    PROPERTY_VALUE: key x-rdp-taskid
    """
    LITERAL = "literal"
    PROPERTY_VALUE = "property_value"


class NotifierConfig(BaseModel):
    """
    Configuration for one upload notification.

    Read-only once built. Built again on the next invocation so app setting
    changes apply without a restart.
    """

    storage_connection_string: str = Field(
        ...,
        repr=False,
        description="Connection string of the media storage account"
    )

    rdp_host: str = Field(..., description="RDP API host")
    rdp_port: int = Field(..., ge=1, le=65535, description="RDP API port")
    rdp_scheme: str = Field(default=RdpDefaults.SCHEME, description="RDP API URL scheme")
    rdp_version: str = Field(
        default=RdpDefaults.API_VERSION,
        description="Value of the x-rdp-version header"
    )

    default_client_id: str = Field(..., description="Fallback for x-rdp-clientid")
    default_user_id: str = Field(..., description="Fallback for x-rdp-userid")
    default_user_roles: str = Field(..., description="Fallback for x-rdp-userroles")

    subject_filter_policy: SubjectFilterPolicy = Field(
        default=SubjectFilterPolicy(AppDefaults.SUBJECT_FILTER_POLICY),
        description="Subject screening policy"
    )
    task_id_lookup: TaskIdLookupMode = Field(
        default=TaskIdLookupMode(AppDefaults.TASK_ID_LOOKUP),
        description="Metadata key used for the task id"
    )

    verbose_logging: bool = Field(
        default=AppDefaults.DEBUG_MODE,
        description="Log events, descriptors and request options. "
                    "Set DEBUG_MODE=true in environment to enable."
    )

    model_config = {"frozen": True}

    @property
    def rdp_base_url(self) -> str:
        """Scheme, host and port of the RDP API."""
        return f"{self.rdp_scheme}://{self.rdp_host}:{self.rdp_port}"

    @classmethod
    def from_environment(cls) -> 'NotifierConfig':
        """
        Load from environment variables.

        Raises:
            ConfigurationError: Required variable missing or unusable
        """
        results = validate_environment(include_warnings=False)
        for warning in (r for r in results if r.severity == "warning"):
            logger.warning(
                f"{warning.var_name}: {warning.message} ({warning.expected_pattern})",
                extra={'custom_dimensions': warning.to_dict()}
            )

        errors = [r for r in results if r.severity == "error"]
        if errors:
            missing = [e.var_name for e in errors if e.message.startswith("Required")]
            invalid = [e.var_name for e in errors if e.var_name not in missing]
            details = "; ".join(f"{e.var_name}: {e.message}" for e in errors)
            raise ConfigurationError(
                f"Invalid environment configuration - {details}",
                missing=missing,
                invalid=invalid
            )

        try:
            return cls._build_from_environment()
        except PydanticValidationError as e:
            invalid = [
                _FIELD_ENV_VARS.get(str(err["loc"][0]), str(err["loc"][0]))
                for err in e.errors() if err.get("loc")
            ]
            raise ConfigurationError(
                f"Invalid environment configuration - {e.error_count()} values out of range: {invalid}",
                invalid=invalid
            ) from e

    @classmethod
    def _build_from_environment(cls) -> 'NotifierConfig':
        return cls(
            storage_connection_string=os.environ["ENV_STORAGE_CONNECTION_STRING"],
            rdp_host=os.environ["ENV_RDP_HOST"],
            rdp_port=int(os.environ["ENV_RDP_PORT"]),
            rdp_version=resolve_optional_var("ENV_RDP_VERSION") or RdpDefaults.API_VERSION,
            default_client_id=os.environ["ENV_CLIENT_ID"],
            default_user_id=os.environ["ENV_DEFAULT_USER_ID"],
            default_user_roles=os.environ["ENV_DEFAULT_USER_ROLES"],
            subject_filter_policy=load_subject_filter_policy(),
            task_id_lookup=TaskIdLookupMode(
                (resolve_optional_var("ENV_TASK_ID_LOOKUP") or AppDefaults.TASK_ID_LOOKUP).lower()
            ),
            verbose_logging=(
                resolve_optional_var("DEBUG_MODE") or str(AppDefaults.DEBUG_MODE)
            ).lower() in ("true", "1", "yes"),
        )

    def debug_dict(self) -> Dict[str, Any]:
        """Configuration for diagnostics with the connection string masked."""
        return {
            'storage_connection_string': '***MASKED***',
            'rdp_base_url': self.rdp_base_url,
            'rdp_version': self.rdp_version,
            'default_client_id': self.default_client_id,
            'default_user_id': self.default_user_id,
            'default_user_roles': self.default_user_roles,
            'subject_filter_policy': self.subject_filter_policy.value,
            'task_id_lookup': self.task_id_lookup.value,
            'verbose_logging': self.verbose_logging,
        }


def load_subject_filter_policy() -> SubjectFilterPolicy:
    """
    Subject policy from ENV_SUBJECT_FILTER_POLICY, default when unset or malformed.

    Never raises, so subjects can be screened before the rest of the
    configuration is validated.
    """
    value = resolve_optional_var("ENV_SUBJECT_FILTER_POLICY") or AppDefaults.SUBJECT_FILTER_POLICY
    return SubjectFilterPolicy(value.lower())


REQUIRED_ENV_VARS = [name for name, rule in ENV_VAR_RULES.items() if rule.required]

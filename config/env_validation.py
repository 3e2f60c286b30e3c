# ============================================================================
# ENVIRONMENT VARIABLE VALIDATION
# ============================================================================
# STATUS: Configuration - Per-invocation validation with regex patterns
# PURPOSE: Validate env vars before any network call, with clear error messages
# ============================================================================
"""
Environment Variable Validation Module.

Validates environment variables using regex patterns to catch configuration
errors EARLY with clear, actionable error messages.

NotifierConfig.from_environment() runs these rules on every invocation and
raises ConfigurationError when any required variable is missing or unusable.
A malformed optional variable is reported as a warning and replaced by its
default (see resolve_optional_var).
The health endpoint exposes the same result through get_validation_summary().

Design Philosophy:
    - FAIL FAST: No metadata fetch or REST call with a broken configuration
    - CLEAR ERRORS: Show exactly what's wrong and how to fix it
    - NO SECRETS: Connection strings are masked in every report
    - ZERO DEPENDENCIES: Only standard library imports

Usage:
    from config.env_validation import validate_environment

    errors = validate_environment()
    for error in errors:
        print(f"{error.var_name}: {error.message}")

Exports:
    ENV_VAR_RULES: Dict of all validation rules
    ValidationError: Dataclass for validation errors
    validate_environment: Main validation function
    validate_single_var: Validate one variable
    resolve_optional_var: Optional value or its default
"""

import os
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Any


# ============================================================================
# VALIDATION ERROR
# ============================================================================

@dataclass
class ValidationError:
    """Result of a failed environment variable validation."""
    var_name: str
    message: str
    current_value: Optional[str]
    expected_pattern: str
    fix_suggestion: str
    severity: str = "error"  # error, warning

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "var_name": self.var_name,
            "message": self.message,
            "current_value": self._mask_sensitive(self.current_value),
            "expected_pattern": self.expected_pattern,
            "fix_suggestion": self.fix_suggestion,
            "severity": self.severity,
        }

    def _mask_sensitive(self, value: Optional[str]) -> Optional[str]:
        """Mask potentially sensitive values."""
        if value is None:
            return None
        sensitive_keywords = ["password", "secret", "key", "token", "connection"]
        var_lower = self.var_name.lower()
        if any(kw in var_lower for kw in sensitive_keywords):
            return "***MASKED***"
        if len(value) > 30:
            return f"{value[:20]}...({len(value)} chars)"
        return value


# ============================================================================
# VALIDATION RULE DEFINITION
# ============================================================================

@dataclass
class EnvVarRule:
    """
    Validation rule for an environment variable.

    Attributes:
        pattern: Compiled regex pattern for validation
        pattern_description: Human-readable description of expected format
        required: Whether this variable must be set
        fix_suggestion: How to fix if validation fails
        example: Example valid value
        allow_empty: Allow empty string (default False)
        default_value: Default value used if not set (for warning messages)
        warn_on_default: Emit warning when using default value
    """
    pattern: Pattern
    pattern_description: str
    required: bool
    fix_suggestion: str
    example: str
    allow_empty: bool = False
    default_value: Optional[str] = None
    warn_on_default: bool = True


# ============================================================================
# VALIDATION RULES - Single source of truth for env var formats
# ============================================================================

_CONNECTION_STRING = re.compile(r"^(?=.*(AccountName=|BlobEndpoint=|UseDevelopmentStorage=true)).+$", re.IGNORECASE)
_HOST = re.compile(r"^(?!.*://)\S+$")
_PORT = re.compile(r"^[1-9][0-9]{0,4}$")
_NON_EMPTY = re.compile(r"^.*\S.*$")
_VERSION = re.compile(r"^[0-9]+(\.[0-9]+)*$")
_BOOLEAN = re.compile(r"^(true|false|1|0|yes|no)$", re.IGNORECASE)
_SUBJECT_POLICY = re.compile(r"^(segment_count|reserved_marker)$", re.IGNORECASE)
_TASK_ID_LOOKUP = re.compile(r"^(literal|property_value)$", re.IGNORECASE)


ENV_VAR_RULES: Dict[str, EnvVarRule] = {
    # =========================================================================
    # STORAGE (Critical - metadata lookup)
    # =========================================================================
    "ENV_STORAGE_CONNECTION_STRING": EnvVarRule(
        pattern=_CONNECTION_STRING,
        pattern_description="Azure Storage connection string (AccountName=... or BlobEndpoint=...)",
        required=True,
        fix_suggestion="Copy the connection string of the media storage account (Access keys blade)",
        example="DefaultEndpointsProtocol=https;AccountName=mymedia;AccountKey=...;EndpointSuffix=core.windows.net",
    ),

    # =========================================================================
    # RDP API (Critical - REST target)
    # =========================================================================
    "ENV_RDP_HOST": EnvVarRule(
        pattern=_HOST,
        pattern_description="Host name or IP address, no scheme",
        required=True,
        fix_suggestion="Use the bare host name like 'rdp-api.internal' (not 'http://rdp-api.internal')",
        example="rdp-api.internal",
    ),

    "ENV_RDP_PORT": EnvVarRule(
        pattern=_PORT,
        pattern_description="Positive integer port number",
        required=True,
        fix_suggestion="Use a valid port number like 8085",
        example="8085",
    ),

    "ENV_RDP_VERSION": EnvVarRule(
        pattern=_VERSION,
        pattern_description="Dotted version number sent as x-rdp-version",
        required=False,
        fix_suggestion="Set to the API version expected by the RDP server",
        example="8.1",
        default_value="8.1",
        warn_on_default=False,
    ),

    # =========================================================================
    # TENANT DEFAULTS (Critical - header fallbacks)
    # =========================================================================
    "ENV_CLIENT_ID": EnvVarRule(
        pattern=_NON_EMPTY,
        pattern_description="Client id used when the blob carries no x-rdp-clientid",
        required=True,
        fix_suggestion="Set to the client id registered with the RDP API",
        example="mediaUploadClient",
    ),

    "ENV_DEFAULT_USER_ID": EnvVarRule(
        pattern=_NON_EMPTY,
        pattern_description="User id used when the blob carries no x-rdp-userid",
        required=True,
        fix_suggestion="Set to the system user that owns automated uploads",
        example="system",
    ),

    "ENV_DEFAULT_USER_ROLES": EnvVarRule(
        pattern=_NON_EMPTY,
        pattern_description="User roles used when the blob carries no x-rdp-userroles",
        required=True,
        fix_suggestion="Set to the roles of the default user",
        example="admin",
    ),

    # =========================================================================
    # BEHAVIOUR SWITCHES (Optional)
    # =========================================================================
    "ENV_SUBJECT_FILTER_POLICY": EnvVarRule(
        pattern=_SUBJECT_POLICY,
        pattern_description="'segment_count' or 'reserved_marker'",
        required=False,
        fix_suggestion="Use 'segment_count' to ignore nested blob paths or 'reserved_marker' to ignore /renditions/",
        example="segment_count",
        default_value="segment_count",
        warn_on_default=False,
    ),

    "ENV_TASK_ID_LOOKUP": EnvVarRule(
        pattern=_TASK_ID_LOOKUP,
        pattern_description="'literal' or 'property_value'",
        required=False,
        fix_suggestion="Use 'property_value' to read the task id from x-rdp-taskid",
        example="literal",
        default_value="literal",
    ),

    "DEBUG_MODE": EnvVarRule(
        pattern=_BOOLEAN,
        pattern_description="Boolean (true/false)",
        required=False,
        fix_suggestion="Use 'true' to log events and payloads",
        example="false",
        default_value="false",
        warn_on_default=False,
    ),
}


# ============================================================================
# VALIDATION FUNCTIONS
# ============================================================================

def validate_single_var(
    var_name: str,
    rule: EnvVarRule,
    include_warnings: bool = True
) -> Optional[ValidationError]:
    """
    Validate a single environment variable against its rule.

    Args:
        var_name: Environment variable name
        rule: Validation rule to apply
        include_warnings: Whether to return warnings for unset vars using defaults.
            A malformed optional value is always reported as a warning.

    Returns:
        ValidationError if validation fails or warning if using default, None if passes
    """
    value = os.environ.get(var_name)

    if rule.required and (value is None or (not rule.allow_empty and value == "")):
        return ValidationError(
            var_name=var_name,
            message="Required environment variable not set",
            current_value=value,
            expected_pattern=rule.pattern_description,
            fix_suggestion=f"{rule.fix_suggestion}. Example: {rule.example}",
            severity="error",
        )

    if value is None or value == "":
        if include_warnings and not rule.required and rule.warn_on_default and rule.default_value is not None:
            return ValidationError(
                var_name=var_name,
                message="Not set, using default value",
                current_value=None,
                expected_pattern=f"Default: {rule.default_value}",
                fix_suggestion=f"Set explicitly or accept default. {rule.fix_suggestion}",
                severity="warning",
            )
        return None

    if not rule.pattern.match(value):
        if not rule.required and rule.default_value is not None:
            # Reported regardless of include_warnings: the value is ignored
            return ValidationError(
                var_name=var_name,
                message="Invalid format, using default value",
                current_value=value,
                expected_pattern=f"Default: {rule.default_value}",
                fix_suggestion=f"{rule.fix_suggestion}. Expected: {rule.pattern_description}",
                severity="warning",
            )
        return ValidationError(
            var_name=var_name,
            message="Invalid format",
            current_value=value,
            expected_pattern=rule.pattern_description,
            fix_suggestion=f"{rule.fix_suggestion}. Example: {rule.example}",
            severity="error",
        )

    return None


def resolve_optional_var(var_name: str, rules: Optional[Dict[str, EnvVarRule]] = None) -> Optional[str]:
    """
    Value of an optional variable, or its default when unset or malformed.

    Pairs with validate_single_var, which reports the malformed value.
    """
    rule = (rules or ENV_VAR_RULES)[var_name]
    value = os.environ.get(var_name)
    if value and rule.pattern.match(value):
        return value
    return rule.default_value


def validate_environment(
    rules: Optional[Dict[str, EnvVarRule]] = None,
    include_warnings: bool = True
) -> List[ValidationError]:
    """
    Validate all environment variables against their rules.

    Args:
        rules: Optional custom rules dict (defaults to ENV_VAR_RULES)
        include_warnings: Whether to include warnings for vars using defaults

    Returns:
        List of ValidationError objects (errors and optionally warnings)
    """
    if rules is None:
        rules = ENV_VAR_RULES

    results = []
    for var_name, rule in rules.items():
        result = validate_single_var(var_name, rule, include_warnings=include_warnings)
        if result:
            results.append(result)

    return results


def get_validation_summary(include_warnings: bool = True) -> Dict[str, Any]:
    """
    Get a summary of environment variable validation status.

    Returns:
        Dict with validation summary suitable for health endpoint
    """
    all_results = validate_environment(include_warnings=include_warnings)

    errors = [r for r in all_results if r.severity == "error"]
    warnings = [r for r in all_results if r.severity == "warning"]

    required_vars = [name for name, rule in ENV_VAR_RULES.items() if rule.required]
    optional_vars = [name for name, rule in ENV_VAR_RULES.items() if not rule.required]

    set_required = [name for name in required_vars if os.environ.get(name)]
    missing_required = [name for name in required_vars if not os.environ.get(name)]
    set_optional = [name for name in optional_vars if os.environ.get(name)]
    using_defaults = [name for name in optional_vars if not os.environ.get(name)]

    return {
        "valid": len(errors) == 0,
        "error_count": len(errors),
        "warning_count": len(warnings),
        "required_vars": {
            "total": len(required_vars),
            "set": len(set_required),
            "missing": missing_required,
        },
        "optional_vars": {
            "total": len(optional_vars),
            "set": len(set_optional),
            "using_defaults": len(using_defaults),
        },
        "errors": [e.to_dict() for e in errors],
        "warnings": [w.to_dict() for w in warnings],
    }


def log_validation_results(logger=None) -> bool:
    """
    Log validation results at appropriate levels.

    Logs errors at ERROR level, warnings at WARNING level.
    Returns True if no errors (warnings are OK).

    Args:
        logger: Optional logger instance (uses print if None)
    """
    all_results = validate_environment(include_warnings=True)

    errors = [r for r in all_results if r.severity == "error"]
    warnings = [r for r in all_results if r.severity == "warning"]

    def _log(level: str, msg: str):
        if logger:
            getattr(logger, level.lower())(msg)
        else:
            print(f"[{level.upper()}] {msg}")

    for error in errors:
        _log("error", f"ENV VAR ERROR: {error.var_name} - {error.message}")
        _log("error", f"  Expected: {error.expected_pattern}")
        _log("error", f"  Fix: {error.fix_suggestion}")

    if warnings:
        _log("warning", f"ENV VARS: {len(warnings)} optional variables using defaults:")
        for warning in warnings:
            default_val = warning.expected_pattern.replace("Default: ", "")
            _log("warning", f"  {warning.var_name} → {default_val}")

    if errors:
        _log("error", f"❌ STARTUP_FAILED: {len(errors)} environment variable errors")
        return False
    elif warnings:
        _log("info", f"✅ Environment validation passed ({len(warnings)} vars using defaults)")
        return True
    else:
        _log("info", "✅ Environment validation passed (all vars explicitly set)")
        return True


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ENV_VAR_RULES",
    "EnvVarRule",
    "ValidationError",
    "validate_environment",
    "validate_single_var",
    "resolve_optional_var",
    "get_validation_summary",
    "log_validation_results",
]

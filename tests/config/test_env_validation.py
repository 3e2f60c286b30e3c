"""
Environment variable validation tests.

Tests regex patterns for the RDP endpoint, storage and behaviour switches.
"""

import pytest

from config.env_validation import (
    ENV_VAR_RULES,
    validate_single_var,
    validate_environment,
    get_validation_summary,
    resolve_optional_var,
    ValidationError,
)


class TestRdpHostValidation:
    """ENV_RDP_HOST is any non-blank host without a scheme."""

    rule = ENV_VAR_RULES["ENV_RDP_HOST"]

    @pytest.mark.parametrize("value", ["localhost", "rdp-api.internal", "10.0.0.12", "rdp_api"])
    def test_hosts_accepted(self, monkeypatch, value):
        monkeypatch.setenv("ENV_RDP_HOST", value)
        assert validate_single_var("ENV_RDP_HOST", self.rule) is None

    @pytest.mark.parametrize("value", ["http://rdp-api.internal", "https://10.0.0.12", "  ", "rdp api"])
    def test_scheme_or_blank_rejected(self, monkeypatch, value):
        monkeypatch.setenv("ENV_RDP_HOST", value)
        result = validate_single_var("ENV_RDP_HOST", self.rule)
        assert result is not None
        assert result.severity == "error"

    def test_empty_string_reported_as_missing(self, monkeypatch):
        monkeypatch.setenv("ENV_RDP_HOST", "")
        result = validate_single_var("ENV_RDP_HOST", self.rule)
        assert result is not None
        assert result.message.startswith("Required")


class TestRdpPortValidation:

    rule = ENV_VAR_RULES["ENV_RDP_PORT"]

    @pytest.mark.parametrize("value", ["80", "8085", "65535"])
    def test_numeric_ports_accepted(self, monkeypatch, value):
        monkeypatch.setenv("ENV_RDP_PORT", value)
        assert validate_single_var("ENV_RDP_PORT", self.rule) is None

    @pytest.mark.parametrize("value", ["0", "-1", "80a", "eighty", "08085"])
    def test_non_numeric_ports_rejected(self, monkeypatch, value):
        monkeypatch.setenv("ENV_RDP_PORT", value)
        result = validate_single_var("ENV_RDP_PORT", self.rule)
        assert result is not None
        assert result.message == "Invalid format"


class TestConnectionStringValidation:

    rule = ENV_VAR_RULES["ENV_STORAGE_CONNECTION_STRING"]

    def test_account_key_string_accepted(self, monkeypatch):
        monkeypatch.setenv(
            "ENV_STORAGE_CONNECTION_STRING",
            "DefaultEndpointsProtocol=https;AccountName=a;AccountKey=b;EndpointSuffix=core.windows.net"
        )
        assert validate_single_var("ENV_STORAGE_CONNECTION_STRING", self.rule) is None

    def test_development_storage_accepted(self, monkeypatch):
        monkeypatch.setenv("ENV_STORAGE_CONNECTION_STRING", "UseDevelopmentStorage=true")
        assert validate_single_var("ENV_STORAGE_CONNECTION_STRING", self.rule) is None

    def test_account_url_rejected(self, monkeypatch):
        monkeypatch.setenv("ENV_STORAGE_CONNECTION_STRING", "https://a.blob.core.windows.net")
        assert validate_single_var("ENV_STORAGE_CONNECTION_STRING", self.rule) is not None

    def test_value_masked_in_report(self, monkeypatch):
        monkeypatch.setenv("ENV_STORAGE_CONNECTION_STRING", "AccountKey=supersecret")
        result = validate_single_var("ENV_STORAGE_CONNECTION_STRING", self.rule)
        assert result is not None
        assert result.to_dict()["current_value"] == "***MASKED***"


class TestBehaviourSwitches:

    @pytest.mark.parametrize("value", ["segment_count", "reserved_marker", "RESERVED_MARKER"])
    def test_subject_policies_accepted(self, monkeypatch, value):
        monkeypatch.setenv("ENV_SUBJECT_FILTER_POLICY", value)
        rule = ENV_VAR_RULES["ENV_SUBJECT_FILTER_POLICY"]
        assert validate_single_var("ENV_SUBJECT_FILTER_POLICY", rule) is None

    def test_unknown_subject_policy_falls_back_with_warning(self, monkeypatch):
        monkeypatch.setenv("ENV_SUBJECT_FILTER_POLICY", "everything")
        rule = ENV_VAR_RULES["ENV_SUBJECT_FILTER_POLICY"]
        result = validate_single_var("ENV_SUBJECT_FILTER_POLICY", rule)
        assert result is not None
        assert result.severity == "warning"
        assert result.expected_pattern == "Default: segment_count"

    def test_malformed_optional_value_warns_even_without_warnings(self, monkeypatch):
        monkeypatch.setenv("DEBUG_MODE", "on")
        rule = ENV_VAR_RULES["DEBUG_MODE"]
        result = validate_single_var("DEBUG_MODE", rule, include_warnings=False)
        assert result is not None
        assert result.severity == "warning"
        assert result.current_value == "on"

    def test_unset_task_id_lookup_warns(self, clean_env):
        rule = ENV_VAR_RULES["ENV_TASK_ID_LOOKUP"]
        result = validate_single_var("ENV_TASK_ID_LOOKUP", rule)
        assert result is not None
        assert result.severity == "warning"

    def test_unset_task_id_lookup_silent_without_warnings(self, clean_env):
        rule = ENV_VAR_RULES["ENV_TASK_ID_LOOKUP"]
        assert validate_single_var("ENV_TASK_ID_LOOKUP", rule, include_warnings=False) is None


class TestValidateEnvironment:

    def test_empty_environment_reports_every_required_var(self, clean_env):
        errors = validate_environment(include_warnings=False)
        required = {name for name, rule in ENV_VAR_RULES.items() if rule.required}
        assert {e.var_name for e in errors} == required
        assert all(isinstance(e, ValidationError) for e in errors)

    def test_complete_environment_has_no_errors(self, full_env):
        assert validate_environment(include_warnings=False) == []

    def test_summary_lists_missing_vars(self, full_env):
        full_env.delenv("ENV_RDP_HOST")
        summary = get_validation_summary()
        assert summary["valid"] is False
        assert summary["required_vars"]["missing"] == ["ENV_RDP_HOST"]
        assert summary["error_count"] == 1

    def test_summary_valid_with_defaults(self, full_env):
        summary = get_validation_summary()
        assert summary["valid"] is True
        assert summary["optional_vars"]["using_defaults"] == summary["optional_vars"]["total"]

    def test_summary_valid_with_malformed_optional_value(self, full_env):
        full_env.setenv("ENV_RDP_VERSION", "v8")
        summary = get_validation_summary()
        assert summary["valid"] is True
        assert "ENV_RDP_VERSION" in [w["var_name"] for w in summary["warnings"]]


class TestResolveOptionalVar:

    def test_valid_value_returned(self, clean_env):
        clean_env.setenv("ENV_RDP_VERSION", "9.2")
        assert resolve_optional_var("ENV_RDP_VERSION") == "9.2"

    @pytest.mark.parametrize("value", ["v8", "", "8.x"])
    def test_unset_or_malformed_value_uses_default(self, clean_env, value):
        clean_env.setenv("ENV_RDP_VERSION", value)
        assert resolve_optional_var("ENV_RDP_VERSION") == "8.1"

    def test_unset_uses_default(self, clean_env):
        assert resolve_optional_var("DEBUG_MODE") == "false"

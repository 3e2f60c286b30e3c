# ============================================================================
# EXCEPTIONS
# ============================================================================
# STATUS: Shared - used by every layer
# PURPOSE: Exception hierarchy separating contract violations, configuration
#          errors and expected business failures of the upload notifier
# EXPORTS: ContractViolationError, ConfigurationError, BusinessLogicError,
#          MetadataFetchError, TenantIdMissingError, RestCallError,
#          MalformedResponseError, UploadNotificationFailed
# DEPENDENCIES: None (standard library only)
# ============================================================================

"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming bugs that need fixing)
2. Configuration Errors (deployment problems, fatal for the invocation)
3. Business Logic Failures (expected runtime issues)

Services raise these; the UploadNotifier maps them to a NotificationResult;
the trigger layer turns a failed result back into an exception so the
Functions host reports the invocation as failed.
"""

from typing import List, Optional


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated (programming bugs).

    These should NEVER be caught and handled - they indicate bugs
    that need to be fixed in the code.

    Examples:
        - Payload builder receives a list instead of a metadata dict
        - Trigger passes something that is not a BlobCreatedEvent
    """
    pass


class ConfigurationError(Exception):
    """
    System configuration error.

    Fatal for the current invocation. Raised before any network call is
    attempted.

    Examples:
        - ENV_RDP_HOST not set
        - ENV_RDP_PORT is not a number
    """

    def __init__(
        self,
        message: str,
        missing: Optional[List[str]] = None,
        invalid: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.missing = missing or []
        self.invalid = invalid or []


class BusinessLogicError(Exception):
    """
    Base class for expected runtime business logic failures.

    These are normal failures that occur during system operation
    and should be handled gracefully without crashing.
    """
    pass


class MetadataFetchError(BusinessLogicError):
    """
    Blob metadata could not be read from Azure Storage.

    Examples:
        - Blob deleted before the event was delivered
        - Storage account unreachable
        - Authentication failure
    """

    def __init__(self, message: str, container_name: str = None, blob_name: str = None):
        super().__init__(message)
        self.container_name = container_name
        self.blob_name = blob_name


class TenantIdMissingError(BusinessLogicError):
    """
    Blob metadata carries no x-rdp-tenantid.

    Not a failure of the invocation: the upload is simply not addressed to
    any tenant, so there is nothing to register.
    """
    pass


class RestCallError(BusinessLogicError):
    """
    The create call to the RDP API did not succeed.

    Examples:
        - Connection refused / DNS failure
        - HTTP status other than 200
        - Response body status other than "success"
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MalformedResponseError(RestCallError):
    """RDP API answered 200 but the body is not the expected JSON document."""
    pass


class UploadNotificationFailed(Exception):
    """
    Raised by the trigger layer when an invocation ends in failure.

    Surfacing an exception is how an Azure Function signals failure to the
    host, which lets Event Grid apply its own retry policy.
    """

    def __init__(self, message: str, invocation_id: Optional[str] = None):
        super().__init__(message)
        self.invocation_id = invocation_id

"""
Configuration Defaults - Single source of truth for all default values.

Organization:
    - RdpDefaults: Downstream RDP API contract constants
    - MetadataDefaults: Blob metadata key conventions
    - EventDefaults: Event Grid subject conventions
    - AppDefaults: Application-wide switches

Required environment variables have NO defaults here. A missing
ENV_RDP_HOST must stop the invocation, not silently target a placeholder.

Usage:
    from config.defaults import RdpDefaults

    version: str = Field(default=RdpDefaults.API_VERSION, ...)
"""


# =============================================================================
# RDP API DEFAULTS
# =============================================================================

class RdpDefaults:
    """Constants of the binary stream object create endpoint."""

    API_VERSION = "8.1"
    SCHEME = "http"
    CREATE_PATH_TEMPLATE = "/{tenant_id}/api/binarystreamobjectservice/create"
    CONTENT_TYPE = "application/json"
    SUCCESS_STATUS = "success"

    # Descriptor constants
    OBJECT_TYPE = "binarystreamobject"
    TASK_ID_LOCALE = "en-US"
    TASK_ID_SOURCE = "internal"


# =============================================================================
# METADATA DEFAULTS
# =============================================================================

class MetadataDefaults:
    """
    Blob metadata key conventions.

    Azure metadata keys must be valid C# identifiers, so uploaders write
    x_rdp_tenantid where the API expects x-rdp-tenantid.
    """

    ESCAPING_PREFIX = "x_rdp_"
    CANONICAL_PREFIX = "x-rdp-"

    TENANT_ID = "x-rdp-tenantid"
    CLIENT_ID = "x-rdp-clientid"
    USER_ID = "x-rdp-userid"
    USER_ROLES = "x-rdp-userroles"
    OWNERSHIP_DATA = "x-rdp-ownershipdata"
    TASK_ID = "x-rdp-taskid"

    OBJECT_ID = "binarystreamobjectid"
    ORIGINAL_FILENAME = "originalfilename"

    # Key looked up by the deployed handler in "literal" task id mode
    LITERAL_TASK_ID_KEY = "TASK_ID_METADATA_PROPERTY"


# =============================================================================
# EVENT DEFAULTS
# =============================================================================

class EventDefaults:
    """
    Event Grid BlobCreated subject conventions.

    Subject format:
        /blobServices/default/containers/{container}/blobs/{blob}
    """

    SUBJECT_SEPARATOR = "/"
    EXPECTED_SEGMENT_COUNT = 7
    CONTAINER_SEGMENT_INDEX = 4
    BLOBS_MARKER = "/blobs/"
    RESERVED_PATH_MARKER = "/renditions/"


# =============================================================================
# APPLICATION DEFAULTS
# =============================================================================

class AppDefaults:
    """Application-wide switches."""

    DEBUG_MODE = False
    SUBJECT_FILTER_POLICY = "segment_count"
    TASK_ID_LOOKUP = "literal"

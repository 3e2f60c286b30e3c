"""
Azure Functions entry point for the Upload Notifier.

Registers uploaded media assets with the RDP API. Every blob written to the
media storage account raises a Microsoft.Storage.BlobCreated event; this app
reads the blob's metadata and posts a binary stream object descriptor to the
tenant's create endpoint.

Architecture:
    Event Grid -> upload_notifier -> UploadNotifier -> BlobMetadataRepository (metadata)
                                                    -> RdpApiClient (POST create)

Exports:
    app: Azure Function App instance

Dependencies:
    azure.functions: Azure Functions SDK
    triggers/*: Event Grid and HTTP trigger implementations

Endpoints:
    Event Grid:
        UploadNotifier - Microsoft.Storage.BlobCreated subscription

    HTTP:
        GET /api/health - Configuration health check

Environment Variables:
    ENV_STORAGE_CONNECTION_STRING: Media storage account connection string
    ENV_RDP_HOST / ENV_RDP_PORT: RDP API endpoint
    ENV_CLIENT_ID, ENV_DEFAULT_USER_ID, ENV_DEFAULT_USER_ROLES: Header fallbacks
    ENV_RDP_VERSION: x-rdp-version header (optional, default 8.1)
    ENV_SUBJECT_FILTER_POLICY: segment_count | reserved_marker (optional)
    ENV_TASK_ID_LOOKUP: literal | property_value (optional)
    DEBUG_MODE: Verbose event and payload logging (optional)
"""

# ========================================================================
# IMPORTS - Categorized by source for maintainability
# ========================================================================

# Native Python modules
import logging

# Azure SDK modules (3rd party - Microsoft)
import azure.functions as func

# Suppress Azure SDK HTTP logging
logging.getLogger("azure.core.pipeline.policies.http_logging_policy").setLevel(logging.WARNING)
logging.getLogger("azure.storage").setLevel(logging.WARNING)
logging.getLogger("azure.core").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)

# Application modules (our code)
from config.env_validation import log_validation_results
from triggers.health import health_handler
from triggers.upload_notifier import handle_blob_created_event
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "function_app")
validation_logger = LoggerFactory.create_logger(ComponentType.VALIDATOR, "EnvValidation")

# ========================================================================
# STARTUP VALIDATION
# ========================================================================
# Reported only: configuration is re-validated on every invocation, so a
# broken app setting fails invocations instead of the host.
if not log_validation_results(validation_logger):
    logger.error("Upload notifier started with invalid configuration; invocations will fail until fixed")

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)


@app.function_name(name="UploadNotifier")
@app.event_grid_trigger(arg_name="event")
def upload_notifier(event: func.EventGridEvent, context: func.Context) -> None:
    """Register an uploaded blob with the RDP API."""
    handle_blob_created_event(event, context)


@app.route(route="health", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def health(req: func.HttpRequest) -> func.HttpResponse:
    """Configuration health check; no storage or RDP calls."""
    return health_handler(req)

# ============================================================================
# EVENT GRID UPLOAD NOTIFIER HANDLER
# ============================================================================
# STATUS: Trigger layer - Microsoft.Storage.BlobCreated processing
# PURPOSE: Convert the Event Grid event, screen its subject, run UploadNotifier
# ============================================================================
"""
Upload Notifier Event Grid Handler.

Bridges the Functions host and services.UploadNotifier.

Invocation Flow:
    1. Convert func.EventGridEvent -> BlobCreatedEvent
    2. Screen the subject (ENV_SUBJECT_FILTER_POLICY only)
         not applicable -> SKIPPED returned, rest of the environment unread
    3. Load NotifierConfig (fresh every invocation)
         missing/invalid env var -> ConfigurationError raised, no network call
    4. Build repository + client, run UploadNotifier
    5. FAILED  -> UploadNotificationFailed raised (host marks invocation failed)
       SKIPPED / COMPLETED -> return normally

Usage:
    from triggers.upload_notifier import handle_blob_created_event

    @app.event_grid_trigger(arg_name="event")
    def upload_notifier(event: func.EventGridEvent, context: func.Context) -> None:
        handle_blob_created_event(event, context)
"""

import uuid
from typing import Any, Optional

import azure.functions as func

from config import NotifierConfig, load_config, load_subject_filter_policy
from core.models import BlobCreatedEvent, NotificationResult
from exceptions import ConfigurationError, MetadataFetchError, UploadNotificationFailed
from infrastructure import RepositoryFactory
from services import UploadNotifier, screen_event_subject
from util_logger import LoggerFactory, ComponentType, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "UploadNotifierTrigger")


@log_exceptions(logger=logger)
def create_notifier(config: NotifierConfig) -> UploadNotifier:
    """Wire UploadNotifier to the real storage account and RDP API."""
    return UploadNotifier(
        config=config,
        metadata_repository=RepositoryFactory.create_blob_metadata_repository(config),
        rdp_client=RepositoryFactory.create_rdp_client(config),
    )


def _invocation_id(context: Optional[Any]) -> str:
    invocation_id = getattr(context, 'invocation_id', None) if context is not None else None
    return invocation_id or str(uuid.uuid4())


def handle_blob_created_event(
    event: func.EventGridEvent,
    context: Optional[func.Context] = None
) -> NotificationResult:
    """
    Process one BlobCreated event.

    Args:
        event: Event Grid event delivered by the host
        context: Functions invocation context (supplies invocation_id)

    Returns:
        NotificationResult for SKIPPED and COMPLETED invocations

    Raises:
        ConfigurationError: Environment incomplete or malformed
        UploadNotificationFailed: Metadata fetch or REST call failed
    """
    invocation_id = _invocation_id(context)
    blob_event = BlobCreatedEvent.from_event_grid(event)

    logger.info(
        f"[{invocation_id[:8]}] BlobCreated event received: {blob_event.subject}",
        extra={'custom_dimensions': {
            'invocation_id': invocation_id,
            'event_id': blob_event.id,
            'event_type': blob_event.event_type
        }}
    )

    skipped = screen_event_subject(blob_event, invocation_id, load_subject_filter_policy())
    if skipped is not None:
        logger.info(
            f"[{invocation_id[:8]}] Upload notification {skipped.status.value}",
            extra={'custom_dimensions': skipped.to_log_dict()}
        )
        return skipped

    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error(
            f"[{invocation_id[:8]}] Unable to load configuration: {e}",
            extra={'custom_dimensions': {
                'invocation_id': invocation_id,
                'missing': e.missing,
                'invalid': e.invalid
            }}
        )
        raise

    try:
        notifier = create_notifier(config)
    except MetadataFetchError as e:
        raise UploadNotificationFailed(str(e), invocation_id=invocation_id) from e

    result = notifier.process(blob_event, invocation_id)

    logger.info(
        f"[{invocation_id[:8]}] Upload notification {result.status.value}",
        extra={'custom_dimensions': result.to_log_dict()}
    )

    if not result.succeeded:
        raise UploadNotificationFailed(
            f"Upload notification failed ({result.error_type}): {result.error}",
            invocation_id=invocation_id
        )

    return result

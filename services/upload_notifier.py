"""
Upload Notifier - registers uploaded media assets with the RDP API.

Processing Flow (each step short-circuits the rest):
    1. Parse subject        not applicable      -> SKIPPED
    2. Fetch metadata       MetadataFetchError  -> FAILED
                            no properties       -> SKIPPED
    3. Derive headers       no tenant id        -> SKIPPED
    4. Build descriptor
    5. POST descriptor      RestCallError       -> FAILED
                            success             -> COMPLETED

SKIPPED means "not for us" and the invocation succeeds. FAILED is turned
into an exception by the trigger so Event Grid can redeliver; nothing here
retries.

Usage:
    notifier = UploadNotifier(config, metadata_repository, rdp_client)
    result = notifier.process(event, invocation_id)

    # Step 1 alone, before any configuration is loaded
    skipped = screen_event_subject(event, invocation_id, policy)
"""

import time
from typing import Optional

from config import NotifierConfig, SubjectFilterPolicy
from core.models import (
    BlobCreatedEvent,
    BlobLocation,
    NotificationResult,
    NotificationStatus,
    SkipReason,
)
from exceptions import MetadataFetchError, RestCallError, TenantIdMissingError
from infrastructure.blob import IBlobMetadataRepository
from infrastructure.rdp_client import IRdpApiClient
from util_logger import LoggerFactory, ComponentType, LogContext

from .event_subject import parse_event_subject
from .metadata_normalizer import normalize_metadata
from .payload_builder import build_binary_stream_object, create_request_headers

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "UploadNotifier")


class UploadNotifier:
    """
    Runs the notification pipeline for one BlobCreated event.

    Stateless between calls; the collaborators are injected so tests can
    replace storage and HTTP with fakes.
    """

    def __init__(
        self,
        config: NotifierConfig,
        metadata_repository: IBlobMetadataRepository,
        rdp_client: IRdpApiClient,
        verbose_logging: Optional[bool] = None
    ):
        """
        Args:
            config: Invocation configuration
            metadata_repository: Storage metadata lookups
            rdp_client: RDP create call
            verbose_logging: Overrides config.verbose_logging when given
        """
        self.config = config
        self.metadata_repository = metadata_repository
        self.rdp_client = rdp_client
        self.verbose_logging = config.verbose_logging if verbose_logging is None else verbose_logging

    def process(self, event: BlobCreatedEvent, invocation_id: str) -> NotificationResult:
        """
        Process one event.

        Args:
            event: Parsed BlobCreated event
            invocation_id: Functions invocation id

        Returns:
            NotificationResult (COMPLETED, SKIPPED or FAILED)
        """
        start_time = time.time()
        log_ctx = LogContext(invocation_id=invocation_id, event_id=event.id)

        if self.verbose_logging:
            logger.info(
                "Eventgrid event received",
                extra={'custom_dimensions': {**log_ctx.to_dict(), 'event': event.to_log_dict()}}
            )

        # Step 1: subject
        location = parse_event_subject(event.subject, self.config.subject_filter_policy)
        if location is None:
            return _subject_skipped(event, invocation_id, self.config.subject_filter_policy, log_ctx)

        log_ctx.container_name = location.container_name
        log_ctx.blob_name = location.blob_name

        # Step 2: metadata
        try:
            blob = self.metadata_repository.get_blob_metadata(location.container_name, location.blob_name)
        except MetadataFetchError as e:
            logger.error(
                f"Error fetching metadata: {e}",
                extra={'custom_dimensions': log_ctx.to_dict()}
            )
            return self._failed(invocation_id, location, e)

        if blob is None:
            logger.info(
                f"No metadata result for {location.container_name}/{location.blob_name}",
                extra={'custom_dimensions': log_ctx.to_dict()}
            )
            return NotificationResult(
                status=NotificationStatus.SKIPPED,
                reason=SkipReason.METADATA_EMPTY,
                invocation_id=invocation_id,
                container_name=location.container_name,
                blob_name=location.blob_name
            )

        # Step 3: headers
        metadata = normalize_metadata(blob.metadata)
        try:
            headers = create_request_headers(self.config, metadata)
        except TenantIdMissingError as e:
            logger.warning(
                f"TenantId missing: {e} ({location.container_name}/{location.blob_name})",
                extra={'custom_dimensions': log_ctx.to_dict()}
            )
            return NotificationResult(
                status=NotificationStatus.SKIPPED,
                reason=SkipReason.TENANT_ID_MISSING,
                invocation_id=invocation_id,
                container_name=location.container_name,
                blob_name=location.blob_name
            )

        log_ctx.tenant_id = headers.tenant_id

        # Step 4: descriptor
        envelope = build_binary_stream_object(
            blob=blob,
            headers=headers,
            invocation_id=invocation_id,
            content_length=event.data.content_length,
            task_id_mode=self.config.task_id_lookup,
            verbose_logging=self.verbose_logging
        )
        log_ctx.task_id = envelope.task_id

        if self.verbose_logging:
            logger.info(
                "BinaryStreamObject built",
                extra={'custom_dimensions': {**log_ctx.to_dict(), 'binary_stream_object': envelope.to_payload()}}
            )

        # Step 5: submit
        try:
            response = self.rdp_client.create_binary_stream_object(headers, envelope)
        except RestCallError as e:
            logger.error(
                f"Fail to make REST api call to post the binary stream object: {e}",
                extra={'custom_dimensions': {**log_ctx.to_dict(), 'status_code': e.status_code}}
            )
            result = self._failed(invocation_id, location, e)
            result.tenant_id = headers.tenant_id
            result.object_id = envelope.object_id
            result.task_id = envelope.task_id
            return result

        elapsed = time.time() - start_time
        logger.info(
            f"Registered {location.container_name}/{location.blob_name} as {envelope.object_id} "
            f"for tenant {headers.tenant_id} in {elapsed:.3f}s",
            extra={'custom_dimensions': {**log_ctx.to_dict(), **response.summary()}}
        )

        return NotificationResult(
            status=NotificationStatus.COMPLETED,
            invocation_id=invocation_id,
            container_name=location.container_name,
            blob_name=location.blob_name,
            tenant_id=headers.tenant_id,
            object_id=envelope.object_id,
            task_id=envelope.task_id,
            response_status=response.status
        )

    @staticmethod
    def _failed(invocation_id: str, location: BlobLocation, error: Exception) -> NotificationResult:
        return NotificationResult(
            status=NotificationStatus.FAILED,
            invocation_id=invocation_id,
            error=str(error),
            error_type=type(error).__name__,
            container_name=location.container_name,
            blob_name=location.blob_name
        )


def screen_event_subject(
    event: BlobCreatedEvent,
    invocation_id: str,
    policy: SubjectFilterPolicy
) -> Optional[NotificationResult]:
    """
    SKIPPED result when the subject is not applicable under policy, else None.

    Needs no configuration or network, so the trigger can screen an event
    before validating the environment.
    """
    if parse_event_subject(event.subject, policy) is not None:
        return None
    log_ctx = LogContext(invocation_id=invocation_id, event_id=event.id)
    return _subject_skipped(event, invocation_id, policy, log_ctx)


def _subject_skipped(
    event: BlobCreatedEvent,
    invocation_id: str,
    policy: SubjectFilterPolicy,
    log_ctx: LogContext
) -> NotificationResult:
    logger.info(
        f"Subject not applicable ({policy.value}): {event.subject}",
        extra={'custom_dimensions': log_ctx.to_dict()}
    )
    return NotificationResult(
        status=NotificationStatus.SKIPPED,
        reason=SkipReason.SUBJECT_NOT_APPLICABLE,
        invocation_id=invocation_id
    )

"""
Binary Stream Object Payload Builder.

Turns normalized blob metadata plus configuration defaults into the request
headers and descriptor of the RDP create call.

Header derivation (metadata key -> header, fallback):
    x-rdp-tenantid      -> x-rdp-tenantId       required, no fallback
    x-rdp-clientid      -> x-rdp-clientId       ENV_CLIENT_ID
    x-rdp-userid        -> x-rdp-userId         ENV_DEFAULT_USER_ID
    x-rdp-userroles     -> x-rdp-userRoles      ENV_DEFAULT_USER_ROLES
    x-rdp-ownershipdata -> x-rdp-ownershipData  omitted

Descriptor derivation:
    id               binarystreamobjectid, else invocation id
    originalFileName originalfilename (consumed), else last segment of the blob name
    taskId           see resolve_task_id
    properties       fixed keys + every other metadata key, original casing,
                     that is not x-rdp-*, not originalfilename and not already
                     a property (compared case-insensitively)

Exports:
    create_request_headers
    resolve_task_id
    build_binary_stream_object
"""

from typing import Dict, Mapping, Optional

from config import NotifierConfig, TaskIdLookupMode
from config.defaults import MetadataDefaults
from core.models import (
    BinaryStreamObject,
    BinaryStreamObjectEnvelope,
    BlobMetadataResult,
    ClientAttributes,
    RequestHeaders,
    TaskIdAttribute,
    TaskIdValue,
)
from exceptions import TenantIdMissingError
from util_logger import LoggerFactory, ComponentType

from .metadata_normalizer import normalize_metadata, normalize_metadata_key

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "PayloadBuilder")


def _metadata_value(metadata: Mapping[str, str], key: str, default: Optional[str] = None) -> Optional[str]:
    """Metadata value for key, or default when absent or empty."""
    value = metadata.get(key)
    return value if value else default


def create_request_headers(config: NotifierConfig, metadata: Mapping[str, str]) -> RequestHeaders:
    """
    Derive the request headers.

    Args:
        config: Invocation configuration (defaults, API version)
        metadata: Normalized blob metadata

    Raises:
        TenantIdMissingError: No x-rdp-tenantid in the metadata
    """
    tenant_id = _metadata_value(metadata, MetadataDefaults.TENANT_ID)
    if not tenant_id:
        raise TenantIdMissingError("TenantId is not present in asset metadata")

    return RequestHeaders(
        rdp_version=config.rdp_version,
        tenant_id=tenant_id,
        client_id=_metadata_value(metadata, MetadataDefaults.CLIENT_ID, config.default_client_id),
        user_id=_metadata_value(metadata, MetadataDefaults.USER_ID, config.default_user_id),
        user_roles=_metadata_value(metadata, MetadataDefaults.USER_ROLES, config.default_user_roles),
        ownership_data=_metadata_value(metadata, MetadataDefaults.OWNERSHIP_DATA),
    )


def resolve_task_id(
    metadata: Mapping[str, str],
    invocation_id: str,
    mode: TaskIdLookupMode = TaskIdLookupMode.LITERAL
) -> str:
    """
    Task id for the descriptor's clientAttributes.

    LITERAL looks for a key literally named TASK_ID_METADATA_PROPERTY, which
    is what the deployed handler does. PROPERTY_VALUE looks for x-rdp-taskid.
    Both fall back to the invocation id.
    """
    if mode == TaskIdLookupMode.PROPERTY_VALUE:
        key = MetadataDefaults.TASK_ID
    else:
        key = normalize_metadata_key(MetadataDefaults.LITERAL_TASK_ID_KEY)
    return _metadata_value(metadata, key, invocation_id)


def build_binary_stream_object(
    blob: BlobMetadataResult,
    headers: RequestHeaders,
    invocation_id: str,
    content_length: Optional[int] = None,
    task_id_mode: TaskIdLookupMode = TaskIdLookupMode.LITERAL,
    verbose_logging: bool = False
) -> BinaryStreamObjectEnvelope:
    """
    Assemble the descriptor for one blob.

    Args:
        blob: Metadata lookup result (raw keys; normalized here)
        headers: Headers from create_request_headers
        invocation_id: Functions invocation id, fallback for object and task id
        content_length: data.contentLength of the event
        task_id_mode: See resolve_task_id
        verbose_logging: Log every pass-through property

    Returns:
        BinaryStreamObjectEnvelope ready for RdpApiClient
    """
    # Normalized copy for lookups; the input stays intact
    metadata: Dict[str, str] = normalize_metadata(blob.metadata)
    object_key = blob.name

    object_id = _metadata_value(metadata, MetadataDefaults.OBJECT_ID, invocation_id)

    original_file_name = metadata.pop(MetadataDefaults.ORIGINAL_FILENAME, None)
    if not original_file_name:
        original_file_name = object_key.split('/')[-1]

    task_id = resolve_task_id(metadata, invocation_id, task_id_mode)

    properties = {
        'objectKey': object_key,
        'originalFileName': original_file_name,
        'fullObjectPath': object_key,
    }
    if content_length is not None:
        properties['contentSize'] = content_length
    properties['user'] = headers.user_id
    properties['role'] = headers.user_roles
    if headers.ownership_data:
        properties['ownershipData'] = headers.ownership_data

    # Raw keys, original casing; collisions with existing properties are case-insensitive
    taken = {name.lower() for name in properties}
    for property_name, value in blob.metadata.items():
        normalized = normalize_metadata_key(property_name)
        if (normalized.startswith(MetadataDefaults.CANONICAL_PREFIX)
                or normalized == MetadataDefaults.ORIGINAL_FILENAME
                or property_name.lower() in taken):
            continue
        if verbose_logging:
            logger.info(f"Adding metadata property: {property_name}, Value: {value}")
        properties[property_name] = value
        taken.add(property_name.lower())

    return BinaryStreamObjectEnvelope(
        client_attributes=ClientAttributes(
            task_id=TaskIdAttribute(values=[TaskIdValue(value=task_id)])
        ),
        binary_stream_object=BinaryStreamObject(
            id=object_id,
            properties=properties
        )
    )

"""
Core Data Models Package.

Pure data structures without business logic.

Exports:
    NotificationStatus, SkipReason: Outcome enums
    BlobCreatedEvent, BlobCreatedEventData, BlobLocation: Event models
    BlobMetadataResult: Metadata lookup result
    RequestHeaders, BinaryStreamObjectEnvelope, ...: Create call request
    RdpApiResponse: Create call response
    NotificationResult: Invocation outcome
"""

from .enums import NotificationStatus, SkipReason

from .events import (
    BlobCreatedEvent,
    BlobCreatedEventData,
    BlobLocation
)

from .blob_metadata import BlobMetadataResult

from .binary_stream_object import (
    RequestHeaders,
    TaskIdValue,
    TaskIdAttribute,
    ClientAttributes,
    BinaryStreamObject,
    BinaryStreamObjectEnvelope
)

from .rdp_api import RdpApiResponse, RdpResponseStatus

from .notification import NotificationResult

__all__ = [
    'NotificationStatus',
    'SkipReason',
    'BlobCreatedEvent',
    'BlobCreatedEventData',
    'BlobLocation',
    'BlobMetadataResult',
    'RequestHeaders',
    'TaskIdValue',
    'TaskIdAttribute',
    'ClientAttributes',
    'BinaryStreamObject',
    'BinaryStreamObjectEnvelope',
    'RdpApiResponse',
    'RdpResponseStatus',
    'NotificationResult',
]

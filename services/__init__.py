"""
Upload Notifier Services.

Business logic, free of Azure Functions types:
    event_subject.py        Subject -> BlobLocation
    metadata_normalizer.py  x_rdp_* -> x-rdp-* key normalization
    payload_builder.py      Headers and binary stream object descriptor
    upload_notifier.py      The pipeline

Exports:
    UploadNotifier, screen_event_subject
    parse_event_subject
    normalize_metadata, normalize_metadata_key
    create_request_headers, resolve_task_id, build_binary_stream_object
"""

from .event_subject import parse_event_subject
from .metadata_normalizer import normalize_metadata, normalize_metadata_key
from .payload_builder import create_request_headers, resolve_task_id, build_binary_stream_object
from .upload_notifier import UploadNotifier, screen_event_subject

__all__ = [
    'UploadNotifier',
    'screen_event_subject',
    'parse_event_subject',
    'normalize_metadata',
    'normalize_metadata_key',
    'create_request_headers',
    'resolve_task_id',
    'build_binary_stream_object',
]

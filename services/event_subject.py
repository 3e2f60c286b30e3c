"""
Event Subject Parser.

Extracts container and blob identity from a BlobCreated subject and decides
whether the event is applicable at all.

Subject format:
    /blobServices/default/containers/{container}/blobs/{blob}

    split('/') -> ['', 'blobServices', 'default', 'containers', '{container}', 'blobs', '{blob}']

Exports:
    parse_event_subject: Subject -> BlobLocation or None
"""

from typing import Optional

from config import SubjectFilterPolicy
from config.defaults import EventDefaults
from core.models import BlobLocation


def parse_event_subject(
    subject: Optional[str],
    policy: SubjectFilterPolicy = SubjectFilterPolicy.SEGMENT_COUNT
) -> Optional[BlobLocation]:
    """
    Parse an Event Grid subject.

    Args:
        subject: Event subject
        policy: SEGMENT_COUNT accepts only blobs at the container root;
                RESERVED_MARKER accepts nested paths except /renditions/

    Returns:
        BlobLocation, or None when the event is not applicable
    """
    if not subject or not isinstance(subject, str):
        return None

    if policy == SubjectFilterPolicy.RESERVED_MARKER:
        return _parse_reserved_marker(subject)
    return _parse_segment_count(subject)


def _parse_segment_count(subject: str) -> Optional[BlobLocation]:
    segments = subject.split(EventDefaults.SUBJECT_SEPARATOR)
    if len(segments) != EventDefaults.EXPECTED_SEGMENT_COUNT:
        return None

    container_name = segments[EventDefaults.CONTAINER_SEGMENT_INDEX]
    blob_name = segments[-1]
    if not container_name or not blob_name:
        return None

    return BlobLocation(container_name=container_name, blob_name=blob_name, subject=subject)


def _parse_reserved_marker(subject: str) -> Optional[BlobLocation]:
    if EventDefaults.RESERVED_PATH_MARKER in subject:
        return None

    head, marker, blob_name = subject.partition(EventDefaults.BLOBS_MARKER)
    if not marker or not blob_name:
        return None

    segments = head.split(EventDefaults.SUBJECT_SEPARATOR)
    if len(segments) <= EventDefaults.CONTAINER_SEGMENT_INDEX:
        return None

    container_name = segments[EventDefaults.CONTAINER_SEGMENT_INDEX]
    if not container_name:
        return None

    return BlobLocation(container_name=container_name, blob_name=blob_name, subject=subject)

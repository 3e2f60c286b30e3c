"""
Pure Enumeration Types for the Upload Notifier.

No business logic - pure type definitions only.

Exports:
    NotificationStatus: Outcome of one invocation
    SkipReason: Why an invocation ended without registering anything
"""

from enum import Enum


class NotificationStatus(str, Enum):
    """
    Outcome of one upload notification.

    - COMPLETED: descriptor registered, RDP API answered success
    - SKIPPED: event not applicable, nothing sent, invocation succeeds
    - FAILED: invocation fails and the host reports it to Event Grid
    """

    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"


class SkipReason(str, Enum):
    """Reasons for a SKIPPED notification."""

    SUBJECT_NOT_APPLICABLE = "subject_not_applicable"
    METADATA_EMPTY = "metadata_empty"
    TENANT_ID_MISSING = "tenant_id_missing"

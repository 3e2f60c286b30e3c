"""
Notification Result Model.

Exports:
    NotificationResult: Outcome of one UploadNotifier invocation
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

from .enums import NotificationStatus, SkipReason


class NotificationResult(BaseModel):
    """
    Outcome of processing one BlobCreated event.

    SKIPPED carries a SkipReason, FAILED carries the error message.
    """
    model_config = ConfigDict(use_enum_values=False)

    status: NotificationStatus
    invocation_id: str
    reason: Optional[SkipReason] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    container_name: Optional[str] = None
    blob_name: Optional[str] = None
    tenant_id: Optional[str] = None
    object_id: Optional[str] = None
    task_id: Optional[str] = None
    response_status: Optional[str] = Field(default=None, description="response.status from the RDP API")

    @property
    def succeeded(self) -> bool:
        """True unless the invocation must be reported as failed."""
        return self.status != NotificationStatus.FAILED

    def to_log_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode='json', exclude_none=True)

"""
RDP API Response Models.

Exports:
    RdpResponseStatus: Nested response block
    RdpApiResponse: Parsed body of a create call
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

from config.defaults import RdpDefaults


class RdpResponseStatus(BaseModel):
    """The `response` block; only `status` is interpreted."""
    model_config = ConfigDict(extra='allow')

    status: Optional[str] = None


class RdpApiResponse(BaseModel):
    """
    Body of a binarystreamobjectservice/create response.

    Example:
        {"response": {"status": "Success", "statusDetail": {...}}}
    """
    model_config = ConfigDict(extra='allow')

    response: Optional[RdpResponseStatus] = None
    status_code: int = Field(default=200, exclude=True)
    raw_body: str = Field(default="", exclude=True, repr=False)

    @property
    def status(self) -> Optional[str]:
        return self.response.status if self.response else None

    @property
    def is_success(self) -> bool:
        """Status equals 'success', case-insensitively."""
        return bool(self.status) and self.status.lower() == RdpDefaults.SUCCESS_STATUS

    def summary(self) -> Dict[str, Any]:
        return {'status_code': self.status_code, 'status': self.status}

from datetime import datetime
from typing import Optional

from pydantic import Field

from api.models.common_schemas import CamelModel


class SendLinkRequest(CamelModel):
    """Request body for emailing a profile form link."""
    recipient_email: Optional[str] = Field(None, description="Address to send the link to (required)")
    sender_name: Optional[str] = Field(None, description="Shown as 'From' in the email body")
    message: Optional[str] = Field(None, description="Personal note shown in the email body")


class SendLinkResponse(CamelModel):
    success: bool = True
    message: str = "Profile link sent successfully"
    token: str = Field(..., description="Issued access token")
    expires_at: datetime

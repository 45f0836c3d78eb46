from datetime import datetime
from typing import Optional

from pydantic import Field

from api.models.common_schemas import CamelModel


class TokenStatusResponse(CamelModel):
    """Validity of an access token. Invalid tokens carry a reason message instead of details."""
    valid: bool
    message: Optional[str] = Field(None, description="Reason the token is not valid")
    expires_at: Optional[datetime] = None
    recipient_email: Optional[str] = None

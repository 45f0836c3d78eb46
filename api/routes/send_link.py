"""
Link API Routes - issue an access token and email the profile form link.

Endpoints:
- POST /send-upload-link - Issue token and send invitation email
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import get_email_service, get_settings, get_token_registry
from api.errors import internal_error
from api.models.common_schemas import ErrorResponse
from api.models.link_schemas import SendLinkRequest, SendLinkResponse
from config.settings import Settings
from services.email_service import EmailService
from services.token_registry import TokenRegistry
from utils.url_builder import build_form_url, build_submit_url, resolve_base_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Links"])


@router.post(
    "/send-upload-link",
    response_model=SendLinkResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Recipient email missing or malformed"},
        500: {"model": ErrorResponse, "description": "Email could not be sent"},
    },
)
def send_upload_link(
    payload: SendLinkRequest,
    request: Request,
    registry: TokenRegistry = Depends(get_token_registry),
    email_service: EmailService = Depends(get_email_service),
    settings: Settings = Depends(get_settings),
):
    """
    Issue a 24-hour access token for a recipient and email them the form link.

    The email carries a link to `GET /profile/{token}` and, when enabled,
    an AMP form that posts straight to `/api/update-profile`.
    """
    recipient_email = (payload.recipient_email or "").strip()
    if not recipient_email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Recipient email is required")
    if "@" not in recipient_email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Recipient email is invalid")

    record = registry.issue(recipient_email)
    base_url = resolve_base_url(settings.PUBLIC_BASE_URL, str(request.base_url))

    try:
        email_service.send_invitation(
            recipient_email=recipient_email,
            form_url=build_form_url(base_url, record.token),
            submit_url=build_submit_url(base_url),
            token=record.token,
            sender_name=payload.sender_name,
            message=payload.message,
        )
    except Exception as e:
        # The link never reached the recipient
        registry.evict(record.token)
        raise internal_error(e, settings, "Failed to send email")

    logger.info(f"Sent profile link to {recipient_email}")
    return SendLinkResponse(token=record.token, expires_at=record.expires_at)

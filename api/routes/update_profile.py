"""
Profile Submission Route - Thin Controller Layer.

Handles HTTP concerns (body parsing, token policy, status codes)
and delegates validation and persistence to ProfileService.

Endpoints:
- POST /api/update-profile - Create or overwrite the profile for a token
"""

import json
import logging
from typing import Optional

import pydantic
from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import get_profile_service, get_settings, get_token_registry
from api.errors import http_error, internal_error
from api.models.common_schemas import ErrorResponse
from api.models.profile_schemas import SubmissionSummary, UpdateProfileRequest, UpdateProfileResponse
from config.settings import Settings
from services.errors import (
    ProfileServiceError,
    TokenAlreadyUsedError,
    TokenExpiredError,
    TokenNotFoundError,
)
from services.profile_service import ProfileService
from services.token_registry import TokenRecord, TokenRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Profiles"])

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


# ============ DEPENDENCY INJECTION ============


async def read_submission(request: Request) -> UpdateProfileRequest:
    """
    Parse the submission body.

    The hosted form posts JSON; AMP email forms post form-encoded data.
    """
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            data = {key: value for key, value in form.items() if isinstance(value, str)}
        else:
            body = await request.body()
            data = json.loads(body) if body else {}
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid request body")

    if not isinstance(data, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid request body")

    try:
        return UpdateProfileRequest.model_validate(data)
    except pydantic.ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid request body")


def authorize_submission(token: str, registry: TokenRegistry, settings: Settings) -> Optional[TokenRecord]:
    """
    Apply the token policy for a submission.

    Returns:
        The live TokenRecord, or None when the submission is let through
        without one (test-prefixed token, or unregistered tokens allowed)

    Raises:
        TokenNotFoundError / TokenExpiredError: strict mode and the token is not live
        TokenAlreadyUsedError: single-use mode and the token already has a submission
    """
    if settings.TEST_TOKEN_PREFIX and token.startswith(settings.TEST_TOKEN_PREFIX):
        logger.info("Accepting submission for test token without registry check")
        return None

    try:
        record = registry.resolve(token)
    except (TokenNotFoundError, TokenExpiredError) as e:
        if settings.ALLOW_UNREGISTERED_TOKENS:
            logger.warning(f"Accepting submission for unregistered token: {e.message}")
            return None
        raise

    if settings.SINGLE_USE_TOKENS and record.used:
        raise TokenAlreadyUsedError("This link has already been used")

    return record


# ============ SUBMISSION ENDPOINT ============


@router.post(
    "/update-profile",
    response_model=UpdateProfileResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing token, full name or company status"},
        404: {"model": ErrorResponse, "description": "Unknown token (strict mode)"},
        409: {"model": ErrorResponse, "description": "Conflicting or repeated submission"},
        410: {"model": ErrorResponse, "description": "Expired token (strict mode)"},
    },
)
def update_profile(
    payload: UpdateProfileRequest = Depends(read_submission),
    service: ProfileService = Depends(get_profile_service),
    registry: TokenRegistry = Depends(get_token_registry),
    settings: Settings = Depends(get_settings),
):
    """
    Create or overwrite the profile attached to a token.

    Repeated submissions with the same token update the same profile;
    the latest submission wins. When the form omits `recipientEmail`,
    the address the token was issued for is used.
    """
    fields = payload.model_dump(by_alias=True)
    try:
        # Field errors take precedence over token errors
        service.validate(payload.token, fields)
        record = authorize_submission(payload.token.strip(), registry, settings)
        if record and not (payload.recipient_email or "").strip():
            fields["recipientEmail"] = record.recipient_email

        profile = service.submit(payload.token, fields)
        if record:
            registry.mark_used(record.token)
    except ProfileServiceError as e:
        raise http_error(e)
    except Exception as e:
        raise internal_error(e, settings, "Failed to submit profile information")

    return UpdateProfileResponse(
        profile_id=profile.id,
        timestamp=profile.submitted_at,
        data=SubmissionSummary(
            full_name=profile.full_name,
            company_status=profile.company_status,
            current_role=profile.current_position or "Not specified",
            company=profile.company_name or "Not specified",
        ),
    )

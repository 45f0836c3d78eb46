"""
Profile Service - Business Logic Layer.

Owns profile submission and retrieval:
- Validation of required fields (token, full name, company status)
- Normalization of form fields into the stored profile schema
- Upsert keyed on access token (one profile per token)
- Newest-first listing and lookup by profile id

Token validity is not checked here; the API layer decides whether a
submission is allowed before calling submit().
"""

import logging
import math
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlmodel import Session

from models.profile import Profile
from repositories.profile_repository import ProfileRepository
from services.errors import (
    ProfileConflictError,
    StoreUnavailableError,
    ValidationError,
)
from utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)

COMPANY_STATUSES = ("yes", "no")


class ProfileFields(BaseModel):
    """Validated, normalized submission ready to be written to a Profile row."""

    token: str
    full_name: str
    email: str = ""
    company_status: str
    current_position: str = ""
    company_name: str = ""
    experience: str = ""
    skills: str = ""
    email_sent_to: str = ""


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def format_experience(years: Any) -> str:
    """
    Turn the submitted years of experience into the stored display string.

    The field is free text: numbers are tidied, anything else is kept as typed.

    Examples:
        - format_experience("5") -> "5 years"
        - format_experience(2.5) -> "2.5 years"
        - format_experience("3-5") -> "3-5 years"
        - format_experience("") -> ""
    """
    raw = _text(years)
    if not raw:
        return ""
    try:
        number = float(raw)
    except ValueError:
        return f"{raw} years"
    if not math.isfinite(number):
        return f"{raw} years"
    if number.is_integer():
        return f"{int(number)} years"
    return f"{number:g} years"


def validate_submission(token: Any, fields: Mapping[str, Any]) -> ProfileFields:
    """
    Check required fields in order and normalize the rest.

    Args:
        token: Access token the submission was made with
        fields: Raw form fields (camelCase keys as posted by the form)

    Returns:
        ProfileFields

    Raises:
        ValidationError: first failing rule wins
    """
    token = _text(token)
    if not token:
        raise ValidationError("Submission token is required")

    full_name = _text(fields.get("fullName"))
    if not full_name:
        raise ValidationError("Full name is required")

    company_status = _text(fields.get("companyStatus")).lower()
    if not company_status:
        raise ValidationError("Company status is required")
    if company_status not in COMPANY_STATUSES:
        raise ValidationError("Company status must be 'yes' or 'no'")

    recipient_email = _text(fields.get("recipientEmail")).lower()

    return ProfileFields(
        token=token,
        full_name=full_name,
        email=recipient_email,
        company_status=company_status,
        current_position=_text(fields.get("currentRole")),
        company_name=_text(fields.get("companyName")),
        experience=format_experience(fields.get("experienceYears")),
        skills=_text(fields.get("newSkills")),
        email_sent_to=recipient_email,
    )


class ProfileService:
    """
    Application service for profile submissions.

    Responsibilities:
    - Validate and normalize submitted form fields
    - Create the profile on first submission, overwrite it afterwards
    - Keep the one-profile-per-token invariant under concurrent submissions
    """

    def __init__(self, db_session: Session, clock: Clock = utc_now):
        self.db = db_session
        self.clock = clock
        self.profile_repo = ProfileRepository(db_session)

    # ============ SUBMISSION ============

    def validate(self, token: Any, fields: Mapping[str, Any]) -> ProfileFields:
        return validate_submission(token, fields)

    def submit(self, token: Any, fields: Mapping[str, Any]) -> Profile:
        """
        Upsert the profile for a token.

        Args:
            token: Access token the form was opened with
            fields: Raw form fields

        Returns:
            The stored Profile (new or updated)

        Raises:
            ValidationError: missing/invalid required fields; nothing is stored
            ProfileConflictError: a concurrent insert could not be reconciled
            StoreUnavailableError: the database could not be reached
        """
        submission = self.validate(token, fields)
        now = self.clock()

        try:
            existing = self.profile_repo.get_by_token(submission.token)
            if existing:
                profile = self._overwrite(existing, submission, now)
                logger.info(f"Updated profile {profile.id} for token {_mask(submission.token)}")
                return profile

            profile = Profile(token=submission.token, submitted_at=now, updated_at=now)
            self._apply(profile, submission)
            try:
                profile = self.profile_repo.create(profile)
            except IntegrityError:
                # Another request inserted a profile for this token first
                self.db.rollback()
                winner = self.profile_repo.get_by_token(submission.token)
                if winner is None:
                    raise ProfileConflictError("Profile submission conflicted with another request")
                profile = self._overwrite(winner, submission, now)
                logger.info(f"Merged racing submission into profile {profile.id}")
                return profile

            logger.info(f"Created profile {profile.id} for token {_mask(submission.token)}")
            return profile
        except OperationalError as e:
            self.db.rollback()
            logger.error(f"Profile store unavailable: {e}")
            raise StoreUnavailableError("Profile store is unavailable")

    def _overwrite(self, profile: Profile, submission: ProfileFields, now) -> Profile:
        self._apply(profile, submission)
        profile.updated_at = now
        return self.profile_repo.update(profile)

    @staticmethod
    def _apply(profile: Profile, submission: ProfileFields) -> None:
        """Full overwrite of every mutable field, not a merge."""
        profile.full_name = submission.full_name
        profile.email = submission.email
        profile.phone = ""
        profile.address = ""
        profile.current_position = submission.current_position
        profile.company_name = submission.company_name
        profile.company_status = submission.company_status
        profile.experience = submission.experience
        profile.skills = submission.skills
        profile.education = ""
        profile.achievements = ""
        profile.goals = ""
        profile.email_sent_to = submission.email_sent_to

    # ============ QUERIES ============

    def list_profiles(self) -> List[Profile]:
        """All profiles, most recently submitted first."""
        return self.profile_repo.list_recent()

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        return self.profile_repo.get_by_id(profile_id)

    def get_by_token(self, token: str) -> Optional[Profile]:
        return self.profile_repo.get_by_token(token)


def _mask(token: str) -> str:
    return f"{token[:6]}..." if len(token) > 6 else token

"""
Profile model for storing submitted profile details.

One row per access token: the token column is unique so that concurrent
submissions for the same link can never produce two profiles.
"""

from datetime import datetime
from typing import Any, Dict
from uuid import uuid4

import sqlalchemy as sa
from sqlmodel import SQLModel, Field


class Profile(SQLModel, table=True):
    """
    A recipient's submitted personal and professional details.

    Attributes:
        id: Profile identifier, allocated on first submission and stable afterwards
        token: Access token that authorized the submission (unique)
        full_name, email, phone, address: personal info
        current_position, company_name, company_status, experience, skills: professional info
        education, achievements, goals: additional info (reserved)
        email_sent_to: Address the originating link was sent to
        submitted_at: First submission time
        updated_at: Most recent submission time
    """

    __tablename__ = "profiles"
    __table_args__ = (
        sa.Index("ix_profiles_email_sent_to_submitted_at", "email_sent_to", "submitted_at"),
    )

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    token: str = Field(index=True, nullable=False, sa_column_kwargs={"unique": True})

    # Personal info
    full_name: str = Field(nullable=False)
    email: str = Field(default="")
    phone: str = Field(default="")
    address: str = Field(default="")

    # Professional info
    current_position: str = Field(default="")
    company_name: str = Field(default="")
    company_status: str = Field(default="", description="'yes', 'no' or empty")
    experience: str = Field(default="", description="Display string, e.g. '5 years'")
    skills: str = Field(default="")

    # Additional info (not collected by the current forms)
    education: str = Field(default="")
    achievements: str = Field(default="")
    goals: str = Field(default="")

    email_sent_to: str = Field(default="")
    # Plain DateTime columns: timestamps are naive UTC from utils.clock
    submitted_at: datetime = Field(sa_column=sa.Column(sa.DateTime(), nullable=False, index=True))
    updated_at: datetime = Field(sa_column=sa.Column(sa.DateTime(), nullable=False))

    def to_document(self) -> Dict[str, Any]:
        """Nested representation used by the listing API."""
        return {
            "profile_id": self.id,
            "token": self.token,
            "personal_info": {
                "full_name": self.full_name,
                "email": self.email,
                "phone": self.phone,
                "address": self.address,
            },
            "professional_info": {
                "current_position": self.current_position,
                "company_name": self.company_name,
                "company_status": self.company_status,
                "experience": self.experience,
                "skills": self.skills,
            },
            "additional_info": {
                "education": self.education,
                "achievements": self.achievements,
                "goals": self.goals,
            },
            "email_sent_to": self.email_sent_to,
            "submitted_at": self.submitted_at,
            "updated_at": self.updated_at,
        }

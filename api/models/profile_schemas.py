from datetime import datetime
from typing import List, Optional, Union

from pydantic import ConfigDict, Field

from api.models.common_schemas import CamelModel
from models.profile import Profile


# ============ SUBMISSION ============


class UpdateProfileRequest(CamelModel):
    """
    Profile form submission (JSON or form-encoded).

    Every field is optional at the schema level; required-field rules are
    enforced by ProfileService so their order and messages stay fixed.
    """
    model_config = ConfigDict(extra="ignore")

    token: Optional[str] = None
    recipient_email: Optional[str] = None
    full_name: Optional[str] = None
    company_status: Optional[str] = None
    new_skills: Optional[str] = None
    current_role: Optional[str] = None
    company_name: Optional[str] = None
    experience_years: Optional[Union[int, float, str]] = None


class SubmissionSummary(CamelModel):
    full_name: str
    company_status: str
    current_role: str
    company: str


class UpdateProfileResponse(CamelModel):
    success: bool = True
    message: str = "Profile information submitted successfully"
    profile_id: str
    timestamp: datetime = Field(..., description="When the profile was first submitted")
    data: SubmissionSummary


# ============ PROFILE DOCUMENT ============


class PersonalInfo(CamelModel):
    full_name: str
    email: str = ""
    phone: str = ""
    address: str = ""


class ProfessionalInfo(CamelModel):
    current_position: str = ""
    company_name: str = ""
    company_status: str = ""
    experience: str = ""
    skills: str = ""


class AdditionalInfo(CamelModel):
    education: str = ""
    achievements: str = ""
    goals: str = ""


class ProfileDocument(CamelModel):
    profile_id: str
    token: str
    personal_info: PersonalInfo
    professional_info: ProfessionalInfo
    additional_info: AdditionalInfo
    email_sent_to: str = ""
    submitted_at: datetime
    updated_at: datetime

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileDocument":
        return cls.model_validate(profile.to_document())


class ProfileListResponse(CamelModel):
    success: bool = True
    count: int
    profiles: List[ProfileDocument]


class ProfileDetailResponse(CamelModel):
    success: bool = True
    profile: ProfileDocument

from fastapi import APIRouter, Depends

from api.dependencies import get_profile_service, get_settings
from api.errors import http_error, internal_error
from api.models.common_schemas import ErrorResponse
from api.models.profile_schemas import ProfileDetailResponse, ProfileDocument, ProfileListResponse
from config.settings import Settings
from services.errors import ProfileNotFoundError
from services.profile_service import ProfileService

router = APIRouter(prefix="/api/profiles", tags=["Profiles"])


@router.get("", response_model=ProfileListResponse)
def list_profiles(
    service: ProfileService = Depends(get_profile_service),
    settings: Settings = Depends(get_settings),
):
    """All submitted profiles, most recent first. Not paginated."""
    try:
        profiles = [ProfileDocument.from_profile(p) for p in service.list_profiles()]
    except Exception as e:
        raise internal_error(e, settings, "Failed to load profiles")
    return ProfileListResponse(count=len(profiles), profiles=profiles)


@router.get("/{profile_id}", response_model=ProfileDetailResponse, responses={404: {"model": ErrorResponse}})
def get_profile(profile_id: str, service: ProfileService = Depends(get_profile_service)):
    profile = service.get_by_id(profile_id)
    if not profile:
        raise http_error(ProfileNotFoundError("Profile not found"))
    return ProfileDetailResponse(profile=ProfileDocument.from_profile(profile))

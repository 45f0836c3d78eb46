from models.profile import Profile
from models.access_token import AccessToken

__all__ = [
    "Profile",
    "AccessToken",
]

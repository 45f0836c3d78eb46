"""
Function-per-route deployment.

Each endpoint is exposed as its own ASGI app so it can be deployed as an
independent serverless function. Function instances share no memory, so
tokens always go through the database store here regardless of TOKEN_STORE.

Usage (one function per app):
    uvicorn api.serverless:send_upload_link_app
    uvicorn api.serverless:update_profile_app
"""

from fastapi import APIRouter, FastAPI

from api.main import create_app
from api.routes.send_link import router as send_link_router
from api.routes.profile_form import router as profile_form_router
from api.routes.update_profile import router as update_profile_router
from api.routes.profiles import router as profiles_router
from api.routes.status import router as status_router
from config.settings import Settings, settings as default_settings


def function_settings(settings: Settings = default_settings) -> Settings:
    return settings.model_copy(update={"TOKEN_STORE": "database"})


def create_function_app(router: APIRouter, name: str, settings: Settings = default_settings) -> FastAPI:
    """Single-route app with database-backed token state."""
    return create_app(settings=function_settings(settings), routers=[router], title=f"Profile Collection: {name}")


send_upload_link_app = create_function_app(send_link_router, "send-upload-link")
profile_form_app = create_function_app(profile_form_router, "profile")
update_profile_app = create_function_app(update_profile_router, "update-profile")
profiles_app = create_function_app(profiles_router, "profiles")
status_app = create_function_app(status_router, "status")

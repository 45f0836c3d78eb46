import logging
from contextlib import asynccontextmanager
from typing import Iterable, Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import build_token_registry
from api.routes.send_link import router as send_link_router
from api.routes.profile_form import router as profile_form_router
from api.routes.update_profile import router as update_profile_router
from api.routes.profiles import router as profiles_router
from api.routes.status import router as status_router
from config.settings import Settings, settings as default_settings
from services.email_service import EmailService
from services.token_registry import TokenRegistry
from utils.clock import Clock, utc_now
from utils.database import init_db

logger = logging.getLogger(__name__)

DESCRIPTION = """
Collects profile details from recipients invited by email.

## Flow

1. **Invite** → `POST /send-upload-link` issues a 24-hour token and emails a link (plus an AMP form)
2. **Open** → `GET /profile/{token}` serves the form (404 unknown link, 410 expired link)
3. **Submit** → `POST /api/update-profile` creates the profile, or overwrites it on resubmission
4. **Review** → `GET /api/profiles` lists submissions, newest first

One profile is kept per token: resubmitting with the same link updates it in place.
"""

tags_metadata = [
    {
        "name": "Health",
        "description": "Health check endpoints.",
    },
    {
        "name": "Links",
        "description": "Issue access tokens and email profile form links.",
    },
    {
        "name": "Tokens",
        "description": "Token status and the hosted profile form.",
    },
    {
        "name": "Profiles",
        "description": "Submit, list and fetch profiles.",
    },
]

ALL_ROUTERS = (
    send_link_router,
    profile_form_router,
    update_profile_router,
    profiles_router,
    status_router,
)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    token_registry: Optional[TokenRegistry] = None,
    email_service: Optional[EmailService] = None,
    clock: Clock = utc_now,
    routers: Iterable[APIRouter] = ALL_ROUTERS,
    title: str = "Profile Collection API",
) -> FastAPI:
    """
    Build an application instance.

    Args:
        settings: Configuration (defaults to environment settings)
        token_registry: Registry to share across requests (built from settings if omitted)
        email_service: Invitation sender (built from settings if omitted)
        clock: Time source for token expiry and profile timestamps
        routers: Route groups to mount; the function apps mount one each
        title: OpenAPI title
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.AUTO_CREATE_TABLES:
            init_db()
        yield

    app = FastAPI(
        title=title,
        description=DESCRIPTION,
        version="1.0.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.clock = clock
    app.state.token_registry = token_registry or build_token_registry(settings, clock)
    app.state.email_service = email_service or EmailService(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/ping", tags=["Health"])
    def ping():
        """Simple ping endpoint to check if API is responding."""
        return {"message": "pong"}

    @app.get("/health", tags=["Health"])
    def health():
        """Health check endpoint with basic status information."""
        return {
            "status": "healthy",
            "service": title,
            "version": "1.0.0",
            "token_store": settings.TOKEN_STORE,
        }

    for router in routers:
        app.include_router(router)

    return app


configure_logging(default_settings)

# Stateful long-running server: tokens live in this process unless TOKEN_STORE=database
app = create_app()


@app.get("/", tags=["Health"])
def root():
    """Root endpoint with API information and documentation links"""
    return {
        "message": "Welcome to the Profile Collection API",
        "version": "1.0.0",
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "endpoints": {
            "send_link": "/send-upload-link",
            "profile_form": "/profile/{token}",
            "submit": "/api/update-profile",
            "profiles": "/api/profiles",
            "status": "/status/{token}",
            "health": "/health",
        }
    }

"""
Profile Form Route - serves the hosted form behind an emailed link.

Endpoints:
- GET /profile/{token} - Form page (404 unknown token, 410 expired token)
"""

import html
from functools import lru_cache
from pathlib import Path
from string import Template

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse

from api.dependencies import get_settings, get_token_registry
from config.settings import Settings
from services.errors import TokenExpiredError, TokenNotFoundError
from services.token_registry import TokenRegistry
from utils.url_builder import build_submit_url, resolve_base_url

TEMPLATE_PATH = Path(__file__).resolve().parent.parent / "templates" / "profile_form.html"

router = APIRouter(tags=["Tokens"])


@lru_cache()
def _load_template() -> Template:
    return Template(TEMPLATE_PATH.read_text(encoding="utf-8"))


def render_profile_form(token: str, recipient_email: str, expires_at: str, submit_url: str) -> str:
    return _load_template().safe_substitute(
        token=html.escape(token, quote=True),
        recipient_email=html.escape(recipient_email, quote=True),
        expires_at=html.escape(expires_at),
        submit_url=html.escape(submit_url, quote=True),
    )


@router.get("/profile/{token}", response_class=HTMLResponse)
def profile_form(
    token: str,
    request: Request,
    registry: TokenRegistry = Depends(get_token_registry),
    settings: Settings = Depends(get_settings),
):
    try:
        record = registry.resolve(token)
    except TokenNotFoundError:
        return PlainTextResponse("Invalid or expired profile link", status_code=status.HTTP_404_NOT_FOUND)
    except TokenExpiredError:
        return PlainTextResponse("Profile link has expired", status_code=status.HTTP_410_GONE)

    base_url = resolve_base_url(settings.PUBLIC_BASE_URL, str(request.base_url))
    return HTMLResponse(
        render_profile_form(
            token=record.token,
            recipient_email=record.recipient_email,
            expires_at=record.expires_at.strftime("%Y-%m-%d %H:%M"),
            submit_url=build_submit_url(base_url),
        )
    )

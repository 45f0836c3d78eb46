"""URL building utilities for links embedded in invitation emails."""

from typing import Optional
from urllib.parse import quote, urlparse, urlunparse


def normalize_base_url(base_url: str) -> str:
    """
    Normalize a base URL to scheme://host[:port][/path] without a trailing slash.

    Args:
        base_url: Raw base URL (may lack a scheme or carry a trailing slash)

    Returns:
        Clean base URL

    Examples:
        - normalize_base_url('https://profiles.example.com/') -> 'https://profiles.example.com'
        - normalize_base_url('localhost:8000') -> 'http://localhost:8000'
        - normalize_base_url('https://example.com/app/') -> 'https://example.com/app'
    """
    base_url = base_url.strip()
    if "://" not in base_url:
        base_url = f"http://{base_url}"

    parsed = urlparse(base_url)
    return urlunparse((parsed.scheme, parsed.netloc, parsed.path.rstrip("/"), "", "", ""))


def resolve_base_url(public_base_url: Optional[str], request_base_url: str) -> str:
    """Prefer the configured public URL; fall back to the URL the request arrived on."""
    return normalize_base_url(public_base_url or request_base_url)


def build_form_url(base_url: str, token: str) -> str:
    """Link to the hosted profile form, e.g. https://host/profile/<token>."""
    return f"{normalize_base_url(base_url)}/profile/{quote(token, safe='')}"


def build_submit_url(base_url: str) -> str:
    """Endpoint the profile form (web or AMP) posts to."""
    return f"{normalize_base_url(base_url)}/api/update-profile"

from fastapi import APIRouter, Depends

from api.dependencies import get_token_registry
from api.models.token_schemas import TokenStatusResponse
from services.errors import TokenExpiredError, TokenNotFoundError
from services.token_registry import TokenRegistry

router = APIRouter(tags=["Tokens"])


@router.get("/status/{token}", response_model=TokenStatusResponse, response_model_exclude_none=True)
def token_status(token: str, registry: TokenRegistry = Depends(get_token_registry)):
    """Report whether a token is still valid. Always 200; expired tokens are evicted."""
    try:
        record = registry.resolve(token)
    except TokenNotFoundError:
        return TokenStatusResponse(valid=False, message="Invalid token")
    except TokenExpiredError:
        return TokenStatusResponse(valid=False, message="Token expired")

    return TokenStatusResponse(
        valid=True,
        expires_at=record.expires_at,
        recipient_email=record.recipient_email,
    )

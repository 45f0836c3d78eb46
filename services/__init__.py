"""
Services module - Business Logic Layer.

Contains application services that orchestrate business logic,
sitting between the API layer (routes) and the data layer (repositories).

Services handle:
- Business rule validation
- Access token issuance and expiry
- Profile upserts keyed on token
- Outbound invitation email

Usage:
    from services import ProfileService, TokenRegistry

    registry = TokenRegistry()
    record = registry.issue("alice@example.com")
    profile = ProfileService(db_session).submit(record.token, form_fields)
"""

from services.token_registry import TokenRegistry, TokenRecord, InMemoryTokenStore, SqlTokenStore
from services.profile_service import ProfileService
from services.email_service import EmailService

__all__ = [
    "TokenRegistry",
    "TokenRecord",
    "InMemoryTokenStore",
    "SqlTokenStore",
    "ProfileService",
    "EmailService",
]

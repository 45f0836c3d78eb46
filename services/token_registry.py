"""
Token Registry - issues and validates time-bounded access tokens.

A token gates access to one profile form. Tokens expire a fixed TTL after
issuance; expiry is checked lazily on access and expired records are evicted
at that moment. Nothing sweeps the store in the background.

Storage is pluggable through `TokenStore`:
- InMemoryTokenStore: lock-guarded dict for a single long-running process
- SqlTokenStore: `access_tokens` table for stateless deployments
"""

import logging
import secrets
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from pydantic import BaseModel
from sqlalchemy.engine import Engine
from sqlmodel import Session

from models.access_token import AccessToken
from repositories.access_token_repository import AccessTokenRepository
from services.errors import TokenExpiredError, TokenNotFoundError
from utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=24)


def generate_token() -> str:
    """Unguessable URL-safe token (256 bits of entropy)."""
    return secrets.token_urlsafe(32)


class TokenRecord(BaseModel):
    """An issued access token and its validity window."""

    token: str
    recipient_email: str
    created_at: datetime
    expires_at: datetime
    used: bool = False

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


# ============ STORES ============


class TokenStore(ABC):
    """Keyed storage for token records. Implementations must be safe under concurrent access."""

    @abstractmethod
    def save(self, record: TokenRecord) -> None:
        """Insert or replace the record for record.token."""

    @abstractmethod
    def get(self, token: str) -> Optional[TokenRecord]:
        """Return the stored record, or None."""

    @abstractmethod
    def delete(self, token: str) -> None:
        """Remove the record if present."""


class InMemoryTokenStore(TokenStore):
    """Process-local store. State is lost on restart."""

    def __init__(self):
        self._records: Dict[str, TokenRecord] = {}
        self._lock = threading.Lock()

    def save(self, record: TokenRecord) -> None:
        with self._lock:
            self._records[record.token] = record.model_copy()

    def get(self, token: str) -> Optional[TokenRecord]:
        with self._lock:
            record = self._records.get(token)
            return record.model_copy() if record else None

    def delete(self, token: str) -> None:
        with self._lock:
            self._records.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class SqlTokenStore(TokenStore):
    """Database-backed store; each operation runs in its own short session."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def save(self, record: TokenRecord) -> None:
        with Session(self.engine) as session:
            AccessTokenRepository(session).save(AccessToken(**record.model_dump()))

    def get(self, token: str) -> Optional[TokenRecord]:
        with Session(self.engine) as session:
            row = AccessTokenRepository(session).get_by_token(token)
            if not row:
                return None
            return TokenRecord(
                token=row.token,
                recipient_email=row.recipient_email,
                created_at=row.created_at,
                expires_at=row.expires_at,
                used=row.used,
            )

    def delete(self, token: str) -> None:
        with Session(self.engine) as session:
            AccessTokenRepository(session).delete_by_id(token)


# ============ REGISTRY ============


class TokenRegistry:
    """
    Issue, look up and expire access tokens.

    State machine per token: ISSUED stays ISSUED across submissions and
    becomes EXPIRED (evicted on the next access) once now > expires_at.
    """

    def __init__(
        self,
        store: Optional[TokenStore] = None,
        clock: Clock = utc_now,
        ttl: timedelta = DEFAULT_TTL,
        token_factory: Callable[[], str] = generate_token,
    ):
        self.store = store or InMemoryTokenStore()
        self.clock = clock
        self.ttl = ttl
        self.token_factory = token_factory

    def issue(self, recipient_email: str) -> TokenRecord:
        """
        Issue a new token for a recipient.

        Args:
            recipient_email: Address the link will be sent to

        Returns:
            The stored TokenRecord, expiring exactly one TTL after creation
        """
        now = self.clock()
        record = TokenRecord(
            token=self.token_factory(),
            recipient_email=recipient_email,
            created_at=now,
            expires_at=now + self.ttl,
            used=False,
        )
        self.store.save(record)
        logger.info(f"Issued token for {recipient_email}, expires at {record.expires_at.isoformat()}")
        return record

    def resolve(self, token: str) -> TokenRecord:
        """
        Return the live record for a token.

        Raises:
            TokenNotFoundError: token was never issued, or was already evicted
            TokenExpiredError: token expired; it is evicted by this call
        """
        record = self.store.get(token) if token else None
        if record is None:
            raise TokenNotFoundError("Invalid or expired link")

        if record.is_expired(self.clock()):
            self.store.delete(token)
            logger.info(f"Evicted expired token issued for {record.recipient_email}")
            raise TokenExpiredError("Link has expired")

        return record

    def lookup(self, token: str) -> Optional[TokenRecord]:
        """Like resolve(), but returns None for unknown and expired tokens alike."""
        try:
            return self.resolve(token)
        except (TokenNotFoundError, TokenExpiredError):
            return None

    def mark_used(self, token: str) -> None:
        """Flag a token as having a submission. A no-op for unknown tokens."""
        record = self.store.get(token)
        if record is None or record.used:
            return
        record.used = True
        self.store.save(record)

    def evict(self, token: str) -> None:
        self.store.delete(token)

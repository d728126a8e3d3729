"""Round sessions: signed tokens and a Redis-or-memory round store."""

import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any
from uuid import uuid4

import redis.asyncio as redis
from redis.exceptions import RedisError
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from config import config

logger = logging.getLogger(__name__)

# Fields of a stored session record
SESSION_KEY_ROUND = "round"
SESSION_KEY_CREATED_AT = "created_at"
SESSION_KEY_LAST_ACTIVITY = "last_activity"

RoundData = dict[str, Any]


class SessionSigner:
    """
    Issue and verify session tokens.

    A token is a fresh UUID signed with itsdangerous; it stops verifying
    once it is older than the session TTL.
    """

    def __init__(self, secret_key: str | None = None) -> None:
        self._serializer = URLSafeTimedSerializer(
            secret_key or config.security.secret_key,
            salt="round-session",
        )

    def issue(self) -> str:
        """Create a signed token for a new session."""
        return self._serializer.dumps(str(uuid4()))

    def verify(self, token: str, max_age: int | None = None) -> str | None:
        """
        Return the session ID inside ``token``.

        Args:
            token: Token previously returned by ``issue``
            max_age: Maximum token age in seconds (defaults to session_ttl)

        Returns:
            The session ID, or None for forged and expired tokens
        """
        try:
            return self._serializer.loads(token, max_age=max_age or config.session_ttl)
        except (BadSignature, SignatureExpired):
            return None


_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class RoundStore(ABC):
    """
    Keeps the serialized round of each session.

    Subclasses only move whole records; the record layout lives here.
    """

    @abstractmethod
    async def _read(self, session_id: str) -> dict[str, Any] | None:
        ...

    @abstractmethod
    async def _write(self, session_id: str, record: dict[str, Any], ttl: int) -> None:
        ...

    async def load_round(self, session_id: str) -> RoundData | None:
        """Return the stored round of a session, or None if there is none."""
        record = await self._read(session_id)
        if record is None:
            return None
        return record.get(SESSION_KEY_ROUND)

    async def save_round(self, session_id: str, round_data: RoundData) -> None:
        """Store a session's round and refresh the session TTL."""
        now = int(time.time())
        record = await self._read(session_id) or {SESSION_KEY_CREATED_AT: now}
        record[SESSION_KEY_ROUND] = round_data
        record[SESSION_KEY_LAST_ACTIVITY] = now
        await self._write(session_id, record, config.session_ttl)


class InMemoryRoundStore(RoundStore):
    """Process-local store for local play and tests."""

    def __init__(self) -> None:
        self._records: dict[str, tuple[dict[str, Any], float]] = {}

    async def _read(self, session_id: str) -> dict[str, Any] | None:
        record, expires_at = self._records.get(session_id, (None, 0.0))
        if record is not None and expires_at <= time.time():
            del self._records[session_id]
            return None
        return record

    async def _write(self, session_id: str, record: dict[str, Any], ttl: int) -> None:
        self._records[session_id] = (record, time.time() + ttl)


class RedisRoundStore(RoundStore):
    """Redis-backed store; expiry is left to Redis."""

    PREFIX = "blackjack:round:"

    def __init__(self, redis_client: redis.Redis) -> None:
        self._redis = redis_client

    async def _read(self, session_id: str) -> dict[str, Any] | None:
        raw = await self._redis.get(self.PREFIX + session_id)
        return None if raw is None else json.loads(raw)

    async def _write(self, session_id: str, record: dict[str, Any], ttl: int) -> None:
        await self._redis.setex(self.PREFIX + session_id, ttl, json.dumps(record))


_round_store: RoundStore | None = None


async def get_round_store() -> RoundStore:
    """Get or create the round store, preferring Redis when reachable."""
    global _round_store

    if _round_store is not None:
        return _round_store

    redis_client = redis.from_url(config.redis.url)
    try:
        await redis_client.ping()
    except (RedisError, OSError) as exc:
        logger.warning("Redis unavailable at %s (%s); using in-memory sessions", config.redis.url, exc)
        await redis_client.aclose()
        _round_store = InMemoryRoundStore()
    else:
        _round_store = RedisRoundStore(redis_client)
    return _round_store


def session_id_from_token(token: str) -> str | None:
    """Return the session ID of a valid token, None otherwise."""
    return get_session_signer().verify(token)

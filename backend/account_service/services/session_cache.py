import logging
from typing import Optional
from redis import Redis
from account_service.core.config import Settings
from account_service.schemas.user import UserResponse

logger = logging.getLogger(__name__)


class SessionCache:
    """Redis-backed token -> profile mapping.

    Keys are ``key_prefix + token`` and expire after ``ttl_seconds``; Redis
    handles expiry, nothing here renews or sweeps entries.
    """

    def __init__(self, client: Redis, key_prefix: str, ttl_seconds: int) -> None:
        self._client = client
        self._key_prefix = key_prefix
        self._ttl_seconds = ttl_seconds

    @classmethod
    def from_settings(cls, client: Redis, settings: Settings) -> "SessionCache":
        return cls(client, settings.USER_TOKEN_KEY_PREFIX, settings.user_token_ttl_seconds)

    def key_for(self, token: str) -> str:
        return f"{self._key_prefix}{token}"

    def set(self, token: str, profile: UserResponse) -> None:
        key = self.key_for(token)
        self._client.set(key, profile.model_dump_json(), ex=self._ttl_seconds)
        logger.debug(f"Stored session {key} (ttl={self._ttl_seconds}s)")

    def get(self, token: str) -> Optional[UserResponse]:
        raw = self._client.get(self.key_for(token))
        if raw is None:
            return None
        return UserResponse.model_validate_json(raw)

    def delete(self, token: str) -> bool:
        """Remove the session; returns whether a key was actually deleted"""
        return self._client.delete(self.key_for(token)) > 0

# Redis factory + durable token stores
import math
from typing import Optional

import redis
from pydantic import ValidationError

from claris_auth.config.settings import settings
from claris_auth.schemas.tokens import StoredToken
from claris_auth.utils.clock import now_millis

# singleton client for the token store

_token_redis = None

def get_token_redis() -> redis.Redis:
    global _token_redis
    if _token_redis is None:
        _token_redis = redis.Redis.from_url(settings.redis_url, decode_responses=True)
    return _token_redis


class RedisTokenStore:
    def __init__(self, client: redis.Redis, prefix: str = "token:", clock=now_millis):
        self.client = client
        self.prefix = prefix
        self.clock = clock

    def load(self, key: str) -> Optional[StoredToken]:
        cached = self.client.get(f"{self.prefix}{key}")
        if not cached:
            return None
        try:
            return StoredToken.model_validate_json(cached)
        except ValidationError:
            print(f">Unreadable token payload under {self.prefix}{key}, treating as cache miss.")
            return None

    def save(self, key: str, value: str, expires_at: int) -> None:
        ttl_seconds = max(1, math.ceil((expires_at - self.clock()) / 1000)) # redis expiry mirrors the token's
        body = StoredToken(value=value, expires_at=expires_at).model_dump_json()
        self.client.setex(f"{self.prefix}{key}", ttl_seconds, body)


class InMemoryTokenStore:
    def __init__(self):
        self.store: dict[str, StoredToken] = {}

    def load(self, key: str) -> Optional[StoredToken]:
        return self.store.get(key)

    def save(self, key: str, value: str, expires_at: int) -> None:
        self.store[key] = StoredToken(value=value, expires_at=expires_at)

"""
Two-tier token cache: Claris ID token (Cognito) -> FileMaker Data API session token.

Each tier keeps its token in process memory and in a durable store shared
between processes. Refreshes are single-flight per tier: callers that queue
behind an in-flight refresh reuse its result instead of authenticating again.
"""

import asyncio
from enum import Enum
from typing import Awaitable, Callable, Optional, Protocol, TypeVar

from pydantic import SecretStr

from claris_auth.core.cognito import CognitoSRPAuthenticator
from claris_auth.core.data_api import DataAPISessionClient
from claris_auth.core.exceptions import is_authorization_failure
from claris_auth.schemas.tokens import StoredToken, TierStatus, TokenResult
from claris_auth.utils.clock import now_millis

T = TypeVar("T")

ID_TOKEN_STORE_KEY = "CACHED_CLARIS_ID_TOKEN"
SESSION_TOKEN_STORE_KEY = "CACHED_FM_SESSION_TOKEN"


class Tier(str, Enum):
    IDENTITY = "identity"
    SESSION = "session"


class TokenStore(Protocol):
    def load(self, key: str) -> Optional[StoredToken]: ...

    def save(self, key: str, value: str, expires_at: int) -> None: ...


Refresher = Callable[[bool], Awaitable[TokenResult]]


class CachedTokenTier:
    def __init__(
        self,
        name: str,
        store_key: str,
        safety_margin_ms: int,
        refresh: Refresher,
        store: TokenStore,
        clock: Callable[[], int] = now_millis,
    ):
        self.name = name
        self.store_key = store_key
        self.safety_margin_ms = safety_margin_ms
        self.refresh = refresh
        self.store = store
        self.clock = clock

        self._cached: Optional[TokenResult] = None
        self._lock = asyncio.Lock()
        self._generation = 0 # bumped on every finished refresh attempt
        self._last_error: Optional[Exception] = None # outcome of the latest attempt, None on success
        self.refresh_count = 0

    def _memory_valid(self, now: int) -> bool:
        return self._cached is not None and now < self._cached.expires_at_epoch_millis

    def _adopt_stored(self, now: int) -> Optional[TokenResult]:
        stored = self.store.load(self.store_key)
        if stored is None:
            return None
        # durable copies must outlive the safety margin to be worth adopting
        if now < stored.expires_at - self.safety_margin_ms:
            print(f">Adopting {self.name} token from durable store.")
            self._cached = TokenResult(token=stored.value, expires_at_epoch_millis=stored.expires_at)
            return self._cached
        return None

    async def get_result(self, force_refresh: bool = False) -> TokenResult:
        if not force_refresh and self._memory_valid(self.clock()):
            return self._cached

        generation = self._generation
        async with self._lock:
            now = self.clock()
            if self._generation != generation:
                # another caller refreshed while we waited; share its outcome
                if self._last_error is not None:
                    raise self._last_error
                if self._memory_valid(now):
                    return self._cached

            if not force_refresh:
                if self._memory_valid(now):
                    return self._cached
                adopted = self._adopt_stored(now)
                if adopted is not None:
                    return adopted

            print(f">Refreshing {self.name} token{' (forced)' if force_refresh else ''}.")
            try:
                result = await self.refresh(force_refresh)
            except Exception as e:
                print(f">Refreshing {self.name} token failed: {type(e).__name__}")
                self._last_error = e
                self._generation += 1
                raise

            self._last_error = None
            self._cached = result
            self._generation += 1
            self.refresh_count += 1
            self.store.save(self.store_key, result.token, result.expires_at_epoch_millis)
            print(f">Cached {self.name} token until {result.expires_at_epoch_millis}.")
            return result

    async def get(self, force_refresh: bool = False) -> str:
        result = await self.get_result(force_refresh)
        return result.token

    def status(self) -> TierStatus:
        if self._cached is None:
            return TierStatus()
        return TierStatus(
            cached=self._memory_valid(self.clock()),
            expires_at_epoch_millis=self._cached.expires_at_epoch_millis,
        )


class TokenManager:
    """
    Owns both tiers. Build one per process and pass it to whatever needs tokens.
    """

    def __init__(
        self,
        authenticator: CognitoSRPAuthenticator,
        session_client: DataAPISessionClient,
        store: TokenStore,
        *,
        username: str,
        password: SecretStr,
        pool_name: str,
        id_token_safety_margin_seconds: int = 5 * 60,
        session_safety_margin_seconds: int = 2 * 60,
        clock: Callable[[], int] = now_millis,
    ):
        self.authenticator = authenticator
        self.session_client = session_client
        self.username = username
        self._password = password
        self.pool_name = pool_name

        self.identity = CachedTokenTier(
            Tier.IDENTITY.value,
            ID_TOKEN_STORE_KEY,
            id_token_safety_margin_seconds * 1000,
            self._refresh_identity,
            store,
            clock,
        )
        self.session = CachedTokenTier(
            Tier.SESSION.value,
            SESSION_TOKEN_STORE_KEY,
            session_safety_margin_seconds * 1000,
            self._refresh_session,
            store,
            clock,
        )

    async def _refresh_identity(self, force_refresh: bool) -> TokenResult:
        return await self.authenticator.authenticate(
            self.username,
            self._password.get_secret_value(),
            self.pool_name,
        )

    async def _refresh_session(self, force_refresh: bool) -> TokenResult:
        # a forced session refresh re-authenticates as well
        id_token = await self.identity.get(force_refresh)
        return await self.session_client.create_session(id_token)

    def tier(self, tier: Tier) -> CachedTokenTier:
        return self.identity if Tier(tier) == Tier.IDENTITY else self.session

    async def get_result(self, tier: Tier = Tier.SESSION, force_refresh: bool = False) -> TokenResult:
        return await self.tier(tier).get_result(force_refresh)

    async def get(self, tier: Tier = Tier.SESSION, force_refresh: bool = False) -> str:
        return await self.tier(tier).get(force_refresh)

    async def with_auto_retry(
        self,
        action: Callable[[str], Awaitable[T]],
        tier: Tier = Tier.SESSION,
    ) -> T:
        """
        Run action(token); on a 401-class failure refresh once and run it again.

        The second attempt's failure propagates as-is.
        """
        token = await self.get(tier)
        try:
            return await action(token)
        except Exception as e:
            if not is_authorization_failure(e):
                raise
            print(f">Authorization failure with cached {Tier(tier).value} token, refreshing and retrying once.")

        fresh_token = await self.get(tier, force_refresh=True)
        return await action(fresh_token)


def build_token_manager(config, http_client, store: TokenStore) -> TokenManager:
    """Wire both tiers from Settings."""
    authenticator = CognitoSRPAuthenticator(
        http_client,
        config.cognito_url,
        config.cognito_client_id,
        user_agent=config.user_agent,
        default_expires_in=config.default_expires_in_seconds,
    )
    session_client = DataAPISessionClient(
        http_client,
        config.fm_host,
        config.fm_database,
        api_version=config.fm_api_version,
        session_ttl_seconds=config.session_token_ttl_seconds,
    )
    return TokenManager(
        authenticator,
        session_client,
        store,
        username=config.fm_username,
        password=config.fm_password,
        pool_name=config.pool_name,
        id_token_safety_margin_seconds=config.id_token_safety_margin_seconds,
        session_safety_margin_seconds=config.session_safety_margin_seconds,
    )

# FileMaker Data API: exchange a Claris ID token for a session token
from datetime import datetime
from typing import Callable

import httpx
from pydantic import ValidationError

from claris_auth.utils.clock import to_epoch_millis, utc_now
from claris_auth.core.exceptions import ConfigurationError, DataAPIError
from claris_auth.schemas.tokens import DataAPISessionResponse, TokenResult

SESSION_TOKEN_TTL_SECONDS = 14 * 60 # Data API sessions idle out after 15 minutes


class DataAPISessionClient:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        host: str,
        database: str,
        *,
        api_version: str = "vLatest",
        session_ttl_seconds: int = SESSION_TOKEN_TTL_SECONDS,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.http_client = http_client
        self.host = host
        self.database = database
        self.api_version = api_version
        self.session_ttl_seconds = session_ttl_seconds
        self.clock = clock

    @property
    def sessions_url(self) -> str:
        return f"https://{self.host}/fmi/data/{self.api_version}/databases/{self.database}/sessions"

    async def create_session(self, id_token: str) -> TokenResult:
        if not id_token:
            raise ConfigurationError("id_token must be a non-empty string")
        if not self.host or not self.database:
            raise ConfigurationError("FileMaker host and database must be configured")

        print(">Requesting FileMaker Data API session.")
        try:
            r = await self.http_client.post(
                self.sessions_url,
                json={},
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"FMID {id_token}",
                },
            )
        except httpx.HTTPError as e:
            print(f">Data API session transport failure: {type(e).__name__}")
            raise DataAPIError(None, str(e) or type(e).__name__) from e

        if not r.is_success:
            print(f">Data API session failed with status {r.status_code}")
            raise DataAPIError(r.status_code, r.text)

        try:
            body = DataAPISessionResponse.model_validate_json(r.content)
        except ValidationError as e:
            raise DataAPIError(r.status_code, f"unexpected response body: {r.text[:200]}") from e

        expires_at = to_epoch_millis(self.clock()) + self.session_ttl_seconds * 1000
        return TokenResult(token=body.response.token, expires_at_epoch_millis=expires_at)

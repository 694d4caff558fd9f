from datetime import datetime
from typing import Callable, Optional

import httpx
from pydantic import ValidationError

from claris_auth.core.challenge import compute_claim_signature, get_date_string
from claris_auth.core.exceptions import AuthChallengeError, ConfigurationError, IdentityProviderError
from claris_auth.core.srp_client import AuthenticationHelper
from claris_auth.schemas.cognito import (
    PASSWORD_VERIFIER,
    AuthenticationResultType,
    InitiateAuthRequest,
    InitiateAuthResponse,
    PasswordVerifierParameters,
    PasswordVerifierResponses,
    RespondToAuthChallengeRequest,
    RespondToAuthChallengeResponse,
    SRPAuthParameters,
)
from claris_auth.schemas.tokens import TokenResult
from claris_auth.utils.clock import to_epoch_millis, utc_now

AMZ_JSON = "application/x-amz-json-1.1"
TARGET_PREFIX = "AWSCognitoIdentityProviderService"
INITIATE_AUTH = "InitiateAuth"
RESPOND_TO_AUTH_CHALLENGE = "RespondToAuthChallenge"
DEFAULT_EXPIRES_IN = 3600


class CognitoSRPAuthenticator:
    """
    Runs USER_SRP_AUTH against a Cognito user pool and returns the ID token.

    Two calls per attempt: InitiateAuth (send A, receive B/salt/secret block),
    then RespondToAuthChallenge (send the signed PASSWORD_VERIFIER claim).
    Nothing is retried here; a failed attempt is restarted by the caller with a
    new AuthenticationHelper.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        cognito_url: str,
        client_id: str,
        *,
        user_agent: Optional[str] = None,
        default_expires_in: int = DEFAULT_EXPIRES_IN,
        clock: Callable[[], datetime] = utc_now,
        helper_factory: Callable[[str], AuthenticationHelper] = AuthenticationHelper,
    ):
        self.http_client = http_client
        self.cognito_url = cognito_url
        self.client_id = client_id
        self.user_agent = user_agent
        self.default_expires_in = default_expires_in
        self.clock = clock
        self.helper_factory = helper_factory

    async def authenticate(self, username: str, password: str, pool_name: str) -> TokenResult:
        for name, value in (("username", username), ("password", password), ("pool_name", pool_name)):
            if not isinstance(value, str) or not value:
                raise ConfigurationError(f"{name} must be a non-empty string")

        helper = self.helper_factory(pool_name)
        helper.init()

        # CLIENT 1. InitiateAuth with A
        print(f">Starting SRP InitiateAuth for user {username}.")
        challenge = await self._initiate_auth(username, helper.get_large_a())

        # CLIENT 2. derive signing key from B + salt, sign the claim
        signing_key = helper.get_password_authentication_key(
            challenge.USER_ID_FOR_SRP,
            password,
            challenge.SRP_B,
            challenge.SALT,
        )
        timestamp = get_date_string(self.clock())
        signature = compute_claim_signature(
            signing_key,
            pool_name,
            challenge.USER_ID_FOR_SRP,
            challenge.SECRET_BLOCK,
            timestamp,
        )

        # CLIENT 3. RespondToAuthChallenge with the claim
        print(f">Responding to {PASSWORD_VERIFIER} challenge for SRP user {challenge.USER_ID_FOR_SRP}.")
        responses = PasswordVerifierResponses(
            USERNAME=challenge.USER_ID_FOR_SRP,
            PASSWORD_CLAIM_SECRET_BLOCK=challenge.SECRET_BLOCK,
            TIMESTAMP=timestamp,
            PASSWORD_CLAIM_SIGNATURE=signature,
        )
        result = await self._respond_to_auth_challenge(responses)

        expires_in = result.ExpiresIn or self.default_expires_in
        expires_at = to_epoch_millis(self.clock()) + expires_in * 1000
        print(f">Cognito authentication succeeded for user {username}, ID token valid for {expires_in}s.")
        return TokenResult(token=result.IdToken, expires_at_epoch_millis=expires_at)

    async def _initiate_auth(self, username: str, srp_a: str) -> PasswordVerifierParameters:
        request = InitiateAuthRequest(
            ClientId=self.client_id,
            AuthParameters=SRPAuthParameters(USERNAME=username, SRP_A=srp_a),
        )
        r = await self._post(INITIATE_AUTH, request.model_dump(mode="json"))
        data = self._parse(INITIATE_AUTH, r, InitiateAuthResponse)

        if data.ChallengeName and data.ChallengeName != PASSWORD_VERIFIER:
            print(">Initial Cognito Challenge:", data.ChallengeName)
            raise AuthChallengeError(
                f"Initial Auth Challenge required: {data.ChallengeName}",
                challenge_name=data.ChallengeName,
            )
        print(f">Cognito challenge received: {data.ChallengeName or PASSWORD_VERIFIER}")

        try:
            return PasswordVerifierParameters.model_validate(data.ChallengeParameters)
        except ValidationError as e:
            missing = sorted(str(err["loc"][0]) for err in e.errors())
            raise AuthChallengeError(
                f"{INITIATE_AUTH} returned incomplete challenge parameters, missing: {', '.join(missing)}",
                challenge_name=data.ChallengeName,
            ) from e

    async def _respond_to_auth_challenge(self, responses: PasswordVerifierResponses) -> AuthenticationResultType:
        request = RespondToAuthChallengeRequest(ClientId=self.client_id, ChallengeResponses=responses)
        r = await self._post(RESPOND_TO_AUTH_CHALLENGE, request.model_dump(mode="json"))
        data = self._parse(RESPOND_TO_AUTH_CHALLENGE, r, RespondToAuthChallengeResponse)

        if data.AuthenticationResult is None:
            print(">Cognito response missing AuthenticationResult, challenge:", data.ChallengeName)
            if data.ChallengeName:
                raise AuthChallengeError(
                    f"Auth Challenge required: {data.ChallengeName}. "
                    "Disable any additional interactive challenge (e.g. 2FA) for this service account.",
                    challenge_name=data.ChallengeName,
                )
            raise AuthChallengeError(
                f"Cognito Auth failed: AuthenticationResult missing. Response: {r.text}"
            )
        return data.AuthenticationResult

    async def _post(self, operation: str, payload: dict) -> httpx.Response:
        headers = {
            "Content-Type": AMZ_JSON,
            "X-Amz-Target": f"{TARGET_PREFIX}.{operation}",
        }
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        try:
            r = await self.http_client.post(self.cognito_url, json=payload, headers=headers)
        except httpx.HTTPError as e: # timeouts included
            print(f">{operation} transport failure: {type(e).__name__}")
            raise IdentityProviderError(operation, None, str(e) or type(e).__name__) from e

        if not r.is_success:
            print(f">{operation} failed with status {r.status_code}")
            raise IdentityProviderError(operation, r.status_code, r.text)
        return r

    @staticmethod
    def _parse(operation: str, r: httpx.Response, model):
        try:
            return model.model_validate_json(r.content)
        except ValidationError as e:
            raise IdentityProviderError(operation, r.status_code, f"unexpected response body: {r.text[:200]}") from e

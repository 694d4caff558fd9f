# errors raised by the Claris ID / Data API authentication flow

import httpx


class ClarisAuthError(Exception):
    pass


class ConfigurationError(ClarisAuthError, ValueError): # missing or empty credentials / endpoints
    pass


class SRPStateError(ClarisAuthError): # helper used out of order (before init(), or reused)
    pass


class SRPProtocolError(ClarisAuthError): # server values that would make the shared secret predictable
    pass


class AuthChallengeError(ClarisAuthError):
    def __init__(self, message: str, challenge_name: str | None = None):
        super().__init__(message)
        self.challenge_name = challenge_name


class IdentityProviderError(ClarisAuthError):
    def __init__(self, step: str, status: int | None, detail: str):
        super().__init__(f"{step} failed: {status if status is not None else 'no response'} - {detail}")
        self.step = step
        self.status = status


class DataAPIError(ClarisAuthError):
    def __init__(self, status: int | None, detail: str):
        super().__init__(f"FileMaker Data API session failed: {status if status is not None else 'no response'} - {detail}")
        self.status = status


def is_authorization_failure(error: BaseException) -> bool:
    # 401 from any layer: our own errors carry .status, httpx carries the response
    if getattr(error, "status", None) == 401:
        return True
    if isinstance(error, httpx.HTTPStatusError) and error.response.status_code == 401:
        return True
    return "401" in str(error)

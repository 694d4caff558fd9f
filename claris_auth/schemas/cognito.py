# Cognito Identity Provider wire models (x-amz-json-1.1), field names as on the wire
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

USER_SRP_AUTH = "USER_SRP_AUTH"
PASSWORD_VERIFIER = "PASSWORD_VERIFIER"

# InitiateAuth
class SRPAuthParameters(BaseModel):
    USERNAME: str
    SRP_A: str

class InitiateAuthRequest(BaseModel):
    AuthFlow: str = USER_SRP_AUTH
    ClientId: str
    AuthParameters: SRPAuthParameters

class InitiateAuthResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    ChallengeName: Optional[str] = None
    ChallengeParameters: dict[str, str] = Field(default_factory=dict)

class PasswordVerifierParameters(BaseModel):
    model_config = ConfigDict(extra="allow") # pool / device metadata passes through untouched

    USER_ID_FOR_SRP: str
    SRP_B: str
    SALT: str
    SECRET_BLOCK: str

# RespondToAuthChallenge
class PasswordVerifierResponses(BaseModel):
    USERNAME: str
    PASSWORD_CLAIM_SECRET_BLOCK: str
    TIMESTAMP: str
    PASSWORD_CLAIM_SIGNATURE: str

class RespondToAuthChallengeRequest(BaseModel):
    ChallengeName: str = PASSWORD_VERIFIER
    ClientId: str
    ChallengeResponses: PasswordVerifierResponses

class AuthenticationResultType(BaseModel):
    model_config = ConfigDict(extra="allow")

    IdToken: str
    ExpiresIn: Optional[int] = None
    AccessToken: Optional[str] = None
    RefreshToken: Optional[str] = None
    TokenType: Optional[str] = None

class RespondToAuthChallengeResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    ChallengeName: Optional[str] = None
    AuthenticationResult: Optional[AuthenticationResultType] = None

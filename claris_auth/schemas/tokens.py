# Token models shared by the cache tiers and the diagnostics API
from typing import Optional
from pydantic import BaseModel, Field

class TokenResult(BaseModel): # what every tier hands back after a refresh
    token: str
    expires_at_epoch_millis: int = Field(..., description="Absolute expiry, ms since epoch")

class StoredToken(BaseModel): # durable store payload
    value: str
    expires_at: int = Field(..., description="Absolute expiry, ms since epoch")

# Data API: POST /sessions
class DataAPISessionBody(BaseModel):
    token: str

class DataAPISessionResponse(BaseModel):
    response: DataAPISessionBody

# API Models
class ConnectionTestOut(BaseModel):
    success: bool = True
    message: str = "Connection successful"
    logs: list[str] = Field(default_factory=list)

class TierStatus(BaseModel):
    cached: bool = False
    expires_at_epoch_millis: Optional[int] = None

class TokenStatusOut(BaseModel):
    identity: TierStatus
    session: TierStatus

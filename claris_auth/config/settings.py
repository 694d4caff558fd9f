# === Pydantic BaseSettings for all env vars ===

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

class Settings(BaseSettings):

    # COGNITO (Claris ID identity provider)
    cognito_user_pool_id: str = Field("us-west-2_NqkuZcXQY")
    cognito_client_id: str = Field("4l9rvl4mv5es1eep1qe97cautn")
    cognito_region: str = Field("us-west-2")

    # FILEMAKER DATA API (downstream session tier)
    fm_host: str = Field("")
    fm_database: str = Field("")
    fm_username: str = Field("")
    fm_password: SecretStr = Field(SecretStr(""))
    fm_api_version: str = Field("vLatest")

    # durable token store
    redis_url: str = Field("redis://localhost:6379/0")

    # outbound HTTP
    http_timeout: float = Field(10.0)
    user_agent: str | None = Field(DEFAULT_USER_AGENT)

    # token lifetimes (seconds)
    id_token_safety_margin_seconds: int = Field(5 * 60)
    session_safety_margin_seconds: int = Field(2 * 60)
    session_token_ttl_seconds: int = Field(14 * 60)
    default_expires_in_seconds: int = Field(3600) # used when Cognito omits ExpiresIn

    model_config = SettingsConfigDict(
        env_file = ".env",
        case_sensitive = False,
        extra="ignore"
    )

    @property
    def pool_name(self) -> str:
        # short pool name = part after the region prefix, e.g. "us-west-2_NqkuZcXQY" -> "NqkuZcXQY"
        return self.cognito_user_pool_id.split("_", 1)[-1]

    @property
    def cognito_url(self) -> str:
        return f"https://cognito-idp.{self.cognito_region}.amazonaws.com/"

settings = Settings()

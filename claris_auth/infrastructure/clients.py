import httpx
from claris_auth.config.settings import Settings, settings

def http_client(config: Settings = settings) -> httpx.AsyncClient:
    # one client shared by the Cognito and Data API calls; caller owns aclose()
    return httpx.AsyncClient(timeout=config.http_timeout)

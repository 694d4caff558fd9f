from contextlib import asynccontextmanager
from fastapi import FastAPI
from claris_auth.config.settings import settings
from claris_auth.infrastructure.cache import RedisTokenStore, get_token_redis
from claris_auth.infrastructure.clients import http_client
from claris_auth.core.token_cache import build_token_manager
from claris_auth.api.diagnostics import router as diagnostics_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup: one HTTP client + one token manager for the whole process
    client = http_client(settings)
    redis_client = get_token_redis()
    app.state.token_manager = build_token_manager(settings, client, RedisTokenStore(redis_client))
    yield
    # shutdown: close connections
    await client.aclose()
    redis_client.close()

# Run with uvicorn claris_auth.main:app --reload
app = FastAPI(title="Claris Auth Service", lifespan=lifespan)

# ROUTES:
app.include_router(diagnostics_router, prefix="/diagnostics", tags=["DIAGNOSTICS"]) # DIAGNOSTICS

@app.get("/")
def root():
    return {"message": "Claris Auth Service running. Check http://127.0.0.1:8000/docs for endpoints."}

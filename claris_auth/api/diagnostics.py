from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from claris_auth.core.exceptions import ClarisAuthError
from claris_auth.core.token_cache import Tier, TokenManager
from claris_auth.schemas.tokens import ConnectionTestOut, TokenStatusOut

# new APIRouter instance for diagnostics
router = APIRouter()

# the manager is built once in the app lifespan
def get_token_manager(request: Request) -> TokenManager:
    return request.app.state.token_manager

# POST /test-connection => force a full Claris ID + Data API refresh ==========================================================
@router.post(
        "/test-connection",
        summary="Force both token tiers to refresh",
        response_model=ConnectionTestOut,
        responses={
            502: {"description": "Cognito or the FileMaker Data API rejected the request"}
        }
)
async def run_connection_test(token_manager: TokenManager = Depends(get_token_manager)):
    logs = ["Starting diagnostic test..."]
    try:
        await token_manager.get(Tier.IDENTITY, force_refresh=True)
        logs.append("Claris ID token obtained.")
        await token_manager.get(Tier.SESSION, force_refresh=True)
        logs.append("FileMaker session token obtained.")
    except ClarisAuthError as e:
        print(">Diagnostic test failed:", e)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    response = ConnectionTestOut(logs=logs)
    return JSONResponse(
        status_code=200,
        content=response.model_dump(mode="json")
    )

# GET /token-status => expiry of the in-memory tokens (values never returned) =================================================
@router.get(
        "/token-status",
        summary="Show cached token expiry per tier",
        response_model=TokenStatusOut
)
async def token_status(token_manager: TokenManager = Depends(get_token_manager)):
    response = TokenStatusOut(
        identity=token_manager.identity.status(),
        session=token_manager.session.status(),
    )
    return JSONResponse(
        status_code=200,
        content=response.model_dump(mode="json")
    )

# mockapi/api/admin/endpoints/auth.py
import logging
import time

from fastapi import APIRouter, Depends

from mockapi.api.deps import get_config, require_auth
from mockapi.api.responses import fail, ok
from mockapi.core.config import VERSION, Settings
from mockapi.core.errors import INVALID_CREDENTIALS
from mockapi.core.security import check_credentials, issue_token
from mockapi.schemas.auth import LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login")
async def login(payload: LoginRequest, config: Settings = Depends(get_config)):
    if not check_credentials(payload.username, payload.password, config.ADMIN_USERNAME, config.ADMIN_PASSWORD):
        logger.warning(f"Failed login attempt for user {payload.username!r}")
        return fail(INVALID_CREDENTIALS, 401)

    token = issue_token(payload.username, config.JWT_SECRET, config.TOKEN_TTL_SECONDS)
    logger.info(f"User {payload.username!r} logged in")
    return ok(LoginResponse(token=token, expiresIn=config.TOKEN_TTL_SECONDS))


@router.get("/auth/status")
async def auth_status(username: str = Depends(require_auth)):
    return ok({"username": username})


@router.get("/health")
async def health_check():
    return ok({
        "status": "healthy",
        "timestamp": time.time(),
        "version": VERSION,
    })

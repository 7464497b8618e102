# mockapi/api/deps.py
from fastapi import Depends, Request

from mockapi.core.config import Settings
from mockapi.core.errors import AuthError, INVALID_TOKEN, MISSING_AUTH_HEADER
from mockapi.core.security import verify_token
from mockapi.storage.base import Storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_config(request: Request) -> Settings:
    return request.app.state.config


async def authenticate(request: Request, storage: Storage, config: Settings) -> str:
    """Return the authenticated username or raise a 401.

    With ``authEnabled`` switched off in the stored settings every caller
    acts as the configured admin user.
    """
    settings = await storage.get_settings()
    if not settings.auth_enabled:
        return config.ADMIN_USERNAME

    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise AuthError(MISSING_AUTH_HEADER)

    payload = verify_token(auth_header[len("Bearer "):], config.JWT_SECRET)
    if payload is None:
        raise AuthError(INVALID_TOKEN)
    return payload.subject


async def require_auth(
    request: Request,
    storage: Storage = Depends(get_storage),
    config: Settings = Depends(get_config),
) -> str:
    return await authenticate(request, storage, config)

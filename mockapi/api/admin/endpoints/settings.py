# mockapi/api/admin/endpoints/settings.py
from fastapi import APIRouter, Depends

from mockapi.api.deps import get_storage, require_auth
from mockapi.api.responses import ok
from mockapi.schemas.settings import SettingsUpdate
from mockapi.storage.base import Storage

router = APIRouter(dependencies=[Depends(require_auth)])


@router.get("/settings")
async def get_settings(storage: Storage = Depends(get_storage)):
    return ok(await storage.get_settings())


@router.put("/settings")
async def update_settings(payload: SettingsUpdate, storage: Storage = Depends(get_storage)):
    return ok(await storage.update_settings(payload))

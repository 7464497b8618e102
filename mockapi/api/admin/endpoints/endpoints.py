# mockapi/api/admin/endpoints/endpoints.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from mockapi.api.deps import get_storage, require_auth
from mockapi.api.responses import ok
from mockapi.core.errors import NotFoundError, ValidationError
from mockapi.schemas.endpoint import EndpointCreate, EndpointUpdate
from mockapi.storage.base import ProjectNotFoundError, Storage

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_auth)])

ENDPOINT_NOT_FOUND = "Endpoint not found"
# a dangling projectId is a bad request, not a missing endpoint
PROJECT_NOT_FOUND = "Project not found"


@router.get("/endpoints")
async def list_endpoints(
    project_id: Optional[str] = Query(default=None, alias="projectId"),
    storage: Storage = Depends(get_storage),
):
    return ok(await storage.get_endpoints(project_id or None))


@router.get("/endpoints/{endpoint_id}")
async def get_endpoint(endpoint_id: str, storage: Storage = Depends(get_storage)):
    endpoint = await storage.get_endpoint(endpoint_id)
    if endpoint is None:
        raise NotFoundError(ENDPOINT_NOT_FOUND)
    return ok(endpoint)


@router.post("/endpoints")
async def create_endpoint(payload: EndpointCreate, storage: Storage = Depends(get_storage)):
    # the store checks the project under its write lock
    try:
        endpoint = await storage.create_endpoint(payload)
    except ProjectNotFoundError:
        raise ValidationError(PROJECT_NOT_FOUND)
    logger.info(f"Created endpoint {endpoint.id}: {endpoint.method} {endpoint.path} in project {endpoint.project_id}")
    return ok(endpoint, status_code=201)


@router.put("/endpoints/{endpoint_id}")
async def update_endpoint(endpoint_id: str, payload: EndpointUpdate, storage: Storage = Depends(get_storage)):
    try:
        endpoint = await storage.update_endpoint(endpoint_id, payload)
    except ProjectNotFoundError:
        raise ValidationError(PROJECT_NOT_FOUND)
    if endpoint is None:
        raise NotFoundError(ENDPOINT_NOT_FOUND)
    return ok(endpoint)


@router.delete("/endpoints/{endpoint_id}")
async def delete_endpoint(endpoint_id: str, storage: Storage = Depends(get_storage)):
    if not await storage.delete_endpoint(endpoint_id):
        raise NotFoundError(ENDPOINT_NOT_FOUND)
    return ok()

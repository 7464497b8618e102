# mockapi/api/admin/endpoints/projects.py
import logging

from fastapi import APIRouter, Depends

from mockapi.api.deps import get_storage, require_auth
from mockapi.api.responses import ok
from mockapi.core.errors import NotFoundError
from mockapi.schemas.project import ProjectCreate, ProjectUpdate
from mockapi.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_auth)])

PROJECT_NOT_FOUND = "Project not found"


@router.get("/projects")
async def list_projects(storage: Storage = Depends(get_storage)):
    return ok(await storage.get_projects())


@router.get("/projects/{project_id}")
async def get_project(project_id: str, storage: Storage = Depends(get_storage)):
    project = await storage.get_project(project_id)
    if project is None:
        raise NotFoundError(PROJECT_NOT_FOUND)
    return ok(project)


@router.post("/projects")
async def create_project(payload: ProjectCreate, storage: Storage = Depends(get_storage)):
    project = await storage.create_project(payload)
    logger.info(f"Created project {project.id} ({project.name}) at {project.base_path}")
    return ok(project, status_code=201)


@router.put("/projects/{project_id}")
async def update_project(project_id: str, payload: ProjectUpdate, storage: Storage = Depends(get_storage)):
    project = await storage.update_project(project_id, payload)
    if project is None:
        raise NotFoundError(PROJECT_NOT_FOUND)
    return ok(project)


@router.delete("/projects/{project_id}")
async def delete_project(project_id: str, storage: Storage = Depends(get_storage)):
    if not await storage.delete_project(project_id):
        raise NotFoundError(PROJECT_NOT_FOUND)
    logger.info(f"Deleted project {project_id} and its endpoints")
    return ok()

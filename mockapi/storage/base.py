# mockapi/storage/base.py
"""Persistence port shared by every storage backend.

Iteration order is part of the contract: ``get_projects`` and
``get_endpoints`` return records in creation order, which is what makes
first-match resolution reproducible across restarts and backends.
"""
import time
from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import uuid4

from mockapi.schemas.endpoint import Endpoint, EndpointCreate, EndpointUpdate
from mockapi.schemas.project import Project, ProjectCreate, ProjectUpdate
from mockapi.schemas.settings import GlobalSettings, SettingsUpdate
from mockapi.services.resolver import resolve


def generate_id() -> str:
    return uuid4().hex


def now_ms() -> int:
    return int(time.time() * 1000)


class ProjectNotFoundError(LookupError):
    """An endpoint write referenced a project that does not exist."""

    def __init__(self, project_id: str):
        super().__init__(project_id)
        self.project_id = project_id


class Storage(ABC):
    async def initialize(self) -> None:
        """Called once at startup before any request is served."""

    async def close(self) -> None:
        pass

    # Projects
    @abstractmethod
    async def get_projects(self) -> List[Project]: ...

    @abstractmethod
    async def get_project(self, project_id: str) -> Optional[Project]: ...

    @abstractmethod
    async def create_project(self, data: ProjectCreate) -> Project: ...

    @abstractmethod
    async def update_project(self, project_id: str, data: ProjectUpdate) -> Optional[Project]: ...

    @abstractmethod
    async def delete_project(self, project_id: str) -> bool:
        """Delete the project and every endpoint it owns."""

    # Endpoints
    @abstractmethod
    async def get_endpoints(self, project_id: Optional[str] = None) -> List[Endpoint]: ...

    @abstractmethod
    async def get_endpoint(self, endpoint_id: str) -> Optional[Endpoint]: ...

    @abstractmethod
    async def create_endpoint(self, data: EndpointCreate) -> Endpoint:
        """Raise ProjectNotFoundError unless the owning project exists when the row is written."""

    @abstractmethod
    async def update_endpoint(self, endpoint_id: str, data: EndpointUpdate) -> Optional[Endpoint]:
        """None for an unknown id; ProjectNotFoundError when moved to a missing project."""

    @abstractmethod
    async def delete_endpoint(self, endpoint_id: str) -> bool: ...

    @abstractmethod
    async def delete_endpoints_by_project(self, project_id: str) -> int: ...

    async def get_endpoint_by_path(self, path: str, method: str) -> Optional[Endpoint]:
        """Resolve a full request path and method to an enabled endpoint."""
        projects = await self.get_projects()
        endpoints = await self.get_endpoints()
        return resolve(projects, endpoints, path, method)

    # Settings
    @abstractmethod
    async def get_settings(self) -> GlobalSettings: ...

    @abstractmethod
    async def update_settings(self, data: SettingsUpdate) -> GlobalSettings: ...


def merge_project(project: Project, data: ProjectUpdate) -> Project:
    merged = project.model_dump()
    merged.update(data.model_dump(exclude_unset=True))
    merged["id"] = project.id
    merged["created_at"] = project.created_at
    merged["updated_at"] = now_ms()
    return Project.model_validate(merged)


def merge_endpoint(endpoint: Endpoint, data: EndpointUpdate) -> Endpoint:
    merged = endpoint.model_dump()
    merged.update(data.model_dump(exclude_unset=True))
    merged["id"] = endpoint.id
    merged["created_at"] = endpoint.created_at
    merged["updated_at"] = now_ms()
    return Endpoint.model_validate(merged)


def merge_settings(settings: GlobalSettings, data: SettingsUpdate) -> GlobalSettings:
    merged = settings.model_dump()
    merged.update(data.model_dump(exclude_unset=True))
    return GlobalSettings.model_validate(merged)


def new_project(data: ProjectCreate) -> Project:
    now = now_ms()
    return Project(id=generate_id(), created_at=now, updated_at=now, **data.model_dump())


def new_endpoint(data: EndpointCreate) -> Endpoint:
    now = now_ms()
    return Endpoint(id=generate_id(), created_at=now, updated_at=now, **data.model_dump())

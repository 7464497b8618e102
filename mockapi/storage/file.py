# mockapi/storage/file.py
"""JSON-file backed storage.

All records live in memory; every mutation rewrites the whole document
``{"projects": [...], "endpoints": [...], "settings": {...}}``. Without a
file path the store is purely in-memory.
"""
import asyncio
import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as SchemaError

from mockapi.schemas.endpoint import Endpoint, EndpointCreate, EndpointUpdate
from mockapi.schemas.project import Project, ProjectCreate, ProjectUpdate
from mockapi.schemas.settings import GlobalSettings, SettingsUpdate
from mockapi.storage.base import (
    ProjectNotFoundError,
    Storage,
    merge_endpoint,
    merge_project,
    merge_settings,
    new_endpoint,
    new_project,
)

logger = logging.getLogger(__name__)


class FileStorage(Storage):
    def __init__(self, file_path: Optional[str] = None):
        self.file_path = Path(file_path) if file_path else None
        self._projects: List[Project] = []
        self._endpoints: List[Endpoint] = []
        self._settings: Optional[GlobalSettings] = None
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        if self.file_path is None:
            logger.info("File storage running in memory only")
            return

        await asyncio.to_thread(self.file_path.parent.mkdir, parents=True, exist_ok=True)

        if not self.file_path.exists():
            logger.info(f"No data file at {self.file_path}, starting empty")
            await self._save()
            return

        try:
            raw = await asyncio.to_thread(self.file_path.read_text, encoding="utf-8")
            self._load(json.loads(raw))
            logger.info(
                f"Loaded {len(self._projects)} projects and {len(self._endpoints)} endpoints from {self.file_path}"
            )
        except (json.JSONDecodeError, SchemaError, TypeError, AttributeError) as e:
            backup = self.file_path.with_suffix(self.file_path.suffix + ".corrupt")
            logger.warning(f"Unreadable data file {self.file_path} ({e}); moved to {backup}, starting empty")
            await asyncio.to_thread(self.file_path.replace, backup)
            self._projects, self._endpoints, self._settings = [], [], None
            await self._save()

    def _load(self, data: dict) -> None:
        self._projects = [Project.model_validate(p) for p in data.get("projects") or []]
        self._endpoints = [Endpoint.model_validate(e) for e in data.get("endpoints") or []]
        # stored settings may predate newer keys; defaults fill the gaps
        stored = data.get("settings") or {}
        self._settings = GlobalSettings.model_validate({**GlobalSettings().to_wire(), **stored})

    def _dump(self) -> str:
        return json.dumps(
            {
                "projects": [p.to_wire() for p in self._projects],
                "endpoints": [e.to_wire() for e in self._endpoints],
                "settings": self._current_settings().to_wire(),
            },
            indent=2,
        )

    async def _save(self) -> None:
        if self.file_path is None:
            return
        content = self._dump()
        await asyncio.to_thread(self.file_path.write_text, content, encoding="utf-8")

    def _current_settings(self) -> GlobalSettings:
        if self._settings is None:
            self._settings = GlobalSettings()
        return self._settings

    # Projects
    async def get_projects(self) -> List[Project]:
        return [p.model_copy(deep=True) for p in self._projects]

    async def get_project(self, project_id: str) -> Optional[Project]:
        for project in self._projects:
            if project.id == project_id:
                return project.model_copy(deep=True)
        return None

    async def create_project(self, data: ProjectCreate) -> Project:
        async with self._lock:
            project = new_project(data)
            self._projects.append(project)
            await self._save()
        return project.model_copy(deep=True)

    async def update_project(self, project_id: str, data: ProjectUpdate) -> Optional[Project]:
        async with self._lock:
            for index, project in enumerate(self._projects):
                if project.id == project_id:
                    self._projects[index] = merge_project(project, data)
                    await self._save()
                    return self._projects[index].model_copy(deep=True)
        return None

    async def delete_project(self, project_id: str) -> bool:
        async with self._lock:
            remaining = [p for p in self._projects if p.id != project_id]
            if len(remaining) == len(self._projects):
                return False
            self._projects = remaining
            self._endpoints = [e for e in self._endpoints if e.project_id != project_id]
            await self._save()
        return True

    # Endpoints
    async def get_endpoints(self, project_id: Optional[str] = None) -> List[Endpoint]:
        return [
            e.model_copy(deep=True)
            for e in self._endpoints
            if project_id is None or e.project_id == project_id
        ]

    async def get_endpoint(self, endpoint_id: str) -> Optional[Endpoint]:
        for endpoint in self._endpoints:
            if endpoint.id == endpoint_id:
                return endpoint.model_copy(deep=True)
        return None

    def _require_project(self, project_id: str) -> None:
        if not any(p.id == project_id for p in self._projects):
            raise ProjectNotFoundError(project_id)

    async def create_endpoint(self, data: EndpointCreate) -> Endpoint:
        async with self._lock:
            self._require_project(data.project_id)
            endpoint = new_endpoint(data)
            self._endpoints.append(endpoint)
            await self._save()
        return endpoint.model_copy(deep=True)

    async def update_endpoint(self, endpoint_id: str, data: EndpointUpdate) -> Optional[Endpoint]:
        async with self._lock:
            for index, endpoint in enumerate(self._endpoints):
                if endpoint.id == endpoint_id:
                    if data.project_id is not None:
                        self._require_project(data.project_id)
                    self._endpoints[index] = merge_endpoint(endpoint, data)
                    await self._save()
                    return self._endpoints[index].model_copy(deep=True)
        return None

    async def delete_endpoint(self, endpoint_id: str) -> bool:
        async with self._lock:
            remaining = [e for e in self._endpoints if e.id != endpoint_id]
            if len(remaining) == len(self._endpoints):
                return False
            self._endpoints = remaining
            await self._save()
        return True

    async def delete_endpoints_by_project(self, project_id: str) -> int:
        async with self._lock:
            before = len(self._endpoints)
            self._endpoints = [e for e in self._endpoints if e.project_id != project_id]
            deleted = before - len(self._endpoints)
            if deleted:
                await self._save()
        return deleted

    # Settings
    async def get_settings(self) -> GlobalSettings:
        return self._current_settings().model_copy(deep=True)

    async def update_settings(self, data: SettingsUpdate) -> GlobalSettings:
        async with self._lock:
            self._settings = merge_settings(self._current_settings(), data)
            await self._save()
        return self._settings.model_copy(deep=True)

# mockapi/storage/sql.py
"""SQLAlchemy (async) storage backend.

Rows carry an autoincrement ``seq`` column and every listing orders by
it, so this backend iterates in creation order like the file store.
"""
import asyncio
import logging
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.future import select

from mockapi.db.database import create_db_and_tables, create_engine, create_session_factory
from mockapi.models.endpoint import EndpointRecord
from mockapi.models.project import ProjectRecord
from mockapi.models.settings import SETTINGS_ROW_ID, SettingsRecord
from mockapi.schemas.endpoint import Endpoint, EndpointCreate, EndpointUpdate
from mockapi.schemas.project import Project, ProjectCreate, ProjectUpdate
from mockapi.schemas.settings import GlobalSettings, SettingsUpdate
from mockapi.services.resolver import match_project, relative_path
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


def _project_from_row(row: ProjectRecord) -> Project:
    return Project(
        id=row.id,
        name=row.name,
        description=row.description,
        base_path=row.base_path,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _endpoint_from_row(row: EndpointRecord) -> Endpoint:
    return Endpoint(
        id=row.id,
        project_id=row.project_id,
        path=row.path,
        method=row.method,
        response=row.response,
        enabled=row.enabled,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _apply_project(row: ProjectRecord, project: Project) -> None:
    row.name = project.name
    row.description = project.description
    row.base_path = project.base_path
    row.created_at = project.created_at
    row.updated_at = project.updated_at


def _apply_endpoint(row: EndpointRecord, endpoint: Endpoint) -> None:
    row.project_id = endpoint.project_id
    row.path = endpoint.path
    row.method = endpoint.method
    row.response = endpoint.response.to_wire()
    row.enabled = endpoint.enabled
    row.created_at = endpoint.created_at
    row.updated_at = endpoint.updated_at


class SQLStorage(Storage):
    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.engine = create_engine(database_url, echo=echo)
        self.async_session = create_session_factory(self.engine)
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        await create_db_and_tables(self.engine)
        logger.info(f"SQL storage ready ({self.engine.url.render_as_string(hide_password=True)})")

    async def close(self) -> None:
        await self.engine.dispose()

    # Projects
    async def get_projects(self) -> List[Project]:
        async with self.async_session() as session:
            result = await session.execute(select(ProjectRecord).order_by(ProjectRecord.seq))
            return [_project_from_row(row) for row in result.scalars().all()]

    async def get_project(self, project_id: str) -> Optional[Project]:
        async with self.async_session() as session:
            result = await session.execute(select(ProjectRecord).where(ProjectRecord.id == project_id))
            row = result.scalar_one_or_none()
            return _project_from_row(row) if row else None

    async def create_project(self, data: ProjectCreate) -> Project:
        project = new_project(data)
        async with self._lock, self.async_session() as session:
            row = ProjectRecord(id=project.id)
            _apply_project(row, project)
            session.add(row)
            await session.commit()
        return project

    async def update_project(self, project_id: str, data: ProjectUpdate) -> Optional[Project]:
        async with self._lock, self.async_session() as session:
            result = await session.execute(select(ProjectRecord).where(ProjectRecord.id == project_id))
            row = result.scalar_one_or_none()
            if row is None:
                return None
            project = merge_project(_project_from_row(row), data)
            _apply_project(row, project)
            await session.commit()
            return project

    async def delete_project(self, project_id: str) -> bool:
        async with self._lock, self.async_session() as session:
            result = await session.execute(select(ProjectRecord.seq).where(ProjectRecord.id == project_id))
            if result.scalar_one_or_none() is None:
                return False
            # children first so the foreign key never dangles
            await session.execute(delete(EndpointRecord).where(EndpointRecord.project_id == project_id))
            await session.execute(delete(ProjectRecord).where(ProjectRecord.id == project_id))
            await session.commit()
            return True

    # Endpoints
    async def get_endpoints(self, project_id: Optional[str] = None) -> List[Endpoint]:
        query = select(EndpointRecord).order_by(EndpointRecord.seq)
        if project_id is not None:
            query = query.where(EndpointRecord.project_id == project_id)
        async with self.async_session() as session:
            result = await session.execute(query)
            return [_endpoint_from_row(row) for row in result.scalars().all()]

    async def get_endpoint(self, endpoint_id: str) -> Optional[Endpoint]:
        async with self.async_session() as session:
            result = await session.execute(select(EndpointRecord).where(EndpointRecord.id == endpoint_id))
            row = result.scalar_one_or_none()
            return _endpoint_from_row(row) if row else None

    async def get_endpoint_by_path(self, path: str, method: str) -> Optional[Endpoint]:
        project = match_project(await self.get_projects(), path)
        if project is None:
            return None
        query = (
            select(EndpointRecord)
            .where(
                EndpointRecord.project_id == project.id,
                EndpointRecord.path == relative_path(project, path),
                EndpointRecord.method == method,
                EndpointRecord.enabled == True,  # noqa: E712
            )
            .order_by(EndpointRecord.seq)
            .limit(1)
        )
        async with self.async_session() as session:
            result = await session.execute(query)
            row = result.scalar_one_or_none()
            return _endpoint_from_row(row) if row else None

    async def _require_project(self, session, project_id: str) -> None:
        result = await session.execute(select(ProjectRecord.seq).where(ProjectRecord.id == project_id))
        if result.scalar_one_or_none() is None:
            raise ProjectNotFoundError(project_id)

    async def create_endpoint(self, data: EndpointCreate) -> Endpoint:
        endpoint = new_endpoint(data)
        async with self._lock, self.async_session() as session:
            await self._require_project(session, endpoint.project_id)
            row = EndpointRecord(id=endpoint.id)
            _apply_endpoint(row, endpoint)
            session.add(row)
            await session.commit()
        return endpoint

    async def update_endpoint(self, endpoint_id: str, data: EndpointUpdate) -> Optional[Endpoint]:
        async with self._lock, self.async_session() as session:
            result = await session.execute(select(EndpointRecord).where(EndpointRecord.id == endpoint_id))
            row = result.scalar_one_or_none()
            if row is None:
                return None
            if data.project_id is not None:
                await self._require_project(session, data.project_id)
            endpoint = merge_endpoint(_endpoint_from_row(row), data)
            _apply_endpoint(row, endpoint)
            await session.commit()
            return endpoint

    async def delete_endpoint(self, endpoint_id: str) -> bool:
        async with self._lock, self.async_session() as session:
            result = await session.execute(delete(EndpointRecord).where(EndpointRecord.id == endpoint_id))
            await session.commit()
            return result.rowcount > 0

    async def delete_endpoints_by_project(self, project_id: str) -> int:
        async with self._lock, self.async_session() as session:
            result = await session.execute(delete(EndpointRecord).where(EndpointRecord.project_id == project_id))
            await session.commit()
            return result.rowcount

    # Settings
    async def _load_settings(self, session) -> SettingsRecord:
        row = await session.get(SettingsRecord, SETTINGS_ROW_ID)
        if row is None:
            row = SettingsRecord(id=SETTINGS_ROW_ID, data=GlobalSettings().to_wire())
            session.add(row)
            await session.commit()
        return row

    async def get_settings(self) -> GlobalSettings:
        async with self._lock, self.async_session() as session:
            row = await self._load_settings(session)
            return GlobalSettings.model_validate({**GlobalSettings().to_wire(), **row.data})

    async def update_settings(self, data: SettingsUpdate) -> GlobalSettings:
        async with self._lock, self.async_session() as session:
            row = await self._load_settings(session)
            current = GlobalSettings.model_validate({**GlobalSettings().to_wire(), **row.data})
            updated = merge_settings(current, data)
            row.data = updated.to_wire()
            await session.commit()
            return updated

# mockapi/services/resolver.py
"""Map an inbound (path, method) to at most one configured endpoint.

Projects are matched by literal ``basePath`` prefix. When several base
paths prefix the request path the longest one wins, so ``/api/v1`` owns
``/api/v1/users`` even if ``/api`` exists too. Equal-length ties and
duplicate endpoints are broken by storage order (first wins).
"""
from typing import Iterable, Optional, Sequence

from mockapi.schemas.endpoint import Endpoint
from mockapi.schemas.project import Project


def match_project(projects: Iterable[Project], request_path: str) -> Optional[Project]:
    best = None
    for project in projects:
        if not request_path.startswith(project.base_path):
            continue
        # strict > keeps the earliest project on equal length
        if best is None or len(project.base_path) > len(best.base_path):
            best = project
    return best


def relative_path(project: Project, request_path: str) -> str:
    return request_path[len(project.base_path):] or "/"


def match_endpoint(endpoints: Iterable[Endpoint], project_id: str, path: str, method: str) -> Optional[Endpoint]:
    for endpoint in endpoints:
        if (
            endpoint.project_id == project_id
            and endpoint.path == path
            and endpoint.method == method
            and endpoint.enabled
        ):
            return endpoint
    return None


def resolve(
    projects: Sequence[Project],
    endpoints: Sequence[Endpoint],
    request_path: str,
    request_method: str,
) -> Optional[Endpoint]:
    project = match_project(projects, request_path)
    if project is None:
        return None
    return match_endpoint(endpoints, project.id, relative_path(project, request_path), request_method)

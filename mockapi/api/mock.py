# mockapi/api/mock.py
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, PlainTextResponse, RedirectResponse

from mockapi.api.deps import get_config, get_storage
from mockapi.core.config import RESERVED_PATHS, Settings, is_admin_path
from mockapi.core.errors import NotFoundError
from mockapi.services.responder import MockResponder
from mockapi.storage.base import Storage

MOCK_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD"]

router = APIRouter()


def serve_reserved(path: str, method: str, config: Settings):
    if path == "/" and method == "GET":
        return RedirectResponse(url="/index.html")

    if method in ("GET", "HEAD") and path != "/":
        static_dir = Path(config.STATIC_DIR).resolve()
        file_path = static_dir / path.lstrip("/")
        if file_path.is_file():
            return FileResponse(file_path)

    return PlainTextResponse("Not Found", status_code=404)


@router.api_route("/{full_path:path}", methods=MOCK_METHODS, include_in_schema=False)
async def serve_mock(
    request: Request,
    full_path: str,
    storage: Storage = Depends(get_storage),
    config: Settings = Depends(get_config),
):
    path = request.url.path

    # admin paths that matched no admin route
    if is_admin_path(path):
        raise NotFoundError("Not found")

    if path in RESERVED_PATHS:
        return serve_reserved(path, request.method, config)

    return await MockResponder(storage).handle(request.method, path)

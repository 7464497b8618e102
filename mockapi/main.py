# === mockapi/main.py ===
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler, request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from typing import Optional
from mockapi.api.admin.api import api_router
from mockapi.api.mock import router as mock_router
from mockapi.api.deps import authenticate
from mockapi.api.responses import fail
from mockapi.core.config import (
    ADMIN_PREFIX,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_JWT_SECRET,
    RESERVED_PATHS,
    VERSION,
    Settings,
    is_admin_path,
    settings,
)
from mockapi.core.cors import CORSPolicy, decide_dynamic, decide_static
from mockapi.core.errors import ORIGIN_NOT_ALLOWED, AuthError
from mockapi.storage.base import Storage
from mockapi.storage.factory import create_storage
import time
import logging

#logging
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)

SLOW_REQUEST_SECONDS = 1.0


def format_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            return "Invalid request body"
        loc = ".".join(str(part) for part in error.get("loc", ())[1:])
        msg = str(error.get("msg", "invalid value")).removeprefix("Value error, ")
        messages.append(f"{loc}: {msg}" if loc else msg)
    if not messages:
        return "Invalid request body"
    return "Invalid request body: " + "; ".join(messages)


def create_app(config: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    config = config or settings
    storage = storage or create_storage(config)
    admin_cors = CORSPolicy()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up...")
        await storage.initialize()
        if config.ADMIN_PASSWORD == DEFAULT_ADMIN_PASSWORD:
            logger.warning("ADMIN_PASSWORD is the default, change it in production")
        if config.JWT_SECRET == DEFAULT_JWT_SECRET:
            logger.warning("JWT_SECRET is the default, change it in production")
        logger.info(f"Admin API at {ADMIN_PREFIX}, user {config.ADMIN_USERNAME!r}")
        yield
        await storage.close()
        logger.info("Shutting down...")

    app = FastAPI(
        lifespan=lifespan,
        title="Mock API Server",
        description="Serve configurable mock endpoints grouped into projects",
        version=VERSION,
        docs_url=f"{ADMIN_PREFIX}/docs",
        redoc_url=None,
        openapi_url=f"{ADMIN_PREFIX}/openapi.json",
    )
    app.state.config = config
    app.state.storage = storage

    public_admin_paths = {
        f"{ADMIN_PREFIX}/login",
        f"{ADMIN_PREFIX}/health",
        app.docs_url,
        app.openapi_url,
    }

    #admin auth: checked before routing, ahead of body parsing
    @app.middleware("http")
    async def authenticate_admin(request: Request, call_next):
        path = request.url.path
        if is_admin_path(path) and path not in public_admin_paths and request.method != "OPTIONS":
            try:
                await authenticate(request, storage, config)
            except AuthError as e:
                return fail(e.detail, e.status_code)
        return await call_next(request)

    #CORS: static policy for the admin API, stored settings for mock traffic
    @app.middleware("http")
    async def apply_cors(request: Request, call_next):
        path = request.url.path
        origin = request.headers.get("origin")

        if is_admin_path(path):
            decision = decide_static(origin, admin_cors)
        elif path in RESERVED_PATHS:
            return await call_next(request)
        else:
            decision = decide_dynamic(origin, await storage.get_settings())
            if not decision.allowed:
                logger.warning(f"Rejected origin {origin!r} for {request.method} {path}")
                return PlainTextResponse(ORIGIN_NOT_ALLOWED, status_code=403)

        # preflight never reaches a handler
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=decision.headers)

        response = await call_next(request)
        for name, value in decision.headers.items():
            response.headers.setdefault(name, value)
        return response

    @app.middleware("http")
    async def log_request_time(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        # Log slow requests
        if process_time > SLOW_REQUEST_SECONDS:
            logger.warning(f"Slow request: {request.method} {request.url.path} took {process_time:.2f}s")

        return response

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if is_admin_path(request.url.path):
            return fail(str(exc.detail), exc.status_code)
        return await http_exception_handler(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        if is_admin_path(request.url.path):
            return fail(format_validation_error(exc), 400)
        return await request_validation_exception_handler(request, exc)

    #admin API, then the catch-all mock route
    app.include_router(api_router, prefix=ADMIN_PREFIX)
    app.include_router(mock_router)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "mockapi.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )

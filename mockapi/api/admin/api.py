# mockapi/api/admin/api.py
from fastapi import APIRouter
from .endpoints import auth, projects, endpoints, settings

api_router = APIRouter()
api_router.include_router(auth.router, tags=["Auth"])
api_router.include_router(projects.router, tags=["Projects"])
api_router.include_router(endpoints.router, tags=["Endpoints"])
api_router.include_router(settings.router, tags=["Settings"])

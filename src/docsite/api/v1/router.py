from fastapi import APIRouter

from src.docsite.api.v1 import projects, public

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(public.router)

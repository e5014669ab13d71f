from fastapi import APIRouter

from src.phasetracker.api.v1 import auth, client, projects

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(projects.router)
api_router.include_router(client.router)

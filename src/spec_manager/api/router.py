"""Master API router mounted at /api; health checks live at the root."""

from fastapi import APIRouter

from spec_manager.api.routes import auth, health, schema, specifications

health_router = health.router

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(schema.router)
api_router.include_router(specifications.router)

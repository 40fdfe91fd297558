"""Router registrations."""

from fastapi import APIRouter

from access_core.api.routers import health, resources, roles


def get_api_router() -> APIRouter:
    router = APIRouter()
    router.include_router(health.router, tags=["health"])
    router.include_router(roles.router, prefix="/roles", tags=["roles"])
    router.include_router(resources.router, prefix="/resources", tags=["resources"])
    return router

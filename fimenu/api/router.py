"""
==============================================================================
Main API Routers
==============================================================================

Public v1 routes under /api/v1, admin routes under {admin_prefix}/api.

==============================================================================
"""

from fastapi import APIRouter

from fimenu.api.v1 import health, codec, menu
from fimenu.api.admin import products, packages


class MainAPIRouter:
    """
    Public API router combining all versioned routes.
    """

    def __init__(self):
        self._router = APIRouter(prefix="/api/v1")
        self._include_routers()

    def _include_routers(self) -> None:
        self._router.include_router(health.router)
        self._router.include_router(codec.router)
        self._router.include_router(menu.router)

    @property
    def router(self) -> APIRouter:
        return self._router


class AdminAPIRouter:
    """
    Admin router. Every path it serves sits under the gated prefix.
    """

    def __init__(self, admin_prefix: str):
        self._router = APIRouter(prefix=f"{admin_prefix}/api")
        self._router.include_router(products.router)
        self._router.include_router(packages.router)

    @property
    def router(self) -> APIRouter:
        return self._router


# Create main API router instance
api_router = MainAPIRouter().router

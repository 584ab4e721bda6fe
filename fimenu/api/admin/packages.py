"""
==============================================================================
Admin Package Endpoints
==============================================================================

Create, edit and remove product bundles.

==============================================================================
"""

from typing import Optional

from fastapi import APIRouter, Depends

from fimenu.api.views import package_view
from fimenu.catalog import ProductCatalog
from fimenu.core.dependencies import get_admin_service
from fimenu.schemas.menu import PackageCreate, PackagePatch
from fimenu.services.menu_service import AdminMenuService


router = APIRouter(prefix="/packages", tags=["Admin: Packages"])


class AdminPackageController:
    """Controller for admin package operations."""

    def __init__(self, service: AdminMenuService):
        self._service = service

    @staticmethod
    def _packages(catalog: ProductCatalog) -> list:
        return [package_view(p, catalog) for p in catalog.packages]

    def list_packages(self) -> dict:
        catalog = self._service.load()
        return {"success": True, "packages": self._packages(catalog)}

    def add_package(self, request: PackageCreate) -> dict:
        catalog = self._service.add_package(request.model_dump(exclude_unset=True))
        return {
            "success": True,
            "package": package_view(catalog.packages[-1], catalog),
            "packages": self._packages(catalog),
        }

    def update_package(self, package_id: str, request: PackagePatch) -> dict:
        catalog = self._service.update_package(
            package_id,
            request.model_dump(exclude_unset=True)
        )
        return {
            "success": True,
            "package": package_view(catalog.find_package(package_id), catalog),
            "packages": self._packages(catalog),
        }

    def delete_package(self, package_id: str) -> dict:
        catalog = self._service.delete_package(package_id)
        return {"success": True, "deleted": package_id, "packages": self._packages(catalog)}


@router.get("")
def list_packages(service: AdminMenuService = Depends(get_admin_service)):
    return AdminPackageController(service).list_packages()


@router.post("")
def add_package(
    request: Optional[PackageCreate] = None,
    service: AdminMenuService = Depends(get_admin_service)
):
    """Add a package."""
    return AdminPackageController(service).add_package(request or PackageCreate())


@router.patch("/{package_id}")
def update_package(
    package_id: str,
    request: PackagePatch,
    service: AdminMenuService = Depends(get_admin_service)
):
    """Edit package fields."""
    return AdminPackageController(service).update_package(package_id, request)


@router.delete("/{package_id}")
def delete_package(
    package_id: str,
    service: AdminMenuService = Depends(get_admin_service)
):
    """Remove a package."""
    return AdminPackageController(service).delete_package(package_id)

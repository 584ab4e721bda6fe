"""
==============================================================================
Admin Product Endpoints
==============================================================================

Catalog editing for the salesperson. Mounted under the admin prefix, so
AdminAccessGate has already checked credentials.

==============================================================================
"""

import json
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import Response

from fimenu.api.views import catalog_view, product_view
from fimenu.catalog import ProductCatalog
from fimenu.config import Settings, get_settings
from fimenu.core import exceptions
from fimenu.core.dependencies import get_admin_service
from fimenu.schemas.menu import ProductCreate, ProductPatch
from fimenu.services.menu_service import AdminMenuService
from fimenu.utils.links import build_menu_url, products_token


router = APIRouter(prefix="/products", tags=["Admin: Products"])


class AdminProductController:
    """Controller for admin product operations."""

    def __init__(self, service: AdminMenuService):
        self._service = service

    @staticmethod
    def _respond(catalog: ProductCatalog, **extra: Any) -> dict:
        response = {"success": True}
        response.update(extra)
        response.update(catalog_view(catalog))
        return response

    def list_products(self) -> dict:
        return self._respond(self._service.load())

    def add_product(self, request: ProductCreate) -> dict:
        catalog = self._service.add_product(request.model_dump(exclude_unset=True))
        return self._respond(catalog, product=product_view(catalog.products[-1]))

    def update_product(self, product_id: str, request: ProductPatch) -> dict:
        catalog = self._service.update_product(
            product_id,
            request.model_dump(exclude_unset=True)
        )
        return self._respond(catalog, product=product_view(catalog.find_by_id(product_id)))

    def delete_product(self, product_id: str) -> dict:
        catalog = self._service.delete_product(product_id)
        return self._respond(catalog, deleted=product_id)

    def reset(self) -> dict:
        return self._respond(self._service.reset_products())

    def import_products(self, payload: Any) -> dict:
        if not isinstance(payload, list):
            raise exceptions.invalid_import("expected a list of products")
        catalog = self._service.import_products(json.dumps(payload, ensure_ascii=False))
        return self._respond(catalog, imported=len(catalog))

    def export(self) -> Response:
        return Response(
            content=self._service.load().export_json(),
            media_type="application/json",
            headers={"Content-Disposition": 'attachment; filename="fi_products.json"'},
        )

    def share(self, settings: Settings) -> dict:
        """Customer link with this catalog and nothing selected."""
        catalog = self._service.load()
        return {
            "success": True,
            "products_token": products_token(catalog),
            "share_url": build_menu_url(settings.customer_base_url, catalog),
        }


@router.get("")
def list_products(service: AdminMenuService = Depends(get_admin_service)):
    """Saved catalog (or the built-in one)."""
    return AdminProductController(service).list_products()


@router.post("")
def add_product(
    request: Optional[ProductCreate] = None,
    service: AdminMenuService = Depends(get_admin_service)
):
    """Append a product; omitted fields get placeholders."""
    return AdminProductController(service).add_product(request or ProductCreate())


@router.post("/reset")
def reset_products(service: AdminMenuService = Depends(get_admin_service)):
    """Restore the built-in products."""
    return AdminProductController(service).reset()


@router.get("/export")
def export_products(service: AdminMenuService = Depends(get_admin_service)):
    """Download products as ``fi_products.json``."""
    return AdminProductController(service).export()


@router.post("/import")
def import_products(
    payload: List[Any] = Body(...),
    service: AdminMenuService = Depends(get_admin_service)
):
    """Replace products with an exported list."""
    return AdminProductController(service).import_products(payload)


@router.get("/share")
def share_link(
    service: AdminMenuService = Depends(get_admin_service),
    settings: Settings = Depends(get_settings)
):
    """Shareable customer link for the saved catalog."""
    return AdminProductController(service).share(settings)


@router.patch("/{product_id}")
def update_product(
    product_id: str,
    request: ProductPatch,
    service: AdminMenuService = Depends(get_admin_service)
):
    """Edit product fields."""
    return AdminProductController(service).update_product(product_id, request)


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    service: AdminMenuService = Depends(get_admin_service)
):
    """Remove a product."""
    return AdminProductController(service).delete_product(product_id)

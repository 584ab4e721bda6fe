"""
==============================================================================
Customer Menu Endpoints
==============================================================================

Resolve the menu a customer sees from the link they opened, and toggle
selections. The server keeps no customer state: every response carries the
tokens for the next request.

==============================================================================
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from fimenu.api.views import menu_view
from fimenu.catalog import toggle, toggle_package
from fimenu.config import Settings, get_settings
from fimenu.core import exceptions
from fimenu.core.dependencies import get_resolver
from fimenu.schemas.menu import ToggleRequest
from fimenu.services.menu_service import MenuStateResolver


router = APIRouter(prefix="/menu", tags=["Menu"])


class MenuController:
    """Controller for customer menu operations."""

    def __init__(self, resolver: MenuStateResolver, settings: Settings):
        self._resolver = resolver
        self._settings = settings

    def get_menu(self, products: Optional[str], selections: Optional[str]) -> dict:
        state = self._resolver.resolve(products, selections)
        return menu_view(state, self._settings)

    def toggle(self, request: ToggleRequest) -> dict:
        """Apply one toggle and return the new menu."""
        state = self._resolver.resolve(request.products, request.selections)

        if request.package_id is not None:
            package = state.catalog.find_package(request.package_id)
            if package is None:
                raise exceptions.package_not_found(request.package_id)
            selection = toggle_package(state.selection, package)
        else:
            selection = toggle(state.selection, request.product_id)

        return menu_view(state.with_selection(selection), self._settings)


@router.get("")
def get_menu(
    products: Optional[str] = Query(None),
    selections: Optional[str] = Query(None),
    resolver: MenuStateResolver = Depends(get_resolver),
    settings: Settings = Depends(get_settings)
):
    """Menu for the given ``products`` / ``selections`` tokens."""
    controller = MenuController(resolver, settings)
    return controller.get_menu(products, selections)


@router.post("/toggle")
def toggle_selection(
    request: ToggleRequest,
    resolver: MenuStateResolver = Depends(get_resolver),
    settings: Settings = Depends(get_settings)
):
    """Toggle a product or package and return the updated menu."""
    controller = MenuController(resolver, settings)
    return controller.toggle(request)

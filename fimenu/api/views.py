"""
==============================================================================
Response Views
==============================================================================

Dict builders shared by the customer and admin controllers.

==============================================================================
"""

from typing import Any, Dict

from fimenu.catalog import Package, Product, ProductCatalog, selection_list
from fimenu.config import Settings
from fimenu.services.menu_service import MenuState
from fimenu.utils.links import (
    build_email_link,
    build_menu_url,
    format_money,
    products_token,
    selections_token,
)


def product_view(product: Product) -> Dict[str, Any]:
    """Product record plus the display-safe link and formatted price."""
    view = product.to_record()
    view["safe_link"] = product.safe_link
    view["price_display"] = format_money(product.price)
    return view


def package_view(package: Package, catalog: ProductCatalog) -> Dict[str, Any]:
    """Package record plus prices computed against ``catalog``."""
    view = package.to_record()
    price = catalog.package_price(package)
    view["subtotal"] = catalog.package_subtotal(package)
    view["price"] = price
    view["price_display"] = format_money(price)
    view["available_product_ids"] = [
        pid for pid in package.product_ids if catalog.find_by_id(pid) is not None
    ]
    return view


def catalog_view(catalog: ProductCatalog) -> Dict[str, Any]:
    return {
        "products": [product_view(p) for p in catalog.products],
        "packages": [package_view(p, catalog) for p in catalog.packages],
    }


def menu_view(state: MenuState, settings: Settings) -> Dict[str, Any]:
    """Full customer menu: catalog, selections, total and share links."""
    menu_url = build_menu_url(settings.customer_base_url, state.catalog, state.selection)
    total = state.total

    view = {"success": True, "source": state.source.value}
    view.update(catalog_view(state.catalog))
    view.update({
        "selected_ids": selection_list(state.selection),
        "total": total,
        "total_display": format_money(total),
        "tokens": {
            "products": products_token(state.catalog),
            "selections": selections_token(state.selection),
        },
        "menu_url": menu_url,
        "email_link": build_email_link(menu_url),
    })
    return view

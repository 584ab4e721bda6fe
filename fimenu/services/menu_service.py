"""
==============================================================================
Menu Service Module
==============================================================================

Resolves the menu state for a request and applies admin edits.

This module implements:
- MenuState: Catalog + selection + where the catalog came from
- MenuStateResolver: URL token → saved state → built-in defaults
- AdminMenuService: Load, edit and persist the admin's catalog

State Precedence:
----------------
    products    ?products=<token>  →  store[fi_products_v1]  →  defaults
    packages                           store[fi_packages_v1]  →  defaults
    selection   ?selections=<token>                           →  empty

A token that is present but malformed counts as absent and the next source
is tried. Nothing here raises on bad input from a shared link.

==============================================================================
"""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple

from fimenu.catalog import (
    EMPTY_SELECTION,
    Package,
    Product,
    ProductCatalog,
    Selection,
    normalize_packages,
    normalize_products,
    normalize_selection,
)
from fimenu.codec import decode_token
from fimenu.config import Settings, get_settings
from fimenu.db.store import KeyValueStore


# Module logger
logger = logging.getLogger(__name__)


class StateSource(str, enum.Enum):
    """Where the catalog of a resolved menu came from."""

    URL = "url"
    STORAGE = "storage"
    DEFAULT = "default"


@dataclass(frozen=True)
class MenuState:
    """Single authoritative menu value for one request."""

    catalog: ProductCatalog
    selection: Selection
    source: StateSource

    @property
    def total(self):
        return self.catalog.total(self.selection)

    def with_selection(self, selection: Selection) -> MenuState:
        return MenuState(self.catalog, frozenset(selection), self.source)


class MenuStateResolver:
    """
    Applies the precedence chain to build a MenuState.

    Example:
        >>> resolver = MenuStateResolver(KeyValueStore(session))
        >>> state = resolver.resolve(request.query_params.get("products"),
        ...                          request.query_params.get("selections"))
        >>> state.source
        <StateSource.URL: 'url'>
    """

    def __init__(
        self,
        store: KeyValueStore,
        settings: Optional[Settings] = None
    ) -> None:
        self._store = store
        self._settings = settings or get_settings()

    # =========================================================================
    # TOKENS
    # =========================================================================

    def decode(self, token: Optional[str]) -> Optional[Any]:
        """Decode a query-parameter token, enforcing the length limit."""
        if not token:
            return None

        if len(token) > self._settings.max_token_length:
            logger.warning(
                f"Ignoring token of {len(token)} chars "
                f"(limit {self._settings.max_token_length})"
            )
            return None

        return decode_token(token)

    def products_from_token(self, token: Optional[str]) -> Optional[List[Product]]:
        """Products carried by a ``products`` token, or None."""
        decoded = self.decode(token)
        if not isinstance(decoded, list) or not decoded:
            if token:
                logger.info("Products token unusable, falling back to saved state")
            return None

        return normalize_products(decoded) or None

    def selection_from_token(self, token: Optional[str]) -> Selection:
        selection = normalize_selection(self.decode(token))
        if selection is None:
            if token:
                logger.info("Selections token unusable, starting with no selections")
            return EMPTY_SELECTION
        return selection

    # =========================================================================
    # SAVED STATE
    # =========================================================================

    def _load_json(self, key: str) -> Optional[Any]:
        saved = self._store.get(key)
        if saved is None:
            return None

        try:
            return json.loads(saved)
        except ValueError as e:
            logger.warning(f"⚠️ Ignoring corrupt saved state '{key}': {e}")
            return None

    def saved_products(self) -> Optional[List[Product]]:
        """Saved products, or None when nothing usable is stored."""
        parsed = self._load_json(self._settings.products_storage_key)
        if not isinstance(parsed, list) or not parsed:
            return None
        return normalize_products(parsed) or None

    def saved_packages(self) -> Optional[List[Package]]:
        """Saved packages (an empty saved list is respected), or None."""
        parsed = self._load_json(self._settings.packages_storage_key)
        if not isinstance(parsed, list):
            return None
        return normalize_packages(parsed)

    # =========================================================================
    # RESOLUTION
    # =========================================================================

    def load_catalog(
        self,
        products_token: Optional[str] = None
    ) -> Tuple[ProductCatalog, StateSource]:
        """
        Resolve the catalog alone.

        Returns:
            Tuple of (ProductCatalog, StateSource)
        """
        packages = self.saved_packages()
        if packages is None:
            packages = ProductCatalog.default().packages

        products = self.products_from_token(products_token)
        source = StateSource.URL

        if products is None:
            products = self.saved_products()
            source = StateSource.STORAGE

        if products is None:
            products = ProductCatalog.default().products
            source = StateSource.DEFAULT

        logger.debug(f"Catalog resolved from {source.value}: {len(products)} products")
        return ProductCatalog(products, packages), source

    def resolve(
        self,
        products_token: Optional[str] = None,
        selections_token: Optional[str] = None
    ) -> MenuState:
        """
        Build the menu state for a customer request.

        Args:
            products_token: ``products`` query parameter
            selections_token: ``selections`` query parameter

        Returns:
            MenuState
        """
        catalog, source = self.load_catalog(products_token)
        return MenuState(catalog, self.selection_from_token(selections_token), source)


class AdminMenuService:
    """
    Admin edits against the persisted catalog.

    Each operation loads the saved catalog (or the defaults), applies one
    pure edit, saves the result and returns it.

    Example:
        >>> service = AdminMenuService(KeyValueStore(session))
        >>> catalog = service.update_product("dent", {"price": 700})
        >>> catalog.find_by_id("dent").price
        700
    """

    def __init__(
        self,
        store: KeyValueStore,
        settings: Optional[Settings] = None
    ) -> None:
        self._store = store
        self._settings = settings or get_settings()
        self._resolver = MenuStateResolver(store, self._settings)

    def load(self) -> ProductCatalog:
        """Saved catalog, or the built-in one."""
        catalog, _ = self._resolver.load_catalog()
        return catalog

    def save(self, catalog: ProductCatalog) -> None:
        """Write products and packages as plain JSON text, in one commit."""
        self._store.set_many({
            self._settings.products_storage_key:
                json.dumps(catalog.product_records(), ensure_ascii=False),
            self._settings.packages_storage_key:
                json.dumps(catalog.package_records(), ensure_ascii=False),
        })

    def _apply(self, edit: Callable[[ProductCatalog], ProductCatalog]) -> ProductCatalog:
        catalog = edit(self.load())
        self.save(catalog)
        return catalog

    # =========================================================================
    # PRODUCTS
    # =========================================================================

    def add_product(self, fields: Optional[Mapping[str, Any]] = None) -> ProductCatalog:
        return self._apply(lambda catalog: catalog.add_product(fields))

    def update_product(self, product_id: str, patch: Mapping[str, Any]) -> ProductCatalog:
        return self._apply(lambda catalog: catalog.update_product(product_id, patch))

    def delete_product(self, product_id: str) -> ProductCatalog:
        return self._apply(lambda catalog: catalog.delete_product(product_id))

    def import_products(self, text: str) -> ProductCatalog:
        return self._apply(lambda catalog: catalog.import_json(text))

    def reset_products(self) -> ProductCatalog:
        """Restore the built-in products and forget the saved ones."""
        catalog = self.load().reset_products()
        self._store.delete(self._settings.products_storage_key)
        logger.info("Product catalog reset to defaults")
        return catalog

    # =========================================================================
    # PACKAGES
    # =========================================================================

    def add_package(self, fields: Optional[Mapping[str, Any]] = None) -> ProductCatalog:
        return self._apply(lambda catalog: catalog.add_package(fields))

    def update_package(self, package_id: str, patch: Mapping[str, Any]) -> ProductCatalog:
        return self._apply(lambda catalog: catalog.update_package(package_id, patch))

    def delete_package(self, package_id: str) -> ProductCatalog:
        return self._apply(lambda catalog: catalog.delete_package(package_id))

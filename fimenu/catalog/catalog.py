"""
==============================================================================
Product Catalog Module
==============================================================================

Immutable catalog value holding products and packages.

Features:
---------
- Normalization of untrusted product/package lists
- Unique product ids (duplicates are re-keyed, never dropped)
- Edit operations that return a new catalog instead of mutating
- Selection totals and discounted package prices

Record Structure:
----------------
[
  {"id": "dent", "icon": "☂️", "title": "Dent Protection",
   "subtitle": "...", "description": "...", "price": 630,
   "link": "https://www.porsche.com/"},
  ...
]

==============================================================================
"""

from __future__ import annotations

import json
import logging
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import AbstractSet, Any, Dict, Iterable, List, Mapping, Optional

from .defaults import DEFAULT_PACKAGES, DEFAULT_PRODUCTS
from .models import Number, Package, Product, new_product_id
from fimenu.core import exceptions


# Module logger
logger = logging.getLogger(__name__)


NEW_PRODUCT_FIELDS: Dict[str, Any] = {
    "icon": "🆕",
    "title": "New Product",
    "subtitle": "Category",
    "description": "Enter description...",
    "price": 0,
    "link": "",
}


def sum_prices(prices: Iterable[Number]) -> Number:
    """
    Add prices without overflowing.

    Integral prices are ints and summed exactly. Fractional prices are
    small floats; they are added last, and when the whole part is beyond
    float range the fraction is rounded away.
    """
    whole = 0
    fractions = []
    for price in prices:
        if isinstance(price, int):
            whole += price
        else:
            fractions.append(price)

    fraction = math.fsum(fractions)
    if fraction.is_integer():
        return whole + int(fraction)

    try:
        return whole + fraction
    except OverflowError:
        return whole + int(Decimal(str(fraction)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def normalize_products(raw: Any) -> List[Product]:
    """
    Turn an untrusted product list into valid products.

    Non-object entries are skipped. A record whose id repeats an earlier one
    keeps its fields and gets a fresh id.

    Args:
        raw: Decoded JSON value

    Returns:
        List of products (empty when ``raw`` is not a list)
    """
    if not isinstance(raw, list):
        return []

    products: List[Product] = []
    seen = set()

    for item in raw:
        product = Product.from_raw(item)
        if product is None:
            logger.debug(f"Skipping non-object product entry: {item!r}")
            continue

        if product.id in seen:
            fresh_id = new_product_id()
            logger.warning(f"Duplicate product id '{product.id}' re-keyed as '{fresh_id}'")
            product = product.model_copy(update={"id": fresh_id})

        seen.add(product.id)
        products.append(product)

    return products


def normalize_packages(raw: Any) -> List[Package]:
    """Turn an untrusted package list into valid packages, last duplicate id wins."""
    if not isinstance(raw, list):
        return []

    packages: Dict[str, Package] = {}
    for item in raw:
        package = Package.from_raw(item)
        if package is not None:
            packages[package.id] = package
    return list(packages.values())


class ProductCatalog:
    """
    Products and packages currently configured.

    Instances never change; every edit returns a new catalog so the caller
    owns exactly one current value and threads it through explicitly.

    Example:
        >>> catalog = ProductCatalog.default()
        >>> catalog.total({"dent", "xpel", "gone"})
        3125
        >>> catalog = catalog.delete_product("dent")
        >>> catalog.find_by_id("dent") is None
        True
    """

    def __init__(
        self,
        products: Iterable[Product] = (),
        packages: Iterable[Package] = ()
    ) -> None:
        """
        Initialize catalog.

        Args:
            products: Products with unique ids
            packages: Packages with unique ids

        Raises:
            ValueError: If two products or two packages share an id
        """
        self._products = tuple(products)
        self._packages = tuple(packages)
        self._by_id: Dict[str, Product] = {p.id: p for p in self._products}
        self._packages_by_id: Dict[str, Package] = {p.id: p for p in self._packages}

        if len(self._by_id) != len(self._products):
            raise ValueError("Product ids must be unique")
        if len(self._packages_by_id) != len(self._packages):
            raise ValueError("Package ids must be unique")

    # =========================================================================
    # CONSTRUCTORS
    # =========================================================================

    @classmethod
    def default(cls) -> ProductCatalog:
        """Built-in products and packages."""
        return cls.from_records(DEFAULT_PRODUCTS, DEFAULT_PACKAGES)

    @classmethod
    def from_records(cls, products: Any, packages: Any = None) -> ProductCatalog:
        """Build a catalog from untrusted product and package lists."""
        return cls(normalize_products(products), normalize_packages(packages))

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def products(self) -> List[Product]:
        """Get all products in display order."""
        return list(self._products)

    @property
    def packages(self) -> List[Package]:
        """Get all packages in display order."""
        return list(self._packages)

    def find_by_id(self, product_id: str) -> Optional[Product]:
        return self._by_id.get(product_id)

    def find_package(self, package_id: str) -> Optional[Package]:
        return self._packages_by_id.get(package_id)

    def product_records(self) -> List[Dict[str, Any]]:
        """Products as plain dicts, the shape carried by ``products`` tokens."""
        return [p.to_record() for p in self._products]

    def package_records(self) -> List[Dict[str, Any]]:
        return [p.to_record() for p in self._packages]

    def __len__(self) -> int:
        return len(self._products)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProductCatalog):
            return NotImplemented
        return self._products == other._products and self._packages == other._packages

    def __repr__(self) -> str:
        return f"ProductCatalog(products={len(self._products)}, packages={len(self._packages)})"

    # =========================================================================
    # PRODUCT EDITS
    # =========================================================================

    def add_product(self, fields: Optional[Mapping[str, Any]] = None) -> ProductCatalog:
        """
        Append a product.

        Args:
            fields: Initial field values; placeholders fill the rest. A
                caller-supplied id already in use is replaced with a new one.

        Returns:
            New catalog with the product last
        """
        record = dict(NEW_PRODUCT_FIELDS)
        record.update(fields or {})
        if record.get("id") in self._by_id:
            record["id"] = None

        product = Product.model_validate(record)
        logger.info(f"Added product '{product.id}'")
        return ProductCatalog(self._products + (product,), self._packages)

    def update_product(self, product_id: str, patch: Mapping[str, Any]) -> ProductCatalog:
        """
        Merge ``patch`` into a product and re-apply field coercion.

        The id itself cannot be changed.

        Raises:
            AppException: PRODUCT_NOT_FOUND
        """
        current = self._by_id.get(product_id)
        if current is None:
            raise exceptions.product_not_found(product_id)

        record = current.to_record()
        record.update(patch)
        record["id"] = product_id
        updated = Product.model_validate(record)

        return ProductCatalog(
            tuple(updated if p.id == product_id else p for p in self._products),
            self._packages
        )

    def delete_product(self, product_id: str) -> ProductCatalog:
        """
        Remove a product. Packages keep the id; it is skipped when pricing.

        Raises:
            AppException: PRODUCT_NOT_FOUND
        """
        if product_id not in self._by_id:
            raise exceptions.product_not_found(product_id)

        logger.info(f"Deleted product '{product_id}'")
        return ProductCatalog(
            tuple(p for p in self._products if p.id != product_id),
            self._packages
        )

    def with_products(self, products: Iterable[Product]) -> ProductCatalog:
        return ProductCatalog(products, self._packages)

    def reset_products(self) -> ProductCatalog:
        """Restore the built-in products; packages are kept."""
        return self.with_products(normalize_products(DEFAULT_PRODUCTS))

    # =========================================================================
    # PACKAGE EDITS
    # =========================================================================

    def add_package(self, fields: Optional[Mapping[str, Any]] = None) -> ProductCatalog:
        record = dict(fields or {})
        if record.get("id") in self._packages_by_id:
            record["id"] = None

        package = Package.model_validate(record)
        logger.info(f"Added package '{package.id}'")
        return ProductCatalog(self._products, self._packages + (package,))

    def update_package(self, package_id: str, patch: Mapping[str, Any]) -> ProductCatalog:
        """
        Merge ``patch`` (either key style) into a package.

        Raises:
            AppException: PACKAGE_NOT_FOUND
        """
        current = self._packages_by_id.get(package_id)
        if current is None:
            raise exceptions.package_not_found(package_id)

        record = current.to_record()
        for key, value in patch.items():
            record["productIds" if key == "product_ids" else key] = value
        record["id"] = package_id
        updated = Package.model_validate(record)

        return ProductCatalog(
            self._products,
            tuple(updated if p.id == package_id else p for p in self._packages)
        )

    def delete_package(self, package_id: str) -> ProductCatalog:
        if package_id not in self._packages_by_id:
            raise exceptions.package_not_found(package_id)
        return ProductCatalog(
            self._products,
            tuple(p for p in self._packages if p.id != package_id)
        )

    # =========================================================================
    # IMPORT / EXPORT
    # =========================================================================

    def export_json(self) -> str:
        """Products as pretty-printed JSON."""
        return json.dumps(self.product_records(), indent=2, ensure_ascii=False)

    def import_json(self, text: str) -> ProductCatalog:
        """
        Replace the products with the contents of an export file.

        Raises:
            AppException: INVALID_IMPORT if ``text`` is not a JSON list
        """
        try:
            parsed = json.loads(text)
        except ValueError as e:
            raise exceptions.invalid_import(f"invalid JSON ({e})")

        if not isinstance(parsed, list):
            raise exceptions.invalid_import("expected a list of products")

        return self.with_products(normalize_products(parsed))

    # =========================================================================
    # PRICING
    # =========================================================================

    def selected_products(self, selection: AbstractSet[str]) -> List[Product]:
        """Selected products in catalog order; unknown ids are skipped."""
        return [p for p in self._products if p.id in selection]

    def total(self, selection: AbstractSet[str]) -> Number:
        """Sum of the prices of selected products present in the catalog."""
        return sum_prices(p.price for p in self.selected_products(selection))

    def package_subtotal(self, package: Package) -> Number:
        """Undiscounted sum of a package's products found in the catalog."""
        return sum_prices(
            self._by_id[pid].price for pid in package.product_ids if pid in self._by_id
        )

    def package_price(self, package: Package) -> int:
        """
        Discounted package price rounded half-up to a whole unit.

        Example:
            subtotal 1000, discount 15 → 850
        """
        subtotal = Decimal(str(self.package_subtotal(package)))
        discount = Decimal(str(package.discount or 0))
        with localcontext() as ctx:
            # Exact for any subtotal the catalog can hold
            ctx.prec = max(ctx.prec, len(subtotal.as_tuple().digits) + 20)
            price = subtotal * (Decimal(100) - discount) / Decimal(100)
            return int(price.quantize(Decimal(1), rounding=ROUND_HALF_UP))

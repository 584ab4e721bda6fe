"""
==============================================================================
Menu Schemas Module
==============================================================================

Request bodies for the codec, customer menu and admin endpoints.

Field values are only loosely typed here; the catalog models apply the
real coercion rules when a record is built.

==============================================================================
"""

from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# =============================================================================
# CODEC SCHEMAS
# =============================================================================

class EncodeRequest(BaseModel):
    """Any JSON value to turn into a token."""
    value: Any = None


# =============================================================================
# CUSTOMER SCHEMAS
# =============================================================================

class ToggleRequest(BaseModel):
    """
    Toggle one product, or every product of a package, in a selection.

    ``products`` and ``selections`` are the tokens from the current URL.
    """
    products: Optional[str] = Field(default=None)
    selections: Optional[str] = Field(default=None)
    product_id: Optional[str] = Field(default=None, min_length=1)
    package_id: Optional[str] = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def validate_target(self):
        if self.product_id is None and self.package_id is None:
            raise ValueError("Either product_id or package_id must be provided")
        if self.product_id is not None and self.package_id is not None:
            raise ValueError("Cannot provide both product_id and package_id")
        return self


# =============================================================================
# ADMIN SCHEMAS
# =============================================================================

class ProductPatch(BaseModel):
    """Fields an admin may change on a product."""
    icon: Optional[str] = Field(default=None, max_length=16)
    title: Optional[str] = Field(default=None, max_length=200)
    subtitle: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = Field(default=None, max_length=4000)
    price: Optional[float] = Field(default=None, ge=0)
    link: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("icon", "title", "subtitle")
    @classmethod
    def strip_whitespace(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else None


class ProductCreate(ProductPatch):
    """New product; omitted fields get placeholder values."""
    id: Optional[str] = Field(default=None, min_length=1, max_length=100)


class PackagePatch(BaseModel):
    """Fields an admin may change on a package."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = Field(default=None, max_length=4000)
    icon: Optional[str] = Field(default=None, max_length=16)
    product_ids: Optional[List[str]] = Field(default=None, alias="productIds")
    discount: Optional[float] = Field(default=None, ge=0, le=100)
    color: Optional[str] = Field(default=None, max_length=32)


class PackageCreate(PackagePatch):
    """New package."""
    id: Optional[str] = Field(default=None, min_length=1, max_length=100)

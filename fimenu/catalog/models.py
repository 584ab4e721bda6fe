"""
==============================================================================
Catalog Models Module
==============================================================================

Pydantic models for products and packages.

Every field has a coercion rule so that records coming from a shared link,
an import file or the persisted store are repaired field by field instead of
being rejected.

==============================================================================
"""

import uuid
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fimenu.utils.validators import coerce_price, coerce_text, safe_url


Number = Union[int, float]


def new_product_id() -> str:
    """Generate a product id that is never handed out twice."""
    return f"product_{uuid.uuid4().hex}"


def new_package_id() -> str:
    """Generate a package id that is never handed out twice."""
    return f"package_{uuid.uuid4().hex}"


class Product(BaseModel):
    """
    Sellable protection product.

    Attributes:
        id: Unique key within a catalog
        icon: Short display glyph
        title: Product name
        subtitle: Provider or category line
        description: Marketing copy
        price: Finite non-negative amount
        link: Optional "learn more" URL as entered
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=new_product_id, min_length=1)
    icon: str = "🧩"
    title: str = "Product"
    subtitle: str = ""
    description: str = ""
    price: Number = 0
    link: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        text = coerce_text(v, "")
        return text if text else new_product_id()

    @field_validator("icon", mode="before")
    @classmethod
    def coerce_icon(cls, v: Any) -> str:
        return coerce_text(v, "🧩")

    @field_validator("title", mode="before")
    @classmethod
    def coerce_title(cls, v: Any) -> str:
        return coerce_text(v, "Product")

    @field_validator("subtitle", "description", mode="before")
    @classmethod
    def coerce_optional_text(cls, v: Any) -> str:
        return coerce_text(v, "")

    @field_validator("price", mode="before")
    @classmethod
    def coerce_amount(cls, v: Any) -> Number:
        return coerce_price(v)

    @field_validator("link", mode="before")
    @classmethod
    def keep_string_link(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None

    @property
    def safe_link(self) -> Optional[str]:
        """The link if it is a well-formed http(s) URL, else None."""
        return safe_url(self.link)

    @classmethod
    def from_raw(cls, data: Any) -> Optional["Product"]:
        """Build a product from untrusted data; non-objects give None."""
        if not isinstance(data, dict):
            return None
        return cls.model_validate(data)

    def to_record(self) -> Dict[str, Any]:
        """Plain dict used for tokens, exports and storage."""
        return self.model_dump(exclude_none=True)


class Package(BaseModel):
    """
    Named bundle of products with an optional discount.

    ``product_ids`` is serialized as ``productIds``.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(default_factory=new_package_id, min_length=1)
    name: str = "Package"
    description: str = ""
    icon: str = "📦"
    product_ids: List[str] = Field(default_factory=list, alias="productIds")
    discount: Optional[Number] = None
    color: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        text = coerce_text(v, "")
        return text if text else new_package_id()

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v: Any) -> str:
        return coerce_text(v, "Package")

    @field_validator("description", mode="before")
    @classmethod
    def coerce_description(cls, v: Any) -> str:
        return coerce_text(v, "")

    @field_validator("icon", mode="before")
    @classmethod
    def coerce_icon(cls, v: Any) -> str:
        return coerce_text(v, "📦")

    @field_validator("product_ids", mode="before")
    @classmethod
    def dedupe_product_ids(cls, v: Any) -> List[str]:
        if not isinstance(v, list):
            return []
        seen: Dict[str, None] = {}
        for item in v:
            text = coerce_text(item, "")
            if text:
                seen.setdefault(text, None)
        return list(seen)

    @field_validator("discount", mode="before")
    @classmethod
    def clamp_discount(cls, v: Any) -> Optional[Number]:
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, str):
            try:
                float(v)
            except ValueError:
                return None
        elif not isinstance(v, (int, float)):
            return None
        return min(coerce_price(v), 100)

    @field_validator("color", mode="before")
    @classmethod
    def keep_string_color(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) and v.strip() else None

    @classmethod
    def from_raw(cls, data: Any) -> Optional["Package"]:
        """Build a package from untrusted data; non-objects give None."""
        if not isinstance(data, dict):
            return None
        return cls.model_validate(data)

    def to_record(self) -> Dict[str, Any]:
        """Plain dict (``productIds`` key) used for storage."""
        return self.model_dump(by_alias=True, exclude_none=True)

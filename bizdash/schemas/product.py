# ==============================================================================
# PRODUCT SCHEMAS - Catalog and Inventory
# ==============================================================================
# Request/Response schemas for product management
# Input is normalized the way the product editor does it
# ==============================================================================

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import Field, field_validator

from bizdash.core.constants import InventoryConstants, ProductStatus
from bizdash.schemas.base import BaseSchema, Money, PriceInput, TimestampSchema
from bizdash.utils.helpers import (
    dedupe_preserving_order,
    normalize_reference,
    sanitize_string,
)


def _clean_features(value: Any) -> List[str]:
    if not value:
        return []
    limit = InventoryConstants.FEATURE_MAX_LENGTH
    return dedupe_preserving_order(str(f).strip()[:limit] for f in value)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _blank_to_zero(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    return value


class ProductCreate(BaseSchema):
    """
    Schema for creating a product.

    Reference and name are required. Whitespace is removed from the
    reference and it is uppercased; text fields are trimmed to their
    limits and duplicate features are dropped.
    """

    reference: str = Field(
        ...,
        description="User-facing SKU",
    )
    name: str = Field(
        ...,
        description="Product name",
    )
    description: str = Field(
        "",
        description="Product description",
    )
    features: List[str] = Field(
        default_factory=list,
        description="Ordered list of short selling points",
    )
    price: Optional[PriceInput] = Field(
        None,
        ge=0,
        description="Unit price",
    )
    original_price: Optional[PriceInput] = Field(
        None,
        ge=0,
        description="Price before discount, display only",
    )
    stock: int = Field(
        0,
        description="Units in stock",
    )
    status: ProductStatus = Field(
        ProductStatus.IN_STOCK,
        description="Inventory status",
    )
    sales: int = Field(
        0,
        description="Cumulative units sold",
    )
    image: Optional[str] = Field(
        None,
        max_length=500,
        description="Image URL or path",
    )

    @field_validator("reference", mode="before")
    @classmethod
    def validate_reference(cls, v: Any) -> str:
        v = normalize_reference(v, InventoryConstants.REFERENCE_MAX_LENGTH)
        if not v:
            raise ValueError("Product reference is required")
        return v

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> str:
        v = sanitize_string(v, InventoryConstants.NAME_MAX_LENGTH)
        if not v:
            raise ValueError("Product name is required")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v: Any) -> str:
        return (v or "").strip()[:InventoryConstants.DESCRIPTION_MAX_LENGTH]

    @field_validator("features", mode="before")
    @classmethod
    def validate_features(cls, v: Any) -> List[str]:
        return _clean_features(v)

    @field_validator("price", "original_price", mode="before")
    @classmethod
    def empty_price_is_null(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("stock", "sales", mode="before")
    @classmethod
    def empty_count_is_zero(cls, v: Any) -> Any:
        return _blank_to_zero(v)


class ProductUpdate(BaseSchema):
    """Schema for updating a product. Only sent fields are written."""

    reference: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    features: Optional[List[str]] = None
    price: Optional[PriceInput] = Field(None, ge=0)
    original_price: Optional[PriceInput] = Field(None, ge=0)
    stock: Optional[int] = None
    status: Optional[ProductStatus] = None
    sales: Optional[int] = None
    image: Optional[str] = Field(None, max_length=500)

    @field_validator("reference", mode="before")
    @classmethod
    def validate_reference(cls, v: Any) -> Optional[str]:
        if v is None:
            return v
        v = normalize_reference(v, InventoryConstants.REFERENCE_MAX_LENGTH)
        if not v:
            raise ValueError("Product reference cannot be empty")
        return v

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> Optional[str]:
        if v is None:
            return v
        v = sanitize_string(v, InventoryConstants.NAME_MAX_LENGTH)
        if not v:
            raise ValueError("Product name cannot be empty")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v: Any) -> Optional[str]:
        if v is None:
            return v
        return v.strip()[:InventoryConstants.DESCRIPTION_MAX_LENGTH]

    @field_validator("features", mode="before")
    @classmethod
    def validate_features(cls, v: Any) -> Optional[List[str]]:
        if v is None:
            return v
        return _clean_features(v)

    @field_validator("price", "original_price", mode="before")
    @classmethod
    def empty_price_is_null(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("stock", "sales", mode="before")
    @classmethod
    def empty_count_is_zero(cls, v: Any) -> Any:
        return _blank_to_zero(v)


class ProductResponse(TimestampSchema):
    """Schema for product response."""

    id: str = Field(
        ...,
        description="Product unique identifier",
    )
    reference: str = Field(
        "",
        description="User-facing SKU",
    )
    name: str = Field(
        ...,
        description="Product name",
    )
    description: str = Field(
        "",
        description="Product description",
    )
    features: List[str] = Field(
        default_factory=list,
        description="Selling points",
    )
    price: Optional[Money] = Field(
        None,
        description="Unit price",
    )
    original_price: Optional[Money] = Field(
        None,
        description="Price before discount",
    )
    stock: int = Field(
        0,
        description="Units in stock",
    )
    status: Optional[str] = Field(
        None,
        description="Inventory status",
    )
    sales: int = Field(
        0,
        description="Cumulative units sold",
    )
    image: Optional[str] = Field(
        None,
        description="Image URL or path",
    )

    @field_validator("stock", "sales", mode="before")
    @classmethod
    def missing_count_is_zero(cls, v: Any) -> Any:
        return _blank_to_zero(v)

    @field_validator("description", mode="before")
    @classmethod
    def missing_description(cls, v: Any) -> str:
        return v or ""

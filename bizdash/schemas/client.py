# ==============================================================================
# CLIENT SCHEMAS - Customer Records
# ==============================================================================
# Request/Response schemas for client management
# ==============================================================================

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from bizdash.core.constants import ClientStatus
from bizdash.schemas.base import BaseSchema, TimestampSchema
from bizdash.utils.helpers import sanitize_string


class ClientBase(BaseSchema):
    """Fields shared by client requests and responses."""

    cin: str = Field(
        "",
        max_length=50,
        description="Client identification number",
    )
    name: str = Field(
        ...,
        max_length=100,
        description="Client full name",
    )
    email: str = Field(
        "",
        max_length=255,
        description="Contact email",
    )
    phone: str = Field(
        "",
        max_length=50,
        description="Contact phone",
    )
    location: str = Field(
        "",
        max_length=255,
        description="City or address",
    )
    status: ClientStatus = Field(
        ClientStatus.ACTIVE,
        description="Account status",
    )


class ClientCreate(ClientBase):
    """Schema for creating a client."""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Name is required and whitespace-normalized."""
        v = sanitize_string(v, 100)
        if not v:
            raise ValueError("Client name is required")
        return v

    @field_validator("cin", "email", "phone", "location")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return (v or "").strip()


class ClientUpdate(BaseSchema):
    """Schema for updating a client. Every field is optional."""

    cin: Optional[str] = Field(None, max_length=50)
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    location: Optional[str] = Field(None, max_length=255)
    status: Optional[ClientStatus] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = sanitize_string(v, 100)
        if not v:
            raise ValueError("Client name cannot be empty")
        return v


class ClientResponse(ClientBase, TimestampSchema):
    """Schema for client response."""

    id: str = Field(
        ...,
        description="Client unique identifier",
    )
    status: str = Field(
        ClientStatus.ACTIVE.value,
        description="Account status",
    )
    pending_orders_count: int = Field(
        0,
        ge=0,
        description="Number of Pending orders, computed at read time",
    )

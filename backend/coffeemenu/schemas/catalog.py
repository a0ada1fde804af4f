"""
Coffee Menu Backend — Pydantic Request/Response Schemas
=========================================================

What:  Pydantic models defining the JSON contract with the menu UI.
Why:   Input parsing, serialization, and OpenAPI doc generation.
How:   Python attributes are snake_case; the wire format is camelCase
       (`nameRu`, `categoryId`, ...) through an alias generator.
       Request models accept either spelling.

Design Decision:
    Request fields are optional. The editor UI sends whatever the admin typed
    and the store keeps NULL for anything missing; there is no server-side
    validation beyond JSON types.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every schema serialized as camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Auth
# ══════════════════════════════════════════════════════════════════════════


class LoginRequest(BaseModel):
    # Left untyped: a non-string credential is a failed login (401), not a 400
    username: Any = Field(default=None, description="Admin username (case-sensitive)")
    password: Any = Field(default=None, description="Admin password (case-sensitive)")


class LoginResponse(BaseModel):
    success: bool = Field(description="True when the credentials matched")
    token: Optional[str] = Field(default=None, description="Bearer token for admin requests")
    error: Optional[str] = Field(default=None, description="Failure reason")


class VerifyResponse(BaseModel):
    valid: bool = Field(description="Whether the presented bearer token is the admin token")


# ══════════════════════════════════════════════════════════════════════════
# Catalog requests
# ══════════════════════════════════════════════════════════════════════════


class CategoryCreate(CamelModel):
    """Body of POST /api/categories. sort_order is assigned by the store."""
    name_ru: Optional[str] = Field(default=None, description="Name, primary locale")
    name_en: Optional[str] = Field(default=None, description="Name, secondary locale")
    image: Optional[str] = Field(default=None, description="Image URL")


class ItemCreate(CamelModel):
    """Body of POST /api/items."""
    category_id: Optional[int] = Field(default=None, description="Owning category id")
    name_ru: Optional[str] = None
    name_en: Optional[str] = None
    desc_ru: Optional[str] = None
    desc_en: Optional[str] = None
    price: Optional[float] = Field(default=None, description="Price, non-negative")
    image: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Catalog responses
# ══════════════════════════════════════════════════════════════════════════


class CategoryResponse(CamelModel):
    """
    What:  Public representation of a category.
    Why:   sort_order is not exposed; list position already reflects it.
    """
    id: int
    name_ru: Optional[str] = None
    name_en: Optional[str] = None
    image: Optional[str] = None


class ItemResponse(CamelModel):
    id: int
    category_id: Optional[int] = None
    name_ru: Optional[str] = None
    name_en: Optional[str] = None
    desc_ru: Optional[str] = None
    desc_en: Optional[str] = None
    price: Optional[float] = None
    image: Optional[str] = None


class CreatedResponse(BaseModel):
    id: int = Field(description="Store-assigned id of the new row")


class DeletedResponse(BaseModel):
    """
    What:  Result of a delete.
    changes: rows removed from the addressed table. 0 means the id did not
             exist; that is not an error. Cascaded item removals are not counted.
    """
    message: str = Field(default="Deleted")
    changes: int = Field(description="Number of rows deleted")


# ══════════════════════════════════════════════════════════════════════════
# Errors & health
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    error: str = Field(description="Human-readable error message")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    categories: Optional[int] = Field(default=None, description="Number of categories stored")
    uptime_seconds: float = Field(description="Seconds since service started")

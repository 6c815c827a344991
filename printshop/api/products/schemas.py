"""
Product schemas for request/response validation
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from printshop.schemas.base import BaseSchema, Money
from printshop.utils.validators import normalize_text, sanitize_html

class ProductBase(BaseModel):
    """Fields shared by product create and response"""
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=5000)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    image_url: str = Field("", max_length=500)
    category: str = Field("", max_length=100)
    in_stock: int = Field(0, ge=0)
    print_time: str = Field("", max_length=50)
    created_by: str = Field("", max_length=100)

class ProductCreate(ProductBase):
    """Schema for creating a product"""

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v):
        v = normalize_text(v)
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("description")
    @classmethod
    def sanitize_description(cls, v):
        return sanitize_html(v)

class ProductUpdate(BaseModel):
    """Schema for updating a product; only the fields sent are replaced"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = Field(None, max_length=500)
    category: Optional[str] = Field(None, max_length=100)
    in_stock: Optional[int] = Field(None, ge=0)
    print_time: Optional[str] = Field(None, max_length=50)
    created_by: Optional[str] = Field(None, max_length=100)

    @field_validator("description")
    @classmethod
    def sanitize_description(cls, v):
        return sanitize_html(v) if v is not None else v

class ProductResponse(BaseSchema):
    """Schema for product response"""
    id: int
    name: str
    description: str
    price: Money
    image_url: str
    category: str
    in_stock: int
    print_time: str
    created_by: str
    created_at: datetime

class CategoryListResponse(BaseModel):
    categories: List[str]

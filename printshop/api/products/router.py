"""
Product API routes
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, List

from printshop.core.database import get_db
from .schemas import ProductCreate, ProductUpdate, ProductResponse, CategoryListResponse
from .services import ProductService

router = APIRouter()

@router.get(
    "",
    response_model=List[ProductResponse],
    summary="List products",
    description="List the catalog, optionally filtered by exact category"
)
async def list_products(
    category: Optional[str] = Query(None, description='Category name, "All" for no filter'),
    db: AsyncSession = Depends(get_db)
):
    """List products"""
    service = ProductService(db)
    return await service.list_products(category)

@router.get("/categories", response_model=CategoryListResponse, summary="List categories")
async def list_categories(db: AsyncSession = Depends(get_db)):
    """Distinct categories for the catalog filter"""
    service = ProductService(db)
    return CategoryListResponse(categories=await service.list_categories())

@router.get("/{product_id}", response_model=ProductResponse, summary="Get product")
async def get_product(product_id: int, db: AsyncSession = Depends(get_db)):
    """Get single product"""
    service = ProductService(db)
    return await service.get_product(product_id)

@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create product"
)
async def create_product(product_data: ProductCreate, db: AsyncSession = Depends(get_db)):
    """Create product"""
    service = ProductService(db)
    return await service.create_product(product_data.model_dump())

@router.put("/{product_id}", response_model=ProductResponse, summary="Update product")
async def update_product(
    product_id: int,
    product_data: ProductUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update product"""
    service = ProductService(db)
    return await service.update_product(
        product_id,
        product_data.model_dump(exclude_unset=True, exclude_none=True)
    )

@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete product"
)
async def delete_product(product_id: int, db: AsyncSession = Depends(get_db)):
    """Delete product"""
    service = ProductService(db)
    await service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""
Coffee Menu Backend — Category Route Handlers
===============================================

What:  GET/POST /api/categories and DELETE /api/categories/{category_id}.
How:   Thin handlers; CatalogService does the work. Write routes carry the
       require_admin dependency, so an unauthorized call never reaches the
       store and changes nothing.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from coffeemenu.database import get_db_session
from coffeemenu.schemas.catalog import (
    CategoryCreate,
    CategoryResponse,
    CreatedResponse,
    DeletedResponse,
    ErrorResponse,
)
from coffeemenu.services.auth_service import require_admin
from coffeemenu.services.catalog_service import catalog_service

router = APIRouter(prefix="/api/categories", tags=["Categories"])

ADMIN_RESPONSES = {
    401: {"description": "Missing or invalid admin token", "model": ErrorResponse},
    500: {"description": "Store failure", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[CategoryResponse],
    responses={500: {"description": "Store failure", "model": ErrorResponse}},
    summary="List categories in display order",
)
async def list_categories(
    db: AsyncSession = Depends(get_db_session),
) -> List[CategoryResponse]:
    return await catalog_service.list_categories(db)


@router.post(
    "",
    response_model=CreatedResponse,
    responses=ADMIN_RESPONSES,
    dependencies=[Depends(require_admin)],
    summary="Create a category at the end of the display order",
)
async def create_category(
    body: CategoryCreate,
    db: AsyncSession = Depends(get_db_session),
) -> CreatedResponse:
    return await catalog_service.create_category(db, body)


@router.delete(
    "/{category_id}",
    response_model=DeletedResponse,
    responses=ADMIN_RESPONSES,
    dependencies=[Depends(require_admin)],
    summary="Delete a category and all of its items",
)
async def delete_category(
    category_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> DeletedResponse:
    return await catalog_service.delete_category(db, category_id)

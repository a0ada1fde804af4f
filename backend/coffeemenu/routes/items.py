"""
Coffee Menu Backend — Item Route Handlers
===========================================

What:  GET /api/items/{category_id}, POST /api/items, DELETE /api/items/{item_id}.

Note the asymmetric path parameter: GET takes a CATEGORY id (list the
category's items) while DELETE takes an ITEM id.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from coffeemenu.database import get_db_session
from coffeemenu.schemas.catalog import (
    CreatedResponse,
    DeletedResponse,
    ErrorResponse,
    ItemCreate,
    ItemResponse,
)
from coffeemenu.services.auth_service import require_admin
from coffeemenu.services.catalog_service import catalog_service

router = APIRouter(prefix="/api/items", tags=["Items"])

ADMIN_RESPONSES = {
    401: {"description": "Missing or invalid admin token", "model": ErrorResponse},
    500: {"description": "Store failure (e.g. unknown categoryId)", "model": ErrorResponse},
}


@router.get(
    "/{category_id}",
    response_model=List[ItemResponse],
    summary="List the items of one category",
)
async def list_items(
    category_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[ItemResponse]:
    return await catalog_service.list_items(db, category_id)


@router.post(
    "",
    response_model=CreatedResponse,
    responses=ADMIN_RESPONSES,
    dependencies=[Depends(require_admin)],
    summary="Create an item in an existing category",
)
async def create_item(
    body: ItemCreate,
    db: AsyncSession = Depends(get_db_session),
) -> CreatedResponse:
    return await catalog_service.create_item(db, body)


@router.delete(
    "/{item_id}",
    response_model=DeletedResponse,
    responses=ADMIN_RESPONSES,
    dependencies=[Depends(require_admin)],
    summary="Delete one item",
)
async def delete_item(
    item_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> DeletedResponse:
    return await catalog_service.delete_item(db, item_id)

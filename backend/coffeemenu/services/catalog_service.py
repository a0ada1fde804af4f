"""
Coffee Menu Backend — Catalog Service (Business Logic)
========================================================

What:  The six catalog operations behind the HTTP API.
Why:   Routes stay thin (HTTP only); the store stays SQL only.
How:   Delegates each operation to CatalogStore and maps rows to response
       schemas. Authorization happens before these methods are called
       (require_admin dependency on write routes).

Operations:
    list_categories   public   rows ordered by sort_order
    create_category   admin    → {id}
    delete_category   admin    → {message, changes}; items cascade
    list_items        public   rows of one category, insertion order
    create_item       admin    → {id}
    delete_item       admin    → {message, changes}

There is deliberately no update operation: a correction is delete + create.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from coffeemenu.schemas.catalog import (
    CategoryCreate,
    CategoryResponse,
    CreatedResponse,
    DeletedResponse,
    ItemCreate,
    ItemResponse,
)
from coffeemenu.services.catalog_store import CatalogStore, catalog_store

logger = logging.getLogger(__name__)

# Largest rowid SQLite can store
MAX_ROW_ID = 2**63 - 1


def parse_row_id(raw: str) -> Optional[int]:
    """
    Path ids are taken as text. Anything that is not a plain decimal row id
    ("abc", "1.5", "-1") can never name a row, so it maps to None and the
    caller answers with the empty or zero-change result.
    """
    if not (raw.isascii() and raw.isdigit()):
        return None
    value = int(raw)
    return value if value <= MAX_ROW_ID else None


class CatalogService:
    """Stateless orchestrator over a CatalogStore."""

    def __init__(self, store: CatalogStore):
        self.store = store

    async def list_categories(self, db: AsyncSession) -> List[CategoryResponse]:
        rows = await self.store.list_categories(db)
        return [CategoryResponse.model_validate(row) for row in rows]

    async def create_category(self, db: AsyncSession, data: CategoryCreate) -> CreatedResponse:
        new_id = await self.store.create_category(
            db,
            name_ru=data.name_ru,
            name_en=data.name_en,
            image=data.image,
        )
        logger.info("Category %d created", new_id)
        return CreatedResponse(id=new_id)

    async def delete_category(self, db: AsyncSession, category_id: str) -> DeletedResponse:
        """
        Delete a category and, through the foreign key cascade, its items.

        changes counts category rows only; 0 when the id did not exist.
        """
        row_id = parse_row_id(category_id)
        changes = 0 if row_id is None else await self.store.delete_category(db, row_id)
        logger.info("Category %s delete: %d row(s) removed", category_id, changes)
        return DeletedResponse(message="Deleted", changes=changes)

    async def list_items(self, db: AsyncSession, category_id: str) -> List[ItemResponse]:
        row_id = parse_row_id(category_id)
        if row_id is None:
            return []
        rows = await self.store.list_items_by_category(db, row_id)
        return [ItemResponse.model_validate(row) for row in rows]

    async def create_item(self, db: AsyncSession, data: ItemCreate) -> CreatedResponse:
        new_id = await self.store.create_item(
            db,
            category_id=data.category_id,
            name_ru=data.name_ru,
            name_en=data.name_en,
            desc_ru=data.desc_ru,
            desc_en=data.desc_en,
            price=data.price,
            image=data.image,
        )
        logger.info("Item %d created in category %s", new_id, data.category_id)
        return CreatedResponse(id=new_id)

    async def delete_item(self, db: AsyncSession, item_id: str) -> DeletedResponse:
        row_id = parse_row_id(item_id)
        changes = 0 if row_id is None else await self.store.delete_item(db, row_id)
        logger.info("Item %s delete: %d row(s) removed", item_id, changes)
        return DeletedResponse(message="Deleted", changes=changes)


# ── Singleton Instance ────────────────────────────────────────────────────
catalog_service = CatalogService(catalog_store)

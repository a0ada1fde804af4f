"""
Coffee Menu Backend — Catalog Store (Persistence Layer)
=========================================================

What:  Every read and write against the `categories` and `items` tables.
Why:   Keeps SQL in one place; the service and routes never build queries.
How:   Single-statement SQLAlchemy Core queries executed on the request's
       AsyncSession. The session dependency commits or rolls back.
Who:   Called by CatalogService and the health check.

Atomicity:
    Each operation is ONE statement, so the store's own transaction
    guarantees are enough:
    - create_category computes sort_order inside the INSERT:
        INSERT INTO categories (name_ru, name_en, image, sort_order)
        VALUES (:ru, :en, :img,
                (SELECT COALESCE(MAX(sort_order), 0) + 1 FROM categories))
      Two concurrent creations cannot both read the same MAX, because the
      read happens under the write lock of the INSERT itself.
    - delete_category relies on ON DELETE CASCADE; the category and its
      items disappear in the same statement.

Error Policy:
    SQLAlchemyError → StoreError with the driver message verbatim.
    No retries. A missing id on delete yields 0, not an error.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coffeemenu.exceptions import StoreError, driver_message
from coffeemenu.models.catalog import Category, Item

logger = logging.getLogger(__name__)


class CatalogStore:
    """
    Durable storage for categories and items.

    Stateless: every method receives the session to run on.
    """

    async def _run(self, db: AsyncSession, statement, operation: str):
        try:
            return await db.execute(statement)
        except SQLAlchemyError as e:
            message = driver_message(e)
            logger.error("Store failure during %s: %s", operation, message)
            await db.rollback()
            raise StoreError(message=message, context={"operation": operation}) from e

    # ── Categories ────────────────────────────────────────────────────────

    async def list_categories(self, db: AsyncSession) -> List[Category]:
        """All categories, ascending by sort_order (id breaks ties)."""
        result = await self._run(
            db,
            select(Category).order_by(Category.sort_order.asc(), Category.id.asc()),
            "list_categories",
        )
        return list(result.scalars().all())

    async def create_category(
        self,
        db: AsyncSession,
        name_ru: Optional[str],
        name_en: Optional[str],
        image: Optional[str],
    ) -> int:
        """
        Insert a category at the end of the display order.

        Returns:
            The store-assigned id.
        """
        next_sort_order = (
            select(func.coalesce(func.max(Category.sort_order), 0) + 1)
            .scalar_subquery()
        )
        result = await self._run(
            db,
            insert(Category).values(
                name_ru=name_ru,
                name_en=name_en,
                image=image,
                sort_order=next_sort_order,
            ).returning(Category.id),
            "create_category",
        )
        return result.scalar_one()

    async def delete_category(self, db: AsyncSession, category_id: int) -> int:
        """Delete one category (items cascade). Returns category rows removed."""
        result = await self._run(
            db,
            delete(Category)
            .where(Category.id == category_id)
            .execution_options(synchronize_session=False),
            "delete_category",
        )
        return result.rowcount

    async def count_categories(self, db: AsyncSession) -> int:
        result = await self._run(db, select(func.count(Category.id)), "count_categories")
        return result.scalar() or 0

    # ── Items ─────────────────────────────────────────────────────────────

    async def list_items_by_category(self, db: AsyncSession, category_id: int) -> List[Item]:
        """Items of one category in insertion order. Empty list if none."""
        result = await self._run(
            db,
            select(Item).where(Item.category_id == category_id).order_by(Item.id.asc()),
            "list_items_by_category",
        )
        return list(result.scalars().all())

    async def create_item(
        self,
        db: AsyncSession,
        category_id: Optional[int],
        name_ru: Optional[str],
        name_en: Optional[str],
        desc_ru: Optional[str],
        desc_en: Optional[str],
        price: Optional[float],
        image: Optional[str],
    ) -> int:
        """
        Insert an item.

        category_id is not checked here; the foreign key constraint rejects
        a missing category and that surfaces as StoreError.
        """
        result = await self._run(
            db,
            insert(Item).values(
                category_id=category_id,
                name_ru=name_ru,
                name_en=name_en,
                desc_ru=desc_ru,
                desc_en=desc_en,
                price=price,
                image=image,
            ).returning(Item.id),
            "create_item",
        )
        return result.scalar_one()

    async def delete_item(self, db: AsyncSession, item_id: int) -> int:
        result = await self._run(
            db,
            delete(Item)
            .where(Item.id == item_id)
            .execution_options(synchronize_session=False),
            "delete_item",
        )
        return result.rowcount

    async def count_items(self, db: AsyncSession, category_id: Optional[int] = None) -> int:
        """Row count of items, optionally restricted to one category."""
        statement = select(func.count(Item.id))
        if category_id is not None:
            statement = statement.where(Item.category_id == category_id)
        result = await self._run(db, statement, "count_items")
        return result.scalar() or 0


# ── Singleton Instance ────────────────────────────────────────────────────
catalog_store = CatalogStore()

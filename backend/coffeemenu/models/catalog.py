"""
Coffee Menu Backend — Catalog SQLAlchemy Models
=================================================

What:  ORM models for the `categories` and `items` tables.
Why:   Maps menu rows to Python objects; Alembic and create_all read this.
How:   Inherits from the shared DeclarativeBase in coffeemenu.database.
Who:   Used by CatalogStore for all reads and writes.

Table Design:
    - Integer AUTOINCREMENT ids: assigned by the store, never reused after delete
    - Two locales per text field: `_ru` (primary) and `_en` (secondary)
    - categories.sort_order: display order only; gaps and duplicates are allowed
    - items.category_id: FOREIGN KEY ... ON DELETE CASCADE, so removing a
      category removes its items in the same statement
"""

from typing import List, Optional

from sqlalchemy import Float, ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coffeemenu.database import Base


class Category(Base):
    """
    A menu section such as "Coffee" or "Desserts".

    Lifecycle:
        1. Created by an admin; sort_order = max(existing) + 1 (or 1 when empty)
        2. Listed publicly, ascending by sort_order
        3. Deleted by an admin; all of its items go with it
    """

    __tablename__ = "categories"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name_ru: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    name_en: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sort_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    # passive_deletes: the database cascades, the ORM does not load children first
    items: Mapped[List["Item"]] = relationship(
        back_populates="category",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name_en='{self.name_en}', sort_order={self.sort_order})>"


class Item(Base):
    """A priced product belonging to exactly one Category."""

    __tablename__ = "items"
    __table_args__ = (
        Index("idx_items_category_id", "category_id"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=True,
    )
    name_ru: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    name_en: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    desc_ru: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    desc_en: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    category: Mapped[Optional[Category]] = relationship(back_populates="items")

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, category_id={self.category_id}, price={self.price})>"

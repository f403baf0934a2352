from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, String, Boolean, DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

import jewelry_catalog.constants as c
from jewelry_catalog.database import Base


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(
        String(c.CATEGORY_NAME_MAX_LENGTH), nullable=False
    )
    description: Mapped[str | None] = mapped_column(
        String(c.CATEGORY_DESCRIPTION_MAX_LENGTH), nullable=True
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True)

    parent_id: Mapped[int | None] = mapped_column(
        ForeignKey("categories.id"),
        nullable=True,
        index=True
    )
    # глубина от корня, пересчитывается при смене parent_id
    level: Mapped[int] = mapped_column(
        Integer, default=c.CATEGORY_ROOT_LEVEL, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=True
    )

    products: Mapped[list["Product"]] = relationship(
        "Product", back_populates="category"
    )
    parent: Mapped[Optional["Category"]] = relationship(
        "Category",
        back_populates="children",
        remote_side="Category.id"
    )
    children: Mapped[list["Category"]] = relationship(
        "Category",
        back_populates="parent"
    )

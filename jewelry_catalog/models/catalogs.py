from datetime import datetime

from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, String, Table, func
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

import jewelry_catalog.constants as c
from jewelry_catalog.database import Base


# Товары, показанные в каталоге клиента
catalog_products = Table(
    "catalog_products",
    Base.metadata,
    Column(
        "catalog_id",
        ForeignKey("catalogs.id", ondelete="CASCADE"),
        primary_key=True
    ),
    Column(
        "product_id",
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True
    ),
)


class Catalog(Base):
    __tablename__ = "catalogs"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(
        String(c.CATALOG_NAME_MAX_LENGTH), nullable=False
    )
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id"), nullable=False, index=True
    )
    has_password: Mapped[bool] = mapped_column(Boolean, default=False)
    hashed_password: Mapped[str | None] = mapped_column(
        String, nullable=True
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=True
    )

    customer: Mapped["Customer"] = relationship(back_populates="catalogs")
    products: Mapped[list["Product"]] = relationship(
        "Product",
        secondary=catalog_products,
        order_by="Product.id"
    )
    inquiries: Mapped[list["Inquiry"]] = relationship(
        "Inquiry", back_populates="catalog"
    )

    @property
    def product_ids(self) -> list[int]:
        return [product.id for product in self.products]

    @property
    def product_count(self) -> int:
        return len(self.products)

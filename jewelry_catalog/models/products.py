from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    ForeignKey, String, Boolean, DateTime, Numeric, Text, func
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

import jewelry_catalog.constants as c
from jewelry_catalog.database import Base
from jewelry_catalog.service.pricing import calculate_final_price


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(
        String(c.PRODUCT_NAME_MAX_LENGTH), nullable=False
    )
    short_description: Mapped[str | None] = mapped_column(
        String(c.PRODUCT_SHORT_DESCRIPTION_MAX_LENGTH), nullable=True
    )
    long_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    base_price: Mapped[Decimal] = mapped_column(
        Numeric(c.PRODUCT_PRICE_DIGITS, c.PRODUCT_PRICE_SCALE),
        nullable=False
    )
    offer_percentage: Mapped[Decimal] = mapped_column(
        Numeric(5, 2),
        default=Decimal(c.PRODUCT_MIN_OFFER_PERCENTAGE),
        nullable=False
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id"), nullable=False, index=True
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

    category: Mapped["Category"] = relationship(back_populates="products")

    @property
    def final_price(self) -> Decimal:
        return calculate_final_price(self.base_price, self.offer_percentage)

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

import jewelry_catalog.constants as c
from jewelry_catalog.database import Base


class Inquiry(Base):
    __tablename__ = "inquiries"

    id: Mapped[int] = mapped_column(primary_key=True)
    customer_id: Mapped[int] = mapped_column(
        ForeignKey("customers.id"), nullable=False, index=True
    )
    catalog_id: Mapped[int | None] = mapped_column(
        ForeignKey("catalogs.id"), nullable=True, index=True
    )
    product_name: Mapped[str | None] = mapped_column(
        String(c.INQUIRY_PRODUCT_NAME_MAX_LENGTH), nullable=True
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[str] = mapped_column(
        String(c.INQUIRY_ENUM_MAX_LENGTH),
        default=c.INQUIRY_PRIORITY_MEDIUM,
        nullable=False
    )
    # pending / responded / closed, переходы не ограничены
    status: Mapped[str] = mapped_column(
        String(c.INQUIRY_ENUM_MAX_LENGTH),
        default=c.INQUIRY_STATUS_PENDING,
        nullable=False,
        index=True
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

    customer: Mapped["Customer"] = relationship(back_populates="inquiries")
    catalog: Mapped[Optional["Catalog"]] = relationship(
        back_populates="inquiries"
    )

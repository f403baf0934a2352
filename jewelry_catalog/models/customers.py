from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

import jewelry_catalog.constants as c
from jewelry_catalog.database import Base


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(
        String(c.CUSTOMER_NAME_MAX_LENGTH), nullable=False
    )
    email: Mapped[str] = mapped_column(
        String, unique=True, index=True, nullable=False
    )
    phone: Mapped[str | None] = mapped_column(
        String(c.CUSTOMER_PHONE_MAX_LENGTH), nullable=True
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

    catalogs: Mapped[list["Catalog"]] = relationship(
        "Catalog", back_populates="customer"
    )
    inquiries: Mapped[list["Inquiry"]] = relationship(
        "Inquiry", back_populates="customer"
    )

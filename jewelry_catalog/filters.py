from decimal import Decimal
from typing import Optional

from fastapi_filter.contrib.sqlalchemy import Filter
from pydantic import Field, ConfigDict

import jewelry_catalog.constants as c
from jewelry_catalog.models.products import Product as ProductModel


class ProductFilter(Filter):
    """Фильтр для модели Product"""
    name__ilike: Optional[str] = Field(default=None)
    category_id: Optional[int] = Field(default=None)
    category_id__in: Optional[list[int]] = Field(default=None)
    active: Optional[bool] = Field(default=None)
    base_price__gte: Optional[Decimal] = Field(
        ge=c.PRODUCT_MIN_PRICE, default=None
    )
    base_price__lte: Optional[Decimal] = Field(
        ge=c.PRODUCT_MIN_PRICE, default=None
    )
    search: Optional[str] = Field(default=None)
    order_by: Optional[list[str]] = Field(default=None)

    model_config = ConfigDict(populate_by_name=True)

    class Constants(Filter.Constants):
        model = ProductModel
        search_model_fields = [
            'name', 'short_description', 'long_description'
        ]

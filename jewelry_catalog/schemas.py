from datetime import datetime
from decimal import Decimal
from typing import Generic, Optional, TypeVar

from pydantic import (
    BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
)
from pydantic.alias_generators import to_camel

import jewelry_catalog.constants as c

T = TypeVar('T')

ADMIN_ROLE_PATTERN = f'^({"|".join(c.ADMIN_ROLES)})$'
INQUIRY_STATUS_PATTERN = f'^({"|".join(c.INQUIRY_STATUSES)})$'
INQUIRY_PRIORITY_PATTERN = f'^({"|".join(c.INQUIRY_PRIORITIES)})$'


def reject_null(value):
    if value is None:
        raise ValueError('Field may be omitted but cannot be null')
    return value


class CamelModel(BaseModel):
    """
    Базовая схема: JSON в camelCase, на входе принимаются и snake_case имена.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DataResponse(CamelModel, Generic[T]):
    success: bool = True
    data: T


class PageResponse(CamelModel, Generic[T]):
    success: bool = True
    data: list[T]
    total: int
    page: int
    page_size: int


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class BaseFieldIdTimestamps(CamelModel):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# :::КАТЕГОРИИ:::

class CategoryCreate(CamelModel):
    """
    Модель для создания категории.
    Используется в POST запросах.
    """
    name: str = Field(
        min_length=c.CATEGORY_NAME_MIN_LENGTH,
        max_length=c.CATEGORY_NAME_MAX_LENGTH,
        description=(
            f'Category name ({c.CATEGORY_NAME_MIN_LENGTH}-'
            f'{c.CATEGORY_NAME_MAX_LENGTH} characters)'
        )
    )
    description: Optional[str] = Field(
        None, max_length=c.CATEGORY_DESCRIPTION_MAX_LENGTH
    )
    parent_id: Optional[int] = Field(
        None,
        description='Parent category ID, null for a top-level category'
    )
    active: bool = True


class CategoryUpdate(CamelModel):
    """
    Частичное обновление: меняются только переданные поля.
    Явный parentId: null переносит категорию в корень.
    """
    name: Optional[str] = Field(
        None,
        min_length=c.CATEGORY_NAME_MIN_LENGTH,
        max_length=c.CATEGORY_NAME_MAX_LENGTH
    )
    description: Optional[str] = Field(
        None, max_length=c.CATEGORY_DESCRIPTION_MAX_LENGTH
    )
    parent_id: Optional[int] = None
    active: Optional[bool] = None

    not_null = field_validator('name', 'active')(reject_null)


class CategoryBrief(CamelModel):
    id: int
    name: str


class Category(CategoryCreate, BaseFieldIdTimestamps):
    """
    Модель для ответа с данными категории.
    level, subcategoryCount и productCount вычисляются сервером.
    """
    level: int = c.CATEGORY_ROOT_LEVEL
    subcategory_count: int = 0
    product_count: int = 0


# :::ТОВАРЫ:::

class ProductCreate(CamelModel):
    """
    Модель для создания товара.
    Используется в POST запросах.
    """
    name: str = Field(
        min_length=c.PRODUCT_NAME_MIN_LENGTH,
        max_length=c.PRODUCT_NAME_MAX_LENGTH,
    )
    short_description: Optional[str] = Field(
        None, max_length=c.PRODUCT_SHORT_DESCRIPTION_MAX_LENGTH
    )
    long_description: Optional[str] = Field(
        None,
        min_length=c.PRODUCT_LONG_DESCRIPTION_MIN_LENGTH,
        max_length=c.PRODUCT_LONG_DESCRIPTION_MAX_LENGTH
    )
    base_price: Decimal = Field(
        gt=c.PRODUCT_MIN_PRICE,
        max_digits=c.PRODUCT_PRICE_DIGITS,
        decimal_places=c.PRODUCT_PRICE_SCALE,
        description=f'Base price (greater than {c.PRODUCT_MIN_PRICE})'
    )
    offer_percentage: Decimal = Field(
        Decimal(c.PRODUCT_MIN_OFFER_PERCENTAGE),
        ge=c.PRODUCT_MIN_OFFER_PERCENTAGE,
        le=c.PRODUCT_MAX_OFFER_PERCENTAGE,
        decimal_places=2,
        description=(
            f'Discount in percent ({c.PRODUCT_MIN_OFFER_PERCENTAGE}-'
            f'{c.PRODUCT_MAX_OFFER_PERCENTAGE})'
        )
    )
    category_id: int = Field(description='Category the product belongs to')
    active: bool = True


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(
        None,
        min_length=c.PRODUCT_NAME_MIN_LENGTH,
        max_length=c.PRODUCT_NAME_MAX_LENGTH,
    )
    short_description: Optional[str] = Field(
        None, max_length=c.PRODUCT_SHORT_DESCRIPTION_MAX_LENGTH
    )
    long_description: Optional[str] = Field(
        None,
        min_length=c.PRODUCT_LONG_DESCRIPTION_MIN_LENGTH,
        max_length=c.PRODUCT_LONG_DESCRIPTION_MAX_LENGTH
    )
    base_price: Optional[Decimal] = Field(
        None,
        gt=c.PRODUCT_MIN_PRICE,
        max_digits=c.PRODUCT_PRICE_DIGITS,
        decimal_places=c.PRODUCT_PRICE_SCALE,
    )
    offer_percentage: Optional[Decimal] = Field(
        None,
        ge=c.PRODUCT_MIN_OFFER_PERCENTAGE,
        le=c.PRODUCT_MAX_OFFER_PERCENTAGE,
        decimal_places=2,
    )
    category_id: Optional[int] = None
    active: Optional[bool] = None

    not_null = field_validator(
        'name', 'base_price', 'offer_percentage', 'category_id', 'active'
    )(reject_null)


class Product(ProductCreate, BaseFieldIdTimestamps):
    """
    Модель для ответа с данными товара.
    Используется в GET-запросах.
    """
    final_price: Decimal
    category: Optional[CategoryBrief] = None


# :::КЛИЕНТЫ:::

class CustomerCreate(CamelModel):
    name: str = Field(
        min_length=c.CUSTOMER_NAME_MIN_LENGTH,
        max_length=c.CUSTOMER_NAME_MAX_LENGTH,
    )
    email: EmailStr = Field(description='Customer email')
    phone: Optional[str] = Field(
        None, max_length=c.CUSTOMER_PHONE_MAX_LENGTH
    )
    active: bool = True


class CustomerUpdate(CamelModel):
    name: Optional[str] = Field(
        None,
        min_length=c.CUSTOMER_NAME_MIN_LENGTH,
        max_length=c.CUSTOMER_NAME_MAX_LENGTH,
    )
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(
        None, max_length=c.CUSTOMER_PHONE_MAX_LENGTH
    )
    active: Optional[bool] = None

    not_null = field_validator('name', 'email', 'active')(reject_null)


class CustomerBrief(CamelModel):
    id: int
    name: str
    email: str


class Customer(CustomerCreate, BaseFieldIdTimestamps):
    pass


# :::КАТАЛОГИ:::

class CatalogCreate(CamelModel):
    name: str = Field(
        min_length=c.CATALOG_NAME_MIN_LENGTH,
        max_length=c.CATALOG_NAME_MAX_LENGTH,
    )
    customer_id: int
    has_password: bool = False
    password: Optional[str] = Field(
        None,
        min_length=c.CATALOG_PASSWORD_MIN_LENGTH,
        description='Access password, required when hasPassword is true'
    )
    active: bool = True
    product_ids: list[int] = Field(default_factory=list)

    @model_validator(mode='after')
    def check_password(self):
        if self.has_password and not self.password:
            raise ValueError('Password is required when hasPassword is true')
        return self


class CatalogUpdate(CamelModel):
    name: Optional[str] = Field(
        None,
        min_length=c.CATALOG_NAME_MIN_LENGTH,
        max_length=c.CATALOG_NAME_MAX_LENGTH,
    )
    customer_id: Optional[int] = None
    has_password: Optional[bool] = None
    password: Optional[str] = Field(
        None, min_length=c.CATALOG_PASSWORD_MIN_LENGTH
    )
    active: Optional[bool] = None
    product_ids: Optional[list[int]] = None

    not_null = field_validator(
        'name', 'customer_id', 'has_password', 'active', 'product_ids'
    )(reject_null)


class CatalogAccess(CamelModel):
    password: Optional[str] = None


class CatalogBrief(CamelModel):
    id: int
    name: str


class Catalog(BaseFieldIdTimestamps):
    name: str
    customer_id: int
    customer: Optional[CustomerBrief] = None
    has_password: bool
    active: bool
    product_ids: list[int] = Field(default_factory=list)
    product_count: int = 0


# :::ЗАПРОСЫ:::

class InquiryCreate(CamelModel):
    customer_id: int
    catalog_id: Optional[int] = None
    product_name: Optional[str] = Field(
        None, max_length=c.INQUIRY_PRODUCT_NAME_MAX_LENGTH
    )
    message: str = Field(
        min_length=1, max_length=c.INQUIRY_MESSAGE_MAX_LENGTH
    )
    priority: str = Field(
        default=c.INQUIRY_PRIORITY_MEDIUM,
        pattern=INQUIRY_PRIORITY_PATTERN,
        description=f'One of: {", ".join(c.INQUIRY_PRIORITIES)}'
    )
    status: str = Field(
        default=c.INQUIRY_STATUS_PENDING,
        pattern=INQUIRY_STATUS_PATTERN,
        description=f'One of: {", ".join(c.INQUIRY_STATUSES)}'
    )


class InquiryUpdate(CamelModel):
    """
    Любой статус можно сменить на любой другой, переходы не проверяются.
    """
    catalog_id: Optional[int] = None
    product_name: Optional[str] = Field(
        None, max_length=c.INQUIRY_PRODUCT_NAME_MAX_LENGTH
    )
    message: Optional[str] = Field(
        None, min_length=1, max_length=c.INQUIRY_MESSAGE_MAX_LENGTH
    )
    priority: Optional[str] = Field(None, pattern=INQUIRY_PRIORITY_PATTERN)
    status: Optional[str] = Field(None, pattern=INQUIRY_STATUS_PATTERN)

    not_null = field_validator('message', 'priority', 'status')(reject_null)


class Inquiry(InquiryCreate, BaseFieldIdTimestamps):
    customer: Optional[CustomerBrief] = None
    catalog: Optional[CatalogBrief] = None


# :::АДМИНИСТРАТОРЫ:::

class BaseAdminUser(CamelModel):
    """
    Базовая модель для валидации администраторов и вывода о них информации
    """
    full_name: str = Field(
        min_length=c.ADMIN_NAME_MIN_LENGTH,
        max_length=c.ADMIN_NAME_MAX_LENGTH,
    )
    email: EmailStr = Field(description='Admin email, used as login')
    phone: str = Field(
        min_length=c.ADMIN_PHONE_MIN_LENGTH,
        max_length=c.ADMIN_PHONE_MAX_LENGTH,
    )
    role: str = Field(
        default=c.ADMIN_ROLE_SUB,
        pattern=ADMIN_ROLE_PATTERN,
        description=f'Role: "{c.ADMIN_ROLE_SUPER}" or "{c.ADMIN_ROLE_SUB}"'
    )
    active: bool = True


class AdminUserCreate(BaseAdminUser):
    password: str = Field(
        min_length=c.ADMIN_PASSWORD_MIN_LENGTH,
        description=(
            f'Password (at least {c.ADMIN_PASSWORD_MIN_LENGTH} characters)'
        )
    )


class AdminUserUpdate(CamelModel):
    full_name: Optional[str] = Field(
        None,
        min_length=c.ADMIN_NAME_MIN_LENGTH,
        max_length=c.ADMIN_NAME_MAX_LENGTH,
    )
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(
        None,
        min_length=c.ADMIN_PHONE_MIN_LENGTH,
        max_length=c.ADMIN_PHONE_MAX_LENGTH,
    )
    role: Optional[str] = Field(None, pattern=ADMIN_ROLE_PATTERN)
    active: Optional[bool] = None
    password: Optional[str] = Field(
        None, min_length=c.ADMIN_PASSWORD_MIN_LENGTH
    )

    not_null = field_validator(
        'full_name', 'email', 'phone', 'role', 'active', 'password'
    )(reject_null)


class AdminUser(BaseAdminUser, BaseFieldIdTimestamps):
    pass


# :::ДАШБОРД:::

class DashboardStats(CamelModel):
    total_customers: int
    active_products: int
    live_catalogs: int
    pending_inquiries: int
    total_categories: int
    inquiries_by_status: dict[str, int]


class RecentActivity(CamelModel):
    type: str
    entity_id: int
    message: str
    status: Optional[str] = None
    created_at: Optional[datetime] = None

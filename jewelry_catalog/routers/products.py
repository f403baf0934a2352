from fastapi import APIRouter, Depends, Query, status
from fastapi_filter import FilterDepends
from loguru import logger
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

import jewelry_catalog.constants as c
from jewelry_catalog.auth import get_current_admin
from jewelry_catalog.db_depends import get_async_db
from jewelry_catalog.filters import ProductFilter
from jewelry_catalog.models.catalogs import catalog_products
from jewelry_catalog.models.categories import Category as CategoryModel
from jewelry_catalog.models.products import Product as ProductModel
from jewelry_catalog.schemas import (
    DataResponse,
    MessageResponse,
    PageResponse,
    Product as ProductSchema,
    ProductCreate,
    ProductUpdate,
)
from jewelry_catalog.service.tools import (
    create_object_model,
    update_object_model,
    delete_object_model,
    get_object_model_or_404,
)
from jewelry_catalog.service.validators import validate_reference

NOT_FOUND = 'Product not found'
WITH_CATEGORY = (selectinload(ProductModel.category),)

router = APIRouter(
    prefix="/products",
    tags=["products"],
    dependencies=[Depends(get_current_admin)],
)


async def get_product_or_404(product_id: int, db: AsyncSession):
    return await get_object_model_or_404(
        ProductModel, product_id, db, NOT_FOUND, WITH_CATEGORY
    )


async def validate_category(category_id: int, db: AsyncSession):
    return await validate_reference(
        CategoryModel,
        category_id,
        db,
        'categoryId',
        f'Category {category_id} does not exist'
    )


@router.get('/', response_model=PageResponse[ProductSchema])
async def get_all_products(
    product_filter: ProductFilter = FilterDepends(ProductFilter),
    page: int = Query(
        default=c.PRODUCT_ROUTER_MIN_PAGE,
        ge=c.PRODUCT_ROUTER_MIN_PAGE
    ),
    page_size: int = Query(
        ge=c.PRODUCT_ROUTER_MIN_SIZE,
        le=c.PRODUCT_ROUTER_MAX_SIZE,
        default=c.PRODUCT_ROUTER_DEFAULT_SIZE
    ),
    db: AsyncSession = Depends(get_async_db)
):
    """
    Возвращает страницу товаров с фильтрацией и поиском.
    """
    total = await db.scalar(
        product_filter.filter(select(func.count(ProductModel.id)))
    ) or 0

    products_stmt = product_filter.filter(
        select(ProductModel).options(*WITH_CATEGORY)
    )
    if product_filter.order_by:
        products_stmt = product_filter.sort(products_stmt)
    else:
        products_stmt = products_stmt.order_by(ProductModel.id)
    products = await db.scalars(
        products_stmt
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    return {
        "data": products.all(),
        "total": total,
        "page": page,
        "page_size": page_size,
    }


@router.get("/{product_id}", response_model=DataResponse[ProductSchema])
async def get_product(
    product_id: int, db: AsyncSession = Depends(get_async_db)
):
    """
    Возвращает детальную информацию о товаре по его ID.
    """
    product = await get_product_or_404(product_id, db)
    return {"data": product}


@router.post(
        "/",
        response_model=DataResponse[ProductSchema],
        status_code=status.HTTP_201_CREATED
)
async def create_product(
    product: ProductCreate,
    db: AsyncSession = Depends(get_async_db)
):
    """
    Создаёт новый товар.
    """
    await validate_category(product.category_id, db)
    db_product = await create_object_model(
        ProductModel, product.model_dump(), db
    )
    logger.info(
        f'Product {db_product.id} "{db_product.name}" created in '
        f'category {db_product.category_id}'
    )
    return {"data": await get_product_or_404(db_product.id, db)}


@router.put("/{product_id}", response_model=DataResponse[ProductSchema])
async def update_product(
    product_id: int,
    product_update: ProductUpdate,
    db: AsyncSession = Depends(get_async_db)
):
    """
    Обновляет переданные поля товара.
    """
    product = await get_product_or_404(product_id, db)
    values = product_update.model_dump(exclude_unset=True)
    if 'category_id' in values:
        await validate_category(values['category_id'], db)
    await update_object_model(ProductModel, product, values, db)
    logger.info(f'Product {product_id} updated: {sorted(values)}')
    return {"data": await get_product_or_404(product_id, db)}


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_async_db)
):
    """
    Удаляет товар и убирает его из всех каталогов.
    """
    product = await get_product_or_404(product_id, db)
    await db.execute(
        delete(catalog_products)
        .where(catalog_products.c.product_id == product.id)
    )
    await delete_object_model(ProductModel, product, db)
    logger.info(f'Product {product_id} "{product.name}" deleted')
    return {"message": "Product deleted"}

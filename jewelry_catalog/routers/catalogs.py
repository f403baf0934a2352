from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jewelry_catalog.auth import get_current_admin, hash_password, verify_password
from jewelry_catalog.db_depends import get_async_db
from jewelry_catalog.exceptions import NotFoundError, ValidationError
from jewelry_catalog.models.catalogs import (
    Catalog as CatalogModel, catalog_products
)
from jewelry_catalog.models.customers import Customer as CustomerModel
from jewelry_catalog.models.inquiries import Inquiry as InquiryModel
from jewelry_catalog.models.products import Product as ProductModel
from jewelry_catalog.schemas import (
    Catalog as CatalogSchema,
    CatalogAccess,
    CatalogCreate,
    CatalogUpdate,
    DataResponse,
    MessageResponse,
)
from jewelry_catalog.service.tools import (
    commit_and_refresh,
    create_object_model,
    delete_object_model,
    get_object_model_or_404,
)
from jewelry_catalog.service.validators import (
    validate_reference, validate_references
)

NOT_FOUND = 'Catalog not found'
WITH_RELATIONS = (
    selectinload(CatalogModel.customer),
    selectinload(CatalogModel.products),
)

router = APIRouter(
    prefix="/catalogs",
    tags=["catalogs"],
    dependencies=[Depends(get_current_admin)],
)


async def get_catalog_or_404(catalog_id: int, db: AsyncSession):
    return await get_object_model_or_404(
        CatalogModel, catalog_id, db, NOT_FOUND, WITH_RELATIONS
    )


async def validate_customer(customer_id: int, db: AsyncSession):
    return await validate_reference(
        CustomerModel,
        customer_id,
        db,
        'customerId',
        f'Customer {customer_id} does not exist'
    )


@router.get('/', response_model=DataResponse[list[CatalogSchema]])
async def get_catalogs(
    customer_id: int | None = Query(None, description="Catalogs of a customer"),
    active: bool | None = Query(None),
    db: AsyncSession = Depends(get_async_db)
):
    stmt = (
        select(CatalogModel)
        .options(*WITH_RELATIONS)
        .order_by(CatalogModel.id)
    )
    if customer_id is not None:
        stmt = stmt.where(CatalogModel.customer_id == customer_id)
    if active is not None:
        stmt = stmt.where(CatalogModel.active == active)
    catalogs = await db.scalars(stmt)
    return {"data": catalogs.all()}


@router.get('/{catalog_id}', response_model=DataResponse[CatalogSchema])
async def get_catalog(
    catalog_id: int, db: AsyncSession = Depends(get_async_db)
):
    return {"data": await get_catalog_or_404(catalog_id, db)}


@router.post(
    '/',
    response_model=DataResponse[CatalogSchema],
    status_code=status.HTTP_201_CREATED
)
async def create_catalog(
    catalog: CatalogCreate, db: AsyncSession = Depends(get_async_db)
):
    """
    Создаёт каталог клиента. Пароль хранится только в виде хеша.
    """
    await validate_customer(catalog.customer_id, db)
    products = await validate_references(
        ProductModel, catalog.product_ids, db, 'productIds'
    )
    values = catalog.model_dump(exclude={'password', 'product_ids'}) | {
        'hashed_password': (
            hash_password(catalog.password) if catalog.has_password else None
        ),
        'products': products,
    }
    db_catalog = await create_object_model(CatalogModel, values, db)
    logger.info(
        f'Catalog {db_catalog.id} "{db_catalog.name}" created for customer '
        f'{db_catalog.customer_id} with {len(products)} products'
    )
    return {"data": await get_catalog_or_404(db_catalog.id, db)}


@router.put('/{catalog_id}', response_model=DataResponse[CatalogSchema])
async def update_catalog(
    catalog_id: int,
    catalog_update: CatalogUpdate,
    db: AsyncSession = Depends(get_async_db)
):
    catalog = await get_catalog_or_404(catalog_id, db)
    values = catalog_update.model_dump(exclude_unset=True)

    if 'customer_id' in values:
        await validate_customer(values['customer_id'], db)
    if 'product_ids' in values:
        catalog.products = await validate_references(
            ProductModel, values.pop('product_ids'), db, 'productIds'
        )

    password = values.pop('password', None)
    has_password = values.get('has_password', catalog.has_password)
    if not has_password:
        values['hashed_password'] = None
    elif password:
        values['hashed_password'] = hash_password(password)
    elif not catalog.hashed_password:
        raise ValidationError(
            'password', 'Password is required when hasPassword is true'
        )

    for field, value in values.items():
        setattr(catalog, field, value)
    await commit_and_refresh(catalog, db)
    logger.info(f'Catalog {catalog_id} updated')
    return {"data": await get_catalog_or_404(catalog_id, db)}


@router.delete('/{catalog_id}', response_model=MessageResponse)
async def delete_catalog(
    catalog_id: int, db: AsyncSession = Depends(get_async_db)
):
    """
    Удаляет каталог; запросы по нему остаются без ссылки на каталог.
    """
    catalog = await get_catalog_or_404(catalog_id, db)
    await db.execute(
        update(InquiryModel)
        .where(InquiryModel.catalog_id == catalog.id)
        .values(catalog_id=None)
    )
    await db.execute(
        delete(catalog_products)
        .where(catalog_products.c.catalog_id == catalog.id)
    )
    await delete_object_model(CatalogModel, catalog, db)
    logger.info(f'Catalog {catalog_id} deleted')
    return {"message": "Catalog deleted"}


@router.post('/{catalog_id}/access', response_model=DataResponse[CatalogSchema])
async def access_catalog(
    catalog_id: int,
    access: CatalogAccess,
    db: AsyncSession = Depends(get_async_db)
):
    """
    Проверяет пароль каталога. Неактивный каталог считается отсутствующим.
    """
    catalog = await get_catalog_or_404(catalog_id, db)
    if not catalog.active:
        raise NotFoundError(NOT_FOUND)
    if catalog.has_password and (
        not access.password
        or not verify_password(access.password, catalog.hashed_password)
    ):
        logger.warning(f'Wrong password for catalog {catalog_id}')
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail='Invalid catalog password'
        )
    return {"data": catalog}

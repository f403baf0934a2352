from fastapi import APIRouter, Depends, Query, status
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jewelry_catalog.auth import get_current_admin
from jewelry_catalog.db_depends import get_async_db
from jewelry_catalog.models.catalogs import Catalog as CatalogModel
from jewelry_catalog.models.customers import Customer as CustomerModel
from jewelry_catalog.models.inquiries import Inquiry as InquiryModel
from jewelry_catalog.schemas import (
    INQUIRY_PRIORITY_PATTERN,
    INQUIRY_STATUS_PATTERN,
    DataResponse,
    Inquiry as InquirySchema,
    InquiryCreate,
    InquiryUpdate,
    MessageResponse,
)
from jewelry_catalog.service.tools import (
    create_object_model,
    update_object_model,
    delete_object_model,
    get_object_model_or_404,
)
from jewelry_catalog.service.validators import validate_reference

NOT_FOUND = 'Inquiry not found'
WITH_RELATIONS = (
    selectinload(InquiryModel.customer),
    selectinload(InquiryModel.catalog),
)

router = APIRouter(
    prefix="/inquiries",
    tags=["inquiries"],
    dependencies=[Depends(get_current_admin)],
)


async def get_inquiry_or_404(inquiry_id: int, db: AsyncSession):
    return await get_object_model_or_404(
        InquiryModel, inquiry_id, db, NOT_FOUND, WITH_RELATIONS
    )


async def validate_catalog(catalog_id, db: AsyncSession):
    if catalog_id is not None:
        await validate_reference(
            CatalogModel,
            catalog_id,
            db,
            'catalogId',
            f'Catalog {catalog_id} does not exist'
        )


@router.get('/', response_model=DataResponse[list[InquirySchema]])
async def get_inquiries(
    status_filter: str | None = Query(
        None, alias='status', pattern=INQUIRY_STATUS_PATTERN
    ),
    priority: str | None = Query(None, pattern=INQUIRY_PRIORITY_PATTERN),
    customer_id: int | None = Query(None),
    db: AsyncSession = Depends(get_async_db)
):
    """
    Запросы клиентов, новые сверху.
    """
    stmt = (
        select(InquiryModel)
        .options(*WITH_RELATIONS)
        .order_by(InquiryModel.created_at.desc(), InquiryModel.id.desc())
    )
    if status_filter is not None:
        stmt = stmt.where(InquiryModel.status == status_filter)
    if priority is not None:
        stmt = stmt.where(InquiryModel.priority == priority)
    if customer_id is not None:
        stmt = stmt.where(InquiryModel.customer_id == customer_id)
    inquiries = await db.scalars(stmt)
    return {"data": inquiries.all()}


@router.get('/{inquiry_id}', response_model=DataResponse[InquirySchema])
async def get_inquiry(
    inquiry_id: int, db: AsyncSession = Depends(get_async_db)
):
    return {"data": await get_inquiry_or_404(inquiry_id, db)}


@router.post(
    '/',
    response_model=DataResponse[InquirySchema],
    status_code=status.HTTP_201_CREATED
)
async def create_inquiry(
    inquiry: InquiryCreate, db: AsyncSession = Depends(get_async_db)
):
    """Ручное создание запроса администратором"""
    await validate_reference(
        CustomerModel,
        inquiry.customer_id,
        db,
        'customerId',
        f'Customer {inquiry.customer_id} does not exist'
    )
    await validate_catalog(inquiry.catalog_id, db)
    db_inquiry = await create_object_model(
        InquiryModel, inquiry.model_dump(), db
    )
    logger.info(
        f'Inquiry {db_inquiry.id} created for customer '
        f'{db_inquiry.customer_id} ({db_inquiry.status})'
    )
    return {"data": await get_inquiry_or_404(db_inquiry.id, db)}


@router.put('/{inquiry_id}', response_model=DataResponse[InquirySchema])
async def update_inquiry(
    inquiry_id: int,
    inquiry_update: InquiryUpdate,
    db: AsyncSession = Depends(get_async_db)
):
    """
    Обновляет запрос. Статус меняется на любой из допустимых.
    """
    inquiry = await get_inquiry_or_404(inquiry_id, db)
    values = inquiry_update.model_dump(exclude_unset=True)
    if 'catalog_id' in values:
        await validate_catalog(values['catalog_id'], db)
    previous_status = inquiry.status
    await update_object_model(InquiryModel, inquiry, values, db)
    if values.get('status', previous_status) != previous_status:
        logger.info(
            f'Inquiry {inquiry_id} status {previous_status} -> '
            f'{values["status"]}'
        )
    return {"data": await get_inquiry_or_404(inquiry_id, db)}


@router.delete('/{inquiry_id}', response_model=MessageResponse)
async def delete_inquiry(
    inquiry_id: int, db: AsyncSession = Depends(get_async_db)
):
    inquiry = await get_inquiry_or_404(inquiry_id, db)
    await delete_object_model(InquiryModel, inquiry, db)
    logger.info(f'Inquiry {inquiry_id} deleted')
    return {"message": "Inquiry deleted"}

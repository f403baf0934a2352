from fastapi import APIRouter, Depends, Query, status
from loguru import logger
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from jewelry_catalog.auth import get_current_admin
from jewelry_catalog.db_depends import get_async_db
from jewelry_catalog.exceptions import DependencyError
from jewelry_catalog.models.catalogs import Catalog as CatalogModel
from jewelry_catalog.models.customers import Customer as CustomerModel
from jewelry_catalog.models.inquiries import Inquiry as InquiryModel
from jewelry_catalog.schemas import (
    Customer as CustomerSchema,
    CustomerCreate,
    CustomerUpdate,
    DataResponse,
    MessageResponse,
)
from jewelry_catalog.service.tools import (
    count_object_models,
    create_object_model,
    update_object_model,
    delete_object_model,
    get_object_model_or_404,
)
from jewelry_catalog.service.validators import validate_unique_email

NOT_FOUND = 'Customer not found'

router = APIRouter(
    prefix="/customers",
    tags=["customers"],
    dependencies=[Depends(get_current_admin)],
)


@router.get('/', response_model=DataResponse[list[CustomerSchema]])
async def get_customers(
    search: str | None = Query(
        None, min_length=1, description="Search by name, email or phone"
    ),
    active: bool | None = Query(None),
    db: AsyncSession = Depends(get_async_db)
):
    stmt = select(CustomerModel).order_by(CustomerModel.id)
    if search:
        pattern = f'%{search.strip()}%'
        stmt = stmt.where(or_(
            CustomerModel.name.ilike(pattern),
            CustomerModel.email.ilike(pattern),
            CustomerModel.phone.ilike(pattern),
        ))
    if active is not None:
        stmt = stmt.where(CustomerModel.active == active)
    customers = await db.scalars(stmt)
    return {"data": customers.all()}


@router.get('/{customer_id}', response_model=DataResponse[CustomerSchema])
async def get_customer(
    customer_id: int, db: AsyncSession = Depends(get_async_db)
):
    customer = await get_object_model_or_404(
        CustomerModel, customer_id, db, NOT_FOUND
    )
    return {"data": customer}


@router.post(
    '/',
    response_model=DataResponse[CustomerSchema],
    status_code=status.HTTP_201_CREATED
)
async def create_customer(
    customer: CustomerCreate, db: AsyncSession = Depends(get_async_db)
):
    await validate_unique_email(CustomerModel, customer.email, db)
    db_customer = await create_object_model(
        CustomerModel, customer.model_dump(), db
    )
    logger.info(f'Customer {db_customer.id} "{db_customer.name}" created')
    return {"data": db_customer}


@router.put('/{customer_id}', response_model=DataResponse[CustomerSchema])
async def update_customer(
    customer_id: int,
    customer_update: CustomerUpdate,
    db: AsyncSession = Depends(get_async_db)
):
    customer = await get_object_model_or_404(
        CustomerModel, customer_id, db, NOT_FOUND
    )
    values = customer_update.model_dump(exclude_unset=True)
    if 'email' in values:
        await validate_unique_email(
            CustomerModel, values['email'], db, exclude_id=customer.id
        )
    customer = await update_object_model(CustomerModel, customer, values, db)
    logger.info(f'Customer {customer_id} updated: {sorted(values)}')
    return {"data": customer}


@router.delete('/{customer_id}', response_model=MessageResponse)
async def delete_customer(
    customer_id: int, db: AsyncSession = Depends(get_async_db)
):
    """
    Удаление запрещено, пока у клиента есть каталоги или запросы.
    """
    customer = await get_object_model_or_404(
        CustomerModel, customer_id, db, NOT_FOUND
    )
    catalogs = await count_object_models(
        CatalogModel, db, CatalogModel.customer_id == customer.id
    )
    inquiries = await count_object_models(
        InquiryModel, db, InquiryModel.customer_id == customer.id
    )
    if catalogs or inquiries:
        raise DependencyError(
            f'Customer has {catalogs} catalogs and {inquiries} inquiries; '
            'delete them or deactivate the customer instead'
        )
    await delete_object_model(CustomerModel, customer, db)
    logger.info(f'Customer {customer_id} deleted')
    return {"message": "Customer deleted"}

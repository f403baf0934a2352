from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

import jewelry_catalog.constants as c
from jewelry_catalog.auth import get_current_admin
from jewelry_catalog.db_depends import get_async_db
from jewelry_catalog.models.catalogs import Catalog as CatalogModel
from jewelry_catalog.models.categories import Category as CategoryModel
from jewelry_catalog.models.customers import Customer as CustomerModel
from jewelry_catalog.models.inquiries import Inquiry as InquiryModel
from jewelry_catalog.models.products import Product as ProductModel
from jewelry_catalog.schemas import (
    DashboardStats, DataResponse, RecentActivity
)
from jewelry_catalog.service.tools import count_object_models


router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
    dependencies=[Depends(get_current_admin)],
)


@router.get('/stats', response_model=DataResponse[DashboardStats])
async def get_stats(db: AsyncSession = Depends(get_async_db)):
    """Сводные счётчики для главной страницы"""
    rows = await db.execute(
        select(InquiryModel.status, func.count(InquiryModel.id))
        .group_by(InquiryModel.status)
    )
    by_status = dict.fromkeys(c.INQUIRY_STATUSES, 0) | dict(rows.all())
    stats = {
        'total_customers': await count_object_models(CustomerModel, db),
        'active_products': await count_object_models(
            ProductModel, db, ProductModel.active == True
        ),
        'live_catalogs': await count_object_models(
            CatalogModel, db, CatalogModel.active == True
        ),
        'pending_inquiries': by_status[c.INQUIRY_STATUS_PENDING],
        'total_categories': await count_object_models(CategoryModel, db),
        'inquiries_by_status': by_status,
    }
    return {"data": stats}


async def _latest(model, db: AsyncSession, limit: int, *options):
    result = await db.scalars(
        select(model)
        .options(*options)
        .order_by(model.created_at.desc(), model.id.desc())
        .limit(limit)
    )
    return result.all()


@router.get(
    '/recent-activity', response_model=DataResponse[list[RecentActivity]]
)
async def get_recent_activity(
    limit: int = Query(
        c.DASHBOARD_RECENT_DEFAULT_LIMIT,
        ge=1,
        le=c.DASHBOARD_RECENT_MAX_LIMIT
    ),
    db: AsyncSession = Depends(get_async_db)
):
    """
    Последние созданные каталоги, запросы, товары и клиенты одной лентой.
    """
    activity = []
    for catalog in await _latest(
        CatalogModel, db, limit, selectinload(CatalogModel.customer)
    ):
        activity.append({
            'type': 'catalog',
            'entity_id': catalog.id,
            'message': (
                f'New catalog "{catalog.name}" created for '
                f'{catalog.customer.name}'
            ),
            'status': 'active' if catalog.active else 'inactive',
            'created_at': catalog.created_at,
        })
    for inquiry in await _latest(
        InquiryModel, db, limit, selectinload(InquiryModel.customer)
    ):
        subject = f' for {inquiry.product_name}' if inquiry.product_name else ''
        activity.append({
            'type': 'inquiry',
            'entity_id': inquiry.id,
            'message': (
                f'Inquiry received{subject} from {inquiry.customer.name}'
            ),
            'status': inquiry.status,
            'created_at': inquiry.created_at,
        })
    for product in await _latest(ProductModel, db, limit):
        activity.append({
            'type': 'product',
            'entity_id': product.id,
            'message': f'Product "{product.name}" added',
            'status': 'active' if product.active else 'inactive',
            'created_at': product.created_at,
        })
    for customer in await _latest(CustomerModel, db, limit):
        activity.append({
            'type': 'customer',
            'entity_id': customer.id,
            'message': f'New customer registration: {customer.name}',
            'status': 'active' if customer.active else 'inactive',
            'created_at': customer.created_at,
        })

    activity.sort(key=lambda item: item['created_at'], reverse=True)
    return {"data": activity[:limit]}

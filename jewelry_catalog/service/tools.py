from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from jewelry_catalog.exceptions import NotFoundError


async def commit_and_refresh(object_model, db: AsyncSession):
    await db.commit()
    await db.refresh(object_model)
    return object_model


async def create_object_model(model, values: dict, db: AsyncSession):
    db_object = model(**values)
    db.add(db_object)
    db_object = await commit_and_refresh(db_object, db)
    return db_object


async def update_object_model(
    model, object_model, values: dict, db: AsyncSession
):
    if not values:
        return object_model
    await db.execute(
        update(model)
        .where(model.id == object_model.id)
        .values(**values)
    )
    object_model = await commit_and_refresh(object_model, db)
    return object_model


async def delete_object_model(model, object_model, db: AsyncSession):
    await db.execute(delete(model).where(model.id == object_model.id))
    await db.commit()


async def get_object_model_or_404(
    model,
    model_id,
    db: AsyncSession,
    description='Object not found',
    options=()
):
    stmt = select(model).where(model.id == model_id)
    if options:
        # перезагружаем связи и у объектов, уже лежащих в сессии
        stmt = stmt.options(*options).execution_options(
            populate_existing=True
        )
    result = await db.scalars(stmt)
    db_object = result.first()
    if db_object is None:
        raise NotFoundError(description)
    return db_object


async def count_object_models(model, db: AsyncSession, *filters) -> int:
    """Количество строк модели, подходящих под фильтры"""
    total = await db.scalar(
        select(func.count()).select_from(model).where(*filters)
    )
    return total or 0

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from jewelry_catalog.exceptions import ConflictError, ValidationError


async def validate_reference(
    model, object_id, db: AsyncSession, field: str, description=None
):
    """
    Проверка, что внешний ключ из тела запроса указывает на существующую
    запись. Возвращает найденный объект.
    """
    result = await db.scalars(select(model).where(model.id == object_id))
    db_object = result.first()
    if db_object is None:
        raise ValidationError(
            field,
            description or f'{model.__name__} {object_id} does not exist'
        )
    return db_object


async def validate_references(
    model, object_ids, db: AsyncSession, field: str
):
    """Все id из списка существуют; возвращает объекты в порядке id"""
    unique_ids = set(object_ids)
    if not unique_ids:
        return []
    result = await db.scalars(
        select(model).where(model.id.in_(unique_ids)).order_by(model.id)
    )
    db_objects = result.all()
    missing = unique_ids - {db_object.id for db_object in db_objects}
    if missing:
        raise ValidationError(
            field,
            f'{model.__name__} ids do not exist: '
            f'{", ".join(map(str, sorted(missing)))}'
        )
    return list(db_objects)


async def validate_unique_email(
    model, email: str, db: AsyncSession, exclude_id=None
):
    """Email уникален без учёта регистра"""
    stmt = select(model).where(func.lower(model.email) == email.lower())
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    result = await db.scalars(stmt)
    if result.first() is not None:
        raise ConflictError('Email already registered')

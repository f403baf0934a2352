"""
Хранилище категорий: CRUD поверх дерева parent_id.

level хранится в таблице и поддерживается сервером: при создании это
level родителя + 1, при переносе категории пересчитывается всё её
поддерево. Количество подкатегорий и товаров считается при чтении.
"""
from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

import jewelry_catalog.constants as c
from jewelry_catalog.exceptions import DependencyError, ValidationError
from jewelry_catalog.models.categories import Category as CategoryModel
from jewelry_catalog.models.products import Product as ProductModel
from jewelry_catalog.schemas import (
    Category as CategorySchema, CategoryCreate, CategoryUpdate
)
from jewelry_catalog.service import hierarchy
from jewelry_catalog.service.tools import (
    commit_and_refresh,
    count_object_models,
    create_object_model,
    delete_object_model,
    get_object_model_or_404,
)
from jewelry_catalog.service.validators import validate_reference

NOT_FOUND = 'Category not found'
PARENT_FIELD = 'parentId'


async def _get_all(db: AsyncSession) -> list[CategoryModel]:
    result = await db.scalars(select(CategoryModel).order_by(CategoryModel.id))
    return list(result.all())


async def _product_counts(db: AsyncSession, category_id=None) -> dict:
    stmt = select(
        ProductModel.category_id, func.count(ProductModel.id)
    ).group_by(ProductModel.category_id)
    if category_id is not None:
        stmt = stmt.where(ProductModel.category_id == category_id)
    rows = await db.execute(stmt)
    return {category: total for category, total in rows.all()}


def _to_schema(category, subcategory_count=0, product_count=0):
    return CategorySchema.model_validate(category).model_copy(
        update={
            'subcategory_count': subcategory_count,
            'product_count': product_count,
        }
    )


async def _get_parent(db: AsyncSession, parent_id):
    return await validate_reference(
        CategoryModel,
        parent_id,
        db,
        PARENT_FIELD,
        f'Parent category {parent_id} does not exist'
    )


async def list_categories(
    db: AsyncSession, active: bool | None = None
) -> list[CategorySchema]:
    """
    Все категории в порядке вывода дерева (pre-order) с производными
    полями. Фильтр active применяется после упорядочивания.
    """
    categories = await _get_all(db)
    children = hierarchy.children_map(categories)
    product_counts = await _product_counts(db)
    return [
        _to_schema(
            category,
            len(children.get(category.id, [])),
            product_counts.get(category.id, 0)
        )
        for category in hierarchy.preorder(categories)
        if active is None or category.active == active
    ]


async def get_category(db: AsyncSession, category_id: int) -> CategorySchema:
    category = await get_object_model_or_404(
        CategoryModel, category_id, db, NOT_FOUND
    )
    subcategory_count = await count_object_models(
        CategoryModel, db, CategoryModel.parent_id == category.id
    )
    product_counts = await _product_counts(db, category.id)
    return _to_schema(
        category, subcategory_count, product_counts.get(category.id, 0)
    )


async def create_category(
    db: AsyncSession, category: CategoryCreate
) -> CategorySchema:
    level = c.CATEGORY_ROOT_LEVEL
    if category.parent_id is not None:
        parent = await _get_parent(db, category.parent_id)
        level = parent.level + 1
    db_category = await create_object_model(
        CategoryModel, category.model_dump() | {'level': level}, db
    )
    logger.info(
        f'Category {db_category.id} "{db_category.name}" created '
        f'(parent={db_category.parent_id}, level={db_category.level})'
    )
    return _to_schema(db_category)


async def update_category(
    db: AsyncSession, category_id: int, category_update: CategoryUpdate
) -> CategorySchema:
    """
    Частичное обновление. При смене родителя запрещает циклы и
    пересчитывает level категории и всех её потомков.
    """
    category = await get_object_model_or_404(
        CategoryModel, category_id, db, NOT_FOUND
    )
    values = category_update.model_dump(exclude_unset=True)

    new_parent_id = values.pop('parent_id', category.parent_id)
    if new_parent_id != category.parent_id:
        if new_parent_id is not None:
            await _get_parent(db, new_parent_id)
        categories = await _get_all(db)
        if hierarchy.would_create_cycle(
            categories, category.id, new_parent_id
        ):
            raise ValidationError(
                PARENT_FIELD,
                'Category cannot be its own parent or ancestor'
            )
        category.parent_id = new_parent_id
        subtree = hierarchy.descendant_ids(categories, category.id)
        subtree.add(category.id)
        levels = hierarchy.compute_levels(categories)
        for node in categories:
            if node.id in subtree and node.level != levels[node.id]:
                node.level = levels[node.id]
        logger.info(
            f'Category {category.id} moved under {new_parent_id}, '
            f'{len(subtree)} categories re-levelled'
        )

    for field, value in values.items():
        setattr(category, field, value)
    category = await commit_and_refresh(category, db)
    logger.info(f'Category {category.id} updated: {sorted(values)}')
    return await get_category(db, category.id)


async def delete_category(db: AsyncSession, category_id: int) -> None:
    """
    Удаление запрещено, пока у категории есть подкатегории или товары.
    """
    category = await get_object_model_or_404(
        CategoryModel, category_id, db, NOT_FOUND
    )
    subcategory_count = await count_object_models(
        CategoryModel, db, CategoryModel.parent_id == category.id
    )
    if subcategory_count:
        raise DependencyError(
            f'Category has {subcategory_count} subcategories; '
            'move or delete them first'
        )
    product_count = await count_object_models(
        ProductModel, db, ProductModel.category_id == category.id
    )
    if product_count:
        raise DependencyError(
            f'Category has {product_count} products; '
            'move or delete them first'
        )
    await delete_object_model(CategoryModel, category, db)
    logger.info(f'Category {category_id} "{category.name}" deleted')

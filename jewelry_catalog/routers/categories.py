from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from jewelry_catalog.auth import get_current_admin
from jewelry_catalog.db_depends import get_async_db
from jewelry_catalog.schemas import (
    Category as CategorySchema,
    CategoryCreate,
    CategoryUpdate,
    DataResponse,
    MessageResponse,
)
from jewelry_catalog.service import categories as category_store


router = APIRouter(
    prefix="/categories",
    tags=["categories"],
    dependencies=[Depends(get_current_admin)],
)


@router.get("/", response_model=DataResponse[list[CategorySchema]])
async def get_all_categories(
    active: bool | None = Query(
        None, description="Only active (true) or inactive (false) categories"
    ),
    db: AsyncSession = Depends(get_async_db)
):
    """
    Возвращает категории в порядке дерева: каждая сразу после родителя.
    """
    categories = await category_store.list_categories(db, active)
    return {"data": categories}


@router.get("/{category_id}", response_model=DataResponse[CategorySchema])
async def get_category(
    category_id: int, db: AsyncSession = Depends(get_async_db)
):
    category = await category_store.get_category(db, category_id)
    return {"data": category}


@router.post(
        "/",
        response_model=DataResponse[CategorySchema],
        status_code=status.HTTP_201_CREATED
)
async def create_category(
    category: CategoryCreate,
    db: AsyncSession = Depends(get_async_db)
):
    """
    Создаёт новую категорию.
    """
    db_category = await category_store.create_category(db, category)
    return {"data": db_category}


@router.put("/{category_id}", response_model=DataResponse[CategorySchema])
async def update_category(
    category_id: int,
    category: CategoryUpdate,
    db: AsyncSession = Depends(get_async_db)
):
    """
    Обновляет категорию по её ID.
    """
    db_category = await category_store.update_category(
        db, category_id, category
    )
    return {"data": db_category}


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: int, db: AsyncSession = Depends(get_async_db)
):
    """
    Удаляет категорию без подкатегорий и товаров.
    """
    await category_store.delete_category(db, category_id)
    return {"message": "Category deleted"}

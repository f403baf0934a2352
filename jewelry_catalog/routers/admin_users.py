from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

import jewelry_catalog.constants as c
from jewelry_catalog.auth import (
    get_current_admin, get_current_super_admin, hash_password
)
from jewelry_catalog.db_depends import get_async_db
from jewelry_catalog.models.admin_users import AdminUser as AdminUserModel
from jewelry_catalog.schemas import (
    AdminUser as AdminUserSchema,
    AdminUserCreate,
    AdminUserUpdate,
    DataResponse,
    MessageResponse,
)
from jewelry_catalog.service.tools import (
    create_object_model,
    update_object_model,
    delete_object_model,
    get_object_model_or_404,
)
from jewelry_catalog.service.validators import validate_unique_email

NOT_FOUND = 'Admin user not found'

router = APIRouter(prefix='/admin-users', tags=["admin-users"])


@router.get(
    '/',
    response_model=DataResponse[list[AdminUserSchema]],
    dependencies=[Depends(get_current_admin)]
)
async def get_admin_users(db: AsyncSession = Depends(get_async_db)):
    users = await db.scalars(
        select(AdminUserModel).order_by(AdminUserModel.id)
    )
    return {"data": users.all()}


@router.get(
    '/{user_id}',
    response_model=DataResponse[AdminUserSchema],
    dependencies=[Depends(get_current_admin)]
)
async def get_admin_user(
    user_id: int, db: AsyncSession = Depends(get_async_db)
):
    user = await get_object_model_or_404(AdminUserModel, user_id, db, NOT_FOUND)
    return {"data": user}


@router.post(
        '/',
        response_model=DataResponse[AdminUserSchema],
        status_code=status.HTTP_201_CREATED
)
async def create_admin_user(
    user: AdminUserCreate,
    db: AsyncSession = Depends(get_async_db),
    current_admin: AdminUserModel = Depends(get_current_super_admin)
):
    """Создаёт нового администратора (только super-admin)"""

    await validate_unique_email(AdminUserModel, user.email, db)
    db_user = await create_object_model(
        AdminUserModel,
        user.model_dump(exclude={'password'}) | {
            'hashed_password': hash_password(user.password)
        },
        db
    )
    logger.info(
        f'Admin {db_user.email} ({db_user.role}) created by '
        f'{current_admin.email}'
    )
    return {"data": db_user}


@router.put('/{user_id}', response_model=DataResponse[AdminUserSchema])
async def update_admin_user(
    user_id: int,
    user_update: AdminUserUpdate,
    db: AsyncSession = Depends(get_async_db),
    current_admin: AdminUserModel = Depends(get_current_super_admin)
):
    user = await get_object_model_or_404(AdminUserModel, user_id, db, NOT_FOUND)
    values = user_update.model_dump(exclude_unset=True)

    if user.id == current_admin.id and (
        values.get('active') is False
        or values.get('role', c.ADMIN_ROLE_SUPER) != c.ADMIN_ROLE_SUPER
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='You cannot deactivate or demote your own account'
        )
    if 'email' in values:
        await validate_unique_email(
            AdminUserModel, values['email'], db, exclude_id=user.id
        )
    if 'password' in values:
        values['hashed_password'] = hash_password(values.pop('password'))

    user = await update_object_model(AdminUserModel, user, values, db)
    logger.info(f'Admin {user.id} updated by {current_admin.email}')
    return {"data": user}


@router.delete('/{user_id}', response_model=MessageResponse)
async def delete_admin_user(
    user_id: int,
    db: AsyncSession = Depends(get_async_db),
    current_admin: AdminUserModel = Depends(get_current_super_admin)
):
    user = await get_object_model_or_404(AdminUserModel, user_id, db, NOT_FOUND)
    if user.id == current_admin.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='You cannot delete your own account'
        )
    await delete_object_model(AdminUserModel, user, db)
    logger.info(f'Admin {user_id} deleted by {current_admin.email}')
    return {"message": "Admin user deleted"}

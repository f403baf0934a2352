import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

import jewelry_catalog.constants as c
from jewelry_catalog.auth import (
    verify_password,
    create_access_token,
    create_refresh_token,
    get_active_admin_by_email,
    get_current_admin,
    token_payload,
)
from jewelry_catalog.config import REFRESH_SECRET_KEY, ALGORITHM, NAME_TOKEN_HEAD
from jewelry_catalog.db_depends import get_async_db
from jewelry_catalog.models.admin_users import AdminUser as AdminUserModel
from jewelry_catalog.schemas import AdminUser as AdminUserSchema, DataResponse


router = APIRouter(prefix='/auth', tags=["auth"])


@router.post('/login')
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_async_db)
) -> dict:
    user = await get_active_admin_by_email(form_data.username, db)
    if not user or not verify_password(
        form_data.password, user.hashed_password
    ):
        logger.warning(f'Failed login attempt for {form_data.username}')
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": NAME_TOKEN_HEAD},
        )
    payload = token_payload(user)
    return {
        "access_token": create_access_token(data=payload),
        "refresh_token": create_refresh_token(data=payload),
        "token_type": NAME_TOKEN_HEAD
    }


@router.post("/refresh-token")
async def refresh_token(
    refresh_token: str, db: AsyncSession = Depends(get_async_db)
):
    """
    Обновляет access_token с помощью refresh_token.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate refresh token",
        headers={"WWW-Authenticate": NAME_TOKEN_HEAD},
    )
    try:
        payload = jwt.decode(
            refresh_token, REFRESH_SECRET_KEY, algorithms=[ALGORITHM]
        )
        email: str = payload.get(c.TOKEN_DICT_KEY_EMAIL)
        if (
            email is None
            or payload.get(c.TOKEN_DICT_KEY_TYPE) != c.TOKEN_TYPE_REFRESH
        ):
            raise credentials_exception
    except jwt.PyJWTError:
        raise credentials_exception
    user = await get_active_admin_by_email(email, db)
    if user is None:
        raise credentials_exception
    access_token = create_access_token(data=token_payload(user))
    return {"access_token": access_token, "token_type": NAME_TOKEN_HEAD}


@router.get('/me', response_model=DataResponse[AdminUserSchema])
async def get_me(admin: AdminUserModel = Depends(get_current_admin)):
    return {"data": admin}

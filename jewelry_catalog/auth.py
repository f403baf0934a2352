from passlib.context import CryptContext
from fastapi.security import OAuth2PasswordBearer
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, HTTPException, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

import jewelry_catalog.constants as c
from jewelry_catalog.config import (
    SECRET_KEY,
    REFRESH_SECRET_KEY,
    ALGORITHM,
    TOKEN_URL,
    ACCESS_TOKEN_EXPIRE_MINUTES,
    REFRESH_TOKEN_EXPIRE_DAYS,
    NAME_TOKEN_HEAD,
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    ADMIN_NAME,
    ADMIN_PHONE,
)
from jewelry_catalog.db_depends import get_async_db
from jewelry_catalog.models.admin_users import AdminUser as AdminUserModel

# контекст для хеширования с использованием bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=TOKEN_URL)


def hash_password(password: str) -> str:
    """Преобразует пароль в хеш с использованием bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Проверяет, соответствует ли введённый пароль сохранённому хешу.
    """
    return pwd_context.verify(plain_password, hashed_password)


def token_payload(user: AdminUserModel) -> dict:
    return {
        c.TOKEN_DICT_KEY_EMAIL: user.email,
        c.TOKEN_DICT_KEY_ROLE: user.role,
        c.TOKEN_DICT_KEY_ID: user.id
    }


def create_access_token(data: dict):
    """Создаёт JWT"""

    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode.update({
        c.TOKEN_DICT_KEY_EXPIRE: expire,
        c.TOKEN_DICT_KEY_TYPE: c.TOKEN_TYPE_ACCESS
    })
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def create_refresh_token(data: dict):
    """Создаёт рефреш-токен с длительным сроком действия"""

    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(
        days=REFRESH_TOKEN_EXPIRE_DAYS
    )
    to_encode.update({
        c.TOKEN_DICT_KEY_EXPIRE: expire,
        c.TOKEN_DICT_KEY_TYPE: c.TOKEN_TYPE_REFRESH
    })
    return jwt.encode(to_encode, REFRESH_SECRET_KEY, algorithm=ALGORITHM)


async def get_active_admin_by_email(email: str, db: AsyncSession):
    result = await db.scalars(
        select(AdminUserModel).where(
            AdminUserModel.email == email,
            AdminUserModel.active == True
        )
    )
    return result.first()


async def get_current_admin(
        token: str = Depends(oauth2_scheme),
        db: AsyncSession = Depends(get_async_db)
):
    """Проверяет JWT и возвращает администратора из базы"""

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail='Could not validate credentials',
        headers={'WWW-Authenticate': NAME_TOKEN_HEAD},
    )
    try:
        payload = jwt.decode(
            token, SECRET_KEY, algorithms=[ALGORITHM]
        )
        email: str = payload.get(c.TOKEN_DICT_KEY_EMAIL)
        if (
            email is None
            or payload.get(c.TOKEN_DICT_KEY_TYPE) != c.TOKEN_TYPE_ACCESS
        ):
            raise credentials_exception
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail='Token has expired',
            headers={'WWW-Authenticate': NAME_TOKEN_HEAD},
        )
    except jwt.PyJWTError:
        raise credentials_exception
    user = await get_active_admin_by_email(email, db)
    if user is None:
        raise credentials_exception
    return user


async def get_current_super_admin(
    current_admin: AdminUserModel = Depends(get_current_admin)
):
    """
    Проверяет, что администратор имеет роль 'super-admin'.
    """
    if current_admin.role != c.ADMIN_ROLE_SUPER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f'Only {c.ADMIN_ROLE_SUPER} can perform this action'
        )
    return current_admin


async def seed_super_admin(db: AsyncSession):
    """Создаёт супер-админа из настроек, если администраторов ещё нет"""
    existing = await db.scalars(select(AdminUserModel.id).limit(1))
    if existing.first() is not None:
        return None
    admin = AdminUserModel(
        full_name=ADMIN_NAME,
        email=ADMIN_EMAIL,
        phone=ADMIN_PHONE,
        hashed_password=hash_password(ADMIN_PASSWORD),
        role=c.ADMIN_ROLE_SUPER,
        active=True
    )
    db.add(admin)
    await db.commit()
    logger.info(f'Seeded super admin {ADMIN_EMAIL}')
    return admin

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from jewelry_catalog.database import async_session_maker


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """Асинхронная сессия БД на время одного запроса"""
    async with async_session_maker() as session:
        yield session

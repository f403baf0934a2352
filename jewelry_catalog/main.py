from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from loguru import logger

import jewelry_catalog.config as conf
import jewelry_catalog.models  # noqa: F401  регистрация таблиц в metadata
from jewelry_catalog.auth import seed_super_admin
from jewelry_catalog.database import Base, async_engine, async_session_maker
from jewelry_catalog.log import log_middleware
from jewelry_catalog.middlewares import TimingMiddleware
from jewelry_catalog.routers import (
    admin_users,
    auth,
    catalogs,
    categories,
    customers,
    dashboard,
    inquiries,
    products,
)

API_VERSION = 'v1'
STARTED_AT = datetime.now(timezone.utc)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with async_session_maker() as db:
        await seed_super_admin(db)
    logger.info(f'Jewelry catalog API started, base URL /api/{API_VERSION}')
    yield
    await async_engine.dispose()
    logger.info('Database connection closed')


app = FastAPI(lifespan=lifespan)


app_v1 = FastAPI(
    title="Jewelry Catalog Admin API",
    version="0.1.0",
)

app_v1.include_router(auth.router)
app_v1.include_router(admin_users.router)
app_v1.include_router(categories.router)
app_v1.include_router(products.router)
app_v1.include_router(customers.router)
app_v1.include_router(catalogs.router)
app_v1.include_router(inquiries.router)
app_v1.include_router(dashboard.router)


app.mount(f'/api/{API_VERSION}', app_v1)

app.add_middleware(
    GZipMiddleware, minimum_size=conf.MIDDLEWARE_GZIP_MINIMUM_SIZE
)
app.add_middleware(
    TrustedHostMiddleware,
    allowed_hosts=conf.MIDDLEWARE_TRUSTED_HOST_ALLOWED_HOSTS
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=conf.MIDDLEWARE_CORS_ALLOW_ORIGINS,
    allow_credentials=conf.MIDDLEWARE_CORS_ALLOW_CREDENTIALS,
    allow_methods=conf.MIDDLEWARE_CORS_ALLOW_METHODS,
    allow_headers=conf.MIDDLEWARE_CORS_ALLOW_HEADERS,
)
app.add_middleware(TimingMiddleware)
app.middleware("http")(log_middleware)


@app.get("/")
async def root():
    """
    Корневой маршрут, подтверждающий, что API работает.
    """
    return {
        "message": "Jewelry Catalog Admin API",
        "version": API_VERSION,
        "status": "Active",
        "health": "/health",
    }


@app.get("/health")
async def health():
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": (datetime.now(timezone.utc) - STARTED_AT).total_seconds(),
    }

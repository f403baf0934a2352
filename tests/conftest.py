import os
import tempfile
from pathlib import Path

import pytest

# настройки читаются при импорте приложения
TEST_DIR = Path(tempfile.mkdtemp(prefix='jewelry_catalog_'))
os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{TEST_DIR / "test.db"}'
os.environ['LOG_FILE'] = str(TEST_DIR / 'app.log')

import httpx  # noqa: E402

import jewelry_catalog.constants as c  # noqa: E402
from jewelry_catalog.auth import hash_password  # noqa: E402
from jewelry_catalog.database import (  # noqa: E402
    Base, async_engine, async_session_maker
)
from jewelry_catalog.main import app  # noqa: E402
from jewelry_catalog.models import AdminUser  # noqa: E402

API_PREFIX = '/api/v1'

SUPER_ADMIN = {'email': 'root@zipzag.com', 'password': 'root-secret'}
SUB_ADMIN = {'email': 'helper@zipzag.com', 'password': 'helper-secret'}


@pytest.fixture
async def database():
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await async_engine.dispose()


@pytest.fixture
async def admins(database):
    async with async_session_maker() as db:
        db.add_all([
            AdminUser(
                full_name='Root Admin',
                email=SUPER_ADMIN['email'],
                phone='1234567890',
                hashed_password=hash_password(SUPER_ADMIN['password']),
                role=c.ADMIN_ROLE_SUPER,
            ),
            AdminUser(
                full_name='Helper Admin',
                email=SUB_ADMIN['email'],
                phone='0987654321',
                hashed_password=hash_password(SUB_ADMIN['password']),
                role=c.ADMIN_ROLE_SUB,
            ),
        ])
        await db.commit()


@pytest.fixture
async def client(admins):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport, base_url='http://test'
    ) as client:
        yield client


async def login(client, email, password):
    response = await client.post(
        f'{API_PREFIX}/auth/login',
        data={'username': email, 'password': password}
    )
    assert response.status_code == 200, response.text
    return {'Authorization': f'Bearer {response.json()["access_token"]}'}


@pytest.fixture
async def auth_headers(client):
    return await login(client, **SUPER_ADMIN)


@pytest.fixture
async def sub_admin_headers(client):
    return await login(client, **SUB_ADMIN)


@pytest.fixture
def api(client, auth_headers):
    """Запрос к /api/v1 от имени супер-админа"""

    async def request(method, path, **kwargs):
        return await client.request(
            method, f'{API_PREFIX}{path}', headers=auth_headers, **kwargs
        )
    return request


async def created(response):
    assert response.status_code == 201, response.text
    return response.json()['data']


@pytest.fixture
def make_category(api):
    async def make(name, parent_id=None, **fields):
        return await created(await api(
            'POST',
            '/categories/',
            json={'name': name, 'parentId': parent_id, **fields}
        ))
    return make


@pytest.fixture
def make_product(api):
    async def make(category_id, name='Solitaire Ring', **fields):
        payload = {
            'name': name,
            'basePrice': '50000',
            'offerPercentage': '0',
            'categoryId': category_id,
        }
        return await created(
            await api('POST', '/products/', json=payload | fields)
        )
    return make


@pytest.fixture
def make_customer(api):
    async def make(name='Jane Doe', email='jane@example.com', **fields):
        return await created(await api(
            'POST',
            '/customers/',
            json={'name': name, 'email': email, **fields}
        ))
    return make


@pytest.fixture
def make_catalog(api):
    async def make(customer_id, name='Wedding Collection', **fields):
        return await created(await api(
            'POST',
            '/catalogs/',
            json={'name': name, 'customerId': customer_id, **fields}
        ))
    return make


@pytest.fixture
def make_inquiry(api):
    async def make(customer_id, message='Do you have this in gold?', **fields):
        return await created(await api(
            'POST',
            '/inquiries/',
            json={'customerId': customer_id, 'message': message, **fields}
        ))
    return make

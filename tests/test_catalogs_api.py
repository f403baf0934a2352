import pytest


@pytest.fixture
async def customer(make_customer):
    return await make_customer()


@pytest.fixture
async def products(make_category, make_product):
    rings = await make_category('Rings')
    return [
        await make_product(rings['id'], name=name)
        for name in ('Halo Ring', 'Solitaire Ring')
    ]


async def test_create_with_products(make_catalog, customer, products):
    catalog = await make_catalog(
        customer['id'], productIds=[product['id'] for product in products]
    )
    assert catalog['productIds'] == [product['id'] for product in products]
    assert catalog['productCount'] == 2
    assert catalog['customer']['email'] == customer['email']
    assert catalog['hasPassword'] is False


async def test_password_is_never_returned(make_catalog, customer):
    catalog = await make_catalog(
        customer['id'], hasPassword=True, password='diamond'
    )
    assert catalog['hasPassword'] is True
    assert 'password' not in catalog
    assert 'hashedPassword' not in catalog


async def test_password_required_when_protected(api, customer):
    response = await api(
        'POST',
        '/catalogs/',
        json={
            'name': 'Private', 'customerId': customer['id'],
            'hasPassword': True
        }
    )
    assert response.status_code == 422


async def test_unknown_references_are_rejected(api, customer, products):
    response = await api(
        'POST', '/catalogs/', json={'name': 'Private', 'customerId': 999}
    )
    assert response.status_code == 422
    assert response.json()['detail'][0]['loc'] == ['body', 'customerId']

    response = await api(
        'POST',
        '/catalogs/',
        json={
            'name': 'Private',
            'customerId': customer['id'],
            'productIds': [products[0]['id'], 999],
        }
    )
    assert response.status_code == 422
    assert response.json()['detail'][0]['loc'] == ['body', 'productIds']


async def test_access_checks_password(api, make_catalog, customer):
    catalog = await make_catalog(
        customer['id'], hasPassword=True, password='diamond'
    )
    path = f'/catalogs/{catalog["id"]}/access'

    response = await api('POST', path, json={'password': 'ruby'})
    assert response.status_code == 403
    response = await api('POST', path, json={})
    assert response.status_code == 403
    response = await api('POST', path, json={'password': 'diamond'})
    assert response.status_code == 200
    assert response.json()['data']['id'] == catalog['id']


async def test_open_catalog_needs_no_password(api, make_catalog, customer):
    catalog = await make_catalog(customer['id'])
    response = await api('POST', f'/catalogs/{catalog["id"]}/access', json={})
    assert response.status_code == 200


async def test_inactive_catalog_is_not_accessible(
    api, make_catalog, customer
):
    catalog = await make_catalog(customer['id'], active=False)
    response = await api('POST', f'/catalogs/{catalog["id"]}/access', json={})
    assert response.status_code == 404


async def test_update_products_and_password(
    api, make_catalog, customer, products
):
    catalog = await make_catalog(customer['id'])
    path = f'/catalogs/{catalog["id"]}'

    response = await api(
        'PUT', path, json={'productIds': [products[1]['id']]}
    )
    assert response.status_code == 200
    assert response.json()['data']['productIds'] == [products[1]['id']]

    response = await api('PUT', path, json={'hasPassword': True})
    assert response.status_code == 422

    response = await api(
        'PUT', path, json={'hasPassword': True, 'password': 'pearl'}
    )
    assert response.json()['data']['hasPassword'] is True
    response = await api(
        'POST', f'{path}/access', json={'password': 'pearl'}
    )
    assert response.status_code == 200

    response = await api('PUT', path, json={'hasPassword': False})
    assert response.json()['data']['hasPassword'] is False
    response = await api('POST', f'{path}/access', json={})
    assert response.status_code == 200


async def test_list_by_customer(api, make_customer, make_catalog, customer):
    other = await make_customer('John Roe', 'john@example.com')
    await make_catalog(customer['id'], name='Wedding')
    await make_catalog(other['id'], name='Anniversary')

    response = await api(
        'GET', '/catalogs/', params={'customer_id': other['id']}
    )
    assert [item['name'] for item in response.json()['data']] == [
        'Anniversary'
    ]


async def test_delete_detaches_inquiries(
    api, make_catalog, make_inquiry, customer
):
    catalog = await make_catalog(customer['id'])
    inquiry = await make_inquiry(customer['id'], catalogId=catalog['id'])
    assert inquiry['catalog']['id'] == catalog['id']

    response = await api('DELETE', f'/catalogs/{catalog["id"]}')
    assert response.status_code == 200

    response = await api('GET', f'/inquiries/{inquiry["id"]}')
    assert response.status_code == 200
    assert response.json()['data']['catalogId'] is None
    assert response.json()['data']['catalog'] is None

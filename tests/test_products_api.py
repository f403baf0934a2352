from decimal import Decimal

import pytest


def price(value):
    return Decimal(str(value))


@pytest.fixture
async def rings(make_category):
    return await make_category('Rings')


async def test_final_price_applies_offer(make_product, rings):
    product = await make_product(
        rings['id'], basePrice='50000', offerPercentage='15'
    )
    assert price(product['finalPrice']) == Decimal('42500')
    assert product['category'] == {'id': rings['id'], 'name': 'Rings'}


async def test_zero_offer_keeps_base_price(make_product, rings):
    product = await make_product(rings['id'], basePrice='1999.99')
    assert price(product['offerPercentage']) == 0
    assert price(product['finalPrice']) == Decimal('1999.99')


@pytest.mark.parametrize('fields', [
    {'basePrice': '0'},
    {'basePrice': '-5'},
    {'offerPercentage': '100.5'},
    {'offerPercentage': '-1'},
    {'name': 'X'},
])
async def test_invalid_values_are_rejected(api, rings, fields):
    payload = {'name': 'Halo Ring', 'basePrice': '100', 'categoryId': rings['id']}
    response = await api('POST', '/products/', json=payload | fields)
    assert response.status_code == 422


async def test_unknown_category_is_rejected(api):
    response = await api(
        'POST',
        '/products/',
        json={'name': 'Halo Ring', 'basePrice': '100', 'categoryId': 42}
    )
    assert response.status_code == 422
    assert response.json()['detail'][0]['loc'] == ['body', 'categoryId']


async def test_update_recalculates_final_price(api, make_product, rings):
    product = await make_product(rings['id'], basePrice='50000')
    response = await api(
        'PUT', f'/products/{product["id"]}', json={'offerPercentage': '10'}
    )
    assert response.status_code == 200
    data = response.json()['data']
    assert price(data['finalPrice']) == Decimal('45000')
    assert data['name'] == product['name']


async def test_move_to_other_category(
    api, make_category, make_product, rings
):
    necklaces = await make_category('Necklaces')
    product = await make_product(rings['id'])

    response = await api(
        'PUT',
        f'/products/{product["id"]}',
        json={'categoryId': necklaces['id']}
    )
    assert response.json()['data']['category']['name'] == 'Necklaces'

    response = await api(
        'PUT', f'/products/{product["id"]}', json={'categoryId': 999}
    )
    assert response.status_code == 422


async def test_list_is_paginated(api, make_product, rings):
    for index in range(3):
        await make_product(rings['id'], name=f'Ring {index}')

    response = await api('GET', '/products/', params={'page_size': 2})
    body = response.json()
    assert response.status_code == 200
    assert body['total'] == 3
    assert body['pageSize'] == 2
    assert [item['name'] for item in body['data']] == ['Ring 0', 'Ring 1']

    response = await api(
        'GET', '/products/', params={'page': 2, 'page_size': 2}
    )
    assert [item['name'] for item in response.json()['data']] == ['Ring 2']


async def test_list_filters(api, make_category, make_product, rings):
    necklaces = await make_category('Necklaces')
    await make_product(rings['id'], name='Halo Ring', basePrice='900')
    await make_product(
        necklaces['id'],
        name='Pearl Necklace',
        basePrice='300',
        shortDescription='Freshwater pearls',
    )
    await make_product(
        necklaces['id'], name='Gold Chain', basePrice='500', active=False
    )

    async def names(**params):
        response = await api('GET', '/products/', params=params)
        assert response.status_code == 200, response.text
        return [item['name'] for item in response.json()['data']]

    assert await names(category_id=necklaces['id']) == [
        'Pearl Necklace', 'Gold Chain'
    ]
    assert await names(active='false') == ['Gold Chain']
    assert await names(search='pearl') == ['Pearl Necklace']
    assert await names(base_price__gte='400') == ['Halo Ring', 'Gold Chain']
    assert await names(order_by='-base_price') == [
        'Halo Ring', 'Gold Chain', 'Pearl Necklace'
    ]


async def test_delete_removes_product_from_catalogs(
    api, make_product, make_customer, make_catalog, rings
):
    kept = await make_product(rings['id'], name='Halo Ring')
    removed = await make_product(rings['id'], name='Solitaire Ring')
    customer = await make_customer()
    catalog = await make_catalog(
        customer['id'], productIds=[kept['id'], removed['id']]
    )

    response = await api('DELETE', f'/products/{removed["id"]}')
    assert response.status_code == 200
    response = await api('GET', f'/products/{removed["id"]}')
    assert response.status_code == 404

    response = await api('GET', f'/catalogs/{catalog["id"]}')
    assert response.json()['data']['productIds'] == [kept['id']]
    assert response.json()['data']['productCount'] == 1

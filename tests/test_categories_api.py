from conftest import API_PREFIX


async def test_levels_follow_nesting(api, make_category):
    rings = await make_category('Rings')
    engagement = await make_category('Engagement Rings', rings['id'])
    solitaire = await make_category('Solitaire', engagement['id'])

    assert [rings['level'], engagement['level'], solitaire['level']] == [
        0, 1, 2
    ]
    response = await api('GET', f'/categories/{solitaire["id"]}')
    assert response.status_code == 200
    assert response.json()['success'] is True
    assert response.json()['data']['parentId'] == engagement['id']
    assert response.json()['data']['level'] == 2


async def test_create_and_read_back(api, make_category):
    category = await make_category(
        'Earrings', description='Studs and hoops', active=False
    )
    response = await api('GET', f'/categories/{category["id"]}')
    data = response.json()['data']
    assert data['name'] == 'Earrings'
    assert data['description'] == 'Studs and hoops'
    assert data['active'] is False
    assert data['parentId'] is None
    assert data['subcategoryCount'] == 0
    assert data['productCount'] == 0


async def test_short_name_is_rejected(api):
    response = await api('POST', '/categories/', json={'name': 'R'})
    assert response.status_code == 422


async def test_unknown_parent_is_rejected(api):
    response = await api(
        'POST', '/categories/', json={'name': 'Rings', 'parentId': 999}
    )
    assert response.status_code == 422
    assert response.json()['detail'][0]['loc'] == ['body', 'parentId']


async def test_requires_authentication(client):
    response = await client.get(f'{API_PREFIX}/categories/')
    assert response.status_code == 401


async def test_missing_category(api):
    response = await api('GET', '/categories/999')
    assert response.status_code == 404


async def test_partial_update_keeps_other_fields(api, make_category):
    rings = await make_category('Rings')
    category = await make_category('Bands', rings['id'], description='Plain')

    response = await api(
        'PUT', f'/categories/{category["id"]}', json={'active': False}
    )
    assert response.status_code == 200
    data = response.json()['data']
    assert data['active'] is False
    assert data['name'] == 'Bands'
    assert data['description'] == 'Plain'
    assert data['parentId'] == rings['id']
    assert data['level'] == 1


async def test_null_name_is_rejected(api, make_category):
    category = await make_category('Rings')
    response = await api(
        'PUT', f'/categories/{category["id"]}', json={'name': None}
    )
    assert response.status_code == 422


async def test_move_relevels_descendants(api, make_category):
    rings = await make_category('Rings')
    engagement = await make_category('Engagement Rings', rings['id'])
    solitaire = await make_category('Solitaire', engagement['id'])
    necklaces = await make_category('Necklaces')

    response = await api(
        'PUT', f'/categories/{engagement["id"]}', json={'parentId': None}
    )
    assert response.status_code == 200
    assert response.json()['data']['level'] == 0
    response = await api('GET', f'/categories/{solitaire["id"]}')
    assert response.json()['data']['level'] == 1

    response = await api(
        'PUT',
        f'/categories/{engagement["id"]}',
        json={'parentId': necklaces['id']}
    )
    assert response.json()['data']['level'] == 1
    response = await api('GET', f'/categories/{solitaire["id"]}')
    assert response.json()['data']['level'] == 2
    response = await api('GET', f'/categories/{rings["id"]}')
    assert response.json()['data']['subcategoryCount'] == 0


async def test_cycles_are_rejected(api, make_category):
    rings = await make_category('Rings')
    engagement = await make_category('Engagement Rings', rings['id'])
    solitaire = await make_category('Solitaire', engagement['id'])

    for parent_id in (rings['id'], solitaire['id']):
        response = await api(
            'PUT', f'/categories/{rings["id"]}', json={'parentId': parent_id}
        )
        assert response.status_code == 422
        assert response.json()['detail'][0]['loc'] == ['body', 'parentId']

    response = await api('GET', f'/categories/{rings["id"]}')
    assert response.json()['data']['parentId'] is None


async def test_list_is_in_tree_order(api, make_category):
    rings = await make_category('Rings')
    necklaces = await make_category('Necklaces')
    await make_category('Engagement Rings', rings['id'])
    await make_category('bands', rings['id'])
    await make_category('Chains', necklaces['id'], active=False)

    response = await api('GET', '/categories/')
    assert response.status_code == 200
    assert [item['name'] for item in response.json()['data']] == [
        'Necklaces', 'Chains', 'Rings', 'bands', 'Engagement Rings'
    ]

    response = await api('GET', '/categories/', params={'active': 'false'})
    assert [item['name'] for item in response.json()['data']] == ['Chains']


async def test_counts(api, make_category, make_product):
    rings = await make_category('Rings')
    await make_category('Bands', rings['id'])
    await make_category('Engagement Rings', rings['id'])
    await make_product(rings['id'])

    response = await api('GET', '/categories/')
    by_name = {item['name']: item for item in response.json()['data']}
    assert by_name['Rings']['subcategoryCount'] == 2
    assert by_name['Rings']['productCount'] == 1
    assert by_name['Bands']['subcategoryCount'] == 0


async def test_delete_is_blocked_by_dependents(
    api, make_category, make_product
):
    rings = await make_category('Rings')
    bands = await make_category('Bands', rings['id'])
    await make_product(bands['id'])

    for category in (rings, bands):
        response = await api('DELETE', f'/categories/{category["id"]}')
        assert response.status_code == 409


async def test_delete_leaf(api, make_category):
    rings = await make_category('Rings')
    response = await api('DELETE', f'/categories/{rings["id"]}')
    assert response.status_code == 200
    assert response.json() == {
        'success': True, 'message': 'Category deleted'
    }
    response = await api('GET', f'/categories/{rings["id"]}')
    assert response.status_code == 404

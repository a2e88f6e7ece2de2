import json


def open_store(client, **overrides):
    payload = {'ownerName': 'Ana Ruiz', 'name': 'Moda León', 'city': 'León'}
    payload.update(overrides)
    r = client.post('/api/stores', json=payload)
    assert r.status_code == 201, r.get_json()
    return r.get_json()['store']


def publish(client, **overrides):
    payload = {'name': 'Camisa de lino', 'price': '25', 'category': 'Camisas'}
    payload.update(overrides)
    return client.post('/api/products', json=payload)


def test_fixed_catalogs(client):
    cities = client.get('/api/cities').get_json()['cities']
    assert cities[0] == 'Managua'
    assert 'Bluefields' in cities

    data = client.get('/api/categories').get_json()
    assert data['all'] == 'Todos'
    assert len(data['categories']) == 8


def test_store_signup_and_session(client):
    assert client.get('/api/session').get_json()['store'] is None

    store = open_store(client)
    assert store['themeColor'] == 'indigo'
    assert client.get('/api/session').get_json()['store']['id'] == store['id']

    r = client.post('/api/session/logout')
    assert r.get_json()['success'] is True
    assert client.get('/api/session').get_json()['store'] is None


def test_store_signup_validation(client):
    r = client.post('/api/stores', json={'ownerName': 'Ana'})
    assert r.status_code == 400
    assert r.get_json()['success'] is False

    r = client.post('/api/stores', json={'ownerName': 'Ana Ruiz', 'mode': 'personal'})
    assert r.status_code == 201
    assert r.get_json()['store']['name'] == 'Ventas de Ana'


def test_update_own_store_only(client):
    first = open_store(client)
    second = open_store(client, ownerName='Luis', name='Otra')

    r = client.put(f"/api/stores/{first['id']}", json=dict(first, description='x'))
    assert r.status_code == 403

    r = client.put(f"/api/stores/{second['id']}", json=dict(second, description='Nueva'))
    assert r.status_code == 200
    assert client.get(f"/api/stores/{second['id']}").get_json()['store']['description'] == 'Nueva'


def test_publish_requires_session(client):
    r = publish(client)
    assert r.status_code == 401


def test_publish_and_browse(client):
    store = open_store(client)
    r = publish(client)
    assert r.status_code == 201
    product = r.get_json()['product']
    assert product['storeId'] == store['id']
    assert product['brand'] == 'Genérico'

    assert client.get('/api/products').get_json()['products'] == []
    found = client.get('/api/products?city=León&q=lino').get_json()['products']
    assert [p['id'] for p in found] == [product['id']]

    stores = client.get('/api/stores?city=León').get_json()['stores']
    assert stores[0]['reputation'] == {'rating': 0, 'count': 0, 'status': 'NEUTRAL', 'display': '0.0'}

    catalog = client.get(f"/api/stores/{store['id']}/products?category=Zapatos").get_json()
    assert catalog['products'] == []

    detail = client.get(f"/api/products/{product['id']}").get_json()
    assert detail['store']['name'] == 'Moda León'
    assert detail['reviews'] == []


def test_publish_validation(client):
    open_store(client)
    assert publish(client, price='-3').status_code == 400
    assert publish(client, name='').status_code == 400


def test_dashboard_scoped_to_seller(client):
    open_store(client)
    publish(client, name='Camisa azul', brand='Zara')
    open_store(client, ownerName='Luis', name='Otra')
    publish(client, name='Camisa roja')

    products = client.get('/api/dashboard/products?q=camisa').get_json()['products']
    assert [p['name'] for p in products] == ['Camisa roja']


def test_delete_flow(client):
    open_store(client)
    product = publish(client).get_json()['product']

    r = client.delete(f"/api/products/{product['id']}")
    assert r.status_code == 409
    assert r.get_json()['message'] == '¿Estás seguro de que quieres eliminar este producto?'

    r = client.delete(f"/api/products/{product['id']}?confirm=1")
    assert r.status_code == 200
    assert client.get(f"/api/products/{product['id']}").status_code == 404


def test_delete_other_sellers_product(client):
    open_store(client)
    product = publish(client).get_json()['product']
    open_store(client, ownerName='Luis', name='Otra')

    r = client.delete(f"/api/products/{product['id']}?confirm=1")
    assert r.status_code == 403


def test_reviews_and_reputation(client):
    store = open_store(client)
    product = publish(client).get_json()['product']

    for rating in (5, 5, 4):
        r = client.post(f"/api/products/{product['id']}/reviews", json={'rating': rating, 'comment': 'ok'})
        assert r.status_code == 201

    r = client.post(f"/api/products/{product['id']}/reviews", json={'rating': 9})
    assert r.status_code == 400

    reviews = client.get(f"/api/products/{product['id']}/reviews").get_json()['reviews']
    assert len(reviews) == 3
    assert reviews[0]['author'] == 'Anónimo'

    rep = client.get(f"/api/stores/{store['id']}/reputation").get_json()['reputation']
    assert rep['status'] == 'EXCELLENT'
    assert rep['display'] == '4.7'


def test_reviews_unknown_product(client):
    assert client.post('/api/products/nope/reviews', json={'rating': 5}).status_code == 404


def test_suggest_listing(client, ai_client):
    open_store(client)
    ai_client.models.text = json.dumps({'description': 'Elegante.', 'suggestedCategory': 'Vestidos'})

    data = client.post('/api/products/suggest', json={'name': 'Vestido'}).get_json()
    assert data == {'success': True, 'generated': True, 'description': 'Elegante.', 'category': 'Vestidos'}

    r = client.post('/api/products/suggest', json={'name': ''})
    assert r.status_code == 400


def test_chat(client, ai_client):
    open_store(client)
    product = publish(client).get_json()['product']

    greeting = client.get(f"/api/products/{product['id']}/chat").get_json()['messages']
    assert 'Moda León' in greeting[0]['text']

    ai_client.models.text = 'Sí, hacemos envíos.'
    messages = client.post(f"/api/products/{product['id']}/chat", json={'question': '¿Envían?'}).get_json()['messages']
    assert [m['role'] for m in messages] == ['user', 'ai']
    assert messages[1]['text'] == 'Sí, hacemos envíos.'

    empty = client.post(f"/api/products/{product['id']}/chat", json={'question': '  '}).get_json()
    assert empty['messages'] == []
    assert len(ai_client.models.calls) == 1


def test_unknown_route_is_json(client):
    r = client.get('/api/nada')
    assert r.status_code == 404
    assert r.get_json()['success'] is False


# ==============================================================================
# CUERPOS INVÁLIDOS
# ==============================================================================

def test_partial_store_update_keeps_other_fields(client):
    store = open_store(client, description='Ropa casual')

    r = client.put(f"/api/stores/{store['id']}", json={'description': 'Nueva'})
    assert r.status_code == 200
    saved = client.get(f"/api/stores/{store['id']}").get_json()['store']
    assert saved['description'] == 'Nueva'
    assert saved['name'] == 'Moda León'
    assert saved['ownerName'] == 'Ana Ruiz'
    assert saved['city'] == 'León'

    listed = client.get('/api/stores?city=León').get_json()['stores']
    assert [s['id'] for s in listed] == [store['id']]


def test_store_update_rejects_blank_required_fields(client):
    store = open_store(client)
    for body in ({'ownerName': ''}, {'name': '  '}, {'city': 'Tegucigalpa'}, {'name': 5}):
        r = client.put(f"/api/stores/{store['id']}", json=body)
        assert r.status_code == 400, body
        assert r.get_json()['success'] is False

    saved = client.get(f"/api/stores/{store['id']}").get_json()['store']
    assert saved['name'] == 'Moda León'
    assert saved['ownerName'] == 'Ana Ruiz'


def test_non_text_fields_are_rejected(client):
    r = client.post('/api/stores', json={'ownerName': 7, 'name': 'Tienda'})
    assert r.status_code == 400

    open_store(client)
    assert publish(client, name=5).status_code == 400
    assert publish(client, brand=['Zara']).status_code == 400
    assert client.post('/api/products/suggest', json={'name': 5}).status_code == 400

    product = publish(client).get_json()['product']
    r = client.post(f"/api/products/{product['id']}/reviews", json={'rating': 5, 'author': 3})
    assert r.status_code == 400
    r = client.post(f"/api/products/{product['id']}/chat", json={'question': 5})
    assert r.status_code == 400


def test_images_must_be_a_list_of_text(client):
    open_store(client)
    r = publish(client, images='data:AB')
    assert r.status_code == 400
    assert publish(client, images=['data:A', 3]).status_code == 400
    assert client.get('/api/dashboard/products').get_json()['products'] == []

    product = publish(client, images=['data:A', '', 'data:B']).get_json()['product']
    assert product['images'] == ['data:A', 'data:B']

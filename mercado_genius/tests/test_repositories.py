import json
import os

import pytest

from mercado_genius.errors import StorageQuotaExceededError
from mercado_genius.models import Currency, Product, ProductCategory, Review, StoreProfile
from mercado_genius.repositories import (
    ProductRepository,
    ReviewRepository,
    SessionRepository,
    StoreRepository,
)


@pytest.fixture
def session_repo(tmp_path):
    return SessionRepository(str(tmp_path))


@pytest.fixture
def store_repo(tmp_path, session_repo):
    return StoreRepository(str(tmp_path), session_repo)


def make_product(pid, store_id='s1', **kw):
    return Product(id=pid, store_id=store_id, name=kw.pop('name', f'Producto {pid}'), price=10.0, **kw)


def test_missing_files_read_as_empty(tmp_path, store_repo, session_repo):
    assert store_repo.load() == []
    assert ProductRepository(str(tmp_path)).load() == []
    assert ReviewRepository(str(tmp_path)).load() == []
    assert session_repo.get_active_store_id() is None


def test_corrupt_file_reads_as_empty(tmp_path):
    with open(os.path.join(str(tmp_path), 'products.json'), 'w', encoding='utf-8') as f:
        f.write('{no es json')
    assert ProductRepository(str(tmp_path)).load() == []


def test_store_upsert_replaces_and_logs_in(store_repo, session_repo):
    store = StoreProfile(id='s1', name='Tienda', owner_name='Ana', city='Granada')
    store_repo.upsert(store)
    assert session_repo.get_active_store_id() == 's1'

    store.name = 'Tienda Renovada'
    store_repo.upsert(store)
    stores = store_repo.load()
    assert len(stores) == 1
    assert stores[0].name == 'Tienda Renovada'
    assert store_repo.get_by_id('s1').city == 'Granada'
    assert store_repo.get_by_id('nope') is None


def test_store_json_uses_camel_case_keys(tmp_path, store_repo):
    store_repo.upsert(StoreProfile(id='s1', name='T', owner_name='Ana', map_url='https://maps.example'))
    with open(os.path.join(str(tmp_path), 'stores.json'), encoding='utf-8') as f:
        data = json.load(f)
    assert data[0]['ownerName'] == 'Ana'
    assert data[0]['mapUrl'] == 'https://maps.example'
    assert 'logoUrl' not in data[0]


def test_products_newest_first(tmp_path):
    repo = ProductRepository(str(tmp_path))
    repo.add(make_product('p1'))
    repo.add(make_product('p2'))
    repo.add(make_product('p3'))
    assert [p.id for p in repo.load()] == ['p3', 'p2', 'p1']


def test_delete_product(tmp_path):
    repo = ProductRepository(str(tmp_path))
    repo.add(make_product('p1'))
    repo.add(make_product('p2'))

    removed = repo.delete('p1')
    assert removed.id == 'p1'
    assert [p.id for p in repo.load()] == ['p2']
    assert repo.delete('p1') is None


def test_legacy_image_url_is_migrated(tmp_path):
    legacy = [{
        'id': 'old', 'storeId': 's1', 'name': 'Gorra', 'brand': 'Nike', 'price': 12,
        'currency': 'NIO', 'size': 'M', 'category': 'Accesorios', 'description': '',
        'imageUrl': 'data:image/png;base64,AAA', 'createdAt': 1,
    }]
    with open(os.path.join(str(tmp_path), 'products.json'), 'w', encoding='utf-8') as f:
        json.dump(legacy, f)

    product = ProductRepository(str(tmp_path)).get_by_id('old')
    assert product.images == ['data:image/png;base64,AAA']
    assert product.cover_image == 'data:image/png;base64,AAA'
    assert product.currency is Currency.NIO
    assert product.category is ProductCategory.ACCESORIOS
    assert product.display_price == 'C$12'


def test_quota_exceeded_keeps_previous_data(tmp_path):
    repo = ProductRepository(str(tmp_path), quota_bytes=600)
    repo.add(make_product('p1'))

    with pytest.raises(StorageQuotaExceededError) as exc:
        repo.add(make_product('p2', images=['x' * 2000]))

    assert exc.value.key == 'products'
    assert exc.value.quota == 600
    assert [p.id for p in repo.load()] == ['p1']


def test_reviews_for_product_sorted_by_date(tmp_path):
    repo = ReviewRepository(str(tmp_path))
    repo.add(Review(id='r1', product_id='p1', rating=4, date=100))
    repo.add(Review(id='r2', product_id='p2', rating=1, date=150))
    repo.add(Review(id='r3', product_id='p1', rating=5, date=300))
    repo.add(Review(id='r4', product_id='p1', rating=3, date=200))

    assert [r.id for r in repo.get_for_product('p1')] == ['r3', 'r4', 'r1']
    assert {r.id for r in repo.get_for_products(['p1', 'p2'])} == {'r1', 'r2', 'r3', 'r4'}


def test_session_clear(session_repo):
    session_repo.set_active_store_id('s1')
    session_repo.clear_active_store()
    assert session_repo.get_active_store_id() is None
    # cerrar sesión sin sesión activa no falla
    session_repo.clear_active_store()


# ==============================================================================
# IDA Y VUELTA COMPLETA
# ==============================================================================

def full_store():
    return StoreProfile(
        id='s9', name='Ventas de Rosa', owner_name='Rosa Díaz', description='Artículos variados',
        city='Estelí', address='Frente al parque', theme_color='pink',
        map_url='https://maps.example/rosa', banner_url='data:image/png;base64,BANNER',
        logo_url='data:image/png;base64,LOGO', is_personal=True,
    )


def full_product(pid='p9', created_at=1718000000000):
    return Product(
        id=pid, store_id='s9', name='Chaqueta de mezclilla', price=42.5, brand='Levi\'s',
        currency=Currency.NIO, size='L', category=ProductCategory.CHAQUETAS,
        description='Poco uso', images=['data:image/jpeg;base64,A', 'data:image/jpeg;base64,B'],
        created_at=created_at,
    )


def test_store_upsert_then_get_is_equal(store_repo):
    store = full_store()
    store_repo.upsert(store)
    assert store_repo.get_by_id(store.id) == store
    assert store_repo.load() == [store]


def test_product_round_trip_is_equal(tmp_path):
    repo = ProductRepository(str(tmp_path))
    product = full_product()
    repo.add(product)
    assert repo.get_by_id(product.id) == product
    assert ProductRepository(str(tmp_path)).load() == [product]


def test_review_round_trip_is_equal(tmp_path):
    repo = ReviewRepository(str(tmp_path))
    review = Review(id='r9', product_id='p9', rating=3, author='Luis', comment='Llegó a tiempo',
                    date=1718000000123)
    repo.add(review)
    assert repo.load() == [review]
    assert repo.get_for_product('p9') == [review]


def test_equal_timestamps_keep_call_order(tmp_path):
    repo = ProductRepository(str(tmp_path))
    for pid in ('a', 'b', 'c', 'd'):
        repo.add(full_product(pid, created_at=1000))
    assert [p.id for p in repo.load()] == ['d', 'c', 'b', 'a']
    assert [p.id for p in repo.get_by_store('s9')] == ['d', 'c', 'b', 'a']


def test_display_price_drops_trailing_zero():
    assert make_product('x', currency=Currency.NIO).display_price == 'C$10'
    assert full_product().display_price == 'C$42.5'

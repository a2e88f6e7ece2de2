import pytest

from mercado_genius.models import ProductCategory


@pytest.fixture
def catalog_data(container):
    stores = container.store_service
    leon = stores.create_store(owner_name='Ana Ruiz', name='Moda León', description='Ropa casual', city='León')
    leon2 = stores.create_store(owner_name='Luis Pérez', name='Zapatería Central', description='Calzado', city='León')
    managua = stores.create_store(owner_name='Carla Mena', name='Moda Managua', city='Managua')

    products = container.product_service
    products.create_product(leon.id, 'Camisa de lino', 20, brand='Zara', category='Camisas')
    products.create_product(leon.id, 'Pantalón jeans', 30, brand="Levi's", category='Pantalones',
                            description='Corte recto')
    products.create_product(leon2.id, 'Tenis deportivos', 45, brand='Nike', category='Zapatos')
    products.create_product(managua.id, 'Camisa polo', 15, brand='Lacoste', category='Camisas')
    return {'leon': leon, 'leon2': leon2, 'managua': managua}


def test_no_city_means_no_results(container, catalog_data):
    catalog = container.catalog_service
    assert catalog.list_stores_by_city('') == []
    assert catalog.list_stores_by_city(None, 'moda') == []
    assert catalog.list_products_by_city('', 'camisa') == []


def test_stores_by_city_and_term(container, catalog_data):
    catalog = container.catalog_service
    assert [s.name for s in catalog.list_stores_by_city('León')] == ['Moda León', 'Zapatería Central']
    # búsqueda en la descripción, sin distinguir mayúsculas
    assert [s.name for s in catalog.list_stores_by_city('León', 'CALZADO')] == ['Zapatería Central']
    assert catalog.list_stores_by_city('Granada') == []


def test_products_by_city_newest_first(container, catalog_data):
    catalog = container.catalog_service
    names = [p.name for p in catalog.list_products_by_city('León')]
    assert names == ['Tenis deportivos', 'Pantalón jeans', 'Camisa de lino']

    assert [p.name for p in catalog.list_products_by_city('León', 'nike')] == ['Tenis deportivos']
    assert [p.name for p in catalog.list_products_by_city('León', 'recto')] == ['Pantalón jeans']
    assert [p.name for p in catalog.list_products_by_city('Managua', 'camisa')] == ['Camisa polo']


def test_products_by_store_and_category(container, catalog_data):
    catalog = container.catalog_service
    store_id = catalog_data['leon'].id
    assert len(catalog.list_products_by_store(store_id)) == 2
    assert len(catalog.list_products_by_store(store_id, 'Todos')) == 2
    shirts = catalog.list_products_by_store(store_id, 'Camisas')
    assert [p.category for p in shirts] == [ProductCategory.CAMISAS]
    assert catalog.list_products_by_store(store_id, 'Vestidos') == []


def test_seller_search_matches_name_or_brand(container, catalog_data):
    catalog = container.catalog_service
    store_id = catalog_data['leon'].id
    assert [p.name for p in catalog.search_seller_products(store_id, 'levi')] == ['Pantalón jeans']
    assert [p.name for p in catalog.search_seller_products(store_id, 'CAMISA')] == ['Camisa de lino']
    # la descripción no participa en el panel del vendedor
    assert catalog.search_seller_products(store_id, 'recto') == []
    assert catalog.search_seller_products(store_id, '', 'Pantalones')[0].name == 'Pantalón jeans'
    assert catalog.search_seller_products(store_id, 'camisa', 'Pantalones') == []


def test_store_for_product(container, catalog_data):
    catalog = container.catalog_service
    product = catalog.list_products_by_city('Managua')[0]
    assert catalog.store_for_product(product).id == catalog_data['managua'].id

import os
from types import SimpleNamespace

import pytest

# Sin logs de rendimiento a disco durante los tests
os.environ.setdefault('MERCADO_REQUEST_LOGGING', '0')

from mercado_genius.app_container import AppContainer


class FakeModels:
    """Imita client.models de google-genai: devuelve un texto fijo o lanza un error."""

    def __init__(self):
        self.text = ''
        self.error = None
        self.calls = []

    def generate_content(self, model, contents, config=None):
        self.calls.append({'model': model, 'contents': contents, 'config': config})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


class FakeGenAIClient:
    def __init__(self):
        self.models = FakeModels()


@pytest.fixture
def ai_client():
    return FakeGenAIClient()


@pytest.fixture
def container(tmp_path, ai_client):
    c = AppContainer(base_path=str(tmp_path), quota_bytes=0, ai_client=ai_client)
    AppContainer.set_instance(c)
    yield c
    AppContainer.reset_instance()


@pytest.fixture
def client(container):
    from mercado_genius.main import app
    app.config['TESTING'] = True
    with app.test_client() as c:
        yield c


@pytest.fixture
def business_store(container):
    return container.store_service.create_store(
        owner_name='María López',
        name='Variedades María',
        description='Ropa y accesorios',
        city='León',
    )

# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Esta capa encapsula todo el acceso a la persistencia local (archivos JSON).
# Las interfaces (métodos públicos) no dependen del formato de almacenamiento.
#
# ESTRUCTURA:
# ├── interfaces.py          → Protocolos que usan los servicios
# ├── base.py                → Clases base JSON (DictRepository, ListRepository)
# ├── session_repository.py  → Acceso a session.json
# ├── store_repository.py    → Acceso a stores.json
# ├── product_repository.py  → Acceso a products.json
# └── review_repository.py   → Acceso a reviews.json
# ==============================================================================

from .interfaces import (
    ISessionRepository,
    IStoreRepository,
    IProductRepository,
    IReviewRepository,
)

from .base import BaseRepository, DictRepository, ListRepository
from .session_repository import SessionRepository
from .store_repository import StoreRepository
from .product_repository import ProductRepository
from .review_repository import ReviewRepository

__all__ = [
    # Interfaces
    'ISessionRepository',
    'IStoreRepository',
    'IProductRepository',
    'IReviewRepository',

    # Clases base
    'BaseRepository',
    'DictRepository',
    'ListRepository',

    # Implementaciones JSON
    'SessionRepository',
    'StoreRepository',
    'ProductRepository',
    'ReviewRepository',
]

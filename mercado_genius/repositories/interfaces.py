# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
#
# Los servicios dependen de estos protocolos, no de las clases JSON concretas.
# Esto permite:
#
# 1. INDEPENDENCIA DE ALMACENAMIENTO
#    - Cambiar los archivos JSON por otro almacén solo requiere otra
#      implementación que cumpla el protocolo
#
# 2. TESTING
#    - Fácil crear dobles en memoria sin tocar archivos
#
# ==============================================================================

from typing import Iterable, List, Optional, Protocol, runtime_checkable

from mercado_genius.models import Product, Review, StoreProfile


@runtime_checkable
class ISessionRepository(Protocol):
    """Marcador de la tienda con sesión iniciada."""

    def get_active_store_id(self) -> Optional[str]:
        ...

    def set_active_store_id(self, store_id: str) -> None:
        ...

    def clear_active_store(self) -> None:
        ...


@runtime_checkable
class IStoreRepository(Protocol):
    """Colección de perfiles de tienda."""

    def load(self) -> List[StoreProfile]:
        """Todas las tiendas en orden de almacenamiento."""
        ...

    def get_by_id(self, store_id: str) -> Optional[StoreProfile]:
        ...

    def upsert(self, store: StoreProfile) -> None:
        """Reemplaza por id o agrega; además inicia sesión con esa tienda."""
        ...


@runtime_checkable
class IProductRepository(Protocol):
    """Colección de productos, del más nuevo al más antiguo."""

    def load(self) -> List[Product]:
        ...

    def get_by_store(self, store_id: str) -> List[Product]:
        ...

    def get_by_id(self, product_id: str) -> Optional[Product]:
        ...

    def add(self, product: Product) -> None:
        """Inserta al inicio de la colección."""
        ...

    def delete(self, product_id: str) -> Optional[Product]:
        ...


@runtime_checkable
class IReviewRepository(Protocol):
    """Colección de reseñas (solo se agregan)."""

    def load(self) -> List[Review]:
        ...

    def get_for_product(self, product_id: str) -> List[Review]:
        """Reseñas de un producto, más recientes primero."""
        ...

    def get_for_products(self, product_ids: Iterable[str]) -> List[Review]:
        ...

    def add(self, review: Review) -> None:
        ...

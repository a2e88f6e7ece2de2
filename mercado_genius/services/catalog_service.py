# ==============================================================================
# SERVICIO DE CATÁLOGO - Consultas de tiendas y productos
# ==============================================================================
# Filtros de búsqueda sobre las colecciones completas. Los resultados salen en
# orden de almacenamiento (productos: del más nuevo al más antiguo); no hay
# ranking ni paginación.
#
# REGLA DEL COMPRADOR: sin ciudad seleccionada no hay resultados. Esto obliga
# a elegir ciudad antes de explorar.
# ==============================================================================

from typing import List, Optional

from mercado_genius.models import ALL_CATEGORIES, Product, StoreProfile
from mercado_genius.repositories.interfaces import IProductRepository, IStoreRepository


def matches_term(term: str, *fields: str) -> bool:
    """
    Búsqueda por subcadena sin distinguir mayúsculas.
    Un término vacío coincide con todo.
    """
    needle = (term or '').lower()
    return any(needle in (value or '').lower() for value in fields)


def is_all_categories(category: Optional[str]) -> bool:
    """None, '' y 'Todos' significan sin filtro de categoría."""
    return not category or category == ALL_CATEGORIES


class CatalogService:
    """
    Servicio de consultas del catálogo.

    Responsabilidades:
    - Buscar tiendas por ciudad y texto
    - Buscar productos por ciudad y texto
    - Listar el catálogo de una tienda por categoría
    - Filtrar el panel del vendedor
    """

    def __init__(
        self,
        store_repo: IStoreRepository,
        product_repo: IProductRepository
    ):
        self.store_repo = store_repo
        self.product_repo = product_repo

    # =========================================================================
    # CONSULTAS DEL COMPRADOR
    # =========================================================================

    def list_stores_by_city(self, city: Optional[str], search_term: str = '') -> List[StoreProfile]:
        """
        Tiendas de una ciudad cuyo nombre o descripción contiene el término.

        Args:
            city: Ciudad seleccionada (vacía = sin resultados)
            search_term: Texto a buscar

        Returns:
            Tiendas en orden de almacenamiento
        """
        if not city:
            return []
        return [
            store for store in self.store_repo.load()
            if store.city == city and matches_term(search_term, store.name, store.description)
        ]

    def list_products_by_city(self, city: Optional[str], search_term: str = '') -> List[Product]:
        """
        Productos de tiendas de una ciudad cuyo nombre, marca o descripción
        contiene el término.

        Args:
            city: Ciudad seleccionada (vacía = sin resultados)
            search_term: Texto a buscar

        Returns:
            Productos del más nuevo al más antiguo
        """
        if not city:
            return []
        store_ids = {store.id for store in self.store_repo.load() if store.city == city}
        return [
            product for product in self.product_repo.load()
            if product.store_id in store_ids
            and matches_term(search_term, product.name, product.brand, product.description)
        ]

    def list_products_by_store(self, store_id: str, category: Optional[str] = None) -> List[Product]:
        """Catálogo de una tienda, opcionalmente de una sola categoría."""
        products = self.product_repo.get_by_store(store_id)
        if is_all_categories(category):
            return products
        return [p for p in products if p.category.value == category]

    def store_for_product(self, product: Product) -> Optional[StoreProfile]:
        """Tienda dueña de un producto (None si el producto quedó huérfano)."""
        return self.store_repo.get_by_id(product.store_id)

    # =========================================================================
    # CONSULTAS DEL VENDEDOR
    # =========================================================================

    def search_seller_products(
        self,
        store_id: str,
        search_term: str = '',
        category: Optional[str] = None
    ) -> List[Product]:
        """
        Filtro del panel del vendedor: nombre o marca, más categoría opcional.
        """
        return [
            p for p in self.list_products_by_store(store_id, category)
            if matches_term(search_term, p.name, p.brand)
        ]

# ==============================================================================
# REPOSITORIO DE PRODUCTOS
# ==============================================================================
# Encapsula todo el acceso a products.json
# La lista se guarda del más nuevo al más antiguo: agregar un producto lo
# inserta al inicio. Ese orden de almacenamiento ES el orden de publicación;
# no se reordena por createdAt.
# ==============================================================================

import os
from typing import List, Optional

from mercado_genius.models import Product
from mercado_genius.repositories.base import ListRepository


class ProductRepository(ListRepository):
    """
    Repositorio de productos.

    Formato de datos en products.json:
    [
        {
            "id": "9c1e...",
            "storeId": "3f2a...",
            "name": "Camisa de lino",
            "price": 25.0,
            "currency": "USD",
            "images": ["data:image/jpeg;base64,..."],
            "createdAt": 1718000000000,
            ...
        }
    ]
    """

    FILE_NAME = 'products.json'

    def __init__(self, base_path: str, quota_bytes: int = 0):
        super().__init__(os.path.join(base_path, self.FILE_NAME), quota_bytes)

    def load(self) -> List[Product]:
        """
        Carga todos los productos en orden de almacenamiento.

        Los registros antiguos con 'imageUrl' se migran al leerlos
        (ver Product.from_dict).
        """
        return [Product.from_dict(r) for r in self.get_all()]

    def get_by_store(self, store_id: str) -> List[Product]:
        return [p for p in self.load() if p.store_id == store_id]

    def get_by_id(self, product_id: str) -> Optional[Product]:
        record = self.find_by('id', product_id)
        return Product.from_dict(record) if record else None

    def add(self, product: Product) -> None:
        """
        Publica un producto al inicio de la lista.

        Raises:
            StorageQuotaExceededError: Si la colección no cabe en la cuota
        """
        records = [p.to_dict() for p in self.load()]
        records.insert(0, product.to_dict())
        self.save_all(records)

    def delete(self, product_id: str) -> Optional[Product]:
        """
        Elimina un producto por id reescribiendo la colección.

        Returns:
            Producto eliminado o None si no existía
        """
        removed = self.remove_where(lambda r: r.get('id') == product_id)
        return Product.from_dict(removed[0]) if removed else None

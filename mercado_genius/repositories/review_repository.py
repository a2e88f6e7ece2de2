# ==============================================================================
# REPOSITORIO DE RESEÑAS
# ==============================================================================
# Encapsula todo el acceso a reviews.json
# Las reseñas son inmutables: solo se agregan, nunca se editan ni eliminan.
# Eliminar un producto NO elimina sus reseñas.
# ==============================================================================

import os
from typing import Iterable, List

from mercado_genius.models import Review
from mercado_genius.repositories.base import ListRepository


class ReviewRepository(ListRepository):
    """
    Repositorio de reseñas.

    Formato de datos en reviews.json:
    [
        {"id": "...", "productId": "...", "author": "Ana", "rating": 5,
         "comment": "Excelente", "date": 1718000000000}
    ]
    """

    FILE_NAME = 'reviews.json'

    def __init__(self, base_path: str, quota_bytes: int = 0):
        super().__init__(os.path.join(base_path, self.FILE_NAME), quota_bytes)

    def load(self) -> List[Review]:
        """Carga todas las reseñas en orden de almacenamiento."""
        return [Review.from_dict(r) for r in self.get_all()]

    def get_for_product(self, product_id: str) -> List[Review]:
        """Reseñas de un producto, de la más reciente a la más antigua."""
        reviews = [r for r in self.load() if r.product_id == product_id]
        return sorted(reviews, key=lambda r: r.date, reverse=True)

    def get_for_products(self, product_ids: Iterable[str]) -> List[Review]:
        """Reseñas de cualquiera de los productos indicados."""
        ids = set(product_ids)
        return [r for r in self.load() if r.product_id in ids]

    def add(self, review: Review) -> None:
        self.prepend(review.to_dict())

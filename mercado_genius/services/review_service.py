# ==============================================================================
# SERVICIO DE RESEÑAS
# ==============================================================================
# Alta y lectura de reseñas de compradores por producto.
# Las reseñas son inmutables: no se editan ni se eliminan.
# ==============================================================================

import logging
from typing import Any, Callable, List

from mercado_genius.errors import ValidationError
from mercado_genius.models import Review, now_ms
from mercado_genius.repositories.interfaces import IReviewRepository
from mercado_genius.services.store_service import new_id
from mercado_genius.services.validation import clean_text

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR = 'Anónimo'
MIN_RATING = 1
MAX_RATING = 5


def parse_rating(value: Any) -> int:
    """
    Acepta enteros, textos numéricos ('4') y flotantes exactos (4.0).

    Raises:
        ValidationError: Si no es un entero entre MIN_RATING y MAX_RATING
    """
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    elif isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Calificación inválida: {value}")
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(f"La calificación debe estar entre {MIN_RATING} y {MAX_RATING}.")
    return value


class ReviewService:
    """
    Valida y guarda reseñas.

    Reglas:
    * ``rating`` es un entero de 1 a 5 (por defecto 5).
    * ``author`` vacío se guarda como "Anónimo".
    * Las reseñas no se editan ni se eliminan, tampoco al borrar su producto.
    """

    def __init__(self, review_repo: IReviewRepository, id_factory: Callable[[], str] = new_id):
        self.review_repo = review_repo
        self.id_factory = id_factory

    def add_review(
        self,
        product_id: str,
        rating: Any = MAX_RATING,
        author: str = '',
        comment: str = ''
    ) -> Review:
        """
        Registra la reseña de un comprador.

        Raises:
            ValidationError: Si la calificación no es un entero de 1 a 5
        """
        value = parse_rating(rating)
        review = Review(
            id=self.id_factory(),
            product_id=product_id,
            rating=value,
            author=clean_text(author, 'author') or DEFAULT_AUTHOR,
            comment=clean_text(comment, 'comment'),
            date=now_ms(),
        )
        self.review_repo.add(review)
        logger.info("[RESEÑA] %s estrellas para el producto %s", value, product_id)
        return review

    def get_reviews(self, product_id: str) -> List[Review]:
        """Reseñas del producto, de la más reciente a la más antigua."""
        return self.review_repo.get_for_product(product_id)

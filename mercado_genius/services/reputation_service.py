# ==============================================================================
# SERVICIO DE REPUTACIÓN DE TIENDAS
# ==============================================================================
# Deriva la calificación y el estado de una tienda a partir de las reseñas de
# TODOS sus productos. La reseña no guarda la tienda: se une por
# review.productId -> product.storeId.
#
# REGLAS (se evalúan en este orden, gana la primera):
# 1. Sin reseñas               → rating 0, NEUTRAL
# 2. promedio ≥ 4.5 y ≥ 3 reseñas → EXCELLENT
# 3. promedio ≥ 3.5            → GOOD
# 4. promedio ≥ 2.0            → NEUTRAL
# 5. 0 < promedio < 2.0        → SCAM_ALERT
# 6. cualquier otro caso       → POOR
#
# Se recalcula en cada llamada, sin caché.
# ==============================================================================

from typing import Dict, Iterable, List, Sequence

from mercado_genius.models import ReputationResult, ReputationStatus, StoreProfile
from mercado_genius.repositories.interfaces import IProductRepository, IReviewRepository


# Umbrales de la escala de 1 a 5 estrellas
EXCELLENT_MIN_AVERAGE = 4.5
EXCELLENT_MIN_REVIEWS = 3
GOOD_MIN_AVERAGE = 3.5
NEUTRAL_MIN_AVERAGE = 2.0


def compute_reputation(ratings: Sequence[int]) -> ReputationResult:
    """
    Aplica las reglas de reputación a una lista de calificaciones.

    Args:
        ratings: Calificaciones de 1 a 5

    Returns:
        ReputationResult con el promedio, la cantidad y el estado
    """
    count = len(ratings)
    if count == 0:
        return ReputationResult(rating=0, count=0, status=ReputationStatus.NEUTRAL)

    average = sum(ratings) / count

    if average >= EXCELLENT_MIN_AVERAGE and count >= EXCELLENT_MIN_REVIEWS:
        status = ReputationStatus.EXCELLENT
    elif average >= GOOD_MIN_AVERAGE:
        status = ReputationStatus.GOOD
    elif average >= NEUTRAL_MIN_AVERAGE:
        status = ReputationStatus.NEUTRAL
    elif 0 < average < NEUTRAL_MIN_AVERAGE:
        status = ReputationStatus.SCAM_ALERT
    else:
        # Inalcanzable mientras rating esté en 1..5; solo un promedio ≤ 0
        # (datos fuera de rango) llega aquí.
        status = ReputationStatus.POOR

    return ReputationResult(rating=average, count=count, status=status)


def format_rating(result: ReputationResult) -> str:
    """Promedio con un decimal, como se muestra junto a las estrellas."""
    return f"{result.rating:.1f}"


class ReputationService:
    """
    Servicio de reputación.

    Responsabilidades:
    - Unir reseñas -> productos -> tienda
    - Calcular la reputación de una o varias tiendas
    """

    def __init__(
        self,
        product_repo: IProductRepository,
        review_repo: IReviewRepository
    ):
        self.product_repo = product_repo
        self.review_repo = review_repo

    def get_store_ratings(self, store_id: str) -> List[int]:
        """Calificaciones de todas las reseñas de los productos de la tienda."""
        product_ids = [p.id for p in self.product_repo.get_by_store(store_id)]
        return [r.rating for r in self.review_repo.get_for_products(product_ids)]

    def get_store_reputation(self, store_id: str) -> ReputationResult:
        """
        Reputación de una tienda.

        Args:
            store_id: Id de la tienda

        Returns:
            ReputationResult (NEUTRAL con rating 0 si no tiene reseñas)
        """
        return compute_reputation(self.get_store_ratings(store_id))

    def reputations_for_stores(self, stores: Iterable[StoreProfile]) -> Dict[str, ReputationResult]:
        """
        Reputación de varias tiendas (panel del comprador).

        Returns:
            Diccionario {store_id: ReputationResult}
        """
        return {store.id: self.get_store_reputation(store.id) for store in stores}

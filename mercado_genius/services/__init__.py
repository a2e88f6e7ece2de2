# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# Esta capa contiene TODA la lógica de negocio de la aplicación.
#
# PRINCIPIOS:
# 1. Los servicios orquestan operaciones entre repositorios
# 2. Aplican reglas de negocio y valores por defecto
# 3. Las rutas (controllers) solo llaman a servicios
# 4. Los servicios NO conocen el formato de almacenamiento
#
# ESTRUCTURA:
# ├── store_service.py      → Alta de tiendas, perfil, sesión del vendedor
# ├── product_service.py    → Publicar/eliminar productos, publicación con IA
# ├── review_service.py     → Reseñas de compradores
# ├── catalog_service.py    → Búsquedas por ciudad, tienda y categoría
# ├── reputation_service.py → Calificación y estado de cada tienda
# └── ai_service.py         → Puente hacia Gemini (descripción y chat)
# ==============================================================================

from mercado_genius.services.ai_service import AIService, build_client
from mercado_genius.services.catalog_service import CatalogService
from mercado_genius.services.product_service import ProductService
from mercado_genius.services.reputation_service import (
    ReputationService,
    compute_reputation,
    format_rating,
)
from mercado_genius.services.review_service import ReviewService
from mercado_genius.services.store_service import StoreService

__all__ = [
    'AIService',
    'build_client',
    'CatalogService',
    'ProductService',
    'ReputationService',
    'compute_reputation',
    'format_rating',
    'ReviewService',
    'StoreService',
]

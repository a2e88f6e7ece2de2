# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del mercado
# ==============================================================================
# Entidades persistidas (tiendas, productos, reseñas) y valores derivados
# (reputación, sugerencias de IA, mensajes de chat).
# ==============================================================================

from .entities import (
    # Catálogos fijos
    ProductCategory,
    Currency,
    ReputationStatus,
    SellerMode,
    NICARAGUA_CITIES,
    ALL_CATEGORIES,
    now_ms,

    # Entidades persistidas
    StoreProfile,
    Product,
    Review,

    # Valores derivados
    ReputationResult,
    ListingSuggestion,
    ChatMessage,
)

__all__ = [
    'ProductCategory',
    'Currency',
    'ReputationStatus',
    'SellerMode',
    'NICARAGUA_CITIES',
    'ALL_CATEGORIES',
    'now_ms',

    'StoreProfile',
    'Product',
    'Review',

    'ReputationResult',
    'ListingSuggestion',
    'ChatMessage',
]

# ==============================================================================
# SERVICIO DE PRODUCTOS
# ==============================================================================
# Publicación y eliminación de productos, más la generación asistida de la
# descripción.
#
# REGLAS:
# - Nombre y precio son obligatorios; el precio no puede ser negativo
# - Marca vacía → "Genérico", talla vacía → "Única"
# - El producto nuevo queda primero en el catálogo
# - Eliminar exige confirmación explícita; las reseñas del producto se quedan
# - Si el almacenamiento está lleno, el producto se pierde y se avisa
# ==============================================================================

import logging
import math
from typing import Any, Callable, Dict, List, Optional

from mercado_genius.errors import StorageQuotaExceededError, ValidationError
from mercado_genius.models import Currency, Product, ProductCategory, now_ms
from mercado_genius.repositories.interfaces import IProductRepository
from mercado_genius.services.ai_service import AIService
from mercado_genius.services.store_service import new_id
from mercado_genius.services.validation import clean_images, clean_text

logger = logging.getLogger(__name__)

DEFAULT_BRAND = 'Genérico'
DEFAULT_SIZE = 'Única'

STORAGE_FULL_MESSAGE = (
    "¡Almacenamiento lleno! Intenta borrar productos antiguos "
    "o subir imágenes menos pesadas."
)
DELETE_CONFIRM_PROMPT = '¿Estás seguro de que quieres eliminar este producto?'
NAME_REQUIRED_MESSAGE = "Por favor ingresa al menos el nombre del producto."


def parse_price(value: Any) -> float:
    """
    Convierte el precio ingresado en un decimal no negativo.

    Raises:
        ValidationError: Si está vacío, no es numérico o es negativo
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("El precio es requerido.")
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Precio inválido: {value}")
    if not math.isfinite(price) or price < 0:
        raise ValidationError(f"Precio inválido: {value}")
    return price


def parse_currency(value: Any) -> Currency:
    if not value:
        return Currency.USD
    try:
        return Currency(value)
    except ValueError:
        raise ValidationError(f"Moneda inválida: {value}")


def parse_category(value: Any) -> ProductCategory:
    if not value:
        return ProductCategory.OTRO
    try:
        return ProductCategory(value)
    except ValueError:
        raise ValidationError(f"Categoría inválida: {value}")


class ProductService:
    """
    Servicio para gestión de productos.

    Responsabilidades:
    - Publicar productos con valores por defecto
    - Eliminar productos con confirmación
    - Pedir a la IA la descripción y categoría de una publicación
    """

    def __init__(
        self,
        product_repo: IProductRepository,
        ai_service: Optional[AIService] = None,
        id_factory: Callable[[], str] = new_id
    ):
        """
        Args:
            product_repo: Repositorio de productos
            ai_service: Puente de IA (opcional)
            id_factory: Generador de ids (inyectable para tests)
        """
        self.product_repo = product_repo
        self.ai_service = ai_service
        self.id_factory = id_factory

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_product(self, product_id: str) -> Optional[Product]:
        return self.product_repo.get_by_id(product_id)

    def get_all_products(self) -> List[Product]:
        """Todos los productos, del más nuevo al más antiguo."""
        return self.product_repo.load()

    # =========================================================================
    # PUBLICAR
    # =========================================================================

    def create_product(
        self,
        store_id: str,
        name: str,
        price: Any,
        brand: str = '',
        currency: Any = Currency.USD,
        size: str = '',
        category: Any = ProductCategory.OTRO,
        description: str = '',
        images: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """
        Publica un producto en la tienda indicada.

        Args:
            store_id: Tienda dueña
            name: Nombre (requerido)
            price: Precio (requerido, acepta texto numérico)
            brand: Marca ("Genérico" si vacía)
            currency: 'USD' o 'NIO'
            size: Talla ("Única" si vacía)
            category: Categoría del catálogo (Otro si vacía)
            description: Texto de venta
            images: Imágenes codificadas, la primera es la portada

        Returns:
            Dict {success, product, message}. Si el almacenamiento está lleno
            success es False, product es None y message trae el aviso.

        Raises:
            ValidationError: Si falta el nombre o el precio es inválido
        """
        name = clean_text(name, 'name')
        if not name:
            raise ValidationError("El nombre del producto es requerido.")

        product = Product(
            id=self.id_factory(),
            store_id=store_id,
            name=name,
            brand=clean_text(brand, 'brand') or DEFAULT_BRAND,
            price=parse_price(price),
            currency=parse_currency(currency),
            size=clean_text(size, 'size') or DEFAULT_SIZE,
            category=parse_category(category),
            description=clean_text(description, 'description'),
            images=clean_images(images),
            created_at=now_ms(),
        )

        try:
            self.product_repo.add(product)
        except StorageQuotaExceededError as e:
            logger.error("[STORAGE] Cuota excedida al publicar '%s': %s", product.name, e)
            return {'success': False, 'product': None, 'message': STORAGE_FULL_MESSAGE}

        logger.info("[PRODUCTO] '%s' publicado en la tienda %s", product.name, store_id)
        return {'success': True, 'product': product, 'message': f"Producto '{product.name}' publicado."}

    # =========================================================================
    # ELIMINAR
    # =========================================================================

    def delete_product(self, product_id: str, confirmed: bool = False) -> Dict[str, Any]:
        """
        Elimina un producto si el vendedor lo confirmó.

        Args:
            product_id: Id del producto
            confirmed: Respuesta del vendedor a DELETE_CONFIRM_PROMPT

        Returns:
            Dict {success, product, message, confirm_required}
        """
        if not confirmed:
            return {
                'success': False,
                'product': None,
                'message': DELETE_CONFIRM_PROMPT,
                'confirm_required': True,
            }

        removed = self.product_repo.delete(product_id)
        if removed is None:
            return {
                'success': False,
                'product': None,
                'message': 'Producto no encontrado.',
                'confirm_required': False,
            }

        logger.info("[PRODUCTO] '%s' eliminado (id=%s)", removed.name, removed.id)
        return {
            'success': True,
            'product': removed,
            'message': f"Producto '{removed.name}' eliminado.",
            'confirm_required': False,
        }

    # =========================================================================
    # PUBLICACIÓN ASISTIDA POR IA
    # =========================================================================

    def generate_listing_copy(
        self,
        name: str,
        brand: str = '',
        details: str = '',
        current_description: str = '',
        current_category: Any = ProductCategory.OTRO
    ) -> Dict[str, Any]:
        """
        Propone descripción y categoría para el formulario de publicación.

        Si la IA falla o no está configurada, se devuelven los valores actuales
        del formulario sin cambios. Una categoría sugerida fuera del catálogo
        se convierte en Otro.

        Returns:
            Dict {description, category, generated}

        Raises:
            ValidationError: Si no se indicó el nombre del producto
        """
        name = clean_text(name, 'name')
        if not name:
            raise ValidationError(NAME_REQUIRED_MESSAGE)

        current = {
            'description': clean_text(current_description, 'description'),
            'category': ProductCategory.parse(current_category) if current_category else ProductCategory.OTRO,
            'generated': False,
        }
        if self.ai_service is None:
            return current

        suggestion = self.ai_service.generate_listing_copy(
            name, clean_text(brand, 'brand'), clean_text(details, 'details')
        )
        if suggestion is None:
            return current

        return {
            'description': suggestion.description,
            'category': ProductCategory.parse(suggestion.suggested_category),
            'generated': True,
        }

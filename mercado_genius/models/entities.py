# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto del mercado local.
# Se persisten como JSON con las claves camelCase históricas
# (storeId, ownerName, createdAt...) para mantener compatibilidad con los
# datos ya guardados.
# ==============================================================================

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# ==============================================================================
# ENUMERACIONES Y CATÁLOGOS FIJOS
# ==============================================================================

class ProductCategory(str, Enum):
    """Categorías de producto permitidas."""
    CAMISAS = 'Camisas'
    PANTALONES = 'Pantalones'
    ZAPATOS = 'Zapatos'
    ACCESORIOS = 'Accesorios'
    DEPORTIVO = 'Ropa Deportiva'
    VESTIDOS = 'Vestidos'
    CHAQUETAS = 'Chaquetas'
    OTRO = 'Otro'

    @classmethod
    def parse(cls, value: Any) -> 'ProductCategory':
        """Convierte un texto en categoría; lo desconocido cae en OTRO."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.OTRO


class Currency(str, Enum):
    """Monedas aceptadas para los precios."""
    USD = 'USD'
    NIO = 'NIO'  # Córdoba nicaragüense

    @property
    def symbol(self) -> str:
        return 'C$' if self is Currency.NIO else '$'


class ReputationStatus(str, Enum):
    """Etiqueta derivada de las calificaciones de una tienda."""
    EXCELLENT = 'EXCELLENT'
    GOOD = 'GOOD'
    NEUTRAL = 'NEUTRAL'
    POOR = 'POOR'
    SCAM_ALERT = 'SCAM_ALERT'


class SellerMode(str, Enum):
    """Modo de registro del vendedor."""
    BUSINESS = 'business'   # Negocio con nombre propio
    PERSONAL = 'personal'   # Persona vendiendo artículos variados


# Ciudades donde opera el mercado (la primera es la selección por defecto)
NICARAGUA_CITIES = (
    'Managua',
    'León',
    'Granada',
    'Estelí',
    'Matagalpa',
    'Chinandega',
    'Masaya',
    'Rivas',
    'Jinotega',
    'Bluefields',
)

# Filtro de categoría que significa "todas"
ALL_CATEGORIES = 'Todos'


def now_ms() -> int:
    """Timestamp actual en milisegundos (formato de createdAt / date)."""
    return int(time.time() * 1000)


# ==============================================================================
# TIENDAS
# ==============================================================================

@dataclass
class StoreProfile:
    """
    Perfil de un vendedor y contenedor de su catálogo.

    Attributes:
        id: Identificador único
        name: Nombre visible de la tienda
        owner_name: Nombre completo del dueño
        description: Descripción corta del negocio
        city: Ciudad (una de NICARAGUA_CITIES)
        address: Dirección o punto de entrega
        theme_color: Color del tema ('indigo' negocio, 'pink' personal)
        map_url: Enlace de Google Maps (opcional)
        banner_url: Imagen de portada (opcional)
        logo_url: Logo codificado (opcional)
        is_personal: True si es un perfil personal
    """
    id: str
    name: str
    owner_name: str
    description: str = ''
    city: str = NICARAGUA_CITIES[0]
    address: str = ''
    theme_color: str = 'indigo'
    map_url: Optional[str] = None
    banner_url: Optional[str] = None
    logo_url: Optional[str] = None
    is_personal: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        d = {
            'id': self.id,
            'name': self.name,
            'ownerName': self.owner_name,
            'description': self.description,
            'themeColor': self.theme_color,
            'city': self.city,
            'address': self.address,
            'isPersonal': self.is_personal,
        }
        if self.map_url is not None:
            d['mapUrl'] = self.map_url
        if self.banner_url is not None:
            d['bannerUrl'] = self.banner_url
        if self.logo_url is not None:
            d['logoUrl'] = self.logo_url
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StoreProfile':
        """Crea instancia desde diccionario."""
        return cls(
            id=str(data.get('id', '')),
            name=data.get('name', ''),
            owner_name=data.get('ownerName', ''),
            description=data.get('description', ''),
            city=data.get('city', NICARAGUA_CITIES[0]),
            address=data.get('address', ''),
            theme_color=data.get('themeColor', 'indigo'),
            map_url=data.get('mapUrl'),
            banner_url=data.get('bannerUrl'),
            logo_url=data.get('logoUrl'),
            is_personal=bool(data.get('isPersonal', False)),
        )


# ==============================================================================
# PRODUCTOS
# ==============================================================================

@dataclass
class Product:
    """
    Artículo publicado por una tienda.

    Attributes:
        id: Identificador único
        store_id: Tienda dueña del producto
        name: Nombre del producto
        brand: Marca
        price: Precio (decimal no negativo)
        currency: Moneda del precio
        size: Talla
        category: Categoría del catálogo
        description: Texto de venta
        images: Imágenes codificadas; la primera es la portada
        created_at: Momento de creación en milisegundos
    """
    id: str
    store_id: str
    name: str
    price: float
    brand: str = ''
    currency: Currency = Currency.USD
    size: str = ''
    category: ProductCategory = ProductCategory.OTRO
    description: str = ''
    images: List[str] = field(default_factory=list)
    created_at: int = field(default_factory=now_ms)

    @property
    def cover_image(self) -> Optional[str]:
        """Imagen de portada o None si no tiene imágenes."""
        return self.images[0] if self.images else None

    @property
    def display_price(self) -> str:
        """Precio con símbolo de moneda (ej: C$350, C$12.5)."""
        price = float(self.price)
        amount = int(price) if price.is_integer() else price
        return f"{self.currency.symbol}{amount}"

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        return {
            'id': self.id,
            'storeId': self.store_id,
            'name': self.name,
            'brand': self.brand,
            'price': self.price,
            'currency': self.currency.value,
            'size': self.size,
            'category': self.category.value,
            'description': self.description,
            'images': list(self.images),
            'createdAt': self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Product':
        """
        Crea instancia desde diccionario.

        Migra el formato antiguo de una sola imagen: si el registro trae
        'imageUrl' y no tiene 'images', la imagen pasa a ser la portada.
        """
        images = data.get('images') or []
        if not images and data.get('imageUrl'):
            images = [data['imageUrl']]
        try:
            currency = Currency(data.get('currency', 'USD'))
        except ValueError:
            currency = Currency.USD
        return cls(
            id=str(data.get('id', '')),
            store_id=str(data.get('storeId', '')),
            name=data.get('name', ''),
            brand=data.get('brand', ''),
            price=float(data.get('price') or 0),
            currency=currency,
            size=data.get('size', ''),
            category=ProductCategory.parse(data.get('category')),
            description=data.get('description', ''),
            images=list(images),
            created_at=int(data.get('createdAt') or 0),
        )


# ==============================================================================
# RESEÑAS
# ==============================================================================

@dataclass
class Review:
    """
    Reseña de un comprador sobre un producto. Inmutable una vez creada.

    Attributes:
        id: Identificador único
        product_id: Producto reseñado
        author: Nombre del autor ('Anónimo' si no lo indica)
        rating: Calificación entera de 1 a 5
        comment: Comentario libre
        date: Momento de creación en milisegundos
    """
    id: str
    product_id: str
    rating: int
    author: str = 'Anónimo'
    comment: str = ''
    date: int = field(default_factory=now_ms)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        return {
            'id': self.id,
            'productId': self.product_id,
            'author': self.author,
            'rating': self.rating,
            'comment': self.comment,
            'date': self.date,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Review':
        """Crea instancia desde diccionario."""
        return cls(
            id=str(data.get('id', '')),
            product_id=str(data.get('productId', '')),
            author=data.get('author', 'Anónimo'),
            rating=int(data.get('rating') or 0),
            comment=data.get('comment', ''),
            date=int(data.get('date') or 0),
        )


# ==============================================================================
# VALORES DERIVADOS (no se persisten)
# ==============================================================================

@dataclass
class ReputationResult:
    """Reputación agregada de una tienda."""
    rating: float
    count: int
    status: ReputationStatus

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rating': self.rating,
            'count': self.count,
            'status': self.status.value,
        }


@dataclass
class ListingSuggestion:
    """Sugerencia de la IA para una publicación."""
    description: str
    suggested_category: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'description': self.description,
            'suggestedCategory': self.suggested_category,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ListingSuggestion':
        return cls(
            description=str(data.get('description', '')),
            suggested_category=str(data.get('suggestedCategory', '')),
        )


@dataclass
class ChatMessage:
    """Mensaje del chat con el asistente de ventas."""
    role: str   # 'user' | 'ai'
    text: str
    timestamp: int = field(default_factory=now_ms)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'role': self.role,
            'text': self.text,
            'timestamp': self.timestamp,
        }

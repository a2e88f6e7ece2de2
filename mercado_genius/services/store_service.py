# ==============================================================================
# SERVICIO DE TIENDAS Y SESIÓN DEL VENDEDOR
# ==============================================================================
# Alta de tiendas (modo negocio o personal), actualización del perfil y
# manejo de la sesión activa.
#
# REGLAS:
# - El nombre del dueño es obligatorio siempre
# - En modo negocio el nombre de la tienda es obligatorio
# - En modo personal el nombre se arma como "Ventas de {primer nombre}"
# - Abrir una tienda inicia la sesión de su vendedor
# - Las tiendas no se eliminan; cerrar sesión solo borra el marcador
# ==============================================================================

import logging
import uuid
from typing import Callable, List, Optional

from mercado_genius.errors import ValidationError
from mercado_genius.models import NICARAGUA_CITIES, SellerMode, StoreProfile
from mercado_genius.repositories.interfaces import ISessionRepository, IStoreRepository
from mercado_genius.services.validation import clean_text, optional_text

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Identificador aleatorio único para registros nuevos."""
    return uuid.uuid4().hex


class StoreService:
    """
    Servicio para gestión de tiendas.

    Responsabilidades:
    - Registrar tiendas con los valores por defecto de cada modo
    - Reemplazar el perfil de una tienda existente
    - Resolver y cerrar la sesión del vendedor
    """

    PERSONAL_NAME_TEMPLATE = 'Ventas de {first_name}'
    PERSONAL_DEFAULT_DESCRIPTION = 'Venta de artículos variados'
    DEFAULT_ADDRESS = 'Acordar con vendedor'
    THEME_COLORS = {
        SellerMode.BUSINESS: 'indigo',
        SellerMode.PERSONAL: 'pink',
    }

    def __init__(
        self,
        store_repo: IStoreRepository,
        session_repo: ISessionRepository,
        id_factory: Callable[[], str] = new_id
    ):
        """
        Args:
            store_repo: Repositorio de tiendas
            session_repo: Repositorio del marcador de sesión
            id_factory: Generador de ids (inyectable para tests)
        """
        self.store_repo = store_repo
        self.session_repo = session_repo
        self.id_factory = id_factory

    # =========================================================================
    # ALTA Y ACTUALIZACIÓN
    # =========================================================================

    def create_store(
        self,
        owner_name: str,
        mode: SellerMode = SellerMode.BUSINESS,
        name: str = '',
        description: str = '',
        city: Optional[str] = None,
        address: str = '',
        map_url: Optional[str] = None,
        logo_url: Optional[str] = None,
        banner_url: Optional[str] = None
    ) -> StoreProfile:
        """
        Registra una tienda e inicia la sesión de su vendedor.

        Args:
            owner_name: Nombre completo del dueño (requerido)
            mode: Negocio o perfil personal
            name: Nombre del negocio (requerido en modo negocio)
            description: Descripción libre
            city: Ciudad; por defecto la primera de la lista
            address: Dirección o punto de entrega
            map_url: Enlace de Google Maps
            logo_url: Logo ya codificado
            banner_url: Portada ya codificada

        Returns:
            La tienda creada

        Raises:
            ValidationError: Si falta un campo requerido o la ciudad no existe
        """
        try:
            mode = SellerMode(mode)
        except ValueError:
            raise ValidationError(f"Modo de vendedor inválido: {mode}")
        is_personal = mode is SellerMode.PERSONAL

        store = StoreProfile(
            id=self.id_factory(),
            name=clean_text(name, 'name'),
            owner_name=clean_text(owner_name, 'ownerName'),
            description=clean_text(description, 'description'),
            city=city or NICARAGUA_CITIES[0],
            address=clean_text(address, 'address'),
            theme_color=self.THEME_COLORS[mode],
            map_url=optional_text(map_url, 'mapUrl'),
            logo_url=optional_text(logo_url, 'logoUrl'),
            banner_url=optional_text(banner_url, 'bannerUrl'),
            is_personal=is_personal,
        )
        if is_personal and store.owner_name:
            store.name = self.PERSONAL_NAME_TEMPLATE.format(first_name=store.owner_name.split()[0])
        if is_personal and not store.description:
            store.description = self.PERSONAL_DEFAULT_DESCRIPTION
        self._validate_profile(store)

        self.store_repo.upsert(store)
        logger.info("[TIENDA] Tienda '%s' creada en %s (id=%s)", store.name, store.city, store.id)
        return store

    def update_store(self, store: StoreProfile) -> Optional[StoreProfile]:
        """
        Reemplaza el perfil completo de una tienda existente.

        Aplica las mismas reglas que el alta: dueño obligatorio, nombre
        obligatorio en modo negocio y ciudad de la lista.

        Returns:
            La tienda guardada o None si el id no existe

        Raises:
            ValidationError: Si el perfil no cumple las reglas del alta
        """
        if self.store_repo.get_by_id(store.id) is None:
            return None

        store.owner_name = clean_text(store.owner_name, 'ownerName')
        store.name = clean_text(store.name, 'name')
        store.description = clean_text(store.description, 'description')
        store.address = clean_text(store.address, 'address')
        store.theme_color = clean_text(store.theme_color, 'themeColor')
        store.map_url = optional_text(store.map_url, 'mapUrl')
        store.logo_url = optional_text(store.logo_url, 'logoUrl')
        store.banner_url = optional_text(store.banner_url, 'bannerUrl')
        if store.is_personal and not store.name and store.owner_name:
            store.name = self.PERSONAL_NAME_TEMPLATE.format(first_name=store.owner_name.split()[0])
        self._validate_profile(store)

        self.store_repo.upsert(store)
        logger.info("[TIENDA] Perfil de '%s' actualizado (id=%s)", store.name, store.id)
        return store

    def _validate_profile(self, store: StoreProfile) -> None:
        """Reglas comunes de alta y actualización; completa dirección y color."""
        if not store.owner_name:
            raise ValidationError("Tu nombre completo es requerido.")
        if not store.name:
            raise ValidationError("El nombre del negocio es requerido.")
        if not isinstance(store.city, str) or store.city not in NICARAGUA_CITIES:
            raise ValidationError(f"Ciudad inválida: {store.city}")
        store.address = store.address or self.DEFAULT_ADDRESS
        if not store.theme_color:
            mode = SellerMode.PERSONAL if store.is_personal else SellerMode.BUSINESS
            store.theme_color = self.THEME_COLORS[mode]

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_store(self, store_id: str) -> Optional[StoreProfile]:
        return self.store_repo.get_by_id(store_id)

    def list_stores(self) -> List[StoreProfile]:
        return self.store_repo.load()

    # =========================================================================
    # SESIÓN
    # =========================================================================

    def get_active_store(self) -> Optional[StoreProfile]:
        """
        Tienda del vendedor con sesión iniciada.

        Un marcador que apunta a una tienda inexistente se trata como
        sesión cerrada.
        """
        store_id = self.session_repo.get_active_store_id()
        if not store_id:
            return None
        return self.store_repo.get_by_id(store_id)

    def logout(self) -> None:
        """Cierra la sesión del vendedor. Tiendas, productos y reseñas se conservan."""
        self.session_repo.clear_active_store()

# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Punto único donde se construyen los repositorios y servicios. Se crea una
# vez al arrancar y se pasa a quien lo necesite; los servicios nunca leen
# estado global.
#
# Facilita:
#   - Testing (directorio de datos temporal, cliente de IA falso)
#   - Cambiar el almacenamiento sin tocar servicios
# ==============================================================================

from typing import Any, Optional

from mercado_genius import config
from mercado_genius.repositories import (
    ProductRepository,
    ReviewRepository,
    SessionRepository,
    StoreRepository,
)
from mercado_genius.services import (
    AIService,
    CatalogService,
    ProductService,
    ReputationService,
    ReviewService,
    StoreService,
    build_client,
)


class AppContainer:
    """
    Contenedor de dependencias de la aplicación.

    Implementa el patrón Singleton para asegurar una única instancia
    de cada repositorio y servicio.

    Uso:
        container = AppContainer(base_path='/path/to/data')
        catalog = container.catalog_service
        stores = catalog.list_stores_by_city('León')
    """

    _instance: Optional['AppContainer'] = None

    def __init__(
        self,
        base_path: str = None,
        quota_bytes: int = None,
        ai_client: Any = None
    ):
        """
        Inicializa el contenedor.

        Args:
            base_path: Directorio de datos (por defecto config.DATA_DIR)
            quota_bytes: Cuota por colección (por defecto config.STORAGE_QUOTA_BYTES)
            ai_client: Cliente de Gemini ya construido (por defecto se crea
                       con la credencial del entorno)
        """
        self._base_path = base_path or config.DATA_DIR
        self._quota_bytes = config.STORAGE_QUOTA_BYTES if quota_bytes is None else quota_bytes
        self._ai_client = ai_client

        # Repositorios y servicios (lazy loading)
        self._session_repo: Optional[SessionRepository] = None
        self._store_repo: Optional[StoreRepository] = None
        self._product_repo: Optional[ProductRepository] = None
        self._review_repo: Optional[ReviewRepository] = None

        self._ai_service: Optional[AIService] = None
        self._store_service: Optional[StoreService] = None
        self._product_service: Optional[ProductService] = None
        self._review_service: Optional[ReviewService] = None
        self._catalog_service: Optional[CatalogService] = None
        self._reputation_service: Optional[ReputationService] = None

    @property
    def base_path(self) -> str:
        return self._base_path

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def session_repo(self) -> SessionRepository:
        if self._session_repo is None:
            self._session_repo = SessionRepository(self._base_path, self._quota_bytes)
        return self._session_repo

    @property
    def store_repo(self) -> StoreRepository:
        if self._store_repo is None:
            self._store_repo = StoreRepository(self._base_path, self.session_repo, self._quota_bytes)
        return self._store_repo

    @property
    def product_repo(self) -> ProductRepository:
        if self._product_repo is None:
            self._product_repo = ProductRepository(self._base_path, self._quota_bytes)
        return self._product_repo

    @property
    def review_repo(self) -> ReviewRepository:
        if self._review_repo is None:
            self._review_repo = ReviewRepository(self._base_path, self._quota_bytes)
        return self._review_repo

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def ai_service(self) -> AIService:
        if self._ai_service is None:
            client = self._ai_client
            if client is None:
                client = build_client(config.get_ai_api_key())
            self._ai_service = AIService(client, model=config.AI_MODEL)
        return self._ai_service

    @property
    def store_service(self) -> StoreService:
        if self._store_service is None:
            self._store_service = StoreService(self.store_repo, self.session_repo)
        return self._store_service

    @property
    def product_service(self) -> ProductService:
        if self._product_service is None:
            self._product_service = ProductService(self.product_repo, self.ai_service)
        return self._product_service

    @property
    def review_service(self) -> ReviewService:
        if self._review_service is None:
            self._review_service = ReviewService(self.review_repo)
        return self._review_service

    @property
    def catalog_service(self) -> CatalogService:
        if self._catalog_service is None:
            self._catalog_service = CatalogService(self.store_repo, self.product_repo)
        return self._catalog_service

    @property
    def reputation_service(self) -> ReputationService:
        if self._reputation_service is None:
            self._reputation_service = ReputationService(self.product_repo, self.review_repo)
        return self._reputation_service

    # =========================================================================
    # SINGLETON
    # =========================================================================

    @classmethod
    def get_instance(cls, base_path: str = None) -> 'AppContainer':
        """
        Obtiene la instancia del contenedor global.

        Args:
            base_path: Directorio de datos (solo se usa en la primera llamada)
        """
        if cls._instance is None:
            cls._instance = cls(base_path)
        return cls._instance

    @classmethod
    def set_instance(cls, container: 'AppContainer') -> None:
        """Reemplaza el contenedor global (tests, arranque personalizado)."""
        cls._instance = container

    @classmethod
    def reset_instance(cls) -> None:
        """Elimina la instancia global (útil para tests)."""
        cls._instance = None


def get_container(base_path: str = None) -> AppContainer:
    """
    Obtiene el contenedor de dependencias global.

    Args:
        base_path: Directorio de datos

    Returns:
        Instancia del contenedor
    """
    return AppContainer.get_instance(base_path)

# ==============================================================================
# REPOSITORIO DE TIENDAS
# ==============================================================================
# Encapsula todo el acceso a stores.json
# Las tiendas se almacenan como lista: [{tienda1}, {tienda2}, ...]
# ==============================================================================

import os
from typing import List, Optional

from mercado_genius.models import StoreProfile
from mercado_genius.repositories.base import ListRepository
from mercado_genius.repositories.session_repository import SessionRepository


class StoreRepository(ListRepository):
    """
    Repositorio de perfiles de tienda.

    Formato de datos en stores.json:
    [
        {
            "id": "3f2a...",
            "name": "Variedades María",
            "ownerName": "María López",
            "city": "León",
            ...
        }
    ]

    Guardar una tienda también deja a su dueño con la sesión iniciada, por eso
    el repositorio recibe el repositorio de sesión.
    """

    FILE_NAME = 'stores.json'

    def __init__(self, base_path: str, session_repo: SessionRepository, quota_bytes: int = 0):
        """
        Args:
            base_path: Directorio de datos
            session_repo: Repositorio del marcador de sesión activa
            quota_bytes: Cuota de la colección (0 = sin límite)
        """
        super().__init__(os.path.join(base_path, self.FILE_NAME), quota_bytes)
        self.session_repo = session_repo

    def load(self) -> List[StoreProfile]:
        """Carga todas las tiendas en orden de almacenamiento."""
        return [StoreProfile.from_dict(r) for r in self.get_all()]

    def get_by_id(self, store_id: str) -> Optional[StoreProfile]:
        record = self.find_by('id', store_id)
        return StoreProfile.from_dict(record) if record else None

    def upsert(self, store: StoreProfile) -> None:
        """
        Reemplaza la tienda con el mismo id o la agrega al final, y marca su
        id como sesión activa.
        """
        self.replace_or_append('id', store.to_dict())
        self.session_repo.set_active_store_id(store.id)

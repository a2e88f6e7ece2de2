# ==============================================================================
# REPOSITORIO DE SESIÓN
# ==============================================================================
# Encapsula el acceso a session.json
# Guarda un único dato: el id de la tienda del vendedor con sesión iniciada.
# ==============================================================================

import os
from typing import Optional

from mercado_genius.repositories.base import DictRepository


class SessionRepository(DictRepository):
    """
    Marcador de sesión activa.

    Formato de datos en session.json:
    {"activeSellerId": "3f2a..."}
    """

    FILE_NAME = 'session.json'
    ACTIVE_SELLER_KEY = 'activeSellerId'

    def __init__(self, base_path: str, quota_bytes: int = 0):
        super().__init__(os.path.join(base_path, self.FILE_NAME), quota_bytes)

    def get_active_store_id(self) -> Optional[str]:
        """Id de la tienda con sesión iniciada, o None."""
        return self.get_value(self.ACTIVE_SELLER_KEY)

    def set_active_store_id(self, store_id: str) -> None:
        self.set_value(self.ACTIVE_SELLER_KEY, store_id)

    def clear_active_store(self) -> None:
        """Cierra la sesión; los demás datos no se tocan."""
        self.remove_value(self.ACTIVE_SELLER_KEY)

# ==============================================================================
# REPOSITORIO BASE - Almacenamiento clave-valor en archivos JSON
# ==============================================================================
# Cada colección vive en un documento JSON propio dentro del directorio de
# datos. Se serializa completo en cada escritura y se deserializa completo en
# cada lectura: no hay caché ni índices.
# ==============================================================================

import errno
import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from mercado_genius.errors import StorageError, StorageQuotaExceededError

logger = logging.getLogger(__name__)

# Errores del sistema operativo que equivalen a "almacenamiento lleno"
_FULL_DISK_ERRNOS = frozenset(
    code for code in (getattr(errno, 'ENOSPC', None), getattr(errno, 'EDQUOT', None))
    if code is not None
)


class BaseRepository(ABC):
    """
    Clase base abstracta para todos los repositorios.

    Proporciona lectura/escritura de un documento JSON con:
    - Escritura atómica (archivo temporal + os.replace)
    - Lock global para serializar el acceso a archivos
    - Cuota opcional de bytes por colección
    """

    # Lock global para evitar escrituras concurrentes a archivos
    _file_lock = threading.RLock()

    def __init__(self, file_path: str, quota_bytes: int = 0):
        """
        Inicializa el repositorio con la ruta al archivo JSON.

        Args:
            file_path: Ruta absoluta al archivo JSON de datos
            quota_bytes: Tamaño máximo del documento serializado (0 = sin límite)
        """
        self.file_path = file_path
        self.quota_bytes = quota_bytes
        self.key = os.path.splitext(os.path.basename(file_path))[0]
        os.makedirs(os.path.dirname(file_path) or '.', exist_ok=True)

    @abstractmethod
    def _empty_data(self) -> Any:
        """
        Retorna la estructura de datos vacía para este repositorio.

        Returns:
            Estructura vacía (dict, list, etc.) según el repositorio
        """
        pass

    def _read_raw(self) -> Any:
        """
        Lee los datos crudos del archivo JSON.

        Un archivo inexistente o corrupto se lee como la colección vacía.
        """
        with self._file_lock:
            try:
                with open(self.file_path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except FileNotFoundError:
                return self._empty_data()
            except json.JSONDecodeError:
                logger.warning("[STORAGE] %s corrupto, se lee como vacío", self.file_path)
                return self._empty_data()

    def _write_raw(self, data: Any) -> None:
        """
        Escribe datos al archivo JSON.

        Args:
            data: Datos a serializar y escribir

        Raises:
            StorageQuotaExceededError: Si el documento supera la cuota o el disco está lleno
            StorageError: Si falla la escritura por otro motivo
        """
        payload = json.dumps(data, indent=2, ensure_ascii=False)
        size = len(payload.encode('utf-8'))
        if self.quota_bytes and size > self.quota_bytes:
            raise StorageQuotaExceededError(self.key, size, self.quota_bytes)

        with self._file_lock:
            temp_path = self.file_path + '.tmp'
            try:
                with open(temp_path, 'w', encoding='utf-8') as f:
                    f.write(payload)
                os.replace(temp_path, self.file_path)
            except OSError as e:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                if e.errno in _FULL_DISK_ERRNOS:
                    raise StorageQuotaExceededError(self.key) from e
                raise StorageError(f"No se pudo escribir '{self.key}': {e}") from e


class DictRepository(BaseRepository):
    """
    Repositorio base para datos almacenados como diccionario.

    Ejemplo: session.json -> {"activeSellerId": "..."}
    """

    def _empty_data(self) -> Dict:
        return {}

    def get_all(self) -> Dict[str, Any]:
        data = self._read_raw()
        return data if isinstance(data, dict) else {}

    def get_value(self, key: str, default: Any = None) -> Any:
        return self.get_all().get(key, default)

    def set_value(self, key: str, value: Any) -> None:
        data = self.get_all()
        data[key] = value
        self._write_raw(data)

    def remove_value(self, key: str) -> bool:
        """
        Elimina una clave.

        Returns:
            True si la clave existía
        """
        data = self.get_all()
        if key not in data:
            return False
        del data[key]
        self._write_raw(data)
        return True


class ListRepository(BaseRepository):
    """
    Repositorio base para datos almacenados como lista de registros.

    Ejemplo: products.json -> [{...}, {...}]
    """

    def _empty_data(self) -> List:
        return []

    def get_all(self) -> List[Dict[str, Any]]:
        """
        Obtiene todos los registros en orden de almacenamiento.

        Returns:
            Lista con todos los datos
        """
        data = self._read_raw()
        return data if isinstance(data, list) else []

    def save_all(self, data: List[Dict[str, Any]]) -> None:
        """Guarda todos los registros (reemplazo completo)."""
        self._write_raw(data)

    def prepend(self, record: Dict[str, Any]) -> None:
        """Agrega un registro al inicio (el más reciente queda primero)."""
        data = self.get_all()
        data.insert(0, record)
        self._write_raw(data)

    def find_by(self, field: str, value: Any) -> Optional[Dict[str, Any]]:
        """
        Busca un registro por un campo específico.

        Returns:
            Primer registro que coincide o None
        """
        for record in self.get_all():
            if record.get(field) == value:
                return record
        return None

    def replace_or_append(self, field: str, record: Dict[str, Any]) -> bool:
        """
        Reemplaza el registro cuyo campo coincide; si no existe lo agrega al final.

        Returns:
            True si reemplazó un registro existente
        """
        data = self.get_all()
        value = record.get(field)
        for index, existing in enumerate(data):
            if existing.get(field) == value:
                data[index] = record
                self._write_raw(data)
                return True
        data.append(record)
        self._write_raw(data)
        return False

    def remove_where(self, predicate: Callable[[Dict[str, Any]], bool]) -> List[Dict[str, Any]]:
        """
        Elimina los registros que cumplen el predicado y reescribe la colección.

        Returns:
            Registros eliminados
        """
        data = self.get_all()
        kept = [r for r in data if not predicate(r)]
        removed = [r for r in data if predicate(r)]
        if removed:
            self._write_raw(kept)
        return removed

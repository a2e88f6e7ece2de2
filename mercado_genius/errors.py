# ==============================================================================
# EXCEPCIONES DEL DOMINIO
# ==============================================================================
# Los servicios lanzan estas excepciones; las rutas las traducen a respuestas
# JSON con el mensaje para el usuario.
# ==============================================================================


class MercadoError(Exception):
    """Excepción base de la aplicación."""
    pass


class ValidationError(MercadoError, ValueError):
    """Un campo requerido falta o tiene un valor inválido."""
    pass


class StorageError(MercadoError):
    """Error al leer o escribir una colección persistida."""
    pass


class StorageQuotaExceededError(StorageError):
    """
    La escritura superaría la cuota de almacenamiento local
    (o el sistema operativo reporta disco lleno).

    Attributes:
        key: Nombre de la colección que no se pudo escribir
        size: Tamaño en bytes del documento rechazado (0 si se desconoce)
        quota: Cuota configurada en bytes (0 = sin cuota)
    """

    def __init__(self, key: str, size: int = 0, quota: int = 0):
        self.key = key
        self.size = size
        self.quota = quota
        if quota:
            message = f"'{key}' ocupa {size} bytes y la cuota es de {quota} bytes"
        else:
            message = f"No hay espacio para escribir '{key}'"
        super().__init__(message)

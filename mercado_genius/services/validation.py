# ==============================================================================
# VALIDACIÓN DE CAMPOS - Entrada de formularios
# ==============================================================================
# Los cuerpos JSON llegan con cualquier tipo en cada campo. Estos helpers
# normalizan los campos de texto y de imágenes antes de que los servicios
# apliquen sus reglas; un tipo inesperado es un ValidationError (400), nunca
# un error interno.
# ==============================================================================

from typing import Any, List, Optional

from mercado_genius.errors import ValidationError


def clean_text(value: Any, label: str) -> str:
    """
    Texto sin espacios alrededor. None se trata como vacío.

    Raises:
        ValidationError: Si el valor no es texto
    """
    if value is None:
        return ''
    if not isinstance(value, str):
        raise ValidationError(f"El campo '{label}' debe ser texto.")
    return value.strip()


def optional_text(value: Any, label: str) -> Optional[str]:
    """Como clean_text, pero un campo vacío queda en None."""
    return clean_text(value, label) or None


def clean_images(value: Any) -> List[str]:
    """
    Lista de imágenes codificadas, sin entradas vacías.

    Raises:
        ValidationError: Si no es una lista de textos
    """
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(img, str) for img in value):
        raise ValidationError("Las imágenes deben ser una lista de textos.")
    return [img for img in value if img.strip()]

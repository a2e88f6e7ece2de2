# ==============================================================================
# CONFIGURACIÓN - Variables de entorno
# ==============================================================================
# Todos los valores se leen del entorno al importar el módulo.
# Para desarrollo local basta con los valores por defecto; en producción
# definir al menos MERCADO_SECRET_KEY y GEMINI_API_KEY.
# ==============================================================================

import logging
import os

logger = logging.getLogger(__name__)

BASE = os.path.dirname(os.path.abspath(__file__))


def _env_flag(name: str, default: bool) -> bool:
    """Interpreta una variable de entorno como booleano ('1', 'true', 'si')."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'si', 'sí', 'on')


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("[CONFIG] %s=%r no es un entero, usando %s", name, value, default)
        return default


# ═══════════════════════════════════════════════════════════════════════════════
# MODO PRODUCCIÓN
# ═══════════════════════════════════════════════════════════════════════════════
PRODUCTION_MODE = _env_flag('MERCADO_PRODUCTION', False)

# ═══════════════════════════════════════════════════════════════════════════════
# SESIONES FLASK
# ═══════════════════════════════════════════════════════════════════════════════
# Comando: export MERCADO_SECRET_KEY="tu_clave_secreta_muy_larga_y_aleatoria"
DEFAULT_SECRET = "mercado_genius_dev_secret_key_change_in_production"
SECRET_KEY = os.environ.get('MERCADO_SECRET_KEY') or DEFAULT_SECRET

# ═══════════════════════════════════════════════════════════════════════════════
# ALMACENAMIENTO LOCAL
# ═══════════════════════════════════════════════════════════════════════════════
# Directorio donde viven stores.json, products.json, reviews.json y session.json
DATA_DIR = os.environ.get('MERCADO_DATA_DIR') or os.path.join(BASE, 'data')

# Cuota por colección en bytes. 5 MiB es el presupuesto de localStorage del
# navegador para el que se diseñó la app. 0 desactiva la cuota.
STORAGE_QUOTA_BYTES = _env_int('MERCADO_STORAGE_QUOTA_BYTES', 5 * 1024 * 1024)

# ═══════════════════════════════════════════════════════════════════════════════
# LOGS DE RENDIMIENTO
# ═══════════════════════════════════════════════════════════════════════════════
REQUEST_LOGGING = _env_flag('MERCADO_REQUEST_LOGGING', True)
LOGS_DIR = os.environ.get('MERCADO_LOGS_DIR') or os.path.join(BASE, 'logs')

# ═══════════════════════════════════════════════════════════════════════════════
# ASISTENTE IA (Gemini)
# ═══════════════════════════════════════════════════════════════════════════════
AI_MODEL = os.environ.get('MERCADO_AI_MODEL') or 'gemini-2.5-flash'


def get_ai_api_key():
    """Credencial de Gemini. Acepta GEMINI_API_KEY o, por compatibilidad, API_KEY."""
    return os.environ.get('GEMINI_API_KEY') or os.environ.get('API_KEY')


def warn_insecure_settings() -> None:
    """Advierte si producción arranca con valores de desarrollo."""
    if PRODUCTION_MODE and SECRET_KEY == DEFAULT_SECRET:
        logger.warning("[ADVERTENCIA] MERCADO_PRODUCTION activo sin MERCADO_SECRET_KEY definida")
    if not get_ai_api_key():
        logger.warning("[ADVERTENCIA] GEMINI_API_KEY no definida: el asistente IA no responderá")

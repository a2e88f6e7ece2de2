# ==============================================================================
# LOG DE PETICIONES - Tiempos por ruta
# ==============================================================================
# Mide cuánto tarda cada ruta sin afectar la respuesta.
# Guarda logs legibles en logs/:
#   - performance.log  → todas las peticiones
#   - slow_routes.log  → solo las lentas (≥300 ms) y muy lentas (≥700 ms)
#
# ACTIVAR/DESACTIVAR: variable de entorno MERCADO_REQUEST_LOGGING
# ==============================================================================

import logging
import os
import time

from flask import Flask, g, request

# Umbrales de tiempo (en milisegundos)
THRESHOLD_WARNING = 300
THRESHOLD_CRITICAL = 700

PERFORMANCE_LOGGER = 'mercado_genius.performance'
SLOW_ROUTES_LOGGER = 'mercado_genius.slow_routes'

# Nombres legibles por regla de Flask (para logs más humanos)
ROUTE_NAMES = {
    'GET /api/cities': 'Listar ciudades',
    'GET /api/categories': 'Listar categorías',

    # Vendedor
    'GET /api/session': 'Ver sesión del vendedor',
    'POST /api/session/logout': 'Cerrar sesión',
    'POST /api/stores': 'Abrir tienda',
    'PUT /api/stores/<store_id>': 'Actualizar perfil de tienda',
    'GET /api/dashboard/products': 'Ver panel del vendedor',
    'POST /api/products': 'Publicar producto',
    'POST /api/products/suggest': 'Generar descripción con IA',
    'DELETE /api/products/<product_id>': 'Eliminar producto',

    # Comprador
    'GET /api/stores': 'Buscar tiendas',
    'GET /api/stores/<store_id>': 'Ver tienda',
    'GET /api/stores/<store_id>/products': 'Ver catálogo de tienda',
    'GET /api/stores/<store_id>/reputation': 'Ver reputación de tienda',
    'GET /api/products': 'Buscar productos',
    'GET /api/products/<product_id>': 'Ver producto',
    'GET /api/products/<product_id>/reviews': 'Ver reseñas',
    'POST /api/products/<product_id>/reviews': 'Dejar reseña',
    'GET /api/products/<product_id>/chat': 'Abrir chat',
    'POST /api/products/<product_id>/chat': 'Preguntar al asistente',
}


def get_route_name(method: str, path: str, rule: str = None) -> str:
    """Nombre legible de la ruta; si no está mapeada, devuelve 'MÉTODO /ruta'."""
    if rule:
        name = ROUTE_NAMES.get(f"{method} {rule}")
        if name:
            return name
    return ROUTE_NAMES.get(f"{method} {path}", f"{method} {path}")


def _file_logger(name: str, path: str) -> logging.Logger:
    """Logger que escribe a un archivo propio, sin duplicar handlers."""
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    target = os.path.abspath(path)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return logger
    handler = logging.FileHandler(target, encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(message)s'))
    logger.addHandler(handler)
    return logger


def init_request_logging(app: Flask, logs_dir: str) -> None:
    """
    Registra hooks before_request / after_request que miden cada ruta.

    Uso:
        init_request_logging(app, config.LOGS_DIR)
    """
    os.makedirs(logs_dir, exist_ok=True)
    performance = _file_logger(PERFORMANCE_LOGGER, os.path.join(logs_dir, 'performance.log'))
    slow_routes = _file_logger(SLOW_ROUTES_LOGGER, os.path.join(logs_dir, 'slow_routes.log'))

    @app.before_request
    def _start_timer():
        g.start_time = time.perf_counter()

    @app.after_request
    def _log_request(response):
        start = g.pop('start_time', None)
        if start is None or request.path.startswith('/static'):
            return response

        elapsed = (time.perf_counter() - start) * 1000
        rule = str(request.url_rule) if request.url_rule else None
        action = get_route_name(request.method, request.path, rule)

        performance.info("%s | %s %s | %s | %.0f ms",
                         action, request.method, request.path, response.status_code, elapsed)

        if elapsed >= THRESHOLD_CRITICAL:
            slow_routes.critical("Ruta MUY LENTA: %s (%s %s) %.0f ms (umbral: %s ms)",
                                 action, request.method, request.path, elapsed, THRESHOLD_CRITICAL)
        elif elapsed >= THRESHOLD_WARNING:
            slow_routes.warning("Ruta LENTA: %s (%s %s) %.0f ms (umbral: %s ms)",
                                action, request.method, request.path, elapsed, THRESHOLD_WARNING)
        return response

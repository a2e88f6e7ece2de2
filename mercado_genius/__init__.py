# ==============================================================================
# MERCADO GENIUS - Mercado local de tiendas y productos
# ==============================================================================
# Paquete principal. La app Flask vive en mercado_genius.main y el
# contenedor de dependencias en mercado_genius.app_container.
# ==============================================================================

__version__ = '1.0.0'

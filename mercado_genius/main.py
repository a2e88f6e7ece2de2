from flask import Flask, request
from werkzeug.exceptions import Forbidden, HTTPException, NotFound, Unauthorized

from mercado_genius import config
from mercado_genius.errors import StorageError, ValidationError
from mercado_genius.models import (
    ALL_CATEGORIES,
    ChatMessage,
    NICARAGUA_CITIES,
    ProductCategory,
    SellerMode,
    StoreProfile,
)
from mercado_genius.request_logger import init_request_logging
from mercado_genius.services import format_rating
from mercado_genius.services.product_service import STORAGE_FULL_MESSAGE
from mercado_genius.services.validation import clean_text

# ═══════════════════════════════════════════════════════════════════════════
# CONTENEDOR DE DEPENDENCIAS - Servicios y Repositorios
# ═══════════════════════════════════════════════════════════════════════════
# Las rutas solo orquestan request → servicio → respuesta JSON.
# Toda la lógica de negocio vive en services/.
# ═══════════════════════════════════════════════════════════════════════════
from mercado_genius.app_container import get_container

app = Flask(__name__)
app.secret_key = config.SECRET_KEY
app.config['DATA_DIR'] = config.DATA_DIR
app.json.sort_keys = False
app.json.ensure_ascii = False

config.warn_insecure_settings()

if config.REQUEST_LOGGING:
    init_request_logging(app, config.LOGS_DIR)


def _container():
    return get_container(app.config['DATA_DIR'])


# ═══════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════

def _body():
    """Cuerpo JSON de la petición (dict vacío si no hay)."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _is_yes(value):
    return str(value or '').strip().lower() in ('1', 'true', 'yes', 'si', 'sí')


def _store_json(store, reputation=None):
    data = store.to_dict()
    if reputation is not None:
        data['reputation'] = reputation.to_dict()
        data['reputation']['display'] = format_rating(reputation)
    return data


def _require_active_store():
    """Tienda del vendedor con sesión iniciada o 401."""
    store = _container().store_service.get_active_store()
    if store is None:
        raise Unauthorized("Debes abrir tu tienda primero.")
    return store


def _get_product_or_404(product_id):
    product = _container().product_service.get_product(product_id)
    if product is None:
        raise NotFound("Producto no encontrado.")
    return product


def _get_store_or_404(store_id):
    store = _container().store_service.get_store(store_id)
    if store is None:
        raise NotFound("Tienda no encontrada.")
    return store


# ═══════════════════════════════════════════════════════════════════════════
# MANEJO DE ERRORES
# ═══════════════════════════════════════════════════════════════════════════

@app.errorhandler(ValidationError)
def handle_validation_error(e):
    return {"success": False, "error": str(e)}, 400


@app.errorhandler(StorageError)
def handle_storage_error(e):
    app.logger.error("[STORAGE] %s", e)
    return {"success": False, "error": STORAGE_FULL_MESSAGE}, 507


@app.errorhandler(HTTPException)
def handle_http_error(e):
    return {"success": False, "error": e.description}, e.code


# ═══════════════════════════════════════════════════════════════════════════
# CATÁLOGOS FIJOS
# ═══════════════════════════════════════════════════════════════════════════

@app.route('/api/cities', methods=['GET'])
def api_cities():
    return {"success": True, "cities": list(NICARAGUA_CITIES)}


@app.route('/api/categories', methods=['GET'])
def api_categories():
    return {
        "success": True,
        "all": ALL_CATEGORIES,
        "categories": [c.value for c in ProductCategory],
    }


# ═══════════════════════════════════════════════════════════════════════════
# SESIÓN DEL VENDEDOR
# ═══════════════════════════════════════════════════════════════════════════

@app.route('/api/session', methods=['GET'])
def api_session():
    """Vendedor con sesión iniciada (store = null si no hay)."""
    store = _container().store_service.get_active_store()
    return {"success": True, "store": store.to_dict() if store else None}


@app.route('/api/session/logout', methods=['POST'])
def api_logout():
    _container().store_service.logout()
    return {"success": True, "message": "Sesión cerrada."}


# ═══════════════════════════════════════════════════════════════════════════
# TIENDAS
# ═══════════════════════════════════════════════════════════════════════════

@app.route('/api/stores', methods=['POST'])
def api_create_store():
    """Abre una tienda (modo 'business' o 'personal') e inicia sesión."""
    data = _body()
    store = _container().store_service.create_store(
        owner_name=data.get('ownerName', ''),
        mode=data.get('mode') or SellerMode.BUSINESS.value,
        name=data.get('name', ''),
        description=data.get('description', ''),
        city=data.get('city'),
        address=data.get('address', ''),
        map_url=data.get('mapUrl'),
        logo_url=data.get('logoUrl'),
        banner_url=data.get('bannerUrl'),
    )
    return {"success": True, "store": store.to_dict()}, 201


@app.route('/api/stores/<store_id>', methods=['PUT'])
def api_update_store(store_id):
    """Actualiza el perfil de la tienda del vendedor.

    Los campos del cuerpo se aplican sobre el perfil guardado; los que no
    vienen conservan su valor actual.
    """
    active = _require_active_store()
    if active.id != store_id:
        raise Forbidden("Solo puedes editar tu propia tienda.")

    data = active.to_dict()
    data.update(_body())
    data['id'] = store_id
    store = _container().store_service.update_store(StoreProfile.from_dict(data))
    if store is None:
        raise NotFound("Tienda no encontrada.")
    return {"success": True, "store": store.to_dict()}


@app.route('/api/stores', methods=['GET'])
def api_list_stores():
    """Tiendas de una ciudad (?city=) filtradas por texto (?q=)."""
    container = _container()
    stores = container.catalog_service.list_stores_by_city(
        request.args.get('city', ''),
        request.args.get('q', ''),
    )
    reputations = container.reputation_service.reputations_for_stores(stores)
    return {
        "success": True,
        "stores": [_store_json(s, reputations[s.id]) for s in stores],
    }


@app.route('/api/stores/<store_id>', methods=['GET'])
def api_get_store(store_id):
    store = _get_store_or_404(store_id)
    reputation = _container().reputation_service.get_store_reputation(store.id)
    return {"success": True, "store": _store_json(store, reputation)}


@app.route('/api/stores/<store_id>/products', methods=['GET'])
def api_store_products(store_id):
    """Catálogo de la tienda, opcionalmente por categoría (?category=)."""
    store = _get_store_or_404(store_id)
    products = _container().catalog_service.list_products_by_store(
        store.id, request.args.get('category')
    )
    return {"success": True, "products": [p.to_dict() for p in products]}


@app.route('/api/stores/<store_id>/reputation', methods=['GET'])
def api_store_reputation(store_id):
    store = _get_store_or_404(store_id)
    reputation = _container().reputation_service.get_store_reputation(store.id)
    return {
        "success": True,
        "reputation": dict(reputation.to_dict(), display=format_rating(reputation)),
    }


# ═══════════════════════════════════════════════════════════════════════════
# PRODUCTOS - COMPRADOR
# ═══════════════════════════════════════════════════════════════════════════

@app.route('/api/products', methods=['GET'])
def api_list_products():
    """Productos de tiendas de una ciudad (?city=) filtrados por texto (?q=)."""
    products = _container().catalog_service.list_products_by_city(
        request.args.get('city', ''),
        request.args.get('q', ''),
    )
    return {"success": True, "products": [p.to_dict() for p in products]}


@app.route('/api/products/<product_id>', methods=['GET'])
def api_get_product(product_id):
    """Detalle del producto con su tienda, reputación y reseñas."""
    container = _container()
    product = _get_product_or_404(product_id)
    store = container.catalog_service.store_for_product(product)
    reputation = container.reputation_service.get_store_reputation(product.store_id)
    reviews = container.review_service.get_reviews(product.id)
    return {
        "success": True,
        "product": product.to_dict(),
        "store": _store_json(store, reputation) if store else None,
        "reviews": [r.to_dict() for r in reviews],
    }


# ═══════════════════════════════════════════════════════════════════════════
# PRODUCTOS - VENDEDOR
# ═══════════════════════════════════════════════════════════════════════════

@app.route('/api/dashboard/products', methods=['GET'])
def api_dashboard_products():
    """Panel del vendedor: sus productos por texto (?q=) y categoría (?category=)."""
    store = _require_active_store()
    products = _container().catalog_service.search_seller_products(
        store.id,
        request.args.get('q', ''),
        request.args.get('category'),
    )
    return {"success": True, "products": [p.to_dict() for p in products]}


@app.route('/api/products', methods=['POST'])
def api_create_product():
    store = _require_active_store()
    data = _body()
    result = _container().product_service.create_product(
        store_id=store.id,
        name=data.get('name', ''),
        price=data.get('price'),
        brand=data.get('brand', ''),
        currency=data.get('currency'),
        size=data.get('size', ''),
        category=data.get('category'),
        description=data.get('description', ''),
        images=data.get('images') or [],
    )
    if not result['success']:
        return {"success": False, "error": result['message']}, 507
    return {
        "success": True,
        "product": result['product'].to_dict(),
        "message": result['message'],
    }, 201


@app.route('/api/products/suggest', methods=['POST'])
def api_suggest_listing():
    """Descripción y categoría sugeridas por la IA para el formulario."""
    _require_active_store()
    data = _body()
    result = _container().product_service.generate_listing_copy(
        name=data.get('name', ''),
        brand=data.get('brand', ''),
        details=data.get('details', ''),
        current_description=data.get('description', ''),
        current_category=data.get('category'),
    )
    return {
        "success": True,
        "generated": result['generated'],
        "description": result['description'],
        "category": result['category'].value,
    }


@app.route('/api/products/<product_id>', methods=['DELETE'])
def api_delete_product(product_id):
    """Elimina un producto propio. Requiere ?confirm=1."""
    store = _require_active_store()
    product = _get_product_or_404(product_id)
    if product.store_id != store.id:
        raise Forbidden("Solo puedes eliminar productos de tu tienda.")

    result = _container().product_service.delete_product(
        product_id, confirmed=_is_yes(request.args.get('confirm'))
    )
    if result['confirm_required']:
        return {"success": False, "confirm_required": True, "message": result['message']}, 409
    if not result['success']:
        raise NotFound(result['message'])
    return {"success": True, "message": result['message']}


# ═══════════════════════════════════════════════════════════════════════════
# RESEÑAS
# ═══════════════════════════════════════════════════════════════════════════

@app.route('/api/products/<product_id>/reviews', methods=['GET'])
def api_get_reviews(product_id):
    product = _get_product_or_404(product_id)
    reviews = _container().review_service.get_reviews(product.id)
    return {"success": True, "reviews": [r.to_dict() for r in reviews]}


@app.route('/api/products/<product_id>/reviews', methods=['POST'])
def api_add_review(product_id):
    product = _get_product_or_404(product_id)
    data = _body()
    review = _container().review_service.add_review(
        product.id,
        rating=data.get('rating', 5),
        author=data.get('author', ''),
        comment=data.get('comment', ''),
    )
    return {"success": True, "review": review.to_dict()}, 201


# ═══════════════════════════════════════════════════════════════════════════
# CHAT CON EL ASISTENTE DE VENTAS
# ═══════════════════════════════════════════════════════════════════════════

def _chat_store_name(product):
    store = _container().catalog_service.store_for_product(product)
    if store is None:
        raise NotFound("Tienda no encontrada.")
    return store.name


@app.route('/api/products/<product_id>/chat', methods=['GET'])
def api_chat_greeting(product_id):
    product = _get_product_or_404(product_id)
    greeting = _container().ai_service.chat_greeting(_chat_store_name(product), product.name)
    return {"success": True, "messages": [greeting.to_dict()]}


@app.route('/api/products/<product_id>/chat', methods=['POST'])
def api_chat_ask(product_id):
    """Pregunta al asistente. Una pregunta vacía no se envía a la IA."""
    product = _get_product_or_404(product_id)
    question = clean_text(_body().get('question'), 'question')
    if not question:
        return {"success": True, "messages": []}

    store_name = _chat_store_name(product)
    user_msg = ChatMessage(role='user', text=question)
    answer = _container().ai_service.answer_product_question(product, question, store_name)
    ai_msg = ChatMessage(role='ai', text=answer)
    return {"success": True, "messages": [user_msg.to_dict(), ai_msg.to_dict()]}


if __name__ == "__main__":
    import logging
    import os

    # Desarrollo local; en producción usar WSGI (gunicorn wsgi:app)
    logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')
    DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'
    HOST = os.environ.get('FLASK_HOST', '0.0.0.0')
    PORT = int(os.environ.get('FLASK_PORT', 5000))

    app.logger.info("Servidor iniciado en http://%s:%s (datos en %s)", HOST, PORT, app.config['DATA_DIR'])
    app.run(debug=DEBUG, host=HOST, port=PORT)

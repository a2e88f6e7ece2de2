# ==============================================================================
# SERVICIO DE IA - Asistente de ventas con Google Gemini
# ==============================================================================
# Dos capacidades, ambas tratadas como un servicio externo opaco:
#
# 1. generate_listing_copy()  → descripción + categoría sugerida (JSON)
# 2. answer_product_question() → respuesta libre del asistente de la tienda
#
# CONTRATO: ninguna llamada lanza excepciones hacia quien la usa.
# - Fallo al generar la publicación → None (el formulario queda como estaba)
# - Fallo al responder → mensaje fijo de disculpa
# Sin reintentos, sin caché, sin cancelación.
# ==============================================================================

import json
import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from mercado_genius.models import (
    ChatMessage,
    ListingSuggestion,
    Product,
    ProductCategory,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = 'gemini-2.5-flash'

# Respuestas fijas del asistente
EMPTY_ANSWER_MESSAGE = "Lo siento, no pude procesar tu pregunta en este momento."
ERROR_ANSWER_MESSAGE = "Hubo un error conectando con el asistente virtual."

LISTING_PROMPT = """
Eres especialista en marketing de moda y comercio electrónico.
Escribe una descripción de venta atractiva y persuasiva para el producto y
elige la categoría que mejor le corresponde.

Producto: {name}
Marca: {brand}
Detalles adicionales: {details}

Categorías permitidas: {categories}.
""".strip()

ANSWER_PROMPT = """
Eres el asistente virtual de ventas de la tienda "{store_name}", amable y experto.
Un cliente pregunta por este producto:

Nombre: {name}
Marca: {brand}
Precio: {price}
Talla: {size}
Descripción: {description}
Categoría: {category}

Pregunta del cliente: "{question}"

Responde de forma concisa y útil, orientada a cerrar la venta. Si preguntan por
existencias o envíos, da una respuesta positiva estándar (por ejemplo, envíos a
todo el país). Tono amigable y profesional. Máximo 3 oraciones.
""".strip()

LISTING_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        'description': types.Schema(
            type=types.Type.STRING,
            description="Descripción de venta atractiva para el producto (máximo 300 caracteres).",
        ),
        'suggestedCategory': types.Schema(
            type=types.Type.STRING,
            description="La categoría de la lista permitida que mejor describe el producto.",
        ),
    },
    required=['description', 'suggestedCategory'],
)


def build_client(api_key: Optional[str]) -> Optional[Any]:
    """
    Crea el cliente de Gemini.

    Returns:
        genai.Client o None si no hay credencial
    """
    if not api_key:
        return None
    return genai.Client(api_key=api_key)


class AIService:
    """
    Puente hacia el modelo de texto.

    Uso:
        ai = AIService(build_client(os.environ['GEMINI_API_KEY']))
        suggestion = ai.generate_listing_copy('Camisa de lino', 'Zara', 'manga larga')
    """

    def __init__(self, client: Optional[Any] = None, model: str = DEFAULT_MODEL):
        """
        Args:
            client: Cliente con la interfaz de genai.Client (None = IA deshabilitada)
            model: Nombre del modelo a usar
        """
        self.client = client
        self.model = model

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def _generate(self, prompt: str, config: Optional[types.GenerateContentConfig] = None) -> str:
        """Llamada cruda al modelo; lanza excepción si no hay cliente o falla la red."""
        if self.client is None:
            raise RuntimeError("GEMINI_API_KEY no configurada")
        response = self.client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=config,
        )
        return (getattr(response, 'text', '') or '').strip()

    # =========================================================================
    # PUBLICACIÓN DE PRODUCTOS
    # =========================================================================

    def generate_listing_copy(
        self,
        name: str,
        brand: str = '',
        details: str = ''
    ) -> Optional[ListingSuggestion]:
        """
        Genera descripción y categoría sugerida para un producto.

        Args:
            name: Nombre del producto
            brand: Marca
            details: Características libres que el vendedor quiere destacar

        Returns:
            ListingSuggestion o None si la IA no respondió algo utilizable
        """
        prompt = LISTING_PROMPT.format(
            name=name,
            brand=brand,
            details=details,
            categories=', '.join(c.value for c in ProductCategory),
        )
        config = types.GenerateContentConfig(
            response_mime_type='application/json',
            response_schema=LISTING_SCHEMA,
        )
        try:
            text = self._generate(prompt, config)
            if not text:
                logger.warning("[IA] Respuesta vacía al generar la publicación de '%s'", name)
                return None
            data = json.loads(text)
            if not isinstance(data, dict):
                logger.warning("[IA] Respuesta sin objeto JSON: %r", text[:200])
                return None
            return ListingSuggestion.from_dict(data)
        except Exception as e:
            logger.error("[IA] Error generando la publicación con Gemini: %s: %s", type(e).__name__, e)
            return None

    # =========================================================================
    # CHAT CON EL COMPRADOR
    # =========================================================================

    def chat_greeting(self, store_name: str, product_name: str) -> ChatMessage:
        """Primer mensaje del asistente al abrir el chat de un producto."""
        return ChatMessage(
            role='ai',
            text=f"¡Hola! Soy el asistente virtual de {store_name}. "
                 f"¿Tienes alguna duda sobre {product_name}?",
        )

    def answer_product_question(self, product: Product, question: str, store_name: str) -> str:
        """
        Responde la pregunta de un comprador sobre un producto.

        Returns:
            Texto de la respuesta; nunca lanza excepción
        """
        prompt = ANSWER_PROMPT.format(
            store_name=store_name,
            name=product.name,
            brand=product.brand,
            price=product.display_price,
            size=product.size,
            description=product.description,
            category=product.category.value,
            question=question,
        )
        try:
            text = self._generate(prompt)
            return text or EMPTY_ANSWER_MESSAGE
        except Exception as e:
            logger.error("[IA] Error respondiendo pregunta del producto %s: %s: %s",
                         product.id, type(e).__name__, e)
            return ERROR_ANSWER_MESSAGE

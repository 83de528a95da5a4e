# -*- coding: utf-8 -*-
"""
Cliente HTTP para la Demo API (catálogo externo de productos)
Sin reintentos: cualquier fallo se reporta al orquestador en el primer intento
"""

import requests
import logging
from typing import Optional, List, Any

from pydantic import TypeAdapter, ValidationError

from ..models.channel import Channel
from ..models.demo_product import DemoProduct
from .meta import CHANNEL_META_URL_KEY, Meta

_logger = logging.getLogger(__name__)

_PRODUCTS = TypeAdapter(List[DemoProduct])


class APIClientError(Exception):
    """Excepción para errores de transporte o de protocolo de la API"""
    pass


class DemoAPI:
    """
    Cliente HTTP para la Demo API

    Endpoints:
    - POST   /products       crear/actualizar productos
    - GET    /products       obtener productos por ID
    - GET    /products/page  listar productos a partir de un código
    - DELETE /products       eliminar productos por ID
    - DELETE /clean          eliminar todos los productos
    """

    def __init__(self, base_url: str, timeout: int = 30):
        """
        Inicializa el cliente API

        Args:
            base_url: URL base de la API (ej: http://localhost:8080)
            timeout: Timeout en segundos para cada petición
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()

        self.session.headers.update({
            'Content-Type': 'application/json',
            'User-Agent': 'DemoConnector/1.0',
        })

        _logger.info(f"DemoAPI initialized: {base_url} (timeout={timeout}s)")

    @classmethod
    def from_channel(cls, channel: Channel, timeout: int = 30) -> 'DemoAPI':
        """
        Crea el cliente usando la URL configurada en la meta del canal

        Raises:
            ValueError: Si el canal no tiene api_url
        """
        base_url = Meta(channel).get(CHANNEL_META_URL_KEY)
        if not base_url:
            raise ValueError(f"Channel {channel.id} has no '{CHANNEL_META_URL_KEY}' meta")
        return cls(base_url=base_url, timeout=timeout)

    def _make_request(self, method: str, endpoint: str, **kwargs) -> Optional[Any]:
        """
        Realiza una petición HTTP

        Args:
            method: Método HTTP (GET, POST, DELETE)
            endpoint: Endpoint de la API (ej: /products)
            **kwargs: Argumentos adicionales para requests (params, json, etc.)

        Returns:
            Respuesta JSON decodificada, o None si no hay cuerpo

        Raises:
            APIClientError: Error de red o respuesta no 2xx
        """
        url = f"{self.base_url}{endpoint}"

        try:
            _logger.debug(f"{method} {url}")

            response = self.session.request(
                method=method,
                url=url,
                timeout=self.timeout,
                **kwargs
            )
        except requests.exceptions.RequestException as e:
            _logger.error(f"Request exception: {str(e)}")
            raise APIClientError(str(e)) from e

        _logger.debug(
            f"Response: {response.status_code} "
            f"(time: {response.elapsed.total_seconds():.2f}s)"
        )

        if not 200 <= response.status_code < 300:
            error_msg = f"Client error: {response.status_code} - {response.text}"
            _logger.error(error_msg)
            raise APIClientError(error_msg)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise APIClientError(f"Invalid JSON response from {url}") from e

    def _parse_products(self, data: Any) -> List[DemoProduct]:
        try:
            return _PRODUCTS.validate_python(data)
        except ValidationError as e:
            raise APIClientError(f"Invalid products response: {e.error_count()} validation error(s)") from e

    def post_products(self, products: List[DemoProduct]) -> List[DemoProduct]:
        """
        Crea o actualiza productos

        Args:
            products: Productos en formato de la API

        Returns:
            Productos guardados (con IDs asignados), en el mismo orden
        """
        body = [p.model_dump() for p in products]
        return self._parse_products(self._make_request('POST', '/products', json=body))

    def delete_products(self, ids: List[str]) -> None:
        """
        Elimina productos por ID externo

        Args:
            ids: IDs de productos en la API
        """
        self._make_request('DELETE', '/products', json=list(ids))

    def get_products(self, ids: List[str]) -> List[DemoProduct]:
        """Obtiene productos por ID, en el orden pedido"""
        return self._parse_products(self._make_request('GET', '/products', json=list(ids)))

    def get_products_page(self, channel_product_code: str = '', limit: int = 10) -> List[DemoProduct]:
        """
        Lista productos ordenados por ID

        Args:
            channel_product_code: Último ID recibido; la página empieza después de él
            limit: Número máximo de productos
        """
        params = {'limit': limit}
        if channel_product_code:
            params['channel_product_code'] = channel_product_code
        return self._parse_products(self._make_request('GET', '/products/page', params=params))

    def clean(self) -> None:
        """Elimina todos los productos (solo para entornos de prueba)"""
        self._make_request('DELETE', '/clean')

    def close(self):
        """Cierra la sesión HTTP"""
        self.session.close()
        _logger.info("DemoAPI session closed")

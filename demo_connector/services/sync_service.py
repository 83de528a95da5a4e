# -*- coding: utf-8 -*-
"""
Servicio de Sincronización de Productos
Orquesta Transform -> Envío a la Demo API -> Registro de resultados
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from ..models.channel import Channel, ChannelProduct
from ..models.demo_product import DemoProduct
from .api_client import APIClientError, DemoAPI
from .results import Err, Ok, Result
from .sync_logger import SyncLogger
from .sync_results import SyncResults, utc_now
from .transform import try_demo_product_ids, try_demo_products

_logger = logging.getLogger(__name__)

INVALID_TRANSFORM = 'Invalid Transform'


class SyncService:
    """
    Servicio para sincronizar lotes de productos de canal

    Responsabilidades:
    - Transformar el lote al formato de la API
    - Enviar el lote (crear/actualizar o eliminar)
    - Registrar el resultado en cada producto
    - Registrar un evento de log si el lote falla

    Un fallo en cualquier etapa detiene las siguientes y marca todo el lote
    como fallido. Los errores del lote nunca se propagan al llamador: el
    resultado se consulta en cada producto (outcome / success).
    """

    def __init__(
        self,
        api: DemoAPI,
        logger: Optional[SyncLogger] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Args:
            api: Cliente de la Demo API
            logger: Productor de eventos de log
            clock: Función que retorna la fecha de sincronización
        """
        self.api = api
        self.logger = logger or SyncLogger()
        self.results = SyncResults(clock=clock)

    @classmethod
    def for_channel(cls, channel: Channel, logger: Optional[SyncLogger] = None, timeout: int = 30) -> 'SyncService':
        """
        Crea el servicio con un cliente apuntando a la api_url del canal

        Raises:
            ValueError: Si el canal no tiene api_url
        """
        return cls(api=DemoAPI.from_channel(channel, timeout=timeout), logger=logger)

    def sync_upsert(self, channel_products: List[ChannelProduct], channel: Channel) -> None:
        """
        Crea o actualiza el lote en la API externa

        Flujo:
        1. Transformar a DemoProduct (fallo -> 'Invalid Transform')
        2. POST /products (fallo -> mensaje del error)
        3. Asignar a cada producto el ID devuelto en la misma posición

        Args:
            channel_products: Lote a sincronizar (se modifica en sitio)
            channel: Canal destino
        """
        self._check_args(channel_products, channel)
        if not channel_products:
            return

        _logger.info(f"Syncing {len(channel_products)} products to channel {channel.id}")

        body = try_demo_products(channel_products)
        if isinstance(body, Err):
            _logger.warning(f"Transform failed: {body.error}")
            self._fail(channel_products, INVALID_TRANSFORM, channel)
            return

        response = self._post_products(body.value)
        if isinstance(response, Err):
            self._fail(channel_products, str(response.error), channel)
            return

        self.results.set_success(channel_products, response.value)
        _logger.info(f"  → SYNCED: {len(channel_products)} products (channel {channel.id})")

    def sync_delete(self, channel_products: List[ChannelProduct], channel: Channel) -> None:
        """
        Elimina el lote de la API externa

        Flujo:
        1. Extraer los channel_product_code (fallo -> 'Invalid Transform')
        2. DELETE /products (fallo -> mensaje del error)
        3. Marcar todo el lote como eliminado

        Args:
            channel_products: Lote a eliminar (se modifica en sitio)
            channel: Canal destino
        """
        self._check_args(channel_products, channel)
        if not channel_products:
            return

        _logger.info(f"Deleting {len(channel_products)} products from channel {channel.id}")

        ids = try_demo_product_ids(channel_products)
        if isinstance(ids, Err):
            _logger.warning(f"Transform failed: {ids.error}")
            self._fail(channel_products, INVALID_TRANSFORM, channel)
            return

        response = self._delete_products(ids.value)
        if isinstance(response, Err):
            self._fail(channel_products, str(response.error), channel)
            return

        self.results.set_delete_success(channel_products)
        _logger.info(f"  → DELETED: {len(channel_products)} products (channel {channel.id})")

    def _post_products(self, products: List[DemoProduct]) -> Result[List[DemoProduct], APIClientError]:
        try:
            saved = self.api.post_products(products)
        except APIClientError as e:
            return Err(e)

        # La respuesta se asocia por posición; un largo distinto no se puede asociar
        if len(saved) != len(products):
            return Err(APIClientError(
                f"Invalid response: expected {len(products)} products, got {len(saved)}"
            ))
        return Ok(saved)

    def _delete_products(self, ids: List[str]) -> Result[None, APIClientError]:
        try:
            self.api.delete_products(ids)
        except APIClientError as e:
            return Err(e)
        return Ok(None)

    def _fail(self, channel_products: List[ChannelProduct], reason: str, channel: Channel) -> None:
        self.results.set_failed(channel_products, reason)
        self.logger.log_product_sync_failed(channel_products, reason, channel)

    @staticmethod
    def _check_args(channel_products, channel) -> None:
        if channel_products is None:
            raise ValueError("channel_products is required")
        if channel is None:
            raise ValueError("channel is required")

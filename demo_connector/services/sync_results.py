# -*- coding: utf-8 -*-
"""
Registro del resultado de sincronización en cada producto del lote
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List

from ..models.channel import ChannelProduct
from ..models.demo_product import DemoProduct
from ..models.outcome import DeleteSucceeded, Failed, Success

_logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SyncResults:
    """
    Aplica el resultado de una sincronización a todos los productos del lote

    Cada método recorre el lote completo: después de llamarlo,
    ningún producto queda sin resultado.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.clock = clock

    def set_failed(self, channel_products: List[ChannelProduct], reason: str) -> None:
        """Marca todo el lote como fallido con el mismo motivo"""
        for cp in channel_products:
            cp.outcome = Failed(reason=reason)
            cp.success = False
            cp.synced = None
        _logger.debug(f"{len(channel_products)} products marked as failed: {reason}")

    def set_success(self, channel_products: List[ChannelProduct], demo_products: List[DemoProduct]) -> None:
        """
        Marca cada producto como sincronizado con el ID devuelto por la API

        La respuesta se asocia por posición: demo_products[i] corresponde
        a channel_products[i]. Las variantes se asocian por SKU y las
        imágenes por URL.

        Raises:
            ValueError: Si las listas no tienen el mismo largo
        """
        if len(channel_products) != len(demo_products):
            raise ValueError(
                f"Cannot record {len(demo_products)} results for {len(channel_products)} products"
            )

        synced = self.clock().isoformat()
        for cp, dp in zip(channel_products, demo_products):
            cp.channel_product_code = dp.id

            option_ids = {o.sku: o.id for o in dp.options}
            for v in cp.variants:
                if v.sku in option_ids:
                    v.channel_variant_code = option_ids[v.sku]

            image_ids = {i.url: i.id for i in dp.images}
            for i in cp.images:
                if i.src in image_ids:
                    i.channel_image_code = image_ids[i.src]

            cp.outcome = Success(channel_product_code=dp.id)
            cp.success = True
            cp.synced = synced

    def set_delete_success(self, channel_products: List[ChannelProduct]) -> None:
        """Marca todo el lote como eliminado"""
        synced = self.clock().isoformat()
        for cp in channel_products:
            cp.outcome = DeleteSucceeded()
            cp.success = True
            cp.synced = synced

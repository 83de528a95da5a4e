# -*- coding: utf-8 -*-
"""
Registro de eventos de sincronización
Genera un LogEvent por fallo de lote y lo envía al Writer
"""

import logging
from typing import List, Optional

from ..log.writer import Writer
from ..models.channel import Channel, ChannelProduct
from ..models.log import LogEvent, LogLevel

_logger = logging.getLogger(__name__)

ORIGIN = 'Demo Connector'

_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class SyncLogger:
    """
    Productor de eventos de log del conector

    Cada evento se escribe con el Writer (JSON lines) y además
    se replica en el logging estándar con el nivel equivalente.
    """

    def __init__(self, writer: Optional[Writer] = None, origin: str = ORIGIN):
        self.writer = writer or Writer()
        self.origin = origin

    def log(self, event: LogEvent) -> LogEvent:
        self.writer.write(event)
        _logger.log(_LEVELS[event.level], f"[{event.origin}] {event.message} {event.context}")
        return event

    def log_product_sync_failed(
        self,
        channel_products: List[ChannelProduct],
        message: str,
        channel: Channel,
    ) -> LogEvent:
        """
        Registra el fallo de sincronización de un lote completo

        Args:
            channel_products: Lote que falló
            message: Motivo del fallo (mensaje original del error)
            channel: Canal destino

        Returns:
            LogEvent emitido
        """
        event = LogEvent(
            message=message,
            client_id=channel.client_id,
            log_to_es=True,
            level=LogLevel.ERROR,
            origin=self.origin,
            context={
                'channel_id': str(channel.id),
                'channel_product_ids': ','.join(str(cp.id) for cp in channel_products),
                'count': str(len(channel_products)),
            },
        )
        return self.log(event)

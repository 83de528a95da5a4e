# -*- coding: utf-8 -*-
"""
Acceso restringido a la configuración (meta) del canal
"""

from typing import Dict, Optional

from ..models.channel import Channel

CHANNEL_META_URL_KEY = 'api_url'

ALLOWED_CHANNEL_META = (
    CHANNEL_META_URL_KEY,
)


class Meta:
    """
    Lee la meta del canal limitada a las claves permitidas

    Ejemplo:
        meta = Meta(channel)
        base_url = meta.get(CHANNEL_META_URL_KEY)  # str o None
    """

    def __init__(self, channel: Channel):
        # Si una clave se repite, gana la última
        self.map: Dict[str, str] = {}
        for m in channel.meta:
            self.map[m.key] = m.value

    def get(self, key: str) -> Optional[str]:
        """
        Retorna el valor de una clave permitida

        Args:
            key: Clave de meta del canal

        Returns:
            Valor de la clave, o None si no está permitida o no existe
        """
        if key not in ALLOWED_CHANNEL_META:
            return None
        return self.map.get(key)

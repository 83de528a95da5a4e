# -*- coding: utf-8 -*-
"""
Modelos del canal y de los productos de canal
El sistema que llama construye estos objetos antes de sincronizar y los descarta después
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .outcome import SyncOutcome


class Meta(BaseModel):
    """Par clave/valor de configuración del canal"""
    key: str
    value: str


class Channel(BaseModel):
    """
    Destino de la sincronización (una integración con un catálogo externo)

    El campo meta es una lista y puede contener claves duplicadas;
    ver services.meta.Meta para la regla de resolución.
    """
    id: int
    client_id: int
    description: str = ''
    meta: List[Meta] = Field(default_factory=list)


class ChannelVariant(BaseModel):
    id: Optional[int] = None
    sku: Optional[str] = None
    channel_variant_code: Optional[str] = None


class ChannelImage(BaseModel):
    id: Optional[int] = None
    src: Optional[str] = None
    channel_image_code: Optional[str] = None


class ChannelProduct(BaseModel):
    """
    Producto interno destinado a un canal

    - channel_product_code: ID del producto en el sistema externo (None si nunca se creó)
    - success / synced: resultado y fecha de la última sincronización
    - outcome: resultado tipado de la última sincronización
    """
    id: int
    channel_id: Optional[int] = None
    client_id: Optional[int] = None
    title: Optional[str] = None
    channel_product_code: Optional[str] = None
    delete: bool = False
    variants: List[ChannelVariant] = Field(default_factory=list)
    images: List[ChannelImage] = Field(default_factory=list)
    success: Optional[bool] = None
    synced: Optional[str] = None
    outcome: Optional[SyncOutcome] = None

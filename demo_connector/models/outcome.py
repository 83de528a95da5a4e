# -*- coding: utf-8 -*-
"""
Resultado de una sincronización para un producto de canal
"""

from typing import Union

from pydantic import BaseModel, ConfigDict


class Success(BaseModel):
    """Creado/actualizado en el sistema externo con el ID devuelto"""
    model_config = ConfigDict(frozen=True)

    channel_product_code: str


class Failed(BaseModel):
    """La sincronización falló; reason contiene el mensaje original"""
    model_config = ConfigDict(frozen=True)

    reason: str


class DeleteSucceeded(BaseModel):
    """Eliminado del sistema externo"""
    model_config = ConfigDict(frozen=True)


SyncOutcome = Union[Success, Failed, DeleteSucceeded]

# -*- coding: utf-8 -*-
"""
Formato de producto de la Demo API (wire format)
Solo lo construye services.transform; el cliente API lo usa para leer respuestas
"""

from typing import List

from pydantic import BaseModel, Field


class DemoOption(BaseModel):
    id: str = ''
    sku: str = Field(..., min_length=1)


class DemoImage(BaseModel):
    id: str = ''
    url: str = ''


class DemoProduct(BaseModel):
    """
    Producto tal como lo espera la API externa

    La API rechaza productos sin nombre o sin opciones, por eso
    las mismas reglas se validan aquí antes de enviar.
    """
    id: str = ''
    name: str = Field(..., min_length=1)
    options: List[DemoOption] = Field(..., min_length=1)
    images: List[DemoImage] = Field(default_factory=list)

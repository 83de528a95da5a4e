# -*- coding: utf-8 -*-
"""
Transformación de productos de canal al formato de la Demo API
Funciones puras: sin I/O y sin modificar la entrada
"""

from typing import List

from pydantic import ValidationError

from ..models.channel import ChannelProduct
from ..models.demo_product import DemoImage, DemoOption, DemoProduct
from .results import Err, Ok, Result


class TransformError(Exception):
    """El producto no se puede representar en el formato de la API"""
    pass


def to_demo_product(channel_product: ChannelProduct) -> DemoProduct:
    """
    Convierte un producto de canal en un DemoProduct

    Mapeo:
    - channel_product_code -> id  (vacío si el producto aún no existe)
    - title                -> name
    - variants             -> options (sku, channel_variant_code)
    - images               -> images (src, channel_image_code)

    Raises:
        TransformError: Si faltan campos requeridos por la API
    """
    try:
        return DemoProduct(
            id=channel_product.channel_product_code or '',
            name=channel_product.title or '',
            options=[
                DemoOption(id=v.channel_variant_code or '', sku=v.sku or '')
                for v in channel_product.variants
            ],
            images=[
                DemoImage(id=i.channel_image_code or '', url=i.src or '')
                for i in channel_product.images
            ],
        )
    except ValidationError as e:
        raise TransformError(
            f"Invalid channel product {channel_product.id}: {e.error_count()} validation error(s)"
        ) from e
    except (AttributeError, TypeError) as e:
        raise TransformError(f"Malformed channel product {getattr(channel_product, 'id', None)}: {e}") from e


def to_demo_products(channel_products: List[ChannelProduct]) -> List[DemoProduct]:
    """Convierte todo el lote; un solo producto inválido invalida el lote"""
    return [to_demo_product(cp) for cp in channel_products]


def to_demo_product_ids(channel_products: List[ChannelProduct]) -> List[str]:
    """
    Extrae los IDs externos a eliminar, en el mismo orden que el lote

    Raises:
        TransformError: Si algún producto no tiene channel_product_code
    """
    ids = []
    for position, cp in enumerate(channel_products):
        code = getattr(cp, 'channel_product_code', None)
        if not code:
            raise TransformError(f"Channel product at position {position} has no channel_product_code")
        ids.append(code)
    return ids


def try_demo_products(channel_products: List[ChannelProduct]) -> Result[List[DemoProduct], TransformError]:
    try:
        return Ok(to_demo_products(channel_products))
    except TransformError as e:
        return Err(e)


def try_demo_product_ids(channel_products: List[ChannelProduct]) -> Result[List[str], TransformError]:
    try:
        return Ok(to_demo_product_ids(channel_products))
    except TransformError as e:
        return Err(e)

# -*- coding: utf-8 -*-
"""
Resultado explícito de una etapa del pipeline (Ok / Err)
Permite al orquestador decidir por tipo en lugar de propagar excepciones
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar('T')
E = TypeVar('E', bound=Exception)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


Result = Union[Ok[T], Err[E]]

# -*- coding: utf-8 -*-
"""
Evento de log estructurado
Se serializa como una línea JSON por el Writer (ver log/writer.py)
"""

from enum import Enum
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class LogLevel(str, Enum):
    INFO = 'info'
    WARNING = 'warning'
    ERROR = 'error'


class LogEvent(BaseModel):
    """
    Registro inmutable de un evento

    - client_id: cliente al que pertenece el canal
    - log_to_es: si debe enviarse al sink externo de logs
    - origin: componente que generó el evento
    - context: datos adicionales (solo strings)
    """
    model_config = ConfigDict(frozen=True)

    message: str
    client_id: int
    log_to_es: bool = True
    level: LogLevel = LogLevel.INFO
    origin: str
    context: Dict[str, str] = Field(default_factory=dict)

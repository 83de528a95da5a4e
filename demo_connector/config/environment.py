# -*- coding: utf-8 -*-
"""
Configuración de entorno del proceso
Se inicializa una vez con Environment.set(loader); el motor de sincronización no la usa
"""

import os
import logging
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values, find_dotenv

_logger = logging.getLogger(__name__)

LOG_CHANNEL = 'LOG_CHANNEL'
LOG_FS_DIR = 'LOG_FS_DIR'
LOG_FS_FILE_NAME = 'LOG_FS_FILE_NAME'

DEFAULTS = {
    LOG_CHANNEL: 'Share',
    LOG_FS_DIR: './output/',
    LOG_FS_FILE_NAME: 'system.log',
}


class LoaderArray:
    """Carga la configuración desde un diccionario (útil en tests)"""

    def __init__(self, values: Dict[str, str]):
        self.values = dict(values)

    def load(self) -> Dict[str, str]:
        return dict(self.values)


class LoaderDotenv:
    """
    Carga la configuración desde un archivo .env

    Las variables del entorno del sistema tienen prioridad sobre el archivo.
    """

    def __init__(self, path: Optional[str] = None):
        if path:
            self.path = str(Path(path).expanduser().resolve())
        else:
            self.path = find_dotenv(usecwd=True) or None

    def load(self) -> Dict[str, str]:
        values = {}
        if self.path:
            values = {k: v for k, v in dotenv_values(self.path).items() if v is not None}
        for key in values:
            if key in os.environ:
                values[key] = os.environ[key]
        for key in DEFAULTS:
            if key in os.environ:
                values[key] = os.environ[key]
        return values


class Environment:
    """
    Configuración global del proceso

    Ejemplo:
        Environment.set(LoaderDotenv())
        Environment.get_log_fs_dir()
    """

    _values: Dict[str, str] = {}

    @classmethod
    def set(cls, loader) -> None:
        """
        Reemplaza la configuración actual con la del loader

        Args:
            loader: LoaderArray, LoaderDotenv u objeto con método load()
        """
        cls._values = loader.load()
        _logger.debug(f"Environment loaded: {sorted(cls._values)}")

    @classmethod
    def get(cls, key: str, default: Optional[str] = None) -> Optional[str]:
        value = cls._values.get(key)
        if value in (None, ''):
            return DEFAULTS.get(key, default) if default is None else default
        return value

    @classmethod
    def get_log_channel(cls) -> str:
        return cls.get(LOG_CHANNEL)

    @classmethod
    def get_log_fs_dir(cls) -> str:
        return cls.get(LOG_FS_DIR)

    @classmethod
    def get_log_fs_file_name(cls) -> str:
        return cls.get(LOG_FS_FILE_NAME)

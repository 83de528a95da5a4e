# -*- coding: utf-8 -*-
"""
Writer de logs en archivo
Una línea JSON por evento; el archivo solo se abre en modo append
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from ..config.environment import Environment
from ..models.log import LogEvent

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Writer:
    """
    Escribe eventos de log como JSON lines

    Formato de cada línea:
        {"message": ..., "client_id": ..., "log_to_es": ..., "level": ...,
         "origin": ..., "context": {...}, "datetime": "2026-01-01T10:00:00+00:00"}
    """

    def __init__(self, path: Optional[str] = None, clock: Callable[[], datetime] = _utc_now):
        """
        Args:
            path: Archivo destino; por defecto LOG_FS_DIR + LOG_FS_FILE_NAME del Environment
            clock: Función que retorna la fecha a inyectar en cada línea
        """
        self._path = path
        self._clock = clock

    @property
    def path(self) -> Path:
        if self._path:
            return Path(self._path)
        return Path(Environment.get_log_fs_dir()) / Environment.get_log_fs_file_name()

    def write(self, event: LogEvent) -> None:
        record = event.model_dump(mode='json')
        record['datetime'] = self._clock().isoformat()

        path = self.path
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open('a', encoding='utf-8') as f:
            f.write(json.dumps(record) + '\n')

        _logger.debug(f"Log event written to {path}")

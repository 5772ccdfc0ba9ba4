"""Rotating JSON-lines log file."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from ..formatters import JsonFormatter

DEFAULT_LOG_NAME = 'geomodel.log'


class FileHandler(RotatingFileHandler):
    """Rotating handler writing JsonFormatter lines; creates the log directory."""

    def __init__(self,
                 filename: Union[str, Path],
                 max_bytes: int = 10 * 1024 * 1024,
                 backup_count: int = 5,
                 level: int = logging.DEBUG):
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(str(path), maxBytes=max_bytes, backupCount=backup_count,
                         encoding='utf-8')
        self.setFormatter(JsonFormatter())
        self.setLevel(level)

    @classmethod
    def from_config(cls, config, filename: Optional[Union[str, Path]] = None) -> 'FileHandler':
        """
        Build a handler from the ``logging`` and ``paths`` config sections.

        Args:
            config: Config instance
            filename: Log file path, overriding ``logging.file`` and the
                default ``<paths.logs_dir>/geomodel.log``

        Returns:
            FileHandler
        """
        if filename is None:
            filename = config.get('logging.file') or \
                Path(config.get('paths.logs_dir', 'logs')) / DEFAULT_LOG_NAME
        return cls(filename,
                   max_bytes=config.get('logging.max_file_size', 10 * 1024 * 1024),
                   backup_count=config.get('logging.backup_count', 5))

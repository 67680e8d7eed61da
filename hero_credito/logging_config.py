"""Configuração de logging estruturado em JSON."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from hero_credito.config import AppSettings

_RESERVED_ATTRS = set(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Serializa cada registro como uma linha JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "line": record.lineno,
        }

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        # campos passados via extra=
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_record[key] = value

        return json.dumps(log_record, default=str, ensure_ascii=False)


def configure_logging(settings: AppSettings) -> None:
    """Configura o logger do pacote conforme LOG_LEVEL e DISABLE_LOGS."""
    logger = logging.getLogger("hero_credito")
    logger.handlers = []

    if settings.DISABLE_LOGS:
        logger.addHandler(logging.NullHandler())
        logger.propagate = False
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(settings.LOG_LEVEL.upper())
    logger.propagate = False

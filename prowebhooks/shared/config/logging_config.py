# -*- coding: utf-8 -*-
"""
prowebhooks/shared/config/logging_config.py

Logging del receptor de webhooks.

- plain: una línea por registro (desarrollo)
- pretty: igual, con timestamp
- json: python-json-logger, un objeto por registro (producción); los
  campos `extra` de las alertas (error_kind, error_class) salen como claves

Fecha: 2026-10-17
"""

import logging.config
from typing import Dict, Literal

# Librerías ruidosas: su nivel no baja de WARNING aunque la app use DEBUG
QUIET_LOGGERS = ("stripe", "sqlalchemy.engine", "aiosqlite", "uvicorn.access")

_FORMATTERS = {
    "default": {
        "format": "%(levelname)s [%(name)s]: %(message)s",
    },
    "pretty": {
        "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
    "json": {
        "()": "pythonjsonlogger.json.JsonFormatter",
        "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
    },
}

_FORMATTER_BY_FMT = {"plain": "default", "pretty": "pretty", "json": "json"}


def _quiet_loggers(level: str) -> Dict[str, dict]:
    numeric = max(logging.getLevelName(level), logging.WARNING)
    return {name: {"level": logging.getLevelName(numeric)} for name in QUIET_LOGGERS}


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    fmt: Literal["plain", "pretty", "json"] = "plain"
) -> None:
    """
    Configura el logging de la aplicación (root + librerías ruidosas).

    Args:
        level: Nivel del logger root
        fmt: Formato de salida (plain, pretty, json)

    Ejemplos:
        >>> setup_logging("INFO", "plain")
        >>> setup_logging("WARNING", "json")
    """
    level = level.upper()
    formatter = _FORMATTER_BY_FMT.get(fmt, "default")

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {formatter: _FORMATTERS[formatter]},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": _quiet_loggers(level),
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    })


__all__ = ["setup_logging", "QUIET_LOGGERS"]
# Fin del archivo prowebhooks/shared/config/logging_config.py

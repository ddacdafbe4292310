# -*- coding: utf-8 -*-
"""
prowebhooks/modules/webhooks/alerting.py

Colaborador de alertas.

El receptor solo entrega el WebhookError estructurado; construir y
enviar la notificación (email, Slack, ...) es responsabilidad de la
implementación inyectada. La implementación por defecto registra el
mensaje en el logger "prowebhooks.alerts".

Fecha: 2026-10-17
"""

from __future__ import annotations

import logging
from typing import Protocol

from .errors import WebhookError

alert_logger = logging.getLogger("prowebhooks.alerts")


class Alerter(Protocol):
    def notify(self, error: WebhookError) -> None:
        ...


class LoggingAlerter:
    """Alerter que escribe el mensaje de alerta en el log (nivel ERROR)."""

    def __init__(self, logger: logging.Logger = alert_logger):
        self._logger = logger

    def notify(self, error: WebhookError) -> None:
        self._logger.error(
            "Stripe webhook alert: %s",
            error.alert_message,
            extra={"error_kind": error.kind.value, "error_class": error.error_class},
        )


__all__ = ["Alerter", "LoggingAlerter"]

# Fin del archivo prowebhooks/modules/webhooks/alerting.py

# -*- coding: utf-8 -*-
"""
prowebhooks/shared/config/__init__.py

Punto único de acceso a la configuración:
    from prowebhooks.shared.config import get_webhook_settings
"""

from .logging_config import setup_logging
from .settings_webhooks import (
    WebhookSettings,
    get_webhook_settings,
    reset_webhook_settings,
)

__all__ = [
    "setup_logging",
    "WebhookSettings",
    "get_webhook_settings",
    "reset_webhook_settings",
]

# -*- coding: utf-8 -*-
import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_env_and_cache(monkeypatch):
    """
    Aísla variables de entorno y limpia el singleton de WebhookSettings en cada test.
    """
    # Asegura que no heredamos secretos del shell del dev
    for k in list(os.environ.keys()):
        if k.startswith(("STRIPE_", "WEBHOOK_", "PRO_", "DATABASE_", "LOG_")):
            monkeypatch.delenv(k, raising=False)

    from prowebhooks.shared.config.settings_webhooks import reset_webhook_settings

    reset_webhook_settings()
    yield
    reset_webhook_settings()

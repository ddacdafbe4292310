# tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests.

- Variables de entorno mínimas ANTES de importar la app.
- Raíz del proyecto en sys.path (para ejecutar sin instalar el paquete).
- Métricas singleton reiniciadas en cada test.
"""

import os
import sys
import pathlib

import pytest

# -----------------------------------------------------------------------------
# 0) Defaults útiles para la suite
# -----------------------------------------------------------------------------
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_secret")
os.environ.setdefault("STRIPE_NAMESPACE", "")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

# -----------------------------------------------------------------------------
# 1) Asegura la raíz del proyecto en sys.path
# -----------------------------------------------------------------------------
PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
assert (PROJECT_ROOT / "prowebhooks").exists(), f"'prowebhooks' no existe en {PROJECT_ROOT}"


@pytest.fixture(autouse=True)
def _reset_webhook_metrics():
    """Las métricas son un singleton en proceso: aislarlas por test."""
    from prowebhooks.modules.webhooks.metrics import get_webhook_metrics

    get_webhook_metrics().reset()
    yield
    get_webhook_metrics().reset()

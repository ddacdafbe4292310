# -*- coding: utf-8 -*-
"""
prowebhooks/main.py

Punto de entrada del receptor de webhooks de Stripe.

Ajustes clave:
- Configuración vía WebhookSettings (pydantic-settings, .env + entorno)
- Logging configurado antes de montar rutas
- Lifespan: crea motor SQLAlchemy, tabla pro_accounts y WebhookEngine
  con sus colaboradores; libera el motor en shutdown
- create_app(engine=...) permite inyectar un engine ya construido (tests)

Fecha: 2026-10-17
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI

from prowebhooks.modules.accounts import ProAccountRepository
from prowebhooks.modules.webhooks import (
    LoggingAlerter,
    StripeBillingClient,
    WebhookEngine,
    build_handler_table,
)
from prowebhooks.modules.webhooks.routes import router as webhooks_router
from prowebhooks.shared.config import WebhookSettings, get_webhook_settings, setup_logging
from prowebhooks.shared.database import build_engine, build_session_factory, create_schema

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[WebhookSettings] = None,
    engine: Optional[WebhookEngine] = None,
) -> FastAPI:
    """
    Construye la aplicación FastAPI.

    Args:
        settings: Configuración (default: get_webhook_settings())
        engine: WebhookEngine ya construido; si se omite, el lifespan lo
                crea con los colaboradores reales
    """
    settings = settings or get_webhook_settings()
    setup_logging(settings.log_level, settings.log_format)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if engine is not None:
            app.state.webhook_engine = engine
            yield
            return

        db_engine = build_engine(settings.database_url)
        await create_schema(db_engine)

        account_store = ProAccountRepository(build_session_factory(db_engine))
        billing_client = StripeBillingClient(settings.stripe_secret_key)
        handlers = build_handler_table(
            account_store=account_store,
            billing_client=billing_client,
            product_label=settings.pro_product_label,
        )
        app.state.webhook_engine = WebhookEngine(
            secret=settings.stripe_webhook_secret,
            handlers=handlers,
            namespace=settings.stripe_namespace,
            tolerance_seconds=settings.stripe_webhook_tolerance_seconds,
            handler_timeout_seconds=settings.webhook_handler_timeout_seconds,
            alerter=LoggingAlerter(),
        )
        logger.info(
            "Webhook engine ready: namespace=%r tolerance=%ss",
            settings.stripe_namespace, settings.stripe_webhook_tolerance_seconds,
        )
        try:
            yield
        finally:
            await db_engine.dispose()
            logger.info("Database engine disposed")

    app = FastAPI(title="prowebhooks", lifespan=lifespan)
    app.include_router(webhooks_router)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    return app


def run() -> None:
    """Arranca uvicorn (entrada de consola `prowebhooks`)."""
    uvicorn.run("prowebhooks.main:create_app", factory=True, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()

# Fin del archivo prowebhooks/main.py

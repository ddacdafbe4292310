# -*- coding: utf-8 -*-
"""
prowebhooks/modules/webhooks/routes.py

Rutas de webhooks de Stripe.

Endpoint:
- POST /webhooks/stripe

Fecha: 2026-10-17
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from .constants import STRIPE_SIGNATURE_HEADER
from .engine import WebhookEngine

logger = logging.getLogger(__name__)

MSG_ENGINE_NOT_INITIALISED = "Webhook engine not initialised"

router = APIRouter(
    prefix="/webhooks",
    tags=["webhooks:stripe"],
)


def get_webhook_engine(request: Request) -> Optional[WebhookEngine]:
    """Dependencia FastAPI: engine creado en el lifespan de la app (None si no arrancó)."""
    return getattr(request.app.state, "webhook_engine", None)


@router.post(
    "/stripe",
    status_code=status.HTTP_200_OK,
)
async def stripe_webhook(
    request: Request,
    engine: Optional[WebhookEngine] = Depends(get_webhook_engine),
) -> JSONResponse:
    """
    Webhook de Stripe.

    Requiere header Stripe-Signature; el body se verifica byte a byte.
    """
    if engine is None:
        logger.error("Stripe webhook recibido sin engine inicializado")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": MSG_ENGINE_NOT_INITIALISED},
        )

    # Body raw: la firma se calcula sobre los bytes exactos
    raw_body = await request.body()
    sig_header = request.headers.get(STRIPE_SIGNATURE_HEADER)

    response = await engine.process(raw_body, sig_header)
    return JSONResponse(status_code=response.status_code, content=response.body)


__all__ = ["router", "get_webhook_engine", "MSG_ENGINE_NOT_INITIALISED"]

# Fin del archivo prowebhooks/modules/webhooks/routes.py

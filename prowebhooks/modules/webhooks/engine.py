# -*- coding: utf-8 -*-
"""
prowebhooks/modules/webhooks/engine.py

Receptor de webhooks de Stripe: pipeline completo por request.

1. Verifica la firma (HMAC + tolerancia de timestamp)
2. Decodifica el payload en un StripeEvent
3. Clasifica el evento según el namespace de planes
4. Despacha al handler registrado (acotado por timeout)
5. Traduce el resultado a WebhookResponse

Cada etapa puede cortar el pipeline con un error. Toda respuesta 4xx/5xx
se entrega al Alerter con el WebhookError estructurado.

La configuración (secret, namespace, tolerancia) se recibe en el
constructor; el engine no lee configuración global.

Fecha: 2026-10-17
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .alerting import Alerter, LoggingAlerter
from .constants import DEFAULT_TOLERANCE_SECONDS
from .decoder import decode_event
from .dispatcher import HandlerTable, dispatch
from .errors import ErrorKind, WebhookError
from .metrics import WebhookMetricsCollector, get_webhook_metrics
from .namespace_filter import classify_event
from .responses import WebhookResponse, map_error, map_outcome, map_verification_failure
from .signature_verification import verify_signature

logger = logging.getLogger(__name__)

MSG_SECRET_NOT_CONFIGURED = "Webhook secret is not configured"


class WebhookEngine:
    """
    Orquestador sin estado por request.

    Comparte entre requests solo configuración de lectura y los
    colaboradores inyectados (handlers, alerter, métricas).
    """

    def __init__(
        self,
        *,
        secret: str,
        handlers: HandlerTable,
        namespace: str = "",
        tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
        handler_timeout_seconds: Optional[float] = None,
        alerter: Optional[Alerter] = None,
        metrics: Optional[WebhookMetricsCollector] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._secret = secret
        self._handlers = handlers
        self._namespace = namespace
        self._tolerance_seconds = tolerance_seconds
        self._handler_timeout_seconds = handler_timeout_seconds
        self._alerter = alerter or LoggingAlerter()
        self._metrics = metrics or get_webhook_metrics()
        self._clock = clock

    @property
    def namespace(self) -> str:
        return self._namespace

    async def process(
        self,
        raw_body: bytes,
        signature_header: Optional[str],
    ) -> WebhookResponse:
        """
        Procesa un webhook recibido.

        Args:
            raw_body: Bytes exactos del body (no re-serializados)
            signature_header: Valor del header Stripe-Signature (o None)

        Returns:
            WebhookResponse con status, body y, si falla, el WebhookError
        """
        started = time.perf_counter()
        self._metrics.inc_received()
        try:
            response = await self._run_pipeline(raw_body, signature_header)
        finally:
            self._metrics.observe_processing_time((time.perf_counter() - started) * 1000)

        if response.error is not None:
            self._metrics.inc_rejected(response.error.kind.value)
            self._alerter.notify(response.error)
        return response

    async def _run_pipeline(
        self,
        raw_body: bytes,
        signature_header: Optional[str],
    ) -> WebhookResponse:
        if not self._secret:
            logger.error("Stripe webhook rechazado: STRIPE_WEBHOOK_SECRET no configurado.")
            return map_error(
                WebhookError(kind=ErrorKind.CONFIGURATION, message=MSG_SECRET_NOT_CONFIGURED)
            )

        verification = verify_signature(
            raw_body,
            signature_header,
            self._secret,
            tolerance_seconds=self._tolerance_seconds,
            now=int(self._clock()),
        )
        if not verification.verified:
            return map_verification_failure(verification)

        decoded = decode_event(raw_body)
        if isinstance(decoded, WebhookError):
            return map_error(decoded)
        event = decoded

        verdict = classify_event(event, self._namespace)
        logger.info(
            "Stripe webhook received: type=%s id=%s verdict=%s",
            event.type, event.id, verdict.value,
        )

        outcome = await dispatch(
            event,
            verdict,
            self._handlers,
            timeout=self._handler_timeout_seconds,
        )
        self._metrics.inc_dispatched(event.type, outcome.status.value)

        if outcome.error is not None:
            return map_error(outcome.error.with_event_type(event.type))
        if outcome.detail:
            logger.info(
                "Stripe webhook handled: type=%s id=%s status=%s detail=%s",
                event.type, event.id, outcome.status.value, outcome.detail,
            )
        return map_outcome(outcome)


__all__ = ["WebhookEngine", "MSG_SECRET_NOT_CONFIGURED"]

# Fin del archivo prowebhooks/modules/webhooks/engine.py

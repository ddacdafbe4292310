# -*- coding: utf-8 -*-
"""
prowebhooks/modules/webhooks/dispatcher.py

Despacho de eventos a su handler según el tipo.

- Fuera de namespace: NOOP sin invocar ningún handler.
- Tipo sin handler registrado: ERROR UNHANDLED_EVENT_TYPE (debe ser
  visible para operación; nunca se ignora en silencio).
- Handler encontrado: se espera su resultado, acotado por timeout.
- Excepción inesperada del handler: ERROR UPSTREAM (con traceback en log).

Fecha: 2026-10-17
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Mapping, Optional

from .constants import MESSAGE_NOT_OUR_PLAN
from .decoder import StripeEvent
from .errors import ErrorKind
from .namespace_filter import NamespaceVerdict
from .outcomes import HandlerOutcome

logger = logging.getLogger(__name__)

WebhookHandler = Callable[[StripeEvent], Awaitable[HandlerOutcome]]
HandlerTable = Mapping[str, WebhookHandler]


async def dispatch(
    event: StripeEvent,
    verdict: NamespaceVerdict,
    handlers: HandlerTable,
    timeout: Optional[float] = None,
) -> HandlerOutcome:
    """
    Despacha el evento al handler registrado para su tipo.

    Args:
        event: Evento decodificado
        verdict: Veredicto del filtro de namespace
        handlers: Tabla tipo de evento -> handler
        timeout: Segundos máximos para el handler (None = sin límite)

    Returns:
        HandlerOutcome del handler, o el propio del dispatcher
    """
    if verdict is NamespaceVerdict.OUT_OF_NAMESPACE:
        return HandlerOutcome.noop(MESSAGE_NOT_OUR_PLAN, event_id=event.id)

    handler = handlers.get(event.type)
    if handler is None:
        logger.error("Unhandled Stripe webhook event type: %s (event=%s)", event.type, event.id)
        return HandlerOutcome.failed(
            ErrorKind.UNHANDLED_EVENT_TYPE,
            f"Unhandled Stripe webhook event type: {event.type}",
            event_type=event.type,
        )

    try:
        return await asyncio.wait_for(handler(event), timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(
            "Handler timeout: type=%s event=%s timeout=%ss",
            event.type, event.id, timeout,
        )
        return HandlerOutcome.failed(
            ErrorKind.TIMEOUT,
            f"Handler for {event.type} timed out after {timeout:g}s",
            event_type=event.type,
        )
    except Exception as e:
        # Fallo inesperado del handler: se reporta como error, nunca se propaga
        logger.exception("Handler failed: type=%s event=%s", event.type, event.id)
        return HandlerOutcome.failed(
            ErrorKind.UPSTREAM,
            f"Handler for {event.type} failed: {e}",
            event_type=event.type,
        )


__all__ = ["WebhookHandler", "HandlerTable", "dispatch"]

# Fin del archivo prowebhooks/modules/webhooks/dispatcher.py

# -*- coding: utf-8 -*-
"""
prowebhooks/modules/webhooks/decoder.py

Decodificación de payloads de webhooks de Stripe.

Convierte los bytes ya verificados en un StripeEvent. El data.object se
conserva sin tipar: cada handler extrae los sub-campos que necesita.

Un payload sin 'type' es un fallo de decodificación (nunca llega al
dispatcher), y se detecta antes que cualquier otro campo.

Fecha: 2026-10-17
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import ErrorKind, WebhookError

logger = logging.getLogger(__name__)

MSG_MISSING_EVENT_TYPE = "undefined method 'type' for event payload"


class StripeEvent(BaseModel):
    """
    Evento de Stripe decodificado.

    data_object es el valor de data.object tal cual llegó.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="ID único del evento en Stripe (evt_...)")
    type: str = Field(description="Tipo de evento (customer.subscription.deleted, ...)")
    data_object: Any = Field(
        default_factory=dict,
        description="Objeto embebido en data.object, sin tipar"
    )
    created: Optional[int] = Field(default=None, description="Unix timestamp de creación")
    livemode: bool = Field(default=False, description="¿Evento de modo live?")
    api_version: Optional[str] = Field(default=None, description="Versión de API de Stripe")


def _invalid(message: str) -> WebhookError:
    return WebhookError(kind=ErrorKind.INVALID_PAYLOAD, message=message)


def decode_event(raw_body: bytes) -> Union[StripeEvent, WebhookError]:
    """
    Decodifica el body crudo de un webhook.

    Args:
        raw_body: Body crudo del request (ya verificado)

    Returns:
        StripeEvent, o WebhookError (MISSING_EVENT_TYPE / INVALID_PAYLOAD)
    """
    try:
        data = json.loads(raw_body.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        logger.warning("Error parseando webhook payload: %s", e)
        return _invalid(f"Invalid JSON payload: {e}")

    if not isinstance(data, dict):
        return _invalid("Event payload must be a JSON object")

    event_type = data.get("type")
    if event_type is None or event_type == "":
        logger.warning("Webhook payload sin 'type': id=%s", data.get("id"))
        return WebhookError(kind=ErrorKind.MISSING_EVENT_TYPE, message=MSG_MISSING_EVENT_TYPE)

    if not isinstance(event_type, str):
        return _invalid("Event 'type' must be a string")

    event_id = data.get("id")
    if not isinstance(event_id, str) or not event_id:
        return WebhookError(
            kind=ErrorKind.INVALID_PAYLOAD,
            message="Event payload has no valid 'id'",
            event_type=event_type,
        )

    envelope = data.get("data")
    data_object: Any = {}
    if isinstance(envelope, dict) and "object" in envelope:
        data_object = envelope["object"]

    created = data.get("created")
    api_version = data.get("api_version")

    event = StripeEvent(
        id=event_id,
        type=event_type,
        data_object=data_object,
        created=created if isinstance(created, int) and not isinstance(created, bool) else None,
        livemode=data.get("livemode") is True,
        api_version=api_version if isinstance(api_version, str) else None,
    )
    logger.debug("Evento Stripe decodificado: %s (ID: %s)", event.type, event.id)
    return event


def get_field(obj: Any, key: str) -> Optional[Any]:
    """Acceso tolerante: obj[key] si obj es un dict, None en otro caso."""
    if isinstance(obj, dict):
        return obj.get(key)
    return None


def get_id(value: Any) -> Optional[str]:
    """
    ID de una referencia de Stripe: el propio string, o el campo 'id'
    si la referencia viene expandida como objeto.
    """
    if isinstance(value, str) and value:
        return value
    nested = get_field(value, "id")
    if isinstance(nested, str) and nested:
        return nested
    return None


__all__ = [
    "StripeEvent",
    "decode_event",
    "get_field",
    "get_id",
    "MSG_MISSING_EVENT_TYPE",
]

# Fin del archivo prowebhooks/modules/webhooks/decoder.py

# -*- coding: utf-8 -*-
"""
prowebhooks/modules/webhooks/errors.py

Taxonomía de errores del receptor de webhooks.

Los errores viajan como valores (WebhookError) a través del pipeline;
cada etapa devuelve su fallo en lugar de lanzar, y el mapeador de
respuestas decide el status HTTP a partir de ErrorKind.

Las excepciones quedan para los colaboradores externos
(BillingApiError, errores de SQLAlchemy) y se convierten en
WebhookError en la frontera del handler.

Fecha: 2026-10-17
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Tipos de fallo posibles al procesar un webhook."""

    # SignatureVerificationError
    MALFORMED_HEADER = "malformed_header"
    NO_MATCHING_SIGNATURE = "no_matching_signature"
    STALE_TIMESTAMP = "stale_timestamp"
    # DecodeError
    MISSING_EVENT_TYPE = "missing_event_type"
    INVALID_PAYLOAD = "invalid_payload"
    # DispatchError (UnhandledStripeWebhookError)
    UNHANDLED_EVENT_TYPE = "unhandled_event_type"
    # HandlerError
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    UPSTREAM = "upstream"
    # ConfigurationError
    CONFIGURATION = "configuration"


_ERROR_CLASSES = {
    ErrorKind.MALFORMED_HEADER: "SignatureVerificationError",
    ErrorKind.NO_MATCHING_SIGNATURE: "SignatureVerificationError",
    ErrorKind.STALE_TIMESTAMP: "SignatureVerificationError",
    ErrorKind.MISSING_EVENT_TYPE: "DecodeError",
    ErrorKind.INVALID_PAYLOAD: "DecodeError",
    ErrorKind.UNHANDLED_EVENT_TYPE: "UnhandledStripeWebhookError",
    ErrorKind.NOT_FOUND: "HandlerError",
    ErrorKind.TIMEOUT: "HandlerError",
    ErrorKind.UPSTREAM: "HandlerError",
    ErrorKind.CONFIGURATION: "ConfigurationError",
}

SIGNATURE_ERROR_KINDS = frozenset({
    ErrorKind.MALFORMED_HEADER,
    ErrorKind.NO_MATCHING_SIGNATURE,
    ErrorKind.STALE_TIMESTAMP,
})

DECODE_ERROR_KINDS = frozenset({
    ErrorKind.MISSING_EVENT_TYPE,
    ErrorKind.INVALID_PAYLOAD,
})


@dataclass(frozen=True)
class WebhookError:
    """
    Error estructurado (tipo + mensaje) producido por cualquier etapa.

    - message: texto que va en el body {"error": message}
    - alert_message: texto para el colaborador de alertas
    """

    kind: ErrorKind
    message: str
    event_type: Optional[str] = None

    @property
    def error_class(self) -> str:
        """Familia del error (SignatureVerificationError, DecodeError, ...)."""
        return _ERROR_CLASSES[self.kind]

    @property
    def alert_message(self) -> str:
        text = f'({self.error_class}) "{self.message}"'
        if self.event_type:
            text += f" [event_type={self.event_type}]"
        return text

    def with_event_type(self, event_type: Optional[str]) -> "WebhookError":
        """Copia del error asociada a un tipo de evento."""
        if not event_type or self.event_type == event_type:
            return self
        return WebhookError(kind=self.kind, message=self.message, event_type=event_type)


class BillingApiError(Exception):
    """Fallo del cliente de la API de billing (Stripe)."""


class AccountStoreError(Exception):
    """Fallo del almacén de cuentas."""


__all__ = [
    "ErrorKind",
    "WebhookError",
    "BillingApiError",
    "AccountStoreError",
    "SIGNATURE_ERROR_KINDS",
    "DECODE_ERROR_KINDS",
]

# Fin del archivo prowebhooks/modules/webhooks/errors.py

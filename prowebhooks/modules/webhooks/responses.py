# -*- coding: utf-8 -*-
"""
prowebhooks/modules/webhooks/responses.py

Traducción de resultados a (status, body) independiente del transporte.

| Resultado                              | Status | Body                    |
|----------------------------------------|--------|-------------------------|
| Firma inválida / stale / malformada    | 401    | {"error": message}      |
| Payload sin type / inválido            | 400    | {"error": message}      |
| Tipo sin handler, timeout, upstream    | 500    | {"error": message}      |
| NOOP (p. ej. fuera de namespace)       | 200    | {"message": message}    |
| OK                                     | 200    | {"message": "OK"}       |

Fecha: 2026-10-17
"""
from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Dict, Optional

from .constants import MESSAGE_OK
from .errors import DECODE_ERROR_KINDS, SIGNATURE_ERROR_KINDS, ErrorKind, WebhookError
from .outcomes import HandlerOutcome
from .signature_verification import VerificationResult


@dataclass(frozen=True)
class WebhookResponse:
    """Respuesta lista para el transporte; error presente solo si status >= 400."""

    status_code: int
    body: Dict[str, Any]
    error: Optional[WebhookError] = None

    @property
    def is_success(self) -> bool:
        return self.status_code < 400


def status_for_error(kind: ErrorKind) -> int:
    if kind in SIGNATURE_ERROR_KINDS:
        return HTTPStatus.UNAUTHORIZED.value
    if kind in DECODE_ERROR_KINDS:
        return HTTPStatus.BAD_REQUEST.value
    if kind is ErrorKind.NOT_FOUND:
        return HTTPStatus.OK.value
    return HTTPStatus.INTERNAL_SERVER_ERROR.value


def map_error(error: WebhookError) -> WebhookResponse:
    status_code = status_for_error(error.kind)
    if status_code < 400:
        # NOT_FOUND no es fatal: se reconoce la entrega
        return WebhookResponse(status_code=status_code, body={"message": MESSAGE_OK})
    return WebhookResponse(
        status_code=status_code,
        body={"error": error.message},
        error=error,
    )


def map_verification_failure(result: VerificationResult) -> WebhookResponse:
    if result.error is None:
        raise ValueError("map_verification_failure requires a failed VerificationResult")
    return map_error(result.error)


def map_outcome(outcome: HandlerOutcome) -> WebhookResponse:
    if outcome.error is not None:
        return map_error(outcome.error)
    return WebhookResponse(status_code=HTTPStatus.OK.value, body={"message": outcome.message})


__all__ = [
    "WebhookResponse",
    "status_for_error",
    "map_error",
    "map_verification_failure",
    "map_outcome",
]

# Fin del archivo prowebhooks/modules/webhooks/responses.py

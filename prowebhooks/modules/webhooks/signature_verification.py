# -*- coding: utf-8 -*-
"""
prowebhooks/modules/webhooks/signature_verification.py

Verificación de firmas para webhooks de Stripe.

IMPORTANTE:
- HMAC-SHA256 con el webhook secret sobre "<timestamp>.<raw_body>".
- Se hashean los bytes EXACTOS recibidos (nunca el JSON re-serializado).
- La comparación es en tiempo constante (hmac.compare_digest).
- Firma y frescura del timestamp se validan por separado: un timestamp
  fuera de tolerancia rechaza aunque la firma coincida (anti-replay).

Fecha: 2026-10-17
"""
from __future__ import annotations

import hashlib
import hmac
import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import (
    DEFAULT_TOLERANCE_SECONDS,
    EXPECTED_SIGNATURE_SCHEME,
    SIGNATURE_TIMESTAMP_KEY,
)
from .errors import ErrorKind, WebhookError

logger = logging.getLogger(__name__)

MSG_MALFORMED_HEADER = "Unable to extract timestamp and signatures from header"
MSG_NO_MATCHING_SIGNATURE = "No signatures found matching the expected signature for payload"
MSG_STALE_TIMESTAMP = "Timestamp outside the tolerance zone ({timestamp})"


@dataclass(frozen=True)
class ParsedSignature:
    """Header Stripe-Signature descompuesto."""

    timestamp: int
    signatures: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def digests(self, scheme: str = EXPECTED_SIGNATURE_SCHEME) -> List[str]:
        """Digests hex asociados al esquema indicado, en orden."""
        return [value for name, value in self.signatures if name == scheme]


@dataclass(frozen=True)
class VerificationResult:
    """Resultado de verificar una firma: Verified o Failed(reason)."""

    verified: bool
    error: Optional[WebhookError] = None

    @classmethod
    def ok(cls) -> "VerificationResult":
        return cls(verified=True)

    @classmethod
    def failed(cls, kind: ErrorKind, message: str) -> "VerificationResult":
        return cls(verified=False, error=WebhookError(kind=kind, message=message))

    @property
    def reason(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error else None


def parse_signature_header(signature_header: Optional[str]) -> Optional[ParsedSignature]:
    """
    Parsea "t=timestamp,v1=signature[,v1=...][,v0=...]".

    Returns:
        ParsedSignature, o None si falta el timestamp, no es entero,
        o no hay ninguna firma v1
    """
    if not signature_header:
        return None

    timestamp: Optional[int] = None
    signatures: List[Tuple[str, str]] = []

    for item in signature_header.split(","):
        item = item.strip()
        if "=" not in item:
            continue
        key, value = item.split("=", 1)
        key = key.strip()
        value = value.strip()
        if key == SIGNATURE_TIMESTAMP_KEY:
            if timestamp is None:
                try:
                    timestamp = int(value)
                except ValueError:
                    return None
        elif value:
            signatures.append((key, value))

    if timestamp is None:
        return None

    parsed = ParsedSignature(timestamp=timestamp, signatures=tuple(signatures))
    if not parsed.digests():
        return None
    return parsed


def compute_signature(secret: str, timestamp: int, raw_body: bytes) -> str:
    """Firma esperada (hex) para el payload y timestamp dados."""
    signed_payload = f"{timestamp}.".encode("utf-8") + raw_body
    return hmac.new(
        secret.encode("utf-8"),
        msg=signed_payload,
        digestmod=hashlib.sha256,
    ).hexdigest()


def build_signature_header(secret: str, raw_body: bytes, timestamp: Optional[int] = None) -> str:
    """Construye un header Stripe-Signature válido (fixtures y tooling)."""
    if timestamp is None:
        timestamp = int(time.time())
    signature = compute_signature(secret, timestamp, raw_body)
    return f"{SIGNATURE_TIMESTAMP_KEY}={timestamp},{EXPECTED_SIGNATURE_SCHEME}={signature}"


def verify_signature(
    raw_body: bytes,
    signature_header: Optional[str],
    secret: str,
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
    now: Optional[int] = None,
) -> VerificationResult:
    """
    Verifica la firma de un webhook de Stripe usando HMAC-SHA256.

    Args:
        raw_body: Body crudo del request
        signature_header: Header Stripe-Signature
        secret: Secret del webhook (whsec_...)
        tolerance_seconds: Tolerancia de timestamp (default 5 minutos)
        now: Unix timestamp actual (default: time.time())

    Returns:
        VerificationResult; en caso de fallo incluye el WebhookError
    """
    parsed = parse_signature_header(signature_header)
    if parsed is None:
        logger.warning("Stripe webhook rechazado: header Stripe-Signature ausente o malformado")
        return VerificationResult.failed(ErrorKind.MALFORMED_HEADER, MSG_MALFORMED_HEADER)

    expected_signature = compute_signature(secret, parsed.timestamp, raw_body).encode("ascii")

    # compare_digest sobre bytes: el header puede traer caracteres no ASCII
    matched = False
    for sig in parsed.digests():
        if hmac.compare_digest(expected_signature, sig.encode("utf-8")):
            matched = True

    if not matched:
        logger.warning("Stripe webhook rechazado: ninguna firma v1 coincide")
        return VerificationResult.failed(
            ErrorKind.NO_MATCHING_SIGNATURE, MSG_NO_MATCHING_SIGNATURE
        )

    if now is None:
        now = int(time.time())

    drift = abs(now - parsed.timestamp)
    if drift > tolerance_seconds:
        logger.warning(
            "Stripe webhook rechazado: timestamp fuera de tolerancia. "
            "Diferencia: %ss, tolerancia: %ss",
            drift, tolerance_seconds,
        )
        return VerificationResult.failed(
            ErrorKind.STALE_TIMESTAMP,
            MSG_STALE_TIMESTAMP.format(timestamp=parsed.timestamp),
        )

    logger.debug("Stripe webhook: firma verificada correctamente")
    return VerificationResult.ok()


__all__ = [
    "ParsedSignature",
    "VerificationResult",
    "parse_signature_header",
    "compute_signature",
    "build_signature_header",
    "verify_signature",
    "MSG_MALFORMED_HEADER",
    "MSG_NO_MATCHING_SIGNATURE",
    "MSG_STALE_TIMESTAMP",
]

# Fin del archivo prowebhooks/modules/webhooks/signature_verification.py

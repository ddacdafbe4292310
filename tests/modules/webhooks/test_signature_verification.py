# -*- coding: utf-8 -*-
"""
tests/modules/webhooks/test_signature_verification.py

Tests de verificación de firmas Stripe.

Valida:
- Firma válida pasa
- Firma inválida / secret equivocado falla
- Header malformado o ausente falla
- Timestamp fuera de tolerancia falla aunque la firma coincida
- Se firman los bytes exactos del body

Fecha: 2026-10-17
"""

import hashlib
import hmac

import pytest

from prowebhooks.modules.webhooks.errors import ErrorKind
from prowebhooks.modules.webhooks.signature_verification import (
    MSG_MALFORMED_HEADER,
    MSG_NO_MATCHING_SIGNATURE,
    build_signature_header,
    compute_signature,
    parse_signature_header,
    verify_signature,
)

SECRET = "whsec_test_secret_123"
NOW = 1_700_000_000
PAYLOAD = b'{\n  "id": "evt_123",\n  "type": "customer.subscription.deleted"\n}'


def _header(payload: bytes = PAYLOAD, secret: str = SECRET, timestamp: int = NOW) -> str:
    return build_signature_header(secret, payload, timestamp=timestamp)


class TestComputeSignature:

    def test_matches_hmac_sha256_of_timestamp_dot_body(self):
        expected = hmac.new(
            SECRET.encode("utf-8"),
            f"{NOW}.".encode("utf-8") + PAYLOAD,
            hashlib.sha256,
        ).hexdigest()
        assert compute_signature(SECRET, NOW, PAYLOAD) == expected

    def test_header_shape(self):
        header = _header()
        assert header.startswith(f"t={NOW},v1=")
        assert len(header.split("v1=")[1]) == 64


class TestParseSignatureHeader:

    @pytest.mark.parametrize("header", [
        None,
        "",
        "garbage",
        f"v1={'a' * 64}",
        "t=1700000000",
        "t=1700000000,v0=abc",
        f"t=not-a-number,v1={'a' * 64}",
    ])
    def test_unparseable_headers(self, header):
        assert parse_signature_header(header) is None

    def test_collects_all_v1_signatures_in_order(self):
        parsed = parse_signature_header("t=12, v1=aaa ,v0=zzz,v1=bbb")
        assert parsed.timestamp == 12
        assert parsed.digests() == ["aaa", "bbb"]
        assert parsed.digests("v0") == ["zzz"]


class TestVerifySignature:

    def test_valid_signature(self):
        result = verify_signature(PAYLOAD, _header(), SECRET, now=NOW)
        assert result.verified is True
        assert result.error is None
        assert result.reason is None

    def test_missing_header(self):
        result = verify_signature(PAYLOAD, None, SECRET, now=NOW)
        assert result.verified is False
        assert result.reason is ErrorKind.MALFORMED_HEADER
        assert result.error.message == MSG_MALFORMED_HEADER

    def test_wrong_secret(self):
        header = _header(secret="whsec_wrong")
        result = verify_signature(PAYLOAD, header, SECRET, now=NOW)
        assert result.reason is ErrorKind.NO_MATCHING_SIGNATURE
        assert result.error.message == MSG_NO_MATCHING_SIGNATURE

    def test_reserialized_body_does_not_verify(self):
        """La firma es sobre los bytes recibidos, no sobre un JSON equivalente."""
        header = _header()
        compact = b'{"id":"evt_123","type":"customer.subscription.deleted"}'
        result = verify_signature(compact, header, SECRET, now=NOW)
        assert result.reason is ErrorKind.NO_MATCHING_SIGNATURE

    def test_any_matching_signature_is_enough(self):
        good = compute_signature(SECRET, NOW, PAYLOAD)
        header = f"t={NOW},v1={'0' * 64},v1={good}"
        assert verify_signature(PAYLOAD, header, SECRET, now=NOW).verified is True

    def test_non_ascii_signature_does_not_raise(self):
        header = f"t={NOW},v1=ñññ"
        result = verify_signature(PAYLOAD, header, SECRET, now=NOW)
        assert result.reason is ErrorKind.NO_MATCHING_SIGNATURE

    def test_stale_timestamp_rejected_even_with_valid_signature(self):
        old = NOW - 301
        header = _header(timestamp=old)
        result = verify_signature(PAYLOAD, header, SECRET, tolerance_seconds=300, now=NOW)
        assert result.reason is ErrorKind.STALE_TIMESTAMP
        assert result.error.message == f"Timestamp outside the tolerance zone ({old})"

    def test_future_timestamp_rejected(self):
        header = _header(timestamp=NOW + 301)
        result = verify_signature(PAYLOAD, header, SECRET, now=NOW)
        assert result.reason is ErrorKind.STALE_TIMESTAMP

    def test_timestamp_at_tolerance_edge_is_accepted(self):
        header = _header(timestamp=NOW - 300)
        assert verify_signature(PAYLOAD, header, SECRET, now=NOW).verified is True

    def test_signature_checked_before_staleness(self):
        header = _header(secret="whsec_wrong", timestamp=NOW - 3600)
        result = verify_signature(PAYLOAD, header, SECRET, now=NOW)
        assert result.reason is ErrorKind.NO_MATCHING_SIGNATURE

    def test_custom_tolerance(self):
        header = _header(timestamp=NOW - 10)
        assert verify_signature(PAYLOAD, header, SECRET, tolerance_seconds=5, now=NOW).verified is False
        assert verify_signature(PAYLOAD, header, SECRET, tolerance_seconds=10, now=NOW).verified is True

    def test_error_class_is_signature_verification_error(self):
        result = verify_signature(PAYLOAD, "", SECRET, now=NOW)
        assert result.error.error_class == "SignatureVerificationError"
        assert result.error.alert_message == (
            '(SignatureVerificationError) "Unable to extract timestamp and signatures from header"'
        )

# Fin del archivo tests/modules/webhooks/test_signature_verification.py

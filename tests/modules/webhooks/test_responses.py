# -*- coding: utf-8 -*-
"""
tests/modules/webhooks/test_responses.py

Tests del mapeo resultado -> (status, body).
"""

import pytest

from prowebhooks.modules.webhooks.errors import ErrorKind, WebhookError
from prowebhooks.modules.webhooks.outcomes import HandlerOutcome
from prowebhooks.modules.webhooks.responses import (
    map_error,
    map_outcome,
    map_verification_failure,
    status_for_error,
)
from prowebhooks.modules.webhooks.signature_verification import VerificationResult


@pytest.mark.parametrize("kind,status_code", [
    (ErrorKind.MALFORMED_HEADER, 401),
    (ErrorKind.NO_MATCHING_SIGNATURE, 401),
    (ErrorKind.STALE_TIMESTAMP, 401),
    (ErrorKind.MISSING_EVENT_TYPE, 400),
    (ErrorKind.INVALID_PAYLOAD, 400),
    (ErrorKind.UNHANDLED_EVENT_TYPE, 500),
    (ErrorKind.TIMEOUT, 500),
    (ErrorKind.UPSTREAM, 500),
    (ErrorKind.CONFIGURATION, 500),
    (ErrorKind.NOT_FOUND, 200),
])
def test_status_for_error(kind, status_code):
    assert status_for_error(kind) == status_code


def test_error_body_carries_message():
    error = WebhookError(kind=ErrorKind.MISSING_EVENT_TYPE, message="no type")
    response = map_error(error)
    assert response.status_code == 400
    assert response.body == {"error": "no type"}
    assert response.error is error
    assert response.is_success is False


def test_not_found_is_acknowledged_without_error():
    response = map_error(WebhookError(kind=ErrorKind.NOT_FOUND, message="gone"))
    assert response.status_code == 200
    assert response.body == {"message": "OK"}
    assert response.error is None


def test_verification_failure():
    result = VerificationResult.failed(ErrorKind.STALE_TIMESTAMP, "Timestamp outside the tolerance zone (1)")
    response = map_verification_failure(result)
    assert response.status_code == 401
    assert response.body == {"error": "Timestamp outside the tolerance zone (1)"}


def test_verification_success_is_rejected():
    with pytest.raises(ValueError):
        map_verification_failure(VerificationResult.ok())


def test_ok_and_noop_outcomes():
    assert map_outcome(HandlerOutcome.ok()).body == {"message": "OK"}
    noop = map_outcome(HandlerOutcome.noop("Does not appear to be one of our plans"))
    assert noop.status_code == 200
    assert noop.body == {"message": "Does not appear to be one of our plans"}
    assert noop.is_success


def test_failed_outcome():
    response = map_outcome(HandlerOutcome.failed(ErrorKind.UPSTREAM, "stripe down"))
    assert response.status_code == 500
    assert response.body == {"error": "stripe down"}

# -*- coding: utf-8 -*-
"""
tests/modules/webhooks/test_alerting_and_metrics.py

Tests del alerter por defecto, del formato de alerta y del colector de métricas.
"""

import logging

from prowebhooks.modules.webhooks.alerting import LoggingAlerter
from prowebhooks.modules.webhooks.errors import ErrorKind, WebhookError
from prowebhooks.modules.webhooks.metrics import (
    MAX_PROCESSING_SAMPLES,
    WebhookMetricsCollector,
    get_webhook_metrics,
)


class TestWebhookError:

    def test_alert_message_without_event_type(self):
        error = WebhookError(kind=ErrorKind.MALFORMED_HEADER, message="bad header")
        assert error.alert_message == '(SignatureVerificationError) "bad header"'

    def test_alert_message_with_event_type(self):
        error = WebhookError(kind=ErrorKind.UNHANDLED_EVENT_TYPE, message="x").with_event_type("a.b")
        assert error.alert_message == '(UnhandledStripeWebhookError) "x" [event_type=a.b]'

    def test_with_event_type_keeps_existing(self):
        error = WebhookError(kind=ErrorKind.UPSTREAM, message="x", event_type="a.b")
        assert error.with_event_type("a.b") is error
        assert error.with_event_type(None) is error


class TestLoggingAlerter:

    def test_logs_alert_at_error_level(self, caplog):
        alerter = LoggingAlerter()
        error = WebhookError(kind=ErrorKind.TIMEOUT, message="Handler for x timed out after 1s")

        with caplog.at_level(logging.ERROR, logger="prowebhooks.alerts"):
            alerter.notify(error)

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.ERROR
        assert '(HandlerError) "Handler for x timed out after 1s"' in record.getMessage()
        assert record.error_kind == "timeout"
        assert record.error_class == "HandlerError"

    def test_custom_logger(self, caplog):
        alerter = LoggingAlerter(logging.getLogger("ops"))
        with caplog.at_level(logging.ERROR, logger="ops"):
            alerter.notify(WebhookError(kind=ErrorKind.UPSTREAM, message="stripe down"))
        assert caplog.records[0].name == "ops"


class TestWebhookMetricsCollector:

    def test_singleton(self):
        assert get_webhook_metrics() is WebhookMetricsCollector()

    def test_counters(self):
        metrics = get_webhook_metrics()
        metrics.inc_received()
        metrics.inc_rejected("STALE_TIMESTAMP")
        metrics.inc_rejected("stale_timestamp")
        metrics.inc_dispatched("invoice.payment_succeeded", "NOOP")

        snapshot = metrics.snapshot()
        assert snapshot["received_total"] == 1
        assert snapshot["rejected_total"] == {"stale_timestamp": 2}
        assert snapshot["dispatched_total"] == {"invoice.payment_succeeded": {"noop": 1}}

    def test_processing_time_window(self):
        metrics = get_webhook_metrics()
        for value in range(MAX_PROCESSING_SAMPLES + 10):
            metrics.observe_processing_time(float(value))

        snapshot = metrics.snapshot()
        assert snapshot["processing_samples"] == MAX_PROCESSING_SAMPLES
        assert metrics.metrics.processing_times[0] == 10.0

    def test_empty_snapshot(self):
        snapshot = get_webhook_metrics().snapshot()
        assert snapshot["received_total"] == 0
        assert snapshot["processing_ms_p50"] is None

    def test_reset(self):
        metrics = get_webhook_metrics()
        metrics.inc_received()
        metrics.reset()
        assert metrics.snapshot()["received_total"] == 0

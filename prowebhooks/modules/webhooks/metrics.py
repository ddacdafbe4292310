# -*- coding: utf-8 -*-
"""
prowebhooks/modules/webhooks/metrics.py

Métricas en proceso para webhooks de Stripe.

Provee counters y una ventana de latencias para observabilidad.

Fecha: 2026-10-17
"""

from __future__ import annotations

import logging
import statistics
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

MAX_PROCESSING_SAMPLES = 1000


@dataclass
class WebhookMetrics:
    """Contenedor de métricas de webhooks."""

    received_total: int = 0
    rejected_total: Dict[str, int] = field(default_factory=lambda: defaultdict(int))
    dispatched_total: Dict[str, Dict[str, int]] = field(
        default_factory=lambda: defaultdict(lambda: defaultdict(int))
    )
    # Latencias en ms
    processing_times: List[float] = field(default_factory=list)


class WebhookMetricsCollector:
    """
    Colector de métricas de webhooks.

    Singleton para uso global.
    """

    _instance: Optional["WebhookMetricsCollector"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._metrics = WebhookMetrics()
        return cls._instance

    @property
    def metrics(self) -> WebhookMetrics:
        return self._metrics

    # ----------------------------- Counters ------------------------------ #

    def inc_received(self) -> None:
        self._metrics.received_total += 1

    def inc_rejected(self, reason: str) -> None:
        """
        Args:
            reason: malformed_header/no_matching_signature/missing_event_type/...
        """
        self._metrics.rejected_total[reason.lower()] += 1
        logger.debug("webhook_rejected_total{reason=%s} incremented", reason)

    def inc_dispatched(self, event_type: str, status: str) -> None:
        """
        Args:
            event_type: Tipo de evento de Stripe
            status: ok/noop/error
        """
        self._metrics.dispatched_total[event_type][status.lower()] += 1

    # ----------------------------- Histograms ------------------------------ #

    def observe_processing_time(self, duration_ms: float) -> None:
        samples = self._metrics.processing_times
        samples.append(duration_ms)
        # Mantener solo últimas MAX_PROCESSING_SAMPLES mediciones
        if len(samples) > MAX_PROCESSING_SAMPLES:
            del samples[: len(samples) - MAX_PROCESSING_SAMPLES]

    # ----------------------------- Export ------------------------------ #

    def snapshot(self) -> Dict[str, Any]:
        samples = self._metrics.processing_times
        return {
            "received_total": self._metrics.received_total,
            "rejected_total": dict(self._metrics.rejected_total),
            "dispatched_total": {
                event_type: dict(counts)
                for event_type, counts in self._metrics.dispatched_total.items()
            },
            "processing_ms_p50": statistics.median(samples) if samples else None,
            "processing_samples": len(samples),
        }

    def reset(self) -> None:
        """Reinicia las métricas (útil para tests)."""
        self._metrics = WebhookMetrics()


def get_webhook_metrics() -> WebhookMetricsCollector:
    return WebhookMetricsCollector()


__all__ = [
    "WebhookMetrics",
    "WebhookMetricsCollector",
    "get_webhook_metrics",
]

# Fin del archivo prowebhooks/modules/webhooks/metrics.py

# -*- coding: utf-8 -*-
"""
prowebhooks/modules/webhooks/outcomes.py

Resultado de despachar un evento: OK, NOOP (manejado sin efecto) o ERROR.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .constants import MESSAGE_OK
from .errors import ErrorKind, WebhookError


class OutcomeStatus(str, Enum):
    OK = "ok"
    NOOP = "noop"
    ERROR = "error"


@dataclass(frozen=True)
class HandlerOutcome:
    """Resultado de un handler (o del dispatcher)."""

    status: OutcomeStatus
    message: str = MESSAGE_OK
    error: Optional[WebhookError] = None
    detail: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, message: str = MESSAGE_OK, **detail: Any) -> "HandlerOutcome":
        return cls(status=OutcomeStatus.OK, message=message, detail=detail)

    @classmethod
    def noop(cls, message: str = MESSAGE_OK, **detail: Any) -> "HandlerOutcome":
        return cls(status=OutcomeStatus.NOOP, message=message, detail=detail)

    @classmethod
    def failed(
        cls,
        kind: ErrorKind,
        message: str,
        event_type: Optional[str] = None,
        **detail: Any,
    ) -> "HandlerOutcome":
        error = WebhookError(kind=kind, message=message, event_type=event_type)
        return cls(status=OutcomeStatus.ERROR, message=message, error=error, detail=detail)

    @property
    def is_error(self) -> bool:
        return self.status is OutcomeStatus.ERROR


__all__ = ["OutcomeStatus", "HandlerOutcome"]

# Fin del archivo prowebhooks/modules/webhooks/outcomes.py

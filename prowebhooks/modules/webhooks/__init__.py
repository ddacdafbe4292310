# -*- coding: utf-8 -*-
"""
prowebhooks/modules/webhooks/__init__.py

Exporta las funciones clave del receptor de webhooks de Stripe.
"""

from .alerting import Alerter, LoggingAlerter
from .billing_client import BillingClient, Charge, StripeBillingClient
from .decoder import StripeEvent, decode_event
from .dispatcher import HandlerTable, WebhookHandler, dispatch
from .engine import WebhookEngine
from .errors import AccountStoreError, BillingApiError, ErrorKind, WebhookError
from .handlers import (
    AccountStore,
    InvoicePaymentSucceededHandler,
    SubscriptionDeletedHandler,
    build_handler_table,
)
from .namespace_filter import NamespaceVerdict, classify_event, extract_plan_ids
from .outcomes import HandlerOutcome, OutcomeStatus
from .responses import WebhookResponse, map_error, map_outcome, map_verification_failure
from .signature_verification import (
    ParsedSignature,
    VerificationResult,
    build_signature_header,
    compute_signature,
    parse_signature_header,
    verify_signature,
)

__all__ = [
    "Alerter",
    "LoggingAlerter",
    "BillingClient",
    "Charge",
    "StripeBillingClient",
    "StripeEvent",
    "decode_event",
    "HandlerTable",
    "WebhookHandler",
    "dispatch",
    "WebhookEngine",
    "AccountStoreError",
    "BillingApiError",
    "ErrorKind",
    "WebhookError",
    "AccountStore",
    "InvoicePaymentSucceededHandler",
    "SubscriptionDeletedHandler",
    "build_handler_table",
    "NamespaceVerdict",
    "classify_event",
    "extract_plan_ids",
    "HandlerOutcome",
    "OutcomeStatus",
    "WebhookResponse",
    "map_error",
    "map_outcome",
    "map_verification_failure",
    "ParsedSignature",
    "VerificationResult",
    "build_signature_header",
    "compute_signature",
    "parse_signature_header",
    "verify_signature",
]

# Fin del archivo prowebhooks/modules/webhooks/__init__.py

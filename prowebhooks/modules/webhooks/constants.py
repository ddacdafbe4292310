# -*- coding: utf-8 -*-
"""
prowebhooks/modules/webhooks/constants.py

Constantes para webhooks Stripe.
"""

# Header HTTP con la firma
STRIPE_SIGNATURE_HEADER = "Stripe-Signature"

# Elementos del header Stripe-Signature
SIGNATURE_TIMESTAMP_KEY = "t"
EXPECTED_SIGNATURE_SCHEME = "v1"

DEFAULT_TOLERANCE_SECONDS = 300

# Stripe events con handler de referencia
EVENT_SUBSCRIPTION_DELETED = "customer.subscription.deleted"
EVENT_INVOICE_PAYMENT_SUCCEEDED = "invoice.payment_succeeded"

DEFAULT_PRODUCT_LABEL = "Alaveteli Professional"

# Mensajes de respuesta
MESSAGE_OK = "OK"
MESSAGE_NOT_OUR_PLAN = "Does not appear to be one of our plans"

__all__ = [
    "STRIPE_SIGNATURE_HEADER",
    "SIGNATURE_TIMESTAMP_KEY",
    "EXPECTED_SIGNATURE_SCHEME",
    "DEFAULT_TOLERANCE_SECONDS",
    "EVENT_SUBSCRIPTION_DELETED",
    "EVENT_INVOICE_PAYMENT_SUCCEEDED",
    "DEFAULT_PRODUCT_LABEL",
    "MESSAGE_OK",
    "MESSAGE_NOT_OUR_PLAN",
]

# Fin del archivo prowebhooks/modules/webhooks/constants.py

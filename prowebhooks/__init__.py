# -*- coding: utf-8 -*-
"""
prowebhooks

Receptor de webhooks de Stripe: verificación de firma, anti-replay,
filtro de namespace de planes y despacho a handlers idempotentes.
"""

__version__ = "1.0.0"

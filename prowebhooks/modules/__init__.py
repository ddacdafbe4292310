# -*- coding: utf-8 -*-
"""
prowebhooks/modules/__init__.py

Módulos de dominio: webhooks (receptor Stripe) y accounts (cuentas pro).
"""

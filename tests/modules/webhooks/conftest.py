# tests/modules/webhooks/conftest.py
# -*- coding: utf-8 -*-
"""
Conftest compartido para los tests del receptor de webhooks.

Fixtures de colaboradores en memoria (ver stripe_fixtures.py) y
`make_engine` para construir un WebhookEngine con ellos.
"""

import time

import pytest

from prowebhooks.modules.webhooks.billing_client import Charge
from prowebhooks.modules.webhooks.engine import WebhookEngine
from prowebhooks.modules.webhooks.handlers import build_handler_table

from tests.modules.webhooks.stripe_fixtures import (
    CHARGE_ID,
    CUSTOMER_ID,
    WEBHOOK_SECRET,
    FakeAccount,
    FakeAccountStore,
    FakeBillingClient,
    RecordingAlerter,
)


@pytest.fixture
def account():
    return FakeAccount(id=1, stripe_customer_id=CUSTOMER_ID, is_pro=True)


@pytest.fixture
def account_store(account):
    return FakeAccountStore(account)


@pytest.fixture
def charge():
    return Charge(id=CHARGE_ID, description=None)


@pytest.fixture
def billing_client(charge):
    return FakeBillingClient(charge)


@pytest.fixture
def alerter():
    return RecordingAlerter()


@pytest.fixture
def make_engine(account_store, billing_client, alerter):
    """Fábrica de WebhookEngine con colaboradores en memoria."""

    def _make(
        *,
        namespace: str = "",
        secret: str = WEBHOOK_SECRET,
        tolerance_seconds: int = 300,
        handlers=None,
        handler_timeout_seconds=None,
        clock=time.time,
    ) -> WebhookEngine:
        if handlers is None:
            handlers = build_handler_table(
                account_store=account_store,
                billing_client=billing_client,
            )
        return WebhookEngine(
            secret=secret,
            handlers=handlers,
            namespace=namespace,
            tolerance_seconds=tolerance_seconds,
            handler_timeout_seconds=handler_timeout_seconds,
            alerter=alerter,
            clock=clock,
        )

    return _make

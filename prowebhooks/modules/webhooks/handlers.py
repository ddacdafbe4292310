# -*- coding: utf-8 -*-
"""
prowebhooks/modules/webhooks/handlers.py

Handlers de referencia para webhooks de Stripe.

Procesa eventos:
- customer.subscription.deleted: revoca el acceso pro de la cuenta
- invoice.payment_succeeded: etiqueta el cargo con el nombre del producto

Cada efecto es idempotente: Stripe entrega al menos una vez, y una
re-entrega del mismo evento debe terminar en NOOP, no en un segundo
cambio ni en error.

Fecha: 2026-10-17
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from .billing_client import BillingClient
from .constants import (
    DEFAULT_PRODUCT_LABEL,
    EVENT_INVOICE_PAYMENT_SUCCEEDED,
    EVENT_SUBSCRIPTION_DELETED,
)
from .decoder import StripeEvent, get_field, get_id
from .dispatcher import WebhookHandler
from .errors import AccountStoreError, BillingApiError, ErrorKind
from .namespace_filter import line_item_plan_ids
from .outcomes import HandlerOutcome

logger = logging.getLogger(__name__)


class AccountStore(Protocol):
    """Colaborador de cuentas requerido por los handlers."""

    async def find_by_subscription_customer_id(self, customer_id: str) -> Optional[Any]:
        ...

    async def revoke_pro_access(self, account: Any) -> bool:
        ...


class SubscriptionDeletedHandler:
    """
    customer.subscription.deleted: una suscripción cancelada llegó al
    final del periodo; la cuenta asociada pierde el acceso pro.
    """

    def __init__(self, account_store: AccountStore):
        self._account_store = account_store

    async def __call__(self, event: StripeEvent) -> HandlerOutcome:
        customer_id = get_id(get_field(event.data_object, "customer"))

        logger.info(
            "Processing %s: event=%s customer=%s",
            event.type, event.id, customer_id,
        )

        if not customer_id:
            return HandlerOutcome.failed(
                ErrorKind.INVALID_PAYLOAD,
                "Subscription event has no customer reference",
                event_type=event.type,
            )

        try:
            account = await self._account_store.find_by_subscription_customer_id(customer_id)
            if account is None:
                # Cuenta borrada localmente o evento de otro sistema
                logger.info("No pro account for customer %s; ignoring", customer_id)
                return HandlerOutcome.noop(reason="unknown_customer", customer_id=customer_id)

            changed = await self._account_store.revoke_pro_access(account)
        except AccountStoreError as e:
            return HandlerOutcome.failed(ErrorKind.UPSTREAM, str(e), event_type=event.type)

        if not changed:
            return HandlerOutcome.noop(reason="already_revoked", customer_id=customer_id)
        return HandlerOutcome.ok(customer_id=customer_id)


class InvoicePaymentSucceededHandler:
    """
    invoice.payment_succeeded: asigna al cargo de la factura una
    descripción legible con el nombre del producto, solo si las líneas
    de la factura corresponden a un plan de suscripción.
    """

    def __init__(
        self,
        billing_client: BillingClient,
        product_label: str = DEFAULT_PRODUCT_LABEL,
    ):
        self._billing_client = billing_client
        self._product_label = product_label

    async def __call__(self, event: StripeEvent) -> HandlerOutcome:
        invoice = event.data_object
        plan_ids = line_item_plan_ids(invoice)
        charge_id = get_id(get_field(invoice, "charge"))

        logger.info(
            "Processing %s: event=%s charge=%s plans=%s",
            event.type, event.id, charge_id, plan_ids,
        )

        if not plan_ids:
            return HandlerOutcome.noop(reason="no_subscription_plan")
        if not charge_id:
            return HandlerOutcome.noop(reason="no_charge")

        try:
            charge = await self._billing_client.retrieve_charge(charge_id)
            if charge.description == self._product_label:
                logger.info("Charge %s already labelled (idempotent)", charge_id)
                return HandlerOutcome.noop(reason="already_labelled", charge_id=charge_id)

            await self._billing_client.update_charge_description(charge_id, self._product_label)
        except BillingApiError as e:
            return HandlerOutcome.failed(ErrorKind.UPSTREAM, str(e), event_type=event.type)

        return HandlerOutcome.ok(charge_id=charge_id)


def build_handler_table(
    *,
    account_store: AccountStore,
    billing_client: BillingClient,
    product_label: str = DEFAULT_PRODUCT_LABEL,
) -> Dict[str, WebhookHandler]:
    """
    Tabla tipo de evento -> handler con los colaboradores inyectados.

    La tabla es abierta: se pueden añadir entradas para nuevos tipos,
    siempre con efectos idempotentes.
    """
    return {
        EVENT_SUBSCRIPTION_DELETED: SubscriptionDeletedHandler(account_store),
        EVENT_INVOICE_PAYMENT_SUCCEEDED: InvoicePaymentSucceededHandler(
            billing_client, product_label
        ),
    }


__all__ = [
    "AccountStore",
    "SubscriptionDeletedHandler",
    "InvoicePaymentSucceededHandler",
    "build_handler_table",
]

# Fin del archivo prowebhooks/modules/webhooks/handlers.py

# -*- coding: utf-8 -*-
"""
prowebhooks/modules/webhooks/billing_client.py

Cliente de la API de Stripe usado por los handlers para consultar y
anotar cargos ya referenciados por un evento.

Las llamadas del SDK de Stripe son bloqueantes; se ejecutan en el
threadpool para no bloquear el event loop.

Fecha: 2026-10-17
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import stripe
from fastapi.concurrency import run_in_threadpool

from .errors import BillingApiError

logger = logging.getLogger(__name__)


@dataclass
class Charge:
    """Vista mínima de un cargo de Stripe."""
    id: str
    description: Optional[str] = None


class BillingClient(Protocol):
    """Colaborador de billing requerido por los handlers."""

    async def retrieve_charge(self, charge_id: str) -> Charge:
        ...

    async def update_charge_description(self, charge_id: str, description: str) -> Charge:
        ...


def _to_charge(obj: Any) -> Charge:
    return Charge(id=obj["id"], description=obj.get("description"))


class StripeBillingClient:
    """
    Implementación de BillingClient sobre el SDK oficial de Stripe.
    """

    def __init__(self, secret_key: Optional[str] = None):
        """
        Args:
            secret_key: Stripe secret key. Si es None, el SDK usa stripe.api_key.
        """
        self._secret_key = secret_key
        if not secret_key:
            logger.warning("STRIPE_SECRET_KEY not configured")

    async def retrieve_charge(self, charge_id: str) -> Charge:
        """
        Obtiene un cargo.

        Raises:
            BillingApiError: Si Stripe responde con error
        """
        try:
            charge = await run_in_threadpool(
                stripe.Charge.retrieve,
                charge_id,
                api_key=self._secret_key,
            )
        except stripe.StripeError as e:
            logger.error("Stripe charge retrieve failed: charge=%s error=%s", charge_id, e)
            raise BillingApiError(f"Unable to retrieve charge {charge_id}: {e}") from e
        return _to_charge(charge)

    async def update_charge_description(self, charge_id: str, description: str) -> Charge:
        """
        Asigna la descripción de un cargo.

        Raises:
            BillingApiError: Si Stripe responde con error
        """
        try:
            charge = await run_in_threadpool(
                stripe.Charge.modify,
                charge_id,
                description=description,
                api_key=self._secret_key,
            )
        except stripe.StripeError as e:
            logger.error("Stripe charge update failed: charge=%s error=%s", charge_id, e)
            raise BillingApiError(f"Unable to update charge {charge_id}: {e}") from e

        logger.info("Stripe charge description updated: charge=%s", charge_id)
        return _to_charge(charge)


__all__ = [
    "Charge",
    "BillingClient",
    "StripeBillingClient",
]

# Fin del archivo prowebhooks/modules/webhooks/billing_client.py

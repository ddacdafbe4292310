# -*- coding: utf-8 -*-
"""
prowebhooks/modules/accounts/repository.py

Repositorio de cuentas pro (almacén de cuentas usado por los webhooks).

La revocación es un UPDATE condicional (is_pro = true), de modo que dos
entregas concurrentes del mismo evento cambian la fila como máximo una vez.

Fecha: 2026-10-17
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from prowebhooks.modules.webhooks.errors import AccountStoreError
from prowebhooks.shared.database.database import session_scope
from .models import ProAccount

logger = logging.getLogger(__name__)


class ProAccountRepository:
    """
    Repositorio para operaciones con pro_accounts.

    Recibe la fábrica de sesiones (recurso de larga vida) y abre una
    sesión por operación.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get(self, account_id: int) -> Optional[ProAccount]:
        """Obtiene una cuenta por ID."""
        async with self._session_factory() as session:
            return await session.get(ProAccount, account_id)

    async def find_by_subscription_customer_id(
        self,
        customer_id: str,
    ) -> Optional[ProAccount]:
        """
        Busca la cuenta cuyo stripe_customer_id coincide.

        Args:
            customer_id: ID del customer en Stripe

        Returns:
            ProAccount si existe, None si no

        Raises:
            AccountStoreError: Si falla la base de datos
        """
        stmt = select(ProAccount).where(ProAccount.stripe_customer_id == customer_id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Account lookup failed: customer=%s error=%s", customer_id, e)
            raise AccountStoreError(f"Account lookup failed for customer {customer_id}") from e

    async def revoke_pro_access(self, account: ProAccount) -> bool:
        """
        Quita el flag pro de la cuenta.

        Returns:
            True si la fila cambió, False si ya estaba revocada (idempotente)

        Raises:
            AccountStoreError: Si falla la base de datos
        """
        stmt = (
            update(ProAccount)
            .where(ProAccount.id == account.id, ProAccount.is_pro.is_(True))
            .values(is_pro=False)
        )
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(stmt)
                changed = (result.rowcount or 0) > 0
        except SQLAlchemyError as e:
            logger.error("Pro access revocation failed: account=%s error=%s", account.id, e)
            raise AccountStoreError(f"Unable to revoke pro access for account {account.id}") from e

        account.is_pro = False
        if changed:
            logger.info("Pro access revoked: account=%s", account.id)
        else:
            logger.info("Pro access already revoked: account=%s (idempotent)", account.id)
        return changed

    async def create(
        self,
        *,
        stripe_customer_id: Optional[str],
        email: Optional[str] = None,
        is_pro: bool = True,
    ) -> ProAccount:
        """Crea una cuenta pro."""
        account = ProAccount(
            stripe_customer_id=stripe_customer_id,
            email=email,
            is_pro=is_pro,
        )
        async with session_scope(self._session_factory) as session:
            session.add(account)
            await session.flush()
            await session.refresh(account)
        return account


__all__ = ["ProAccountRepository"]

# Fin del archivo prowebhooks/modules/accounts/repository.py

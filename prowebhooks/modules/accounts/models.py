# -*- coding: utf-8 -*-
"""
prowebhooks/modules/accounts/models.py

Modelo ORM para la tabla pro_accounts.

Cada cuenta guarda el customer id de Stripe con el que se suscribió y
el flag de acceso pro que los webhooks pueden revocar.

Fecha: 2026-10-17
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from prowebhooks.shared.database.base import Base


class ProAccount(Base):
    """
    Cuenta con acceso pro vinculada a un customer de Stripe.
    """

    __tablename__ = "pro_accounts"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        doc="Email del titular de la cuenta.",
    )

    stripe_customer_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        unique=True,
        index=True,
        doc="ID del customer en Stripe (cus_...).",
    )

    is_pro: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        doc="Flag de acceso pro.",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return (
            f"<ProAccount id={self.id} customer={self.stripe_customer_id} "
            f"is_pro={self.is_pro}>"
        )


__all__ = ["ProAccount"]

# Fin del archivo prowebhooks/modules/accounts/models.py

# -*- coding: utf-8 -*-
"""
prowebhooks/shared/database/database.py

Motor async de SQLAlchemy para el almacén de cuentas pro.

Provee:
- build_engine(url): create_async_engine
- build_session_factory(engine): async_sessionmaker
- session_scope(factory): context manager con commit/rollback
- create_schema(engine): crea tablas registradas en Base.metadata

El motor y la fábrica de sesiones son recursos de larga vida, propiedad
de la aplicación; cada operación del repositorio abre su propia sesión.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from prowebhooks.shared.database.base import Base

logger = logging.getLogger(__name__)


def build_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """Crea el motor async a partir de la URL configurada."""
    logger.debug("Creating async engine for %s", database_url.split("@")[-1])
    return create_async_engine(database_url, echo=echo, future=True)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Fábrica de sesiones sin expiración tras commit."""
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """
    Abre una sesión, hace commit al salir y rollback ante cualquier error.
    La excepción original se re-lanza.
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_schema(engine: AsyncEngine) -> None:
    """Crea las tablas que aún no existan."""
    # Registrar modelos en Base.metadata antes de create_all
    from prowebhooks.modules.accounts import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


__all__ = [
    "build_engine",
    "build_session_factory",
    "session_scope",
    "create_schema",
]

# Fin del archivo prowebhooks/shared/database/database.py

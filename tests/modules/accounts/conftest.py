# tests/modules/accounts/conftest.py
# -*- coding: utf-8 -*-
"""
Conftest del módulo Accounts.

- Motor ASYNC sqlite+aiosqlite sobre un fichero temporal por test.
- Tablas creadas con create_schema (mismo camino que el lifespan).
"""

import pytest

from prowebhooks.modules.accounts import ProAccountRepository
from prowebhooks.shared.database import build_engine, build_session_factory, create_schema


@pytest.fixture
async def engine(tmp_path):
    eng = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'accounts.db'}")
    await create_schema(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def repository(session_factory):
    return ProAccountRepository(session_factory)

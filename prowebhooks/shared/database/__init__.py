# -*- coding: utf-8 -*-
"""
prowebhooks/shared/database/__init__.py

Infraestructura de base de datos compartida.
"""

from .base import Base
from .database import (
    build_engine,
    build_session_factory,
    create_schema,
    session_scope,
)

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "create_schema",
    "session_scope",
]

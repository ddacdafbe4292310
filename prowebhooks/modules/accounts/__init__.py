# -*- coding: utf-8 -*-
"""
prowebhooks/modules/accounts/__init__.py

Cuentas pro: modelo ORM y repositorio usado como almacén de cuentas.
"""

from .models import ProAccount
from .repository import ProAccountRepository

__all__ = ["ProAccount", "ProAccountRepository"]

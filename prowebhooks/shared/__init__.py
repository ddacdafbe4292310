# -*- coding: utf-8 -*-
"""
prowebhooks/shared/__init__.py

Infraestructura transversal: configuración, logging y base de datos.
"""

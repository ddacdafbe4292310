# -*- coding: utf-8 -*-
"""
prowebhooks/shared/config/settings_webhooks.py

Configuración del receptor de webhooks de Stripe.

Descripción:
    Centraliza el secreto de firma, el namespace de planes, la ventana
    de tolerancia anti-replay, el timeout de handlers y la conexión a
    base de datos de cuentas pro.

Fecha: 2026-10-17
"""

from __future__ import annotations

import os
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WebhookSettings(BaseSettings):
    """Configuración del receptor de webhooks."""

    # =========================================================================
    # STRIPE
    # =========================================================================

    stripe_webhook_secret: str = Field(
        default="",
        description="Stripe webhook signing secret (whsec_...)"
    )

    stripe_namespace: str = Field(
        default="",
        description="Prefijo de planes de este despliegue (vacío = sin filtrado)"
    )

    stripe_webhook_tolerance_seconds: int = Field(
        default=300,
        ge=0,
        description="Tolerancia para validación de timestamp de webhooks Stripe (5 minutos)"
    )

    stripe_secret_key: Optional[str] = Field(
        default=None,
        validate_default=True,
        description="Stripe secret key (sk_live_... o sk_test_...)"
    )

    @field_validator("stripe_namespace", mode="before")
    @classmethod
    def _strip_namespace(cls, v: Optional[str]) -> str:
        """Normaliza el namespace; None o espacios equivalen a vacío."""
        return (v or "").strip()

    @field_validator("stripe_secret_key", mode="before")
    @classmethod
    def _load_stripe_secret_key(cls, v: Optional[str]) -> Optional[str]:
        """Fallback a STRIPE_API_KEY si STRIPE_SECRET_KEY no está definido."""
        if v:
            return v
        return os.getenv("STRIPE_API_KEY")

    # =========================================================================
    # HANDLERS
    # =========================================================================

    webhook_handler_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout para la ejecución de un handler de webhook"
    )

    pro_product_label: str = Field(
        default="Alaveteli Professional",
        description="Descripción que se asigna a los cargos de suscripción pro"
    )

    # =========================================================================
    # BASE DE DATOS / LOGGING
    # =========================================================================

    database_url: str = Field(
        default="sqlite+aiosqlite:///./prowebhooks.db",
        description="URL async de SQLAlchemy para la tabla pro_accounts"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Nivel de logging raíz"
    )

    log_format: Literal["plain", "pretty", "json"] = Field(
        default="plain",
        description="Formato de salida de logs"
    )

    # =========================================================================
    # CONFIGURACIÓN DE PYDANTIC
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton global
_webhook_settings: Optional[WebhookSettings] = None


def get_webhook_settings() -> WebhookSettings:
    """
    Obtiene la instancia global de configuración de webhooks.

    Returns:
        WebhookSettings: Configuración de webhooks
    """
    global _webhook_settings
    if _webhook_settings is None:
        _webhook_settings = WebhookSettings()
    return _webhook_settings


def reset_webhook_settings() -> None:
    """Descarta el singleton (útil para tests que cambian variables de entorno)."""
    global _webhook_settings
    _webhook_settings = None


__all__ = [
    "WebhookSettings",
    "get_webhook_settings",
    "reset_webhook_settings",
]
# Fin del archivo prowebhooks/shared/config/settings_webhooks.py

# -*- coding: utf-8 -*-
"""
prowebhooks/modules/webhooks/namespace_filter.py

Filtro de namespace de planes.

Un mismo endpoint puede recibir eventos de varias líneas de producto que
comparten cuenta de Stripe. Los planes de este despliegue llevan el
prefijo "<namespace>-"; los eventos cuyos planes no lo llevan se ignoran
respondiendo 200 (para que Stripe no lo trate como fallo de entrega).

El recorrido es tolerante: cualquier campo ausente o con forma inesperada
cuenta como "no encontrado", nunca como error.

Fecha: 2026-10-17
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterator, List, Optional

from .decoder import StripeEvent, get_field

logger = logging.getLogger(__name__)


class NamespaceVerdict(str, Enum):
    """Clasificación de un evento respecto al namespace configurado."""

    NOT_APPLICABLE = "not_applicable"
    IN_NAMESPACE = "in_namespace"
    OUT_OF_NAMESPACE = "out_of_namespace"


def _list_items(container: Any) -> List[Any]:
    """
    Elementos de una lista de Stripe: {"object": "list", "data": [...]}
    o directamente [...]. Cualquier otra forma produce lista vacía.
    """
    if isinstance(container, list):
        return container
    data = get_field(container, "data")
    if isinstance(data, list):
        return data
    return []


def plan_id_of(item: Any) -> Optional[str]:
    """item.plan.id si existe y es un string no vacío."""
    plan_id = get_field(get_field(item, "plan"), "id")
    if isinstance(plan_id, str) and plan_id:
        return plan_id
    return None


def line_item_plan_ids(data_object: Any) -> List[str]:
    """Plan ids de data.object.lines (facturas)."""
    ids = (plan_id_of(line) for line in _list_items(get_field(data_object, "lines")))
    return [plan_id for plan_id in ids if plan_id]


def _iter_plan_ids(data_object: Any) -> Iterator[str]:
    # Suscripción con plan único
    plan_id = plan_id_of(data_object)
    if plan_id:
        yield plan_id

    # Facturas
    yield from line_item_plan_ids(data_object)

    # Suscripción con items
    for item in _list_items(get_field(data_object, "items")):
        plan_id = plan_id_of(item)
        if plan_id:
            yield plan_id


def extract_plan_ids(data_object: Any) -> List[str]:
    """Todos los plan ids descubribles en data.object, sin duplicados."""
    seen: List[str] = []
    for plan_id in _iter_plan_ids(data_object):
        if plan_id not in seen:
            seen.append(plan_id)
    return seen


def classify_event(event: StripeEvent, namespace_prefix: str) -> NamespaceVerdict:
    """
    Clasifica un evento según el namespace de planes.

    Args:
        event: Evento decodificado
        namespace_prefix: Namespace configurado ("" desactiva el filtro)

    Returns:
        IN_NAMESPACE si el filtro está desactivado o todos los planes llevan
        el prefijo; NOT_APPLICABLE si no hay planes; OUT_OF_NAMESPACE si
        alguno no lo lleva
    """
    if not namespace_prefix:
        return NamespaceVerdict.IN_NAMESPACE

    plan_ids = extract_plan_ids(event.data_object)
    if not plan_ids:
        return NamespaceVerdict.NOT_APPLICABLE

    prefix = f"{namespace_prefix}-"
    foreign = [plan_id for plan_id in plan_ids if not plan_id.startswith(prefix)]
    if foreign:
        logger.info(
            "Webhook fuera de namespace: event=%s type=%s plans=%s namespace=%s",
            event.id, event.type, foreign, namespace_prefix,
        )
        return NamespaceVerdict.OUT_OF_NAMESPACE

    return NamespaceVerdict.IN_NAMESPACE


__all__ = [
    "NamespaceVerdict",
    "classify_event",
    "extract_plan_ids",
    "line_item_plan_ids",
    "plan_id_of",
]

# Fin del archivo prowebhooks/modules/webhooks/namespace_filter.py

"""
Detalle de salidas por causa (venta, muerte, robo).

La suma de cantidades por causa debe ser igual a las salidas del registro.
Esta regla se valida solo al crear el detalle.
"""
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from ganaderos.core.causes import DEFAULT_SALE_NOTES, ExitCause
from ganaderos.models.exit_detail import ExitDetail
from ganaderos.models.movement_record import MovementRecord


def validate_exit_attribution(total_exits: int, entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Valida y normaliza el detalle de salidas de un registro.

    Args:
        total_exits: Salidas del registro de movimientos
        entries: Lista de dicts con 'cause', 'quantity' y opcionalmente
            'notes', 'price_per_kg', 'total_kg'

    Returns:
        Entradas normalizadas listas para guardar

    Raises:
        ValueError: Causa inválida o repetida, términos de venta faltantes,
            o la suma no coincide con las salidas
    """
    if not entries and total_exits == 0:
        # Sin salidas: se guarda una venta en cero
        entries = [{"cause": ExitCause.sale, "quantity": 0}]

    normalized: List[Dict[str, Any]] = []
    seen = set()
    for entry in entries:
        try:
            cause = ExitCause(entry.get("cause"))
        except ValueError:
            raise ValueError(f"Causa de salida inválida: {entry.get('cause')}")
        if cause in seen:
            raise ValueError(f"Causa de salida repetida: {cause.value}")
        seen.add(cause)

        quantity = int(entry.get("quantity") or 0)
        if quantity < 0:
            raise ValueError("La cantidad no puede ser negativa")

        item: Dict[str, Any] = {
            "cause": cause.value,
            "quantity": quantity,
            "notes": entry.get("notes"),
            "price_per_kg": None,
            "total_kg": None,
        }
        if cause == ExitCause.sale:
            price = Decimal(str(entry.get("price_per_kg") or 0))
            kg = Decimal(str(entry.get("total_kg") or 0))
            if quantity > 0 and (price <= 0 or kg <= 0):
                raise ValueError("El valor por kg y el total de kg son obligatorios para ventas")
            item["price_per_kg"] = price
            item["total_kg"] = kg
            item["notes"] = item["notes"] or DEFAULT_SALE_NOTES
        normalized.append(item)

    assigned = sum(item["quantity"] for item in normalized)
    if assigned != total_exits:
        raise ValueError(
            f"La cantidad asignada ({assigned}) debe ser igual al total de salidas ({total_exits})"
        )
    return normalized


def create_exit_details(db: Session, record: MovementRecord, entries: List[Dict[str, Any]]) -> List[ExitDetail]:
    """Guarda el detalle de salidas de un registro. Solo se permite una vez."""
    if record.exit_details:
        raise ValueError("Las salidas de este registro ya fueron detalladas")

    normalized = validate_exit_attribution(record.exits or 0, entries)
    details = [
        ExitDetail(
            movement_record_id=record.id,
            member=record.member,
            date=record.date,
            **item,
        )
        for item in normalized
    ]
    db.add_all(details)
    db.commit()
    for detail in details:
        db.refresh(detail)
    return details

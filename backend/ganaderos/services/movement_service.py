"""
Lógica de negocio para registros de movimientos (entradas/salidas por socio y fecha).
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ganaderos.models.movement_record import MovementRecord


def fill_derived_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Completa saldo y total cuando no vienen en la petición.

    balance = entries - exits, total = price_per_kg * total_kg.
    Al actualizar solo se recalculan si cambian sus insumos; los valores
    enviados se guardan tal cual.
    """
    values = dict(data)
    if values.get("balance") is None:
        values["balance"] = int(values.get("entries") or 0) - int(values.get("exits") or 0)
    if values.get("total") is None:
        price = Decimal(str(values.get("price_per_kg") or 0))
        kg = Decimal(str(values.get("total_kg") or 0))
        values["total"] = (price * kg).quantize(Decimal("0.01"))
    return values


def _clean_member(values: Dict[str, Any]) -> Dict[str, Any]:
    if "member" in values:
        values["member"] = (values["member"] or "").strip()
        if not values["member"]:
            raise ValueError("El socio es obligatorio")
    return values


def list_movement_records(db: Session, member: Optional[str] = None) -> List[MovementRecord]:
    query = db.query(MovementRecord)
    if member:
        query = query.filter(MovementRecord.member == member)
    return query.order_by(MovementRecord.date.desc(), MovementRecord.id.desc()).all()


def list_members(db: Session) -> List[str]:
    rows = db.query(MovementRecord.member).distinct().order_by(MovementRecord.member).all()
    return [row[0] for row in rows]


def create_movement_record(db: Session, data: Dict[str, Any]) -> MovementRecord:
    values = _clean_member(fill_derived_fields(data))
    record = MovementRecord(**values)
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def update_movement_record(db: Session, record: MovementRecord, data: Dict[str, Any]) -> MovementRecord:
    """
    Actualiza un registro. Si ya tiene detalle de salidas, no se permite
    cambiar salidas, socio ni fecha: el detalle quedaría desalineado.
    """
    values = _clean_member(dict(data))
    # Saldo y total guardados se conservan salvo que cambien sus insumos
    if values.get("balance") is None:
        if "entries" in values or "exits" in values:
            values["balance"] = None
        else:
            values.pop("balance", None)
    if values.get("total") is None:
        if "price_per_kg" in values or "total_kg" in values:
            values["total"] = None
        else:
            values.pop("total", None)
    values = fill_derived_fields({
        "entries": record.entries,
        "exits": record.exits,
        "price_per_kg": record.price_per_kg,
        "total_kg": record.total_kg,
        "balance": record.balance,
        "total": record.total,
        **values,
    })
    locked = (
        int(values["exits"]) != record.exits
        or values.get("member", record.member) != record.member
        or values.get("date", record.date) != record.date
    )
    if record.exit_details and locked:
        raise ValueError("Las salidas de este registro ya tienen detalle por causa")
    for field, value in values.items():
        setattr(record, field, value)
    db.commit()
    db.refresh(record)
    return record

import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ganaderos.core.causes import ExitCause
from ganaderos.core.database import get_db
from ganaderos.core.deps import get_current_user, require_admin
from ganaderos.models.movement_record import MovementRecord
from ganaderos.models.user import User
from ganaderos.services.exit_detail_service import create_exit_details
from ganaderos.services.movement_service import (
    create_movement_record,
    list_members,
    list_movement_records,
    update_movement_record,
)

router = APIRouter()


class MovementRecordCreate(BaseModel):
    member: str
    date: dt.date
    entries: int = Field(0, ge=0)
    exits: int = Field(0, ge=0)
    balance: Optional[int] = None  # por defecto entries - exits
    total_kg: float = Field(0, ge=0)
    price_per_kg: float = Field(0, ge=0)
    freight_cost: float = Field(0, ge=0)
    commission: float = Field(0, ge=0)
    animal_value: float = Field(0, ge=0)
    total: Optional[float] = Field(None, ge=0)  # por defecto price_per_kg * total_kg


class MovementRecordUpdate(BaseModel):
    member: Optional[str] = None
    date: Optional[dt.date] = None
    entries: Optional[int] = Field(None, ge=0)
    exits: Optional[int] = Field(None, ge=0)
    balance: Optional[int] = None
    total_kg: Optional[float] = Field(None, ge=0)
    price_per_kg: Optional[float] = Field(None, ge=0)
    freight_cost: Optional[float] = Field(None, ge=0)
    commission: Optional[float] = Field(None, ge=0)
    animal_value: Optional[float] = Field(None, ge=0)
    total: Optional[float] = Field(None, ge=0)


class MovementRecordResponse(BaseModel):
    id: int
    member: str
    date: dt.date
    entries: int
    exits: int
    balance: int
    total_kg: float
    price_per_kg: float
    freight_cost: float
    commission: float
    animal_value: float
    total: float
    created_at: dt.datetime
    updated_at: Optional[dt.datetime]

    class Config:
        from_attributes = True


class ExitDetailCreate(BaseModel):
    cause: ExitCause
    quantity: int = Field(ge=0)
    notes: Optional[str] = None
    price_per_kg: Optional[float] = Field(None, ge=0)
    total_kg: Optional[float] = Field(None, ge=0)


class ExitDetailResponse(BaseModel):
    id: int
    movement_record_id: int
    member: str
    date: dt.date
    cause: ExitCause
    quantity: int
    notes: Optional[str]
    price_per_kg: Optional[float]
    total_kg: Optional[float]
    created_at: dt.datetime

    class Config:
        from_attributes = True


def _get_record_or_404(db: Session, record_id: int) -> MovementRecord:
    record = db.query(MovementRecord).filter(MovementRecord.id == record_id).first()
    if not record:
        raise HTTPException(status_code=404, detail="Registro no encontrado")
    return record


@router.get("", response_model=List[MovementRecordResponse])
def get_movement_records(
    member: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Registros de movimientos, fecha descendente"""
    return list_movement_records(db, member)


@router.get("/members", response_model=List[str])
def get_members(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return list_members(db)


@router.post("", response_model=MovementRecordResponse)
def create_record(
    data: MovementRecordCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    try:
        return create_movement_record(db, data.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{record_id}", response_model=MovementRecordResponse)
def update_record(
    record_id: int,
    data: MovementRecordUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    record = _get_record_or_404(db, record_id)
    try:
        return update_movement_record(db, record, data.model_dump(exclude_unset=True, exclude_none=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{record_id}")
def delete_record(
    record_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    record = _get_record_or_404(db, record_id)
    db.delete(record)
    db.commit()
    return {"status": "ok", "deleted_id": record_id}


@router.get("/{record_id}/exit-details", response_model=List[ExitDetailResponse])
def get_exit_details(
    record_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _get_record_or_404(db, record_id).exit_details


@router.post("/{record_id}/exit-details", response_model=List[ExitDetailResponse])
def attribute_exits(
    record_id: int,
    data: List[ExitDetailCreate],
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """
    Detalle de salidas por causa. La suma de cantidades debe ser igual a
    las salidas del registro.
    """
    record = _get_record_or_404(db, record_id)
    try:
        return create_exit_details(db, record, [item.model_dump() for item in data])
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

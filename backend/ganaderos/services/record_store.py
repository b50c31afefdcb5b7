"""
Acceso de solo lectura a los registros que consume el reporte de ventas.
"""
from typing import List, Optional, Protocol

from sqlalchemy.orm import Session

from ganaderos.core.causes import ExitCause
from ganaderos.models.movement_record import MovementRecord
from ganaderos.models.exit_detail import ExitDetail


class RecordStore(Protocol):
    def list_movement_records(self) -> List[MovementRecord]:
        ...

    def list_exit_details(self, cause: Optional[ExitCause] = ExitCause.sale) -> List[ExitDetail]:
        ...


class SqlRecordStore:
    """RecordStore backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def list_movement_records(self) -> List[MovementRecord]:
        return (
            self.db.query(MovementRecord)
            .order_by(MovementRecord.date.desc(), MovementRecord.id.desc())
            .all()
        )

    def list_exit_details(self, cause: Optional[ExitCause] = ExitCause.sale) -> List[ExitDetail]:
        query = self.db.query(ExitDetail)
        if cause is not None:
            query = query.filter(ExitDetail.cause == cause.value)
        return query.all()

from datetime import datetime

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from ganaderos.models.base import Base


class ExitDetail(Base):
    """Atribución de parte de las salidas de una fecha a una causa."""

    __tablename__ = "exit_details"
    __table_args__ = (
        CheckConstraint("cause IN ('sale', 'death', 'theft')", name="ck_exit_details_cause"),
    )

    id = Column(Integer, primary_key=True, index=True)
    movement_record_id = Column(
        Integer, ForeignKey("movement_records.id", ondelete="CASCADE"), nullable=False, index=True
    )
    member = Column(String(255), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)

    # "sale", "death" or "theft"
    cause = Column(String(20), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=0)
    notes = Column(String(500), nullable=True)

    # Sale terms as captured at attribution time; the report reads the movement record
    price_per_kg = Column(Numeric(12, 2), nullable=True)
    total_kg = Column(Numeric(12, 2), nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    movement_record = relationship("MovementRecord", back_populates="exit_details")

from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String
from sqlalchemy.orm import relationship

from ganaderos.models.base import Base


class MovementRecord(Base):
    """Entradas/salidas y resumen financiero de un socio en una fecha."""

    __tablename__ = "movement_records"

    id = Column(Integer, primary_key=True, index=True)
    member = Column(String(255), nullable=False, index=True)  # Socio
    date = Column(Date, nullable=False, index=True)

    entries = Column(Integer, nullable=False, default=0)
    exits = Column(Integer, nullable=False, default=0)
    # Guardado, no derivado: normalmente entries - exits
    balance = Column(Integer, nullable=False, default=0)

    total_kg = Column(Numeric(12, 2), nullable=False, default=0)
    price_per_kg = Column(Numeric(12, 2), nullable=False, default=0)
    freight_cost = Column(Numeric(12, 2), nullable=False, default=0)  # Fletes
    commission = Column(Numeric(12, 2), nullable=False, default=0)
    animal_value = Column(Numeric(12, 2), nullable=False, default=0)
    total = Column(Numeric(14, 2), nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=datetime.utcnow)

    exit_details = relationship(
        "ExitDetail",
        back_populates="movement_record",
        cascade="all, delete-orphan",
    )

from __future__ import annotations

from datetime import date as DtDate
from decimal import Decimal

from sqlalchemy import Date, Index, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class HealthRecordORM(Base):
    __tablename__ = "health_records"
    __table_args__ = (Index("idx_health_records_sheep_date", "sheep_id", "date"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    sheep_id: Mapped[str] = mapped_column(String(128), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    weight: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    medication: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[DtDate] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    date_added: Mapped[DtDate] = mapped_column(
        Date, nullable=False, server_default=func.current_date()
    )

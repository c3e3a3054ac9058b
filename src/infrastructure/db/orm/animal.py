from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class AnimalORM(Base):
    __tablename__ = "animals"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    animal_type: Mapped[str] = mapped_column(
        String(16), nullable=False, default="sheep", server_default="sheep"
    )
    gender: Mapped[str] = mapped_column(String(16), nullable=False)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    purchase_cost: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=0, server_default="0"
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default="active", server_default="active"
    )
    addition_type: Mapped[str] = mapped_column(
        String(16), nullable=False, default="purchase", server_default="purchase"
    )
    date_added: Mapped[date] = mapped_column(
        Date, nullable=False, server_default=func.current_date()
    )

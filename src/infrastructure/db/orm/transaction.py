from __future__ import annotations

from datetime import date as DtDate
from decimal import Decimal

from sqlalchemy import Date, Index, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class TransactionORM(Base):
    __tablename__ = "transactions"
    __table_args__ = (Index("idx_transactions_sheep_date", "sheep_id", "date"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    # Plain reference; deleting an animal leaves its transactions in place
    sheep_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    date: Mapped[DtDate] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    date_added: Mapped[DtDate] = mapped_column(
        Date, nullable=False, server_default=func.current_date()
    )

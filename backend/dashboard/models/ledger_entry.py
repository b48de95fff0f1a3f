from datetime import date, datetime

from sqlalchemy import BigInteger, Date, DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column
from dashboard.db.base import Base


class LedgerEntry(Base):
    """Balance of an account as of ``recorded_at``. Rows are only ever inserted."""

    __tablename__ = "ledger_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), index=True)

    # naive UTC
    recorded_at: Mapped[datetime] = mapped_column(DateTime)
    # calendar day of recorded_at in the timezone configured when the row was written
    accrual_day: Mapped[date] = mapped_column(Date)

    balance_cents: Mapped[int] = mapped_column(BigInteger)


Index("ix_ledger_entries_account_recorded", LedgerEntry.account_id, LedgerEntry.recorded_at)

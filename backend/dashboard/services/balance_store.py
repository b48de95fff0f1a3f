from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from dashboard.models.account import Account
from dashboard.models.ledger_entry import LedgerEntry
from dashboard.utils.timezone import as_utc

# largest LIMIT/OFFSET a signed 64-bit driver accepts
MAX_ROW_OFFSET = 2**63 - 1


def get_account(s: Session, user_id: str, for_update: bool = False) -> Account | None:
    q = select(Account).where(Account.uuid == str(user_id))
    if for_update:
        q = q.with_for_update()
    return s.execute(q).scalar_one_or_none()


def latest_entry(s: Session, account_id: int) -> LedgerEntry | None:
    return (
        s.execute(
            select(LedgerEntry)
            .where(LedgerEntry.account_id == account_id)
            .order_by(LedgerEntry.recorded_at.desc(), LedgerEntry.id.desc())
            .limit(1)
        )
        .scalars()
        .first()
    )


def append_entry(
    s: Session,
    account_id: int,
    recorded_at: datetime,
    accrual_day: date,
    balance_cents: int,
) -> LedgerEntry:
    row = LedgerEntry(
        account_id=account_id,
        recorded_at=as_utc(recorded_at).replace(tzinfo=None),
        accrual_day=accrual_day,
        balance_cents=int(balance_cents),
    )
    s.add(row)
    s.flush()
    return row


def page_entries(s: Session, user_id: str, limit: int, offset: int) -> list[LedgerEntry]:
    if offset > MAX_ROW_OFFSET:
        return []
    limit = min(limit, MAX_ROW_OFFSET)
    return list(
        s.execute(
            select(LedgerEntry)
            .join(Account, Account.id == LedgerEntry.account_id)
            .where(Account.uuid == str(user_id))
            .order_by(LedgerEntry.recorded_at.desc(), LedgerEntry.id.desc())
            .limit(limit)
            .offset(offset)
        )
        .scalars()
        .all()
    )

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dashboard.core.config import settings
from dashboard.core.errors import AccountNotFound, StoreError, ValidationError
from dashboard.models.account import Account
from dashboard.models.ledger_entry import LedgerEntry
from dashboard.services import balance_store as store
from dashboard.utils.money import from_cents, to_cents, to_dec
from dashboard.utils.timezone import as_utc, get_timezone, local_day, now_utc

logger = logging.getLogger(__name__)

MAX_TRANSACTION = Decimal("9999")
MAX_TRANSACTION_CENTS = to_cents(MAX_TRANSACTION)
MAX_ALLOWANCE = Decimal("1000000")


@dataclass(frozen=True)
class HistoryEntry:
    balance: float
    recorded_at: datetime


def _clock(now: datetime | None, tz: tzinfo | str | None) -> tuple[datetime, tzinfo]:
    return (as_utc(now) if now is not None else now_utc()), get_timezone(tz)


def _transaction_cents(amount) -> int:
    # checked after rounding so nothing can round onto the limit
    cents = to_cents(to_dec(amount, "amount"))
    if not (-MAX_TRANSACTION_CENTS < cents < MAX_TRANSACTION_CENTS):
        raise ValidationError(f"amount must be between -{MAX_TRANSACTION} and {MAX_TRANSACTION}")
    return cents


def _allowance_cents(allowance) -> int:
    v = to_dec(allowance, "allowance")
    if v < 0:
        raise ValidationError("allowance must be non-negative")
    cents = to_cents(v)
    if cents >= to_cents(MAX_ALLOWANCE):
        raise ValidationError(f"allowance must be below {MAX_ALLOWANCE}")
    return cents


def elapsed_days(last_day: date, now: datetime, tz: tzinfo) -> int:
    """Whole calendar days between ``last_day`` and the day of ``now`` in ``tz``."""
    days = (local_day(now, tz) - last_day).days
    if days < 0:
        logger.warning("clock is behind the ledger (last day %s, now %s); no accrual", last_day, now.isoformat())
        return 0
    return days


def _projected_cents(
    s: Session, account: Account, now: datetime, tz: tzinfo
) -> tuple[int, LedgerEntry | None]:
    last = store.latest_entry(s, account.id)
    if last is None:
        return 0, None
    days = elapsed_days(last.accrual_day, now, tz)
    return int(last.balance_cents) + days * int(account.allowance_cents), last


def get_allowance(s: Session, user_id: str) -> float:
    try:
        account = store.get_account(s, user_id)
    except SQLAlchemyError as e:
        raise StoreError("allowance lookup failed") from e
    if account is None:
        raise AccountNotFound(user_id)
    return from_cents(account.allowance_cents)


def current_balance(
    s: Session,
    user_id: str,
    now: datetime | None = None,
    tz: tzinfo | str | None = None,
) -> float:
    """Last stored balance plus the allowance accrued for each full day since.

    Read only. Days are counted between calendar days in ``tz``, so a partial
    day never accrues.
    """
    now, tz = _clock(now, tz)
    try:
        account = store.get_account(s, user_id)
        if account is None:
            raise AccountNotFound(user_id)
        cents, _ = _projected_cents(s, account, now, tz)
    except SQLAlchemyError as e:
        raise StoreError("balance lookup failed") from e
    return from_cents(cents)


def apply_transaction(
    s: Session,
    user_id: str,
    amount,
    adding: bool = False,
    now: datetime | None = None,
    tz: tzinfo | str | None = None,
) -> float:
    """Settle pending accrual, subtract ``amount`` and append the result.

    ``adding`` flips the sign so the amount is credited. The account row is
    locked for the read-then-append so concurrent writers for one user
    serialize. Returns the new balance.
    """
    delta = _transaction_cents(amount)
    if adding:
        delta = -delta
    now, tz = _clock(now, tz)

    try:
        account = store.get_account(s, user_id, for_update=True)
        if account is None:
            raise AccountNotFound(user_id)

        balance, last = _projected_cents(s, account, now, tz)

        recorded_at = now
        if last is not None and as_utc(last.recorded_at) > now:
            logger.warning("clock skew for %s: stamping entry at previous %s", user_id, last.recorded_at)
            recorded_at = as_utc(last.recorded_at)

        new_balance = balance - delta
        store.append_entry(s, account.id, recorded_at, local_day(recorded_at, tz), new_balance)
        s.commit()
    except AccountNotFound:
        s.rollback()
        raise
    except SQLAlchemyError as e:
        s.rollback()
        logger.exception("transaction for %s failed", user_id)
        raise StoreError("could not record transaction") from e

    logger.info("settled %s: delta=%d cents balance=%d cents", user_id, -delta, new_balance)
    return from_cents(new_balance)


def list_history(
    s: Session,
    user_id: str,
    page_size: int | None = None,
    page: int = 0,
) -> list[HistoryEntry]:
    if page_size is None:
        page_size = settings.bank_history_length
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
        raise ValidationError("page size must be a positive integer")
    if isinstance(page, bool) or not isinstance(page, int) or page < 0:
        raise ValidationError("page must be a non-negative integer")

    try:
        rows = store.page_entries(s, user_id, limit=page_size, offset=page * page_size)
    except SQLAlchemyError as e:
        raise StoreError("history lookup failed") from e

    return [HistoryEntry(balance=from_cents(r.balance_cents), recorded_at=as_utc(r.recorded_at)) for r in rows]


def set_allowance(s: Session, user_id: str, allowance) -> None:
    # pending accrual is not settled; the new rate covers every day since the last entry
    cents = _allowance_cents(allowance)
    try:
        account = store.get_account(s, user_id, for_update=True)
        if account is None:
            raise AccountNotFound(user_id)
        account.allowance_cents = cents
        s.add(account)
        s.commit()
    except AccountNotFound:
        s.rollback()
        raise
    except SQLAlchemyError as e:
        s.rollback()
        logger.exception("allowance update for %s failed", user_id)
        raise StoreError("could not update allowance") from e

    logger.info("allowance for %s set to %d cents/day", user_id, cents)


def open_ledger(s: Session, account: Account, now: datetime | None = None, tz: tzinfo | str | None = None) -> LedgerEntry:
    """Opening zero-balance entry so accrual starts on the day the account was created."""
    now, tz = _clock(now, tz)
    return store.append_entry(s, account.id, now, local_day(now, tz), 0)

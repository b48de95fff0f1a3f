from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dashboard.models.account import Account
from dashboard.services import balance_store as store
from dashboard.services.ledger import open_ledger

logger = logging.getLogger(__name__)


def find_by_username(s: Session, username: str) -> Account | None:
    return s.execute(select(Account).where(Account.username == username)).scalar_one_or_none()


def find_by_google_id(s: Session, google_id: str) -> Account | None:
    return s.execute(select(Account).where(Account.google_id == google_id)).scalar_one_or_none()


def create_account(
    s: Session,
    username: str | None = None,
    password_hash: str | None = None,
    google_id: str | None = None,
    now: datetime | None = None,
    tz: tzinfo | str | None = None,
) -> Account:
    account = Account(
        uuid=str(uuid4()),
        username=username,
        password_hash=password_hash,
        google_id=google_id,
        allowance_cents=0,
        logged_in=True,
    )
    try:
        s.add(account)
        s.flush()
        open_ledger(s, account, now=now, tz=tz)
        s.commit()
    except IntegrityError:
        # username or google id claimed by a concurrent signup
        s.rollback()
        raise
    s.refresh(account)
    logger.info("created account %s", account.uuid)
    return account


def set_logged_in(s: Session, user_id: str, logged_in: bool) -> bool:
    account = store.get_account(s, user_id)
    if account is None:
        return False
    account.logged_in = logged_in
    s.add(account)
    s.commit()
    return True


def is_logged_in(s: Session, user_id: str) -> bool:
    account = store.get_account(s, user_id)
    return bool(account is not None and account.logged_in)

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from dashboard.core.errors import ValidationError
from dashboard.models.account import Account
from dashboard.services.balance_store import append_entry
from dashboard.services.ledger import current_balance, list_history
from dashboard.utils.money import to_cents, to_dec
from dashboard.utils.timezone import get_timezone, local_day


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def _mk_account(session, allowance="0") -> Account:
    account = Account(
        uuid=str(uuid4()),
        username=f"user-{uuid4().hex[:10]}",
        allowance_cents=to_cents(to_dec(allowance)),
        logged_in=True,
    )
    session.add(account)
    session.commit()
    return account


def _add_entries(session, account: Account, start: datetime, n: int):
    tz = get_timezone("UTC")
    for i in range(n):
        ts = start + timedelta(hours=i)
        append_entry(session, account.id, ts, local_day(ts, tz), i * 100)
    session.commit()


def test_pages_of_thirty_over_forty_five_entries(session):
    account = _mk_account(session)
    _add_entries(session, account, _utc(2024, 1, 1), 45)

    first = list_history(session, account.uuid, 30, 0)
    second = list_history(session, account.uuid, 30, 1)
    third = list_history(session, account.uuid, 30, 2)

    assert len(first) == 30
    assert len(second) == 15
    assert third == []

    assert first[0].balance == 44.0
    assert first[0].recorded_at == _utc(2024, 1, 1) + timedelta(hours=44)
    assert second[-1].balance == 0.0

    stamps = [h.recorded_at for h in first + second]
    assert stamps == sorted(stamps, reverse=True)


def test_default_page_size_comes_from_settings(session):
    account = _mk_account(session)
    _add_entries(session, account, _utc(2024, 1, 1), 31)

    assert len(list_history(session, account.uuid)) == 30


def test_history_is_raw_and_does_not_project_accrual(session):
    account = _mk_account(session, allowance="5")
    _add_entries(session, account, _utc(2024, 1, 1), 1)
    now = _utc(2024, 1, 11)

    assert current_balance(session, account.uuid, now=now, tz="UTC") == 50.0
    assert [h.balance for h in list_history(session, account.uuid, 30, 0)] == [0.0]


def test_history_is_scoped_to_one_user(session):
    a = _mk_account(session)
    b = _mk_account(session)
    _add_entries(session, a, _utc(2024, 1, 1), 3)
    _add_entries(session, b, _utc(2024, 1, 1), 5)

    assert len(list_history(session, a.uuid, 30, 0)) == 3
    assert len(list_history(session, b.uuid, 30, 0)) == 5


def test_unknown_user_or_no_entries_is_empty(session):
    account = _mk_account(session)

    assert list_history(session, account.uuid, 30, 0) == []
    assert list_history(session, str(uuid4()), 30, 0) == []


@pytest.mark.parametrize("page_size, page", [(0, 0), (-1, 0), (30, -1), (30, "1"), (30, 1.5), (True, 0)])
def test_bad_paging_arguments_are_rejected(session, page_size, page):
    account = _mk_account(session)

    with pytest.raises(ValidationError):
        list_history(session, account.uuid, page_size, page)


def test_page_far_past_the_end_is_empty(session):
    account = _mk_account(session)
    _add_entries(session, account, _utc(2024, 1, 1), 3)

    assert list_history(session, account.uuid, 30, 10**18) == []
    assert list_history(session, account.uuid, 10**19, 0)[0].balance == 2.0

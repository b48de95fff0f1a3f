from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from dashboard.api.deps import db, current_user, require_owner
from dashboard.core.config import settings
from dashboard.schemas.bank import BankAccountOut, HistoryEntryOut, SetAllowanceIn, TransactIn, TransactOut
from dashboard.services.ledger import apply_transaction, current_balance, get_allowance, list_history, set_allowance
from dashboard.utils.timezone import iso_z

router = APIRouter(prefix="/api", tags=["bank"])


@router.get("/bankaccount", response_model=BankAccountOut)
def bank_account(
    uuid: UUID = Query(...),
    page: int = Query(0, ge=0),
    s: Session = Depends(db),
    u=Depends(current_user),
):
    user_id = require_owner(u, uuid)
    allowance = get_allowance(s, user_id)
    balance = current_balance(s, user_id)
    hist = list_history(s, user_id, settings.bank_history_length, page)
    return BankAccountOut(
        balance=balance,
        allowance=allowance,
        history=[HistoryEntryOut(balance=h.balance, iso_timestamp=iso_z(h.recorded_at)) for h in hist],
    )


@router.post("/banktransact", response_model=TransactOut)
def bank_transact(body: TransactIn, s: Session = Depends(db), u=Depends(current_user)):
    user_id = require_owner(u, body.uuid)
    new_balance = apply_transaction(s, user_id, body.amount, adding=body.adding)
    return TransactOut(new_balance=new_balance)


@router.post("/setallowance")
def set_allowance_route(body: SetAllowanceIn, s: Session = Depends(db), u=Depends(current_user)):
    user_id = require_owner(u, body.uuid)
    set_allowance(s, user_id, body.allowance)
    return Response(status_code=200)

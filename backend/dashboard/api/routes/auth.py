from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from dashboard.api.deps import db, current_user, require_owner
from dashboard.schemas.auth import LoginIn, LoginOut
from dashboard.core.security import hash_password, verify_password, create_access_token
from dashboard.services.accounts import create_account, find_by_google_id, find_by_username, is_logged_in, set_logged_in

router = APIRouter(prefix="/api", tags=["auth"])

def _token_out(uuid: str) -> LoginOut:
    return LoginOut(uuid=uuid, access_token=create_access_token(sub=uuid))

@router.post("/login", response_model=LoginOut)
def login(body: LoginIn, s: Session = Depends(db)):
    existing = find_by_username(s, body.username)
    if existing is not None:
        if body.signing_up:
            raise HTTPException(status_code=400, detail="this username is taken")
        if not verify_password(body.password, existing.password_hash):
            raise HTTPException(status_code=400, detail="invalid username/password")
        set_logged_in(s, existing.uuid, True)
        return _token_out(existing.uuid)

    if not body.signing_up:
        raise HTTPException(status_code=400, detail="invalid username/password")

    try:
        account = create_account(s, username=body.username, password_hash=hash_password(body.password))
    except IntegrityError:
        raise HTTPException(status_code=400, detail="this username is taken")
    return _token_out(account.uuid)

@router.get("/googlelogin", response_model=LoginOut)
def google_login(googleid: str | None = Query(None), s: Session = Depends(db)):
    googleid = (googleid or "").strip()
    if not googleid:
        raise HTTPException(status_code=400, detail="google id could not be read")
    account = find_by_google_id(s, googleid)
    if account is None:
        try:
            account = create_account(s, google_id=googleid)
        except IntegrityError:
            account = find_by_google_id(s, googleid)
            if account is None:
                raise
            set_logged_in(s, account.uuid, True)
    else:
        set_logged_in(s, account.uuid, True)
    return _token_out(account.uuid)

@router.get("/logout")
def logout(uuid: UUID = Query(...), s: Session = Depends(db), u=Depends(current_user)):
    set_logged_in(s, require_owner(u, uuid), False)
    return Response(status_code=200)

@router.get("/loggedin")
def logged_in(uuid: UUID = Query(...), s: Session = Depends(db)):
    if not is_logged_in(s, str(uuid)):
        raise HTTPException(status_code=400, detail="not logged in")
    return Response(status_code=200)

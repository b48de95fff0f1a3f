from uuid import UUID

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWTError
from dashboard.db.session import SessionLocal
from dashboard.core.security import decode_token

bearer = HTTPBearer()

def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()

def current_user(creds: HTTPAuthorizationCredentials = Depends(bearer)):
    try:
        return decode_token(creds.credentials)
    except PyJWTError:
        raise HTTPException(status_code=401, detail="invalid_token")

def require_owner(u: dict, uuid: UUID | str) -> str:
    user_id = str(uuid)
    if u.get("sub") != user_id:
        raise HTTPException(status_code=403, detail="forbidden")
    return user_id

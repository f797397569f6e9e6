from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from videowalker.core.security import (
    ADMIN_SUBJECT_PREFIX,
    create_access_token,
    decode_access_token,
    parse_admin_subject,
    verify_password,
)
from videowalker.db.session import get_db
from videowalker.models import AdminUser
from videowalker.schemas.auth import LoginIn, TokenOut

router = APIRouter(prefix="/api/auth", tags=["Admin Auth"])

security = HTTPBearer(auto_error=False)


# ============================================================
# Dependencies
# ============================================================
def _admin_from_token(db: Session, token: str) -> AdminUser:
    try:
        payload = decode_access_token(token)
        admin_id = parse_admin_subject(payload.get("sub", ""))
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token.")

    admin = db.query(AdminUser).filter(AdminUser.id == admin_id, AdminUser.is_active == True).first()
    if not admin:
        raise HTTPException(status_code=401, detail="Admin not found or inactive.")
    return admin


def require_admin(
    creds: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> AdminUser:
    if creds is None or not creds.credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _admin_from_token(db, creds.credentials)


def optional_admin(
    creds: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[AdminUser]:
    """Public routes that show more to an admin. A bad token is still a 401."""
    if creds is None or not creds.credentials:
        return None
    return _admin_from_token(db, creds.credentials)


# ============================================================
# LOGIN
# ============================================================
@router.post("/login", response_model=TokenOut)
def login(data: LoginIn, db: Session = Depends(get_db)):
    username = data.username.strip()
    admin = db.query(AdminUser).filter(AdminUser.username == username, AdminUser.is_active == True).first()

    if not admin or not verify_password(data.password, admin.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )

    token = create_access_token(subject=f"{ADMIN_SUBJECT_PREFIX}{admin.id}")

    return TokenOut(access_token=token, admin_id=admin.id, username=admin.username)

from datetime import timedelta
from typing import Optional

from fastapi import Depends, HTTPException, Request, Response
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.admin_user import ADMIN_ROLES, AdminUser
from app.utils.timeutils import utcnow


def create_access_token(data: dict, expires_hours: Optional[int] = None) -> str:
    to_encode = data.copy()
    hours = expires_hours if expires_hours is not None else settings.ADMIN_TOKEN_EXPIRE_HOURS
    to_encode.update({"exp": utcnow() + timedelta(hours=hours)})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    # raises JWTError on bad signature / expiry
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])


def admin_token_claims(user: AdminUser) -> dict:
    return {
        "userId": user.id,
        "email": user.email,
        "role": user.role,
        "department": user.department,
    }


def set_admin_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.ADMIN_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.ADMIN_TOKEN_EXPIRE_HOURS * 60 * 60,
    )


def clear_admin_cookie(response: Response) -> None:
    response.set_cookie(
        key=settings.ADMIN_COOKIE_NAME,
        value="",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=0,
    )


def get_current_admin(request: Request, db: Session = Depends(get_db)) -> AdminUser:
    token = request.cookies.get(settings.ADMIN_COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=401, detail="No token provided")

    try:
        payload = decode_access_token(token)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")

    user_id = payload.get("userId")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token")

    user = (
        db.query(AdminUser)
        .filter(AdminUser.id == user_id, AdminUser.is_active.is_(True))
        .first()
    )
    if not user:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return user


def require_section_admin(user: AdminUser = Depends(get_current_admin)) -> AdminUser:
    if user.role not in ADMIN_ROLES:
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    return user


def scoped_section(user: AdminUser) -> Optional[str]:
    """Section a user is restricted to, or None when they may see every section."""
    if user.role == "section_admin" and user.department:
        return user.department
    return None


def ensure_section_access(user: AdminUser, section: Optional[str], message: str) -> None:
    scope = scoped_section(user)
    if scope is not None and section != scope:
        raise HTTPException(status_code=403, detail=message)

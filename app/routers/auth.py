from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from jose import JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.admin_user import AdminSession, AdminUser
from app.schemas.admin_user import (
    AdminAuthOut,
    AdminLoginIn,
    AdminUserOut,
    SectionAdminSignupIn,
)
from app.utils.auth import (
    admin_token_claims,
    clear_admin_cookie,
    create_access_token,
    decode_access_token,
    get_current_admin,
    set_admin_cookie,
)
from app.utils.hashing import check_password_rules, hash_password, verify_password
from app.utils.sections import is_valid_section
from app.utils.timeutils import utcnow
from app.utils.validators import is_valid_email

import logging
logger = logging.getLogger("app.auth")


router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _start_session(db: Session, user: AdminUser, request: Request) -> str:
    """Bump login stats, record the session row and return the cookie token."""
    now = utcnow()
    user.last_login = now
    user.login_count = (user.login_count or 0) + 1

    token = create_access_token(admin_token_claims(user))
    db.add(AdminSession(
        user_id=user.id,
        session_token=token,
        expires_at=now + timedelta(hours=settings.ADMIN_TOKEN_EXPIRE_HOURS),
        ip_address=(
            request.headers.get("x-forwarded-for")
            or request.headers.get("x-real-ip")
            or (request.client.host if request.client else "unknown")
        ),
        user_agent=request.headers.get("user-agent", "unknown"),
    ))
    db.commit()
    db.refresh(user)
    return token


@router.post("/admin-login", response_model=AdminAuthOut)
def admin_login(
    body: AdminLoginIn,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    if not body.email or not body.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    user = (
        db.query(AdminUser)
        .filter(AdminUser.email == body.email.strip().lower(), AdminUser.is_active.is_(True))
        .first()
    )
    if not user or not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = _start_session(db, user, request)
    set_admin_cookie(response, token)
    logger.info("Admin login %s (%s)", user.email, user.role)
    return {"user": user}


@router.post("/section-admin-signup", response_model=AdminAuthOut)
def section_admin_signup(
    body: SectionAdminSignupIn,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    if not body.name or not body.email or not body.section or not body.password:
        raise HTTPException(
            status_code=400,
            detail="All fields are required: name, email, section, and password",
        )
    if not is_valid_email(body.email):
        raise HTTPException(status_code=400, detail="Please enter a valid email address")
    if not is_valid_section(body.section):
        raise HTTPException(
            status_code=400,
            detail="Section must be in format '{batch}_{section_letter}' (e.g., '63_G')",
        )
    check_password_rules(body.password)
    if len(body.name.strip()) < 2:
        raise HTTPException(status_code=400, detail="Name must be at least 2 characters long")

    email = body.email.strip().lower()
    if db.query(AdminUser.id).filter(AdminUser.email == email).first():
        raise HTTPException(status_code=400, detail="An account with this email already exists")

    user = AdminUser(
        email=email,
        password_hash=hash_password(body.password),
        full_name=body.name.strip(),
        role="section_admin",
        department=body.section,
        is_active=True,
        login_count=0,
    )
    db.add(user)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="An account with this email already exists")

    token = _start_session(db, user, request)
    set_admin_cookie(response, token)
    logger.info("Section admin signup %s for %s", user.email, user.department)
    return {
        "message": "Account created successfully! Redirecting to dashboard...",
        "user": user,
    }


@router.post("/logout")
def logout(request: Request, response: Response, db: Session = Depends(get_db)):
    token = request.cookies.get(settings.ADMIN_COOKIE_NAME)
    if token:
        try:
            payload = decode_access_token(token)
        except JWTError:
            payload = None
        if payload and payload.get("userId"):
            (
                db.query(AdminSession)
                .filter(AdminSession.user_id == payload["userId"], AdminSession.is_active.is_(True))
                .update({AdminSession.is_active: False}, synchronize_session=False)
            )
            db.commit()

    clear_admin_cookie(response)
    return {"success": True, "message": "Logged out successfully"}


@router.get("/me", response_model=AdminUserOut)
def get_me(current_user: AdminUser = Depends(get_current_admin)):
    return current_user

import uuid
from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.admin_user import AdminUser
from app.schemas.admin_user import ProfileResultOut, ProfileUpdateIn
from app.utils.auth import get_current_admin

import logging
logger = logging.getLogger("app.profile")


router = APIRouter(prefix="/api/profile", tags=["Profile"])

ALLOWED_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}


def avatar_dir() -> Path:
    path = Path(settings.STATIC_DIR) / "avatars"
    path.mkdir(parents=True, exist_ok=True)
    return path


@router.get("", response_model=ProfileResultOut)
def get_my_profile(user: AdminUser = Depends(get_current_admin)):
    return {"profile": user}


@router.put("", response_model=ProfileResultOut)
def update_my_profile(
    body: ProfileUpdateIn,
    db: Session = Depends(get_db),
    user: AdminUser = Depends(get_current_admin),
):
    data = body.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(user, k, v)

    db.commit()
    db.refresh(user)
    return {"profile": user}


@router.post("/photo", response_model=ProfileResultOut)
async def upload_my_photo(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    user: AdminUser = Depends(get_current_admin),
):
    suffix = ALLOWED_CONTENT_TYPES.get(file.content_type or "")
    if suffix is None:
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Only JPEG, PNG, WebP, and GIF are allowed.",
        )

    content = await file.read()
    max_size = settings.MAX_PHOTO_SIZE_MB * 1024 * 1024
    if len(content) > max_size:
        raise HTTPException(
            status_code=400,
            detail=f"File size too large. Maximum size is {settings.MAX_PHOTO_SIZE_MB}MB.",
        )

    filename = f"{user.id}_{uuid.uuid4().hex}{suffix}"
    (avatar_dir() / filename).write_bytes(content)

    user.profile_photo_url = f"/static/avatars/{filename}"
    db.commit()
    db.refresh(user)
    logger.info("Profile photo updated for %s", user.email)
    return {"profile": user}

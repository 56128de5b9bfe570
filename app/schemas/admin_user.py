from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class AdminLoginIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class SectionAdminSignupIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    section: Optional[str] = None
    password: Optional[str] = None


class AdminUserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    full_name: Optional[str] = None
    role: str
    department: Optional[str] = None


class AdminAuthOut(BaseModel):
    success: bool = True
    message: Optional[str] = None
    user: AdminUserOut


class ProfileOut(AdminUserOut):
    phone: Optional[str] = None
    profile_photo_url: Optional[str] = None
    bio: Optional[str] = None
    address: Optional[str] = None
    website_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    last_login: Optional[datetime] = None
    login_count: int = 0
    created_at: datetime
    updated_at: datetime


class ProfileUpdateIn(BaseModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    address: Optional[str] = None
    website_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None


class ProfileResultOut(BaseModel):
    success: bool = True
    profile: ProfileOut

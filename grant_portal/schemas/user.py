"""
User schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class UserBase(BaseModel):
    """Base user schema"""
    username: str = Field(..., min_length=3, max_length=50)
    full_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255)


class UserRegister(UserBase):
    """Schema for self-registration of applicants"""
    password: str = Field(..., min_length=6, max_length=72)
    role: str = Field(default="applicant", pattern="^(applicant|donor)$")
    applicant_type_id: Optional[int] = None


class UserUpdate(BaseModel):
    """Schema for updating user (admin only)"""
    full_name: Optional[str] = Field(None, max_length=100)
    role: Optional[str] = Field(None, pattern="^(administrator|applicant|reviewer|donor)$")
    is_active: Optional[bool] = None
    is_verified: Optional[bool] = None


class UserResponse(UserBase):
    """Schema for user response"""
    id: int
    role: str
    applicant_type_id: Optional[int]
    is_verified: bool
    is_active: bool
    created_at: Optional[datetime]
    last_login_at: Optional[datetime]
    applicant_type_name: Optional[str] = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    """Schema for token response"""
    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    """Schema for token data"""
    username: Optional[str] = None
    role: Optional[str] = None

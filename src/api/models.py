"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from domain.model.user import AuthProvider, AuthResult, User


class RegisterRequest(BaseModel):
    """Request model for user registration."""
    email: EmailStr
    password: str = Field(..., min_length=8, description="User password (min 8 characters)")
    name: str = Field(..., min_length=1, description="Display name")
    profile_picture: Optional[str] = Field(None, description="Profile picture URL")


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class UpdateUserRequest(BaseModel):
    """Request model for profile updates. Omitted fields are left unchanged."""
    name: Optional[str] = Field(None, min_length=1, description="Display name")
    profile_picture: Optional[str] = Field(None, description="Profile picture URL")
    is_active: Optional[bool] = Field(None, description="False deactivates the account")


class UserResponse(BaseModel):
    """Public view of a user. Carries no password hash or one-time tokens."""
    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User email")
    name: str = Field(..., description="Display name")
    profile_picture: Optional[str] = Field(None, description="Profile picture URL")
    auth_provider: AuthProvider = Field(AuthProvider.LOCAL, description="Authentication provider")
    is_active: bool = Field(True, description="Whether the account may sign in")
    email_verified: bool = Field(False, description="Whether the email was verified")
    created_at: datetime = Field(..., description="Account creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
    last_login: Optional[datetime] = Field(None, description="Last login timestamp")

    @classmethod
    def from_domain(cls, user: User) -> 'UserResponse':
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            profile_picture=user.profile_picture,
            auth_provider=user.auth_provider,
            is_active=user.is_active,
            email_verified=user.email_verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_login=user.last_login,
        )


class AuthResponse(BaseModel):
    """Response model for register and login."""
    user: UserResponse
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")

    @classmethod
    def from_result(cls, result: AuthResult) -> 'AuthResponse':
        return cls(user=UserResponse.from_domain(result.user), access_token=result.access_token)


class MessageResponse(BaseModel):
    """Generic message response schema."""
    message: str = Field(..., description="Response message")

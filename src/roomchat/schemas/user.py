"""User-related Pydantic schemas."""

import re

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# At least ten characters drawn from letters, digits and @$!%*?&, with one of each class.
PASSWORD_PATTERN = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{10,}$"
)


class SignupRequest(BaseModel):
    """Schema for account registration."""

    username: str = Field(
        ...,
        min_length=1,
        max_length=20,
        pattern=r"^[A-Za-z0-9]+$",
        description="Alphanumeric username (max 20 characters)",
    )
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., description="Password meeting the complexity policy")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Require lowercase, uppercase, digit and symbol, ten characters minimum."""
        if not PASSWORD_PATTERN.match(v):
            raise ValueError(
                "Password must be at least 10 characters and include lowercase, "
                "uppercase, a digit and one of @$!%*?&"
            )
        return v


class UserResponse(BaseModel):
    """Public account information."""

    username: str
    email: str
    user_type: str

    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    username: str = Field(..., min_length=1, max_length=20, pattern=r"^[A-Za-z0-9]+$")
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(..., description="Token type (typically 'bearer')")

"""User-related Pydantic schemas."""

from pydantic import Field, field_validator

from .common import APIModel


class RegisterRequest(APIModel):
    """Schema for account registration."""

    firstname: str = Field(..., min_length=1, max_length=100)
    lastname: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=320, description="Unique login email")
    password: str = Field(..., min_length=1, max_length=256)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Require an ``@`` and store the address trimmed and lower-cased."""
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Email address must contain '@'")
        return v


class LoginRequest(APIModel):
    """Schema for login submissions."""

    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=256)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserResponse(APIModel):
    """Public profile of a user. The password digest is never included."""

    id: int = Field(..., alias="_id")
    firstname: str
    lastname: str
    email: str


class AuthResponse(UserResponse):
    """Registration/login response carrying a bearer token."""

    token: str = Field(..., description="JWT bearer token valid for seven days")

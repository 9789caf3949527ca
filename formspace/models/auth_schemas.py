"""Pydantic schemas for authentication and user profiles."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from formspace.components.workspace.models import Theme


class SignupRequest(BaseModel):
    """User registration request."""

    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    """User login request."""

    email: EmailStr
    password: str


class UserResponse(BaseModel):
    """User data response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    workspace_id: str | None = None
    theme: Theme = Theme.dark
    created_at: int


class Token(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class UpdateProfileRequest(BaseModel):
    """Partial profile update. Omitted fields are left unchanged."""

    username: str | None = Field(default=None, min_length=1, max_length=50)
    email: EmailStr | None = None


class UpdateThemeRequest(BaseModel):
    """Display theme update."""

    theme: Theme

"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRegister(BaseModel):
    """User registration request."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class GoogleLogin(BaseModel):
    """Google sign-in request.

    The ID token has been sent under several names by different client
    library versions, so all of them are accepted.
    """

    credential: str | None = None
    id_token: str | None = None
    tokenId: str | None = None  # noqa: N815

    @property
    def token(self) -> str | None:
        return self.credential or self.id_token or self.tokenId


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str | None
    email: str


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    success: bool = True
    message: str
    token: str
    user: UserResponse


class TokenIdentity(BaseModel):
    """Identity resolved from a bearer token."""

    id: int
    email: str


class VerifyResponse(BaseModel):
    """Token verification response."""

    success: bool = True
    user: TokenIdentity

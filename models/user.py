from typing import Annotated, Optional

from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator

# bcrypt only uses the first 72 bytes of a password and refuses longer input
MAX_PASSWORD_BYTES = 72


class User(BaseModel):
    """A user as returned to clients; the password hash never leaves the database layer"""
    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    date: Optional[str] = None


class TokenUser(BaseModel):
    """Identity resolved from a verified token"""
    user_id: str


class RegisterRequest(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, password: str) -> str:
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return password


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

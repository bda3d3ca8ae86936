"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.model.question import Question
from domain.model.user import Credentials, Registration, User

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def _check_password_length(v: str) -> str:
    if len(v.encode('utf-8')) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return v


# Auth Models
class RegisterRequest(BaseModel):
    """Request model for user registration.

    Field aliases match the JSON keys existing clients already send.
    """
    model_config = ConfigDict(populate_by_name=True)

    email: str = ""
    password: str = Field(..., min_length=1)
    name: str = ""
    phone_number: str = Field("", alias="phonenumber")
    profile_pic: str = Field("", alias="profilepic")
    username: str = ""
    user_type: str = Field("", alias="usertype")
    date_of_birth: str = Field("", alias="dob")
    gender: str = ""

    @field_validator('password')
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return _check_password_length(v)

    def to_registration(self) -> Registration:
        return Registration(
            email=self.email,
            password=self.password,
            name=self.name,
            phone_number=self.phone_number,
            profile_pic=self.profile_pic,
            username=self.username,
            user_type=self.user_type,
            date_of_birth=self.date_of_birth,
            gender=self.gender,
        )


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: str
    password: str

    @field_validator('password')
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return _check_password_length(v)

    def to_credentials(self) -> Credentials:
        return Credentials(email=self.email, password=self.password)


class AuthResponse(BaseModel):
    """Response model for authentication."""
    token: str
    status: str = "success"


class UserResponse(BaseModel):
    """Public view of a user (no password digest)."""
    id: str = Field(..., description="User ID (MongoDB _id)")
    name: str
    email: str
    phone_number: str = ""
    profile_pic: str = ""
    username: str = ""
    user_type: str = ""
    date_of_birth: str = ""
    gender: str = ""
    created_at: Optional[datetime] = Field(None, description="Account creation timestamp")

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(**user.to_public())


# Phone OTP Models
class OTPRequest(BaseModel):
    """Request model for sending a one-time code."""
    model_config = ConfigDict(populate_by_name=True)

    phone_number: str = Field(..., min_length=1, alias="phoneNumber")


class VerifyOTPRequest(BaseModel):
    """Request model for checking a one-time code."""
    user: OTPRequest
    code: str = Field(..., min_length=1)


class OTPResponse(BaseModel):
    """Envelope used by the phone OTP endpoints."""
    status: int
    message: str
    data: Any = None
    token: Optional[str] = None


# Question Models
class QuestionResponse(BaseModel):
    """Response model for a catalog question."""
    id: str
    name: str
    category: str = ""
    level: str = ""
    link: str = ""
    video_url: str = ""
    number: int = 0

    @classmethod
    def from_domain(cls, question: Question) -> "QuestionResponse":
        return cls(
            id=question.id,
            name=question.name,
            category=question.category,
            level=question.level,
            link=question.link,
            video_url=question.video_url,
            number=question.number,
        )

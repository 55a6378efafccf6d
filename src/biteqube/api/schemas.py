"""Request bodies for the HTTP API."""

from pydantic import BaseModel, Field


class SignUpRequest(BaseModel):
    email: str
    password: str
    confirm_password: str | None = None
    name: str | None = None


class SignInRequest(BaseModel):
    email: str
    password: str


class PasswordResetRequest(BaseModel):
    email: str


class UpdatePasswordRequest(BaseModel):
    password: str
    confirm_password: str


class UpdateNameRequest(BaseModel):
    name: str


class ThemeRequest(BaseModel):
    theme: str


class ShoppingItemsRequest(BaseModel):
    items: list[str] = Field(default_factory=list)


class CheckedRequest(BaseModel):
    is_checked: bool


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)
    conversation_id: str | None = None


class CheckoutRequest(BaseModel):
    plan: str | None = None


class TrackVisitRequest(BaseModel):
    session_id: str | None = None

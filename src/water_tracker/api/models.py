"""Request models for the HTTP API."""

from pydantic import BaseModel, Field


class SignUpRequest(BaseModel):
    username: str = ""
    email: str = ""
    password: str = ""


class SignInRequest(BaseModel):
    email: str = Field(max_length=128)
    password: str = Field(min_length=8, max_length=32)


class LogActivityRequest(BaseModel):
    activity_id: int

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)]


class RegisterRequestDTO(BaseModel):
    username: Username
    # hashed exactly as typed; only empty values are refused, bcrypt reads the first 72 bytes
    password: str = Field(min_length=1)


class LoginRequestDTO(BaseModel):
    username: Username
    password: str = Field(min_length=1)


class MessageDTO(BaseModel):
    message: str


class LoginSuccessDTO(BaseModel):
    message: str = "Login successful"
    token: str

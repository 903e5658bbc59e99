from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LoginUser(BaseModel):
    username: str
    role: str


class LoginResponse(BaseModel):
    success: bool
    user: Optional[LoginUser] = None
    message: Optional[str] = None

# gagyebu/schemas/user.py
from typing import Optional
from pydantic import BaseModel, EmailStr

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class SignupRequest(BaseModel):
    email: EmailStr
    password: str
    password_confirm: str

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int

class AuthErrorPage(BaseModel):
    title: str
    message: str
    login_url: str = "/auth/login"
    error: Optional[str] = None

from pydantic import BaseModel
from typing import Optional

# Fields are optional so missing values reach the route and get the same
# 400 messages as malformed ones.

# OTP Request
class SendOtpRequest(BaseModel):
    phone: Optional[str] = None

# Sign Up
class SignupRequest(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    otp: Optional[str] = None

# Sign In
class SigninRequest(BaseModel):
    phone: Optional[str] = None
    otp: Optional[str] = None

class MessageResponse(BaseModel):
    success: bool
    message: str

class UserResponse(BaseModel):
    id: str
    name: str
    phone: str

class AuthResponse(BaseModel):
    success: bool
    message: str
    user: UserResponse

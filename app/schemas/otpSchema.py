from typing import Optional
from pydantic import BaseModel


class SendOtpRequest(BaseModel):
    email: Optional[str] = None


class VerifyOtpRequest(BaseModel):
    email: Optional[str] = None
    otp: Optional[str] = None

    class Config:
        coerce_numbers_to_str = True


class SendOtpResponse(BaseModel):
    success: bool
    message: Optional[str] = None


class VerifyOtpResponse(BaseModel):
    verified: bool
    message: Optional[str] = None

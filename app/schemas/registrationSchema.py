from typing import Optional
from pydantic import BaseModel


class StudentRegistrationRequest(BaseModel):
    """Fields of the Student Pass form. Presence is checked by the writer, not here."""

    name: Optional[str] = None
    regNo: Optional[str] = None
    department: Optional[str] = None
    year: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    class Config:
        coerce_numbers_to_str = True


class GuestRegistrationRequest(BaseModel):
    """Fields of the Guest Pass form."""

    name: Optional[str] = None
    rollNo: Optional[str] = None
    college: Optional[str] = None
    department: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    class Config:
        coerce_numbers_to_str = True


class PaymentStatusUpdateRequest(BaseModel):
    email: Optional[str] = None
    transactionId: Optional[str] = None
    paymentStatus: Optional[str] = None

    class Config:
        coerce_numbers_to_str = True


class RegistrationResponse(BaseModel):
    success: bool
    message: Optional[str] = None

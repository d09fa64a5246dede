from typing import List, Optional
from pydantic import BaseModel


class PassField(BaseModel):
    name: str
    label: str


class PassType(BaseModel):
    type: str
    fields: List[PassField]


class TicketInfoResponse(BaseModel):
    event: str
    price: int
    currency: str
    passes: List[PassType]


class PaymentQRResponse(BaseModel):
    upiId: str
    payeeName: str
    amount: int
    currency: str
    paymentUri: str
    qrCode: str
    email: Optional[str] = None

from typing import Optional
from fastapi import APIRouter, Depends, Query
import logging

from app.constants.constants import FIELD_LABELS, LEDGER_FIELDS
from app.core.config import Settings
from app.core.exceptions import RegistrationAppError
from app.core.services import get_payment_qr, get_settings
from app.schemas.ticketSchema import PaymentQRResponse, TicketInfoResponse
from app.services.PaymentQRCodeGenerator import PaymentQRCodeGenerator
from app.utils.responses import error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tickets"])


@router.get("/ticket-info", response_model=TicketInfoResponse)
async def ticket_info(config: Settings = Depends(get_settings)):
    """Price of the pass and the fields each registration form asks for."""
    return {
        "event": config.EVENT_NAME,
        "price": config.TICKET_PRICE,
        "currency": config.TICKET_CURRENCY,
        "passes": [
            {
                "type": ledger.value,
                "fields": [{"name": name, "label": FIELD_LABELS[name]} for name in fields],
            }
            for ledger, fields in LEDGER_FIELDS.items()
        ],
    }


@router.get("/payment-qr", response_model=PaymentQRResponse, response_model_exclude_none=True)
async def payment_qr(
    email: Optional[str] = Query(default=None),
    generator: PaymentQRCodeGenerator = Depends(get_payment_qr),
):
    """UPI payment link for the pass and its QR code as a PNG data URI."""
    try:
        details = generator.payment_details(email.strip() if email else None)
    except RegistrationAppError as e:
        logger.error(f"Payment QR unavailable: {e.message}")
        return error_response(e)
    if email:
        details["email"] = email.strip()
    return details

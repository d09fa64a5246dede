from fastapi import APIRouter, Depends
import logging

from app.constants.constants import Ledger
from app.core.config import Settings
from app.core.exceptions import RegistrationAppError
from app.core.services import get_notifier, get_registration_writer, get_settings
from app.schemas.registrationSchema import (
    GuestRegistrationRequest,
    PaymentStatusUpdateRequest,
    RegistrationResponse,
    StudentRegistrationRequest,
)
from app.services.RegistrationConfirmationEmail import notify_payment_recorded
from app.services.RegistrationWriter import RegistrationWriter
from app.utils.responses import error_response, unexpected_error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["registrations"])


async def _register(writer: RegistrationWriter, ledger: Ledger, values: dict):
    try:
        await writer.register(ledger, values)
    except RegistrationAppError as e:
        return error_response(e)
    except Exception as e:
        logger.exception(f"Error saving {ledger.value} data: {e}")
        return unexpected_error_response("Failed to save registration")
    return {"success": True}


@router.post("/save-student", response_model=RegistrationResponse, response_model_exclude_none=True)
async def save_student(
    payload: StudentRegistrationRequest,
    writer: RegistrationWriter = Depends(get_registration_writer),
):
    """Append a Student Pass registration (status starts as pending)."""
    return await _register(writer, Ledger.student, payload.model_dump())


@router.post("/save-guest", response_model=RegistrationResponse, response_model_exclude_none=True)
async def save_guest(
    payload: GuestRegistrationRequest,
    writer: RegistrationWriter = Depends(get_registration_writer),
):
    """Append a Guest Pass registration."""
    return await _register(writer, Ledger.guest, payload.model_dump())


@router.post("/update-payment-status", response_model=RegistrationResponse, response_model_exclude_none=True)
async def update_payment_status(
    payload: PaymentStatusUpdateRequest,
    writer: RegistrationWriter = Depends(get_registration_writer),
    notifier=Depends(get_notifier),
    config: Settings = Depends(get_settings),
):
    """
    Record the transaction a registrant submitted after paying.

    Student rows get status + transaction id; guest rows have nowhere to
    store them, so a guest match succeeds without a write.
    """
    try:
        await writer.record_payment(payload.email, payload.transactionId, payload.paymentStatus)
    except RegistrationAppError as e:
        return error_response(e)
    except Exception as e:
        logger.exception(f"Error updating payment status: {e}")
        return unexpected_error_response("Failed to update payment status")

    if config.SEND_PAYMENT_CONFIRMATION:
        await notify_payment_recorded(
            notifier,
            payload.email.strip(),
            payload.transactionId.strip(),
            payload.paymentStatus.strip(),
            event_name=config.EVENT_NAME,
        )
    return {"success": True}

from fastapi import APIRouter, Depends, Request
from slowapi.util import get_remote_address
import logging

from app.core.exceptions import RegistrationAppError
from app.core.services import get_otp_service
from app.schemas.otpSchema import SendOtpRequest, SendOtpResponse, VerifyOtpRequest, VerifyOtpResponse
from app.services.OtpService import OtpService
from app.utils.responses import error_response, unexpected_error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["otp"])


# -----------------------------
# Send OTP
# -----------------------------
@router.post("/send-otp", response_model=SendOtpResponse, response_model_exclude_none=True)
async def send_otp(
    payload: SendOtpRequest,
    request: Request,
    otp_service: OtpService = Depends(get_otp_service),
):
    """
    Email a one-time code to the given address.

    The code itself is never part of the response.
    """
    try:
        await otp_service.request_code(payload.email or "", get_remote_address(request))
    except RegistrationAppError as e:
        return error_response(e)
    except Exception as e:
        logger.exception(f"Error sending OTP: {e}")
        return unexpected_error_response("Failed to send OTP")
    return {"success": True}


# -----------------------------
# Verify OTP
# -----------------------------
@router.post("/verify-otp", response_model=VerifyOtpResponse, response_model_exclude_none=True)
async def verify_otp(
    payload: VerifyOtpRequest,
    otp_service: OtpService = Depends(get_otp_service),
):
    """Check a code; a correct code is consumed and cannot be used again."""
    try:
        await otp_service.verify_code(payload.email or "", payload.otp or "")
    except RegistrationAppError as e:
        return error_response(e, flag="verified")
    except Exception as e:
        logger.exception(f"Error verifying OTP: {e}")
        return unexpected_error_response("Failed to verify OTP", flag="verified")
    return {"verified": True}

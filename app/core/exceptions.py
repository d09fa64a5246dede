"""Error taxonomy shared by the OTP and registration services.

Every error carries the HTTP status the API answers with and a message that
is safe to show to the registrant.
"""

from typing import Optional


class RegistrationAppError(Exception):
    """Base class for every request-scoped failure."""

    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(RegistrationAppError):
    status_code = 400
    default_message = "Invalid input"


class InvalidAddressError(InvalidInputError):
    default_message = "Invalid email address"


class MissingFieldError(InvalidInputError):
    default_message = "All fields are required"

    def __init__(self, fields: Optional[list] = None, message: Optional[str] = None):
        self.fields = list(fields or [])
        super().__init__(message)


class RateLimitedError(RegistrationAppError):
    status_code = 429
    default_message = "Rate limit exceeded. Try again later."

    def __init__(self, retry_after: int = 0, message: Optional[str] = None):
        self.retry_after = max(int(retry_after), 0)
        super().__init__(message)


class InvalidOrExpiredError(RegistrationAppError):
    status_code = 400
    default_message = "Invalid or expired OTP"


class DuplicateEmailError(RegistrationAppError):
    status_code = 409
    default_message = "Email already registered"


class RecordNotFoundError(RegistrationAppError):
    status_code = 500
    default_message = "Failed to update payment status"


class CollaboratorError(RegistrationAppError):
    status_code = 500
    default_message = "Upstream service failed"


class DispatchFailedError(CollaboratorError):
    default_message = "Failed to send OTP. Please try again later."


class LedgerError(CollaboratorError):
    default_message = "Failed to reach the registration sheet"


class PaymentNotConfiguredError(RegistrationAppError):
    status_code = 500
    default_message = "Payment details are not configured"

"""Writes registrant rows to the student / guest ledgers and records payments."""

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Mapping, Optional

from app.constants.constants import (
    LEDGER_FIELDS,
    PAYMENT_LOOKUP_ORDER,
    STUDENT_PAYMENT_COLUMNS,
    Ledger,
    PaymentStatus,
)
from app.core.exceptions import (
    DuplicateEmailError,
    InvalidAddressError,
    LedgerError,
    MissingFieldError,
    RecordNotFoundError,
)
from app.models.ledger import LedgerMatch
from app.services.OtpService import is_valid_email

logger = logging.getLogger(__name__)


def _clean(value) -> str:
    return "" if value is None else str(value).strip()


def missing_fields(values: Mapping, required: Iterable[str]) -> List[str]:
    return [name for name in required if not _clean(values.get(name))]


class RegistrationWriter:
    """
    Appends registrants after a ledger-scoped duplicate check and records
    payment status against an existing row.

    When the duplicate check itself fails the append still goes ahead
    (``strict_duplicate_check=False``); pass True to reject instead.
    """

    def __init__(
        self,
        ledger_store,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        strict_duplicate_check: bool = False,
    ):
        self.ledger_store = ledger_store
        self._clock = clock
        self.strict_duplicate_check = strict_duplicate_check

    def build_row(self, ledger: Ledger, values: Mapping) -> List[str]:
        """Timestamp followed by the ledger's fields; student rows end with status + transaction."""
        row = [self._clock().isoformat()]
        row.extend(_clean(values.get(name)) for name in LEDGER_FIELDS[ledger])
        if ledger is Ledger.student:
            row.extend([PaymentStatus.pending.value, ""])
        return row

    async def email_exists(self, ledger: Ledger, email: str) -> bool:
        try:
            return await self.ledger_store.exists(ledger, email)
        except LedgerError:
            if self.strict_duplicate_check:
                raise
            logger.warning(
                f"⚠️ Duplicate check against the {ledger.value} ledger failed for {email}; "
                "continuing with the append"
            )
            return False

    async def register(self, ledger: Ledger, values: Mapping) -> List[str]:
        """
        Validate and append one registrant.

        Raises MissingFieldError, InvalidAddressError, DuplicateEmailError
        or LedgerError. Returns the row that was written.
        """
        missing = missing_fields(values, LEDGER_FIELDS[ledger])
        if missing:
            raise MissingFieldError(missing)

        email = _clean(values.get("email"))
        if not is_valid_email(email):
            raise InvalidAddressError()

        if await self.email_exists(ledger, email):
            logger.info(f"🚫 {email} is already registered in the {ledger.value} ledger")
            raise DuplicateEmailError()

        row = self.build_row(ledger, values)
        await self.ledger_store.append(ledger, row)
        logger.info(f"🎟️ Registered {email} in the {ledger.value} ledger")
        return row

    async def locate(self, email: str) -> Optional[LedgerMatch]:
        """Find ``email`` in the ledgers in lookup order (student first)."""
        for ledger in PAYMENT_LOOKUP_ORDER:
            row = await self.ledger_store.find_row_by_email(ledger, email)
            if row is not None:
                return LedgerMatch(ledger=ledger, row=row)
        return None

    async def record_payment(self, email: str, transaction_id: str, status: str) -> LedgerMatch:
        """
        Store ``status`` and ``transaction_id`` against the registrant's row.

        Guest rows have no payment columns, so a guest match succeeds without
        writing anything. Raises MissingFieldError, RecordNotFoundError or
        LedgerError.
        """
        values = {"email": email, "transactionId": transaction_id, "paymentStatus": status}
        missing = missing_fields(values, values.keys())
        if missing:
            raise MissingFieldError(missing, "Email, transaction ID, and payment status are required")

        email = _clean(email)
        match = await self.locate(email)
        if match is None:
            logger.error(f"❌ {email} not found in any ledger while recording payment")
            raise RecordNotFoundError()

        if match.ledger is Ledger.student:
            await self.ledger_store.update_range(
                match.ledger,
                match.row,
                STUDENT_PAYMENT_COLUMNS,
                [_clean(status), _clean(transaction_id)],
            )
            logger.info(f"💳 Payment '{_clean(status)}' recorded for {email} (row {match.row})")
        else:
            logger.info(f"💳 {email} is a guest registrant; no payment columns to update")
        return match

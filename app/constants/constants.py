"""Constants for one-time codes, ledgers, payment statuses and the ledger column layout."""

import re
from enum import Enum


class OtpVerifyResult(str, Enum):
    """Outcome of checking a candidate code against the code store."""

    success = "success"
    not_found = "not_found"
    expired = "expired"
    mismatch = "mismatch"


class Ledger(str, Enum):
    """The two independent registration ledgers."""

    student = "student"
    guest = "guest"


class PaymentStatus(str, Enum):
    """Well-known payment statuses written to the student ledger."""

    pending = "pending"
    paid = "paid"
    confirmed = "confirmed"
    failed = "failed"


OTP_LENGTH = 6
OTP_MIN_VALUE = 100000
OTP_MAX_VALUE = 999999

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
OTP_PATTERN = re.compile(r"^\d{6}$")

# Payment updates look in the student ledger before the guest ledger.
PAYMENT_LOOKUP_ORDER = (Ledger.student, Ledger.guest)

# Request field names, in the column order they are written after the timestamp.
STUDENT_FIELDS = ["name", "regNo", "department", "year", "email", "phone"]
GUEST_FIELDS = ["name", "rollNo", "college", "department", "email", "phone"]

LEDGER_FIELDS = {
    Ledger.student: STUDENT_FIELDS,
    Ledger.guest: GUEST_FIELDS,
}

# Column layout shared by both tabs: A is the timestamp, F is the email.
EMAIL_COLUMN = "F"
EMAIL_COLUMN_INDEX = 5

# Student tab only: H holds the payment status and I the transaction number.
STUDENT_PAYMENT_COLUMNS = ("H", "I")
LEDGER_LAST_COLUMN = {
    Ledger.student: "I",
    Ledger.guest: "G",
}

FIELD_LABELS = {
    "name": "Full Name",
    "regNo": "Registration Number",
    "rollNo": "Registration / Roll No",
    "department": "Department",
    "year": "Year",
    "college": "College",
    "email": "Email",
    "phone": "Phone Number",
}

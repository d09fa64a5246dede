"""
Service container for the registration backend.
- Builds the OTP store, rate limiter, notifier and ledger store once per process
- Picks offline fallbacks outside production when credentials are missing
- Hands the services to routes through FastAPI dependencies
"""
import logging
from datetime import timedelta
from typing import Optional

from app.constants.constants import Ledger
from app.core.config import Settings, settings
from app.services.BrevoEmailClient import BrevoEmailClient, ConsoleEmailClient
from app.services.GoogleSheetsClient import GoogleSheetsClient
from app.services.LedgerStore import InMemoryLedgerStore, SheetsLedgerStore
from app.services.OtpCodeStore import OtpCodeStore
from app.services.OtpRateLimiter import OtpRateLimiter
from app.services.OtpService import OtpService
from app.services.PaymentQRCodeGenerator import PaymentQRCodeGenerator
from app.services.RegistrationWriter import RegistrationWriter

logger = logging.getLogger(__name__)


class ServiceManager:
    """Owns every stateful service for the lifetime of the app."""

    def __init__(self):
        self.settings: Optional[Settings] = None
        self.code_store: Optional[OtpCodeStore] = None
        self.rate_limiter: Optional[OtpRateLimiter] = None
        self.notifier = None
        self.ledger_store = None
        self.otp_service: Optional[OtpService] = None
        self.registration_writer: Optional[RegistrationWriter] = None
        self.payment_qr: Optional[PaymentQRCodeGenerator] = None

    @property
    def initialized(self) -> bool:
        return self.otp_service is not None

    def init(self, config: Optional[Settings] = None, notifier=None, ledger_store=None):
        """Build the services. ``notifier`` / ``ledger_store`` override the configured collaborators."""
        config = config or settings
        self.settings = config

        self.code_store = OtpCodeStore(ttl=timedelta(minutes=config.OTP_TTL_MINUTES))
        self.rate_limiter = OtpRateLimiter(
            points=config.OTP_RATE_LIMIT_POINTS,
            window_seconds=config.OTP_RATE_LIMIT_WINDOW_SECONDS,
        )
        self.notifier = notifier or self._build_notifier(config)
        self.ledger_store = ledger_store or self._build_ledger_store(config)

        self.otp_service = OtpService(
            code_store=self.code_store,
            rate_limiter=self.rate_limiter,
            notifier=self.notifier,
            event_name=config.EVENT_NAME,
        )
        self.registration_writer = RegistrationWriter(
            self.ledger_store,
            strict_duplicate_check=config.DUPLICATE_CHECK_STRICT,
        )
        self.payment_qr = PaymentQRCodeGenerator(
            upi_id=config.UPI_ID,
            payee_name=config.UPI_PAYEE_NAME,
            amount=config.TICKET_PRICE,
            currency=config.TICKET_CURRENCY,
            event_name=config.EVENT_NAME,
        )
        logger.info(
            f"🧩 Services ready (notifier: {self.notifier.backend}, ledger: {self.ledger_store.backend})"
        )

    def _build_notifier(self, config: Settings):
        if config.BREVO_API_KEY or config.IS_PRODUCTION:
            if not config.BREVO_API_KEY:
                logger.error("❌ BREVO_API_KEY is not set; OTP emails will fail")
            return BrevoEmailClient(
                api_key=config.BREVO_API_KEY,
                sender_email=config.EMAIL_FROM,
                sender_name=config.EMAIL_FROM_NAME,
                timeout=config.EXTERNAL_TIMEOUT_SECONDS,
            )
        logger.warning("⚠️ BREVO_API_KEY not set. Emails will be logged instead of sent.")
        return ConsoleEmailClient()

    def _build_ledger_store(self, config: Settings):
        if config.SHEETS_ENABLED or config.IS_PRODUCTION:
            client = None
            if config.GOOGLE_SERVICE_ACCOUNT:
                client = GoogleSheetsClient.from_json(
                    config.GOOGLE_SERVICE_ACCOUNT,
                    timeout=config.EXTERNAL_TIMEOUT_SECONDS,
                )
            else:
                logger.error("❌ GOOGLE_SERVICE_ACCOUNT is not set; registrations will fail")
            return SheetsLedgerStore(
                client,
                spreadsheet_ids={
                    Ledger.student: config.STUDENT_SPREADSHEET_ID,
                    Ledger.guest: config.GUEST_SPREADSHEET_ID,
                },
                sheet_names={
                    Ledger.student: config.STUDENT_SHEET_NAME,
                    Ledger.guest: config.GUEST_SHEET_NAME,
                },
            )
        logger.warning(
            "⚠️ Google Sheets not configured. Registrations are kept in memory; "
            "set GOOGLE_SERVICE_ACCOUNT, STUDENT_SPREADSHEET_ID and GUEST_SPREADSHEET_ID to persist them."
        )
        return InMemoryLedgerStore()

    def close(self):
        """Drop all services; in-memory codes and counters are lost."""
        if self.code_store:
            self.code_store.clear()
        self.__init__()


# Initialize service manager
service_manager = ServiceManager()


def _require(service):
    if service is None:
        raise RuntimeError("ServiceManager not initialized")
    return service


def get_otp_service() -> OtpService:
    """FastAPI dependency for the OTP service."""
    return _require(service_manager.otp_service)


def get_registration_writer() -> RegistrationWriter:
    return _require(service_manager.registration_writer)


def get_payment_qr() -> PaymentQRCodeGenerator:
    return _require(service_manager.payment_qr)


def get_notifier():
    return _require(service_manager.notifier)


def get_settings() -> Settings:
    return service_manager.settings or settings

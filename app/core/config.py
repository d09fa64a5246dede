import os
import logging
from dotenv import load_dotenv
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings
from typing import List

# Load environment variables from .env file
load_dotenv(".env", override=True)
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Class to store all the settings of the fest registration service."""

    # ------------------------------
    # Environment
    # ------------------------------
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    EVENT_NAME: str = Field(default="VYOMANG")

    # ------------------------------
    # One-time codes
    # ------------------------------
    OTP_TTL_MINUTES: int = Field(default=5)
    OTP_SWEEP_INTERVAL_SECONDS: int = Field(default=60)
    OTP_RATE_LIMIT_POINTS: int = Field(default=5)
    OTP_RATE_LIMIT_WINDOW_SECONDS: int = Field(default=60)

    # ------------------------------
    # External calls
    # ------------------------------
    EXTERNAL_TIMEOUT_SECONDS: float = Field(default=10.0)

    # ------------------------------
    # Email (Brevo) - Optional in development
    # ------------------------------
    BREVO_API_KEY: str = Field(default="")
    EMAIL_FROM: str = Field(default="vyomang.fest@gmail.com")
    EMAIL_FROM_NAME: str = Field(default="VYOMANG")
    SEND_PAYMENT_CONFIRMATION: bool = Field(default=True)

    # ------------------------------
    # Google Sheets ledgers - Optional in development
    # ------------------------------
    GOOGLE_SERVICE_ACCOUNT: str = Field(default="")
    STUDENT_SPREADSHEET_ID: str = Field(default="")
    GUEST_SPREADSHEET_ID: str = Field(default="")
    STUDENT_SHEET_NAME: str = Field(default="Student Pass")
    GUEST_SHEET_NAME: str = Field(default="Guest Pass")
    DUPLICATE_CHECK_STRICT: bool = Field(default=False)

    # ------------------------------
    # Ticket & payment
    # ------------------------------
    TICKET_PRICE: int = Field(default=800)
    TICKET_CURRENCY: str = Field(default="INR")
    UPI_ID: str = Field(default="")
    UPI_PAYEE_NAME: str = Field(default="VYOMANG")

    # ------------------------------
    # CORS
    # ------------------------------
    ALLOWED_ORIGINS: List[str] = Field(default=[
        "https://vyomang.onrender.com",
        "https://kiyotakakirito.github.io",
        "http://localhost:5004",
        "http://localhost:5173",
    ])

    # ------------------------------
    # Computed Fields
    # ------------------------------
    @computed_field
    @property
    def SHEETS_ENABLED(self) -> bool:
        """Whether both spreadsheets and the service account are configured."""
        return bool(
            self.GOOGLE_SERVICE_ACCOUNT
            and self.STUDENT_SPREADSHEET_ID
            and self.GUEST_SPREADSHEET_ID
        )

    @computed_field
    @property
    def IS_PRODUCTION(self) -> bool:
        return self.ENVIRONMENT == "production"

    class Config:
        """Configuration for the settings class."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate the settings
settings = Settings()

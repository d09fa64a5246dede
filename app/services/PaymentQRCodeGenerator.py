"""
Payment QR Code Generator Service
Builds the UPI payment link for a pass and renders it as a QR code image.
"""

import base64
from io import BytesIO
from typing import Optional
from urllib.parse import quote, urlencode

import qrcode
from PIL import Image

from app.core.exceptions import PaymentNotConfiguredError


class PaymentQRCodeGenerator:
    """Service for generating UPI payment QR codes."""

    def __init__(
        self,
        upi_id: str,
        payee_name: str,
        amount: int,
        currency: str = "INR",
        event_name: str = "VYOMANG",
        default_qr_size: int = 10,
        default_border: int = 2,
        default_fill_color: str = "#1a1a2e",
        default_back_color: str = "white",
    ):
        self.upi_id = upi_id
        self.payee_name = payee_name
        self.amount = amount
        self.currency = currency
        self.event_name = event_name
        self.default_qr_size = default_qr_size
        self.default_border = default_border
        self.default_fill_color = default_fill_color
        self.default_back_color = default_back_color

    def build_payment_uri(self, note: Optional[str] = None) -> str:
        """
        Build a ``upi://pay`` link for the pass price.

        Args:
            note: Transaction note shown in the payer's app (defaults to the event pass)
        """
        if not self.upi_id:
            raise PaymentNotConfiguredError()

        params = {
            "pa": self.upi_id,
            "pn": self.payee_name,
            "am": str(self.amount),
            "cu": self.currency,
            "tn": note or f"{self.event_name} Pass",
        }
        return f"upi://pay?{urlencode(params, quote_via=quote)}"

    def generate_qr_code(
        self,
        data: str,
        qr_size: Optional[int] = None,
        border: Optional[int] = None,
        fill_color: Optional[str] = None,
        back_color: Optional[str] = None,
    ) -> Image.Image:
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=qr_size or self.default_qr_size,
            border=border or self.default_border,
        )
        qr.add_data(data)
        qr.make(fit=True)

        qr_img = qr.make_image(
            fill_color=fill_color or self.default_fill_color,
            back_color=back_color or self.default_back_color,
        )
        return qr_img.convert("RGB")

    def generate_qr_code_data_uri(self, data: str, **kwargs) -> str:
        """Generate QR code and return as data URI (data:image/png;base64,...)."""
        qr_img = self.generate_qr_code(data, **kwargs)
        buffered = BytesIO()
        qr_img.save(buffered, format="PNG")
        return f"data:image/png;base64,{base64.b64encode(buffered.getvalue()).decode()}"

    def payment_details(self, email: Optional[str] = None) -> dict:
        note = f"{self.event_name} Pass - {email}" if email else None
        uri = self.build_payment_uri(note)
        return {
            "upiId": self.upi_id,
            "payeeName": self.payee_name,
            "amount": self.amount,
            "currency": self.currency,
            "paymentUri": uri,
            "qrCode": self.generate_qr_code_data_uri(uri),
        }

from app.core.exceptions import CollaboratorError, DispatchFailedError
import logging

logger = logging.getLogger(__name__)


async def send_email_otp(notifier, email: str, code: str, ttl_minutes: int = 5, event_name: str = "VYOMANG") -> dict:
    """
    Send an OTP verification code by email.

    Args:
        notifier: Email client exposing ``send(to, subject, html, text)``
        email: Recipient email address
        code: 6-digit OTP code
        ttl_minutes: How long the code stays valid
        event_name: Event name used in the subject and body

    Returns:
        dict delivery receipt from the notifier

    Raises:
        DispatchFailedError: the email could not be handed to the provider
    """

    # Email template HTML
    html_content = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="UTF-8">
        <style>
            body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
            .header {{ background: linear-gradient(135deg, #1a1a2e 0%, #16213e 100%); color: #d4af37; padding: 30px; border-radius: 10px 10px 0 0; text-align: center; }}
            .content {{ background: #f9fafb; padding: 40px 30px; border-radius: 0 0 10px 10px; }}
            .otp-box {{ background: white; padding: 30px; border-radius: 8px; margin: 30px 0; text-align: center; border: 2px solid #d4af37; }}
            .otp-code {{ font-size: 36px; font-weight: bold; color: #1a1a2e; letter-spacing: 8px; font-family: 'Courier New', monospace; }}
            .footer {{ text-align: center; margin-top: 30px; color: #6b7280; font-size: 12px; }}
            h1 {{ margin: 0; font-size: 24px; }}
            .expires {{ color: #6b7280; font-size: 14px; margin-top: 10px; }}
        </style>
    </head>
    <body>
        <div class="container">
            <div class="header">
                <h1>🎟️ {event_name} Registration</h1>
            </div>
            <div class="content">
                <p>Hello,</p>
                <p>Your OTP for <strong>{event_name}</strong> registration is:</p>

                <div class="otp-box">
                    <div class="otp-code">{code}</div>
                    <p class="expires">⏱️ It is valid for {ttl_minutes} minutes</p>
                </div>

                <p>If you didn't request this code, you can safely ignore this email.</p>

                <div class="footer">
                    <p>This is an automated message. Please do not reply to this email.</p>
                </div>
            </div>
        </div>
    </body>
    </html>
    """

    text_content = f"Your OTP for {event_name} registration is: {code}. It is valid for {ttl_minutes} minutes."

    try:
        return await notifier.send(
            to=email,
            subject=f"Your OTP for {event_name} Registration",
            html=html_content,
            text=text_content,
        )
    except DispatchFailedError:
        raise
    except CollaboratorError as e:
        raise DispatchFailedError() from e
    except Exception as e:
        logger.exception(f"❌ [EMAIL ERROR] Failed to send OTP to {email}: {e}")
        raise DispatchFailedError() from e

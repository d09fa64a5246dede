import html
import logging
import re

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


async def notify_payment_recorded(
    notifier,
    email: str,
    transaction_id: str,
    payment_status: str,
    event_name: str = "VYOMANG",
) -> bool:
    """
    Send the registrant a receipt for the transaction they submitted.

    Best effort: failures are logged and reported as False, never raised.
    """

    email_template = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="UTF-8">
        <style>
            body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
            .header {{ background: linear-gradient(135deg, #1a1a2e 0%, #16213e 100%); color: #d4af37; padding: 30px; border-radius: 10px 10px 0 0; text-align: center; }}
            .content {{ background: #f9fafb; padding: 30px; border-radius: 0 0 10px 10px; }}
            .ticket-card {{ background: white; padding: 20px; border-radius: 8px; margin: 20px 0; border-left: 4px solid #d4af37; }}
            .detail-row {{ margin: 12px 0; padding: 8px 0; border-bottom: 1px solid #f3f4f6; }}
            .label {{ font-weight: bold; color: #6b7280; font-size: 12px; text-transform: uppercase; }}
            .value {{ color: #1f2937; font-size: 15px; margin-top: 4px; }}
            .footer {{ text-align: center; margin-top: 20px; color: #6b7280; font-size: 12px; }}
            h1 {{ margin: 0; }}
        </style>
    </head>
    <body>
        <div class="container">
            <div class="header">
                <h1>🎟️ {event_name} Pass</h1>
            </div>
            <div class="content">
                <p>Hello,</p>
                <p>We have received your payment details for the <strong>{event_name}</strong> pass.</p>

                <div class="ticket-card">
                    <div class="detail-row">
                        <div class="label">Email</div>
                        <div class="value">{email}</div>
                    </div>
                    <div class="detail-row">
                        <div class="label">Transaction ID / UTR</div>
                        <div class="value">{transaction_id}</div>
                    </div>
                    <div class="detail-row">
                        <div class="label">Status</div>
                        <div class="value">{payment_status}</div>
                    </div>
                </div>

                <p>Your payment will be verified by the organizing team. Keep this email for entry.</p>

                <div class="footer">
                    <p>This is an automated message. Please do not reply to this email.</p>
                </div>
            </div>
        </div>
    </body>
    </html>
    """

    html_content = email_template.format(
        event_name=html.escape(event_name),
        email=html.escape(email),
        transaction_id=html.escape(transaction_id),
        payment_status=html.escape(payment_status),
    )

    try:
        await notifier.send(
            to=email,
            subject=_CONTROL_CHARS.sub("", f"{event_name} payment received - {transaction_id}"),
            html=html_content,
            text=f"We received transaction {transaction_id} ({payment_status}) for your {event_name} pass.",
        )
        return True
    except Exception as e:
        logger.error(f"❌ [EMAIL ERROR] Failed to send payment confirmation to {email}: {e}")
        return False

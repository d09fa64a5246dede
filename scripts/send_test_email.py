import os
import sys
import asyncio
import argparse

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from app.core.config import settings
from app.core.services import service_manager


async def send_test_email(to_email: str):
    """Send a test message through the configured notifier."""
    service_manager.init(settings)
    notifier = service_manager.notifier
    print(f"📧 Notifier backend: {notifier.backend}")

    receipt = await notifier.send(
        to=to_email,
        subject="Test Email Configuration",
        html="<p>This is a test email to verify the email configuration.</p>",
        text="This is a test email to verify the email configuration.",
    )
    print(f"✅ Sent: {receipt}")
    service_manager.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Send a test email through the configured provider.")
    parser.add_argument("to", nargs="?", default=settings.EMAIL_FROM, help="Recipient (defaults to EMAIL_FROM)")
    args = parser.parse_args()
    asyncio.run(send_test_email(args.to))

import re
from datetime import datetime, timedelta, timezone

from app.core.exceptions import DispatchFailedError, LedgerError
from app.services.LedgerStore import InMemoryLedgerStore


class FakeClock:
    def __init__(self, start=None):
        self.now = start or datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


class FakeNotifier:
    backend = "fake"

    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    async def send(self, to, subject, html, text=None):
        if self.fail:
            raise DispatchFailedError()
        self.sent.append({"to": to, "subject": subject, "html": html, "text": text})
        return {"status": "sent", "message_id": f"msg-{len(self.sent)}"}

    def last_code(self, to=None):
        for message in reversed(self.sent):
            if to is None or message["to"] == to:
                match = re.search(r"\b(\d{6})\b", message["text"] or "")
                if match:
                    return match.group(1)
        return None


class FlakyLedgerStore(InMemoryLedgerStore):
    """In-memory ledger whose duplicate check can be made to fail."""

    def __init__(self, fail_exists=False):
        super().__init__()
        self.fail_exists = fail_exists

    async def exists(self, ledger, email):
        if self.fail_exists:
            raise LedgerError()
        return await super().exists(ledger, email)



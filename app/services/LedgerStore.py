"""
Ledger stores: the spreadsheet tabs that hold registrant rows.

Both stores expose the same coroutine interface:

- ``exists(ledger, email) -> bool``
- ``append(ledger, values)``
- ``find_row_by_email(ledger, email) -> Optional[int]`` (1-based row number)
- ``update_range(ledger, row, columns, values)``
- ``count_rows(ledger) -> int``

Each call re-reads the ledger; nothing is cached between requests.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from app.constants.constants import (
    EMAIL_COLUMN,
    EMAIL_COLUMN_INDEX,
    LEDGER_LAST_COLUMN,
    Ledger,
)
from app.core.exceptions import LedgerError

logger = logging.getLogger(__name__)


def _same_email(cell, email: str) -> bool:
    return bool(cell) and str(cell).strip().lower() == email.strip().lower()


def _column_index(letter: str) -> int:
    return ord(letter.upper()) - ord("A")


class SheetsLedgerStore:
    """Ledger store backed by two Google spreadsheets (one per ledger).

    Row 1 of each tab is the header row; ``count_rows`` leaves it out.
    """

    backend = "google-sheets"

    def __init__(self, client, spreadsheet_ids: Dict[Ledger, str], sheet_names: Dict[Ledger, str]):
        self.client = client
        self.spreadsheet_ids = spreadsheet_ids
        self.sheet_names = sheet_names

    def _target(self, ledger: Ledger) -> Tuple[str, str]:
        spreadsheet_id = self.spreadsheet_ids.get(ledger)
        if self.client is None or not spreadsheet_id:
            logger.error(f"❌ Google Sheets not configured for the {ledger.value} ledger")
            raise LedgerError("Registration sheet is not configured")
        return spreadsheet_id, self.sheet_names[ledger]

    @staticmethod
    def _a1(sheet_name: str, cells: str) -> str:
        return f"'{sheet_name}'!{cells}"

    async def exists(self, ledger: Ledger, email: str) -> bool:
        spreadsheet_id, sheet = self._target(ledger)
        values = await self.client.get_values(
            spreadsheet_id, self._a1(sheet, f"{EMAIL_COLUMN}:{EMAIL_COLUMN}")
        )
        return any(row and _same_email(row[0], email) for row in values)

    async def append(self, ledger: Ledger, values: Sequence[str]) -> None:
        spreadsheet_id, sheet = self._target(ledger)
        last = LEDGER_LAST_COLUMN[ledger]
        await self.client.append_values(spreadsheet_id, self._a1(sheet, f"A1:{last}1"), [list(values)])
        logger.info(f"📝 Row appended to {sheet}")

    async def find_row_by_email(self, ledger: Ledger, email: str) -> Optional[int]:
        spreadsheet_id, sheet = self._target(ledger)
        last = LEDGER_LAST_COLUMN[ledger]
        rows = await self.client.get_values(spreadsheet_id, self._a1(sheet, f"A:{last}"))
        for index, row in enumerate(rows):
            if len(row) > EMAIL_COLUMN_INDEX and _same_email(row[EMAIL_COLUMN_INDEX], email):
                return index + 1
        return None

    async def update_range(self, ledger: Ledger, row: int, columns: Tuple[str, str], values: Sequence[str]) -> None:
        spreadsheet_id, sheet = self._target(ledger)
        first, last = columns
        await self.client.update_values(
            spreadsheet_id, self._a1(sheet, f"{first}{row}:{last}{row}"), [list(values)]
        )
        logger.info(f"📝 Updated {sheet}!{first}{row}:{last}{row}")

    async def count_rows(self, ledger: Ledger) -> int:
        spreadsheet_id, sheet = self._target(ledger)
        values = await self.client.get_values(spreadsheet_id, self._a1(sheet, "A:A"))
        return max(len(values) - 1, 0)


class InMemoryLedgerStore:
    """Process-local ledger used offline in development and in tests."""

    backend = "in-memory"

    def __init__(self):
        self.rows: Dict[Ledger, List[List[str]]] = {ledger: [] for ledger in Ledger}

    async def exists(self, ledger: Ledger, email: str) -> bool:
        return await self.find_row_by_email(ledger, email) is not None

    async def append(self, ledger: Ledger, values: Sequence[str]) -> None:
        self.rows[ledger].append([str(v) for v in values])

    async def find_row_by_email(self, ledger: Ledger, email: str) -> Optional[int]:
        for index, row in enumerate(self.rows[ledger]):
            if len(row) > EMAIL_COLUMN_INDEX and _same_email(row[EMAIL_COLUMN_INDEX], email):
                return index + 1
        return None

    async def update_range(self, ledger: Ledger, row: int, columns: Tuple[str, str], values: Sequence[str]) -> None:
        if row < 1 or row > len(self.rows[ledger]):
            raise LedgerError(f"Row {row} does not exist")
        target = self.rows[ledger][row - 1]
        start = _column_index(columns[0])
        end = _column_index(columns[1])
        if end - start + 1 != len(values):
            raise LedgerError("Range width does not match the number of values")
        while len(target) <= end:
            target.append("")
        target[start:end + 1] = [str(v) for v in values]

    async def count_rows(self, ledger: Ledger) -> int:
        return len(self.rows[ledger])

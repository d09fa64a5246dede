from dataclasses import dataclass

from app.constants.constants import Ledger


@dataclass(frozen=True)
class LedgerMatch:
    """Where a registrant's row was found: the ledger and its 1-based row number."""

    ledger: Ledger
    row: int

import os
import sys
import asyncio

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from app.constants.constants import Ledger
from app.core.config import settings
from app.core.services import service_manager


async def list_ledgers():
    # Initialize the service manager first
    service_manager.init(settings)
    store = service_manager.ledger_store
    print(f"📒 Ledger backend: {store.backend}")

    for ledger in Ledger:
        rows = await store.count_rows(ledger)
        print(f"✅ {ledger.value}: {rows} row(s)")

    service_manager.close()


if __name__ == "__main__":
    asyncio.run(list_ledgers())

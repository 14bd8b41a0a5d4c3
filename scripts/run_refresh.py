"""
Manual refresh trigger — runs a single refresh cycle from the command line.

Usage:
    python scripts/run_refresh.py

Useful for checking the feed URL and allow-set without starting the server.
"""

import asyncio
import json

from currency_api.main import configure_logging
from currency_api.services.rate_store import rate_store
from currency_api.services.refresh_service import RefreshService


async def main():
    """Run a single refresh cycle and print the report."""
    configure_logging()
    print("Starting manual refresh cycle...")
    result = await RefreshService().run_cycle()

    print("\n=== Refresh Cycle Report ===")
    print(json.dumps(result, indent=2, default=str))
    print(f"\nDates in store: {len(rate_store)}")


if __name__ == "__main__":
    asyncio.run(main())

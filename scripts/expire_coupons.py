# scripts/expire_coupons.py
"""
Out-of-band expiry sweep: Active coupons whose meal date has passed become
Expired. Run from cron once a day after the last service, e.g.

  15 0 * * *  cd /srv/canteen && python -m scripts.expire_coupons
"""

import argparse
import asyncio
import os
from datetime import date

from dotenv import load_dotenv

load_dotenv()

from canteen.core.logging_config import configure_logging  # noqa: E402
from canteen.crud.coupon import expire_stale_coupons  # noqa: E402
from canteen.db import async_session  # noqa: E402
from canteen.utils.timezones import local_today  # noqa: E402


async def run(today: date) -> int:
    async with async_session() as session:
        return await expire_stale_coupons(session, today)


if __name__ == "__main__":
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    parser = argparse.ArgumentParser(description="Expire Active coupons whose meal date has passed")
    parser.add_argument("--today", type=date.fromisoformat, default=None, help="Override today (YYYY-MM-DD)")
    args = parser.parse_args()

    expired = asyncio.run(run(args.today or local_today()))
    print(f"Expired {expired} coupon(s).")

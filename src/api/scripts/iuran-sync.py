#!/usr/bin/env python
"""
Run one iuran sync panel action from the command line:

    sync   Generate the dues of the current month
    month  Generate the dues of one month (--month, --year)
    year   Generate the dues of every month of a year (--year)

The backend is configured through SUPABASE_URL and SUPABASE_ANON_KEY.
"""

import os
import sys
import asyncio
import logging
import argparse

sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(
    os.path.dirname(os.path.abspath(__file__))))))

from src.api.common.constants.months import MONTH_NAMES  # noqa: E402
from src.api.integrations.supabase import SupabaseConfig, SupabaseIuranClient  # noqa: E402
from src.api.iuran.constants import CANDIDATE_YEARS  # noqa: E402
from src.api.iuran.services.sync_panel import SyncPanel  # noqa: E402

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

ACTIONS = ["sync", "month", "year"]


async def main(action: str, month: str = None, year: int = None) -> int:
    """Run the action and return the process exit code."""
    panel = SyncPanel(SupabaseIuranClient(SupabaseConfig()))
    panel.select_period(month=month, year=year)

    if action == "sync":
        await panel.sync_current_month()
    elif action == "month":
        await panel.generate_specific_month()
    else:
        await panel.generate_full_year()

    result = panel.render().result
    if result is None:
        logger.info("Action finished without a result")
        return 0
    if result.variant == "error":
        logger.error(f"{result.title}: {result.message}")
        return 1
    logger.info(f"{result.title}: {result.message}")
    if result.processed_label:
        logger.info(result.processed_label)
    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Run an iuran synchronization action")
    parser.add_argument("action", choices=ACTIONS, help="Action to run")
    parser.add_argument("--month", choices=MONTH_NAMES,
                        help="Month name for the 'month' action (defaults to the current month)")
    parser.add_argument("--year", type=int, choices=CANDIDATE_YEARS,
                        help="Year for the 'month' and 'year' actions (defaults to the current year)")
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    sys.exit(asyncio.run(main(args.action, month=args.month, year=args.year)))

"""
Visit rollover worker, as a separate process.

    python run_visit_worker.py          # daily loop (same as the in-process scheduler)
    python run_visit_worker.py --once   # run the rollover now and exit

Set VISIT_SCHEDULER_ENABLED=false on the API when the loop runs here.
"""

import argparse
import asyncio
import logging
import sys

from app.services.visit_automation import manage_automatic_visits
from app.workers.visit_worker import run_visit_worker

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("visit_worker")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Daily visit rollover worker")
    parser.add_argument("--once", action="store_true", help="run a single rollover and exit")
    args = parser.parse_args(argv)

    if args.once:
        summary = manage_automatic_visits()
        if summary is None:
            return 1
        logger.info(f"Rollover finished: {summary}")
        return 0

    try:
        asyncio.run(run_visit_worker())
    except KeyboardInterrupt:
        logger.info("👋 Visit worker stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())

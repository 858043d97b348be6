"""
Railway startup script.

Handles:
    1. Database seeding (creates tables, inserts fixture rows) when asked
    2. Starts the FastAPI app under uvicorn

Usage:
    python start.py           # serve only
    python start.py --seed    # seed, then serve
"""

import argparse
import asyncio
import logging
import os
import sys

os.chdir(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ".")

from dashboard.config_env import DATABASE_URL_RAW, LOG_LEVEL, PORT  # noqa: E402

logger = logging.getLogger("start")


async def run_seed():
    from dashboard.seed import FIXTURES_DIR, seed_and_close

    if not DATABASE_URL_RAW:
        logger.info("No DATABASE_URL set, seeding the local fallback database")
    await seed_and_close(FIXTURES_DIR)


def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s: %(message)s")

    parser = argparse.ArgumentParser()
    parser.add_argument("--seed", action="store_true", help="Seed the database before serving")
    args = parser.parse_args()

    if args.seed:
        logger.info("Seeding database...")
        try:
            asyncio.run(run_seed())
        except Exception as e:
            logger.error("An error occurred while attempting to seed the database: %s", e)
            sys.exit(1)
        logger.info("Database seeding complete")

    logger.info("Starting FastAPI on port %s...", PORT)
    os.execvp(
        sys.executable,
        [sys.executable, "-m", "uvicorn", "dashboard.app:app",
         "--host", "0.0.0.0", "--port", PORT],
    )


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""Create the schema, load the sample dataset and log a few report queries."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from workforce.core.logger import get_logger, init_logging, log_context, shutdown_logging, timeit  # noqa: E402
from workforce.db import create_schema, create_sync_engine, get_sessionmaker, session_scope  # noqa: E402
from workforce.etl import import_sample_data  # noqa: E402
from workforce.repositories import UserRepository  # noqa: E402

logger = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--url",
        default=None,
        help="SQLAlchemy URL; defaults to the DB_* environment settings",
    )
    parser.add_argument(
        "--skip-load",
        action="store_true",
        help="Only run the report queries against existing data",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    if args.log_level:
        init_logging(level=args.log_level)

    engine = create_sync_engine(args.url)
    factory = get_sessionmaker(engine=engine)

    if not args.skip_load:
        create_schema(engine)
        with session_scope(factory, commit=True) as session:
            with log_context.scoped(step="load"):
                with timeit("Sample data import", unit="users", session=session) as timer:
                    users = import_sample_data(session)
                    timer.add(len(users))

    repository = UserRepository()
    with session_scope(factory) as session:
        with log_context.scoped(step="report"), timeit("Report queries", session=session):
            for row in repository.find_company_names_with_avg_user_payments(session):
                logger.info("%-12s average payment %.2f", row.company_name, row.average)
            for row in repository.find_users_with_avg_payment_above_global_average(session):
                logger.info("%-12s above global average with %.2f", row.user.username, row.average)

    shutdown_logging()


if __name__ == "__main__":
    main()

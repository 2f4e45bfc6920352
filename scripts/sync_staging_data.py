#!/usr/bin/env python3
# File: scripts/sync_staging_data.py
"""
Copy organizations, events and registrations from one database into another,
replacing what the target had. Used to refresh staging from production.

    python scripts/sync_staging_data.py --source $PRODUCTION_DATABASE_URL --target $STAGING_DATABASE_URL
"""
import argparse
import logging
import os
import sys

from dotenv import load_dotenv
from sqlalchemy import create_engine

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from eventdesk.db.database import Base
from eventdesk.models import Event, ManualSalesCount, Organization, ReferralAnswer, Registration, WaitlistCounter

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger("sync_staging_data")

# Parents first
TABLES_TO_SYNC = [Organization.__table__, Event.__table__, Registration.__table__]
# Target rows that hang off the synced tables and must go before them
DEPENDENT_TABLES = [ReferralAnswer.__table__, ManualSalesCount.__table__, WaitlistCounter.__table__]


def sync_all(source_url: str, target_url: str) -> None:
    source = create_engine(source_url)
    target = create_engine(target_url)
    Base.metadata.create_all(bind=target)

    with source.connect() as src, target.begin() as dst:
        for table in DEPENDENT_TABLES + list(reversed(TABLES_TO_SYNC)):
            deleted = dst.execute(table.delete()).rowcount
            logger.info(f"🧹 Cleared {deleted} rows from {table.name}")

        for table in TABLES_TO_SYNC:
            rows = [dict(row._mapping) for row in src.execute(table.select())]
            if rows:
                dst.execute(table.insert(), rows)
            logger.info(f"📦 Synced {len(rows)} rows into {table.name}")

    logger.info("🎉 Data synchronization completed")


def main() -> None:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Sync production data into staging")
    parser.add_argument("--source", default=os.getenv("PRODUCTION_DATABASE_URL"), help="source database URL")
    parser.add_argument("--target", default=os.getenv("STAGING_DATABASE_URL"), help="target database URL")
    args = parser.parse_args()

    if not args.source or not args.target:
        parser.error("both --source and --target (or PRODUCTION_DATABASE_URL / STAGING_DATABASE_URL) are required")
    if args.source == args.target:
        parser.error("source and target must be different databases")

    logger.info("🔄 Starting data synchronization")
    sync_all(args.source, args.target)


if __name__ == "__main__":
    main()

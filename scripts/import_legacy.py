#!/usr/bin/env python3
"""
Script to import the JSON data files written by the old browser app.

This script:
1. Opens (or creates) the farm database and applies schema upgrades
2. Imports kayanet_farm_sheep.json, kayanet_farm_transactions.json and
   kayanet_farm_health.json from the given directory
3. Deletes each file once its records are stored
4. Prints the resulting dashboard totals

Usage:
  python scripts/import_legacy.py --dir ./exported [--database-url sqlite:///farm.db]
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.application.errors import AppError, describe_error
from src.application.use_cases.dashboard import get_dashboard
from src.config.settings import Settings
from src.infrastructure.bootstrap import open_records


async def run_import(directory: Path, database_url: str | None) -> int:
    overrides = {"legacy_data_dir": directory, "allow_memory_fallback": False}
    if database_url:
        overrides["database_url"] = database_url
    settings = Settings(**overrides)

    try:
        records = await open_records(settings)
    except AppError as exc:
        print(f"❌ Import failed: {describe_error(exc)}")
        return 1

    try:
        async with records.unit_of_work() as uow:
            metrics = await get_dashboard.execute(uow)
    finally:
        await records.close()

    print("✅ Legacy data imported")
    print(f"   Animals: {metrics.total_animals} ({metrics.total_sheep} sheep, {metrics.total_goats} goats)")
    print(f"   Net profit: {metrics.net_profit}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Import legacy JSON farm data")
    parser.add_argument("--dir", required=True, type=Path, help="Directory with legacy JSON files")
    parser.add_argument("--database-url", default=None, help="Overrides FARM_DATABASE_URL")
    args = parser.parse_args()
    sys.exit(asyncio.run(run_import(args.dir, args.database_url)))


if __name__ == "__main__":
    main()

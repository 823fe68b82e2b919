"""Load customers and addresses from CSV files into the store.

Usage: python -m customer_directory.seed [DATA_DIR]

Expects ``customers.csv`` and ``addresses.csv`` in DATA_DIR (default
``seed_data``). Unknown CSV columns are dropped; a missing file is skipped.
"""

import csv
import sys
from pathlib import Path
from sqlalchemy import inspect, insert
from sqlalchemy.engine import Engine
from customer_directory.core_settings import get_settings
from customer_directory.domain.models import Customer, Address
from customer_directory.infrastructure.db import Database
from shared.core import setup_logging, get_logger

logger = get_logger(__name__)

DATA_DIR = Path("seed_data")

TABLE_FILES = {
    Customer: "customers.csv",
    Address: "addresses.csv",
}

# CSV header -> table column
COLUMN_RENAMES = {
    Customer: {"customer_id": "id"},
    Address: {"address_id": "id"},
}

def load_table(engine: Engine, model, path: Path) -> int:
    table = model.__table__
    if not path.exists():
        logger.warning(f"{path} not found; skipping {table.name}")
        return 0

    existing_cols = {c["name"] for c in inspect(engine).get_columns(table.name)}
    rename_map = COLUMN_RENAMES.get(model, {})
    with open(path, newline="", encoding="utf-8") as f:
        rows = []
        for r in csv.DictReader(f):
            row = {}
            for k, v in r.items():
                target_col = rename_map.get(k, k)
                if target_col in existing_cols:
                    row[target_col] = v if v != "" else None
            rows.append(row)
    if not rows:
        return 0

    with engine.begin() as conn:
        conn.execute(insert(table), rows)
    logger.info(f"Loaded {len(rows)} rows into {table.name}")
    return len(rows)

def seed(database: Database, data_dir: Path = DATA_DIR) -> dict:
    database.init_models()
    return {
        model.__tablename__: load_table(database.engine, model, data_dir / file)
        for model, file in TABLE_FILES.items()
    }

def main():
    settings = get_settings()
    setup_logging(service_name=f"{settings.SERVICE_NAME}-seed", level=settings.LOG_LEVEL)
    data_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else DATA_DIR
    database = Database(settings.DATABASE_URL)
    try:
        seed(database, data_dir)
    finally:
        database.dispose()

if __name__ == "__main__":
    main()

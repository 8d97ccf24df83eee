"""Load the marketplace category tree from a CSV or XLSX file.

Usage: python scripts/seed_categories.py categories.xlsx [--replace]

Expected columns: code, category, category2 .. category8 (blank cells for
levels a branch does not reach).
"""

import os
import sys

import pandas as pd

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from resale_catalog.infrastructure.database import Base, SessionLocal, engine
from resale_catalog.domain.models.category import MAX_CATEGORY_LEVEL, Category

LEVEL_COLUMNS = [Category.level_field(level) for level in range(1, MAX_CATEGORY_LEVEL + 1)]


def _clean(value):
    if value is None or pd.isna(value):
        return None
    s = str(value).strip()
    return s or None


def read_category_file(path: str) -> pd.DataFrame:
    if path.lower().endswith((".xlsx", ".xls")):
        df = pd.read_excel(path, dtype=str, engine="openpyxl")
    else:
        df = pd.read_csv(path, dtype=str)
    df.columns = [str(c).strip() for c in df.columns]

    missing = [c for c in ["code", "category"] if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(missing)}")
    return df


def seed(path: str, replace: bool = False) -> int:
    df = read_category_file(path)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if replace:
            deleted = db.query(Category).delete()
            print(f"Removed {deleted} existing categories.")

        rows = []
        for record in df.to_dict(orient="records"):
            values = {col: _clean(record.get(col)) for col in LEVEL_COLUMNS}
            if not values["category"]:
                continue
            rows.append(Category(code=_clean(record.get("code")), **values))

        db.add_all(rows)
        db.commit()
        print(f"Inserted {len(rows)} categories.")
        return len(rows)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)
    seed(sys.argv[1], replace="--replace" in sys.argv[2:])

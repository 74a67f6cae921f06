from pathlib import Path
import sqlite3
import sys

SQL = r"""
/* ======================== RECORD STORES ========================
   One table per store. `data` holds the full JSON record; the other
   columns are copies of the indexed fields, kept in sync on write. */

/* -------- products -------- */
CREATE TABLE IF NOT EXISTS products (
    id       TEXT PRIMARY KEY,
    category TEXT,
    data     TEXT NOT NULL CHECK (json_valid(data))
);
CREATE INDEX IF NOT EXISTS idx_products_category ON products(category);

/* -------- customers -------- */
CREATE TABLE IF NOT EXISTS customers (
    id    TEXT PRIMARY KEY,
    phone TEXT,
    data  TEXT NOT NULL CHECK (json_valid(data))
);
CREATE INDEX IF NOT EXISTS idx_customers_phone ON customers(phone);

/* -------- sales -------- */
CREATE TABLE IF NOT EXISTS sales (
    id          TEXT PRIMARY KEY,
    created_at  TEXT,
    paid        INTEGER NOT NULL DEFAULT 0 CHECK (paid IN (0,1)),
    customer_id TEXT,
    data        TEXT NOT NULL CHECK (json_valid(data))
);
CREATE INDEX IF NOT EXISTS idx_sales_created_at  ON sales(created_at);
CREATE INDEX IF NOT EXISTS idx_sales_paid        ON sales(paid);
CREATE INDEX IF NOT EXISTS idx_sales_customer_id ON sales(customer_id);

/* -------- expenses -------- */
CREATE TABLE IF NOT EXISTS expenses (
    id       TEXT PRIMARY KEY,
    date     TEXT,
    category TEXT,
    data     TEXT NOT NULL CHECK (json_valid(data))
);
CREATE INDEX IF NOT EXISTS idx_expenses_date     ON expenses(date);
CREATE INDEX IF NOT EXISTS idx_expenses_category ON expenses(category);
"""


def init_schema(conn: sqlite3.Connection) -> None:
    """Apply the (idempotent) schema on an open connection."""
    conn.executescript(SQL)


if __name__ == "__main__":
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).resolve().parents[2] / "data" / "shop.db"
    target.parent.mkdir(parents=True, exist_ok=True)
    con = sqlite3.connect(target)
    try:
        init_schema(con)
        con.commit()
    finally:
        con.close()
    print(f"✓ DB applied to {target}")

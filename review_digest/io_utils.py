from typing import List, Optional, Protocol
from pathlib import Path
import duckdb
import pandas as pd
from .config import CFG
from .schemas import Product, Review

PRODUCTS_TABLE = "products"
REVIEWS_TABLE = "reviews"

PRODUCT_COLUMNS = ["product_id", "name", "average_rating", "review_count"]
REVIEW_COLUMNS = ["review_id", "product_id", "rating", "comment", "created_at"]


class ReviewRepository(Protocol):
    def find_product(self, product_id: int) -> Optional[Product]: ...

    def find_latest_reviews(self, product_id: int, limit: int) -> List[Review]: ...


class ReviewStore:
    """DuckDB-backed product/review source. Read paths return pydantic models."""

    def __init__(self, path: str = CFG.duckdb_path):
        if path != ":memory:":
            Path(path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = duckdb.connect(path)

    def close(self):
        self._conn.close()

    def ensure_tables(self):
        self._conn.execute(
            f"""CREATE TABLE IF NOT EXISTS {PRODUCTS_TABLE} (
                product_id     BIGINT,
                name           TEXT,
                average_rating DOUBLE,
                review_count   BIGINT
            )"""
        )
        self._conn.execute(
            f"""CREATE TABLE IF NOT EXISTS {REVIEWS_TABLE} (
                review_id  BIGINT,
                product_id BIGINT,
                rating     INTEGER,
                comment    TEXT,
                created_at TIMESTAMP
            )"""
        )

    def write_df(self, table: str, df: pd.DataFrame, chunk_rows: int = 100_000):
        """Append df to an existing table (see ensure_tables) in chunked INSERTs to keep memory bounded."""
        start = 0
        n = len(df)
        while start < n:
            end = min(start + chunk_rows, n)
            self._conn.register("_df_chunk", df.iloc[start:end])
            self._conn.execute(f"INSERT INTO {table} SELECT * FROM _df_chunk;")
            self._conn.unregister("_df_chunk")
            start = end

    # ---------------- repository ----------------
    def find_product(self, product_id: int) -> Optional[Product]:
        row = self._conn.execute(
            f"SELECT product_id, name, average_rating, review_count FROM {PRODUCTS_TABLE} WHERE product_id = ?",
            [product_id],
        ).fetchone()
        if row is None:
            return None
        return Product(
            product_id=row[0],
            name=row[1],
            average_rating=row[2] if row[2] is not None else 0.0,
            review_count=row[3] if row[3] is not None else 0,
        )

    def find_latest_reviews(self, product_id: int, limit: int) -> List[Review]:
        rows = self._conn.execute(
            f"""SELECT review_id, product_id, rating, comment, created_at
                FROM {REVIEWS_TABLE}
                WHERE product_id = ?
                ORDER BY created_at DESC NULLS LAST, review_id DESC
                LIMIT ?""",
            [product_id, int(limit)],
        ).fetchall()
        return [Review(**dict(zip(REVIEW_COLUMNS, row))) for row in rows]

    def refresh_product_aggregates(self):
        """Recompute average_rating (rated reviews) and review_count (all reviews) per product."""
        self._conn.execute(
            f"""
            UPDATE {PRODUCTS_TABLE}
            SET average_rating = COALESCE(agg.avg_rating, 0.0),
                review_count   = agg.n
            FROM (
                SELECT product_id, AVG(rating) AS avg_rating, COUNT(*) AS n
                FROM {REVIEWS_TABLE}
                GROUP BY 1
            ) AS agg
            WHERE {PRODUCTS_TABLE}.product_id = agg.product_id;
            """
        )
        # products with no reviews at all
        self._conn.execute(
            f"""
            UPDATE {PRODUCTS_TABLE}
            SET average_rating = 0.0, review_count = 0
            WHERE NOT EXISTS (
                SELECT 1 FROM {REVIEWS_TABLE} r WHERE r.product_id = {PRODUCTS_TABLE}.product_id
            );
            """
        )

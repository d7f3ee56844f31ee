import logging
from pathlib import Path
import pandas as pd
from .io_utils import PRODUCT_COLUMNS, PRODUCTS_TABLE, REVIEW_COLUMNS, REVIEWS_TABLE, ReviewStore

LOGGER = logging.getLogger(__name__)

PRODUCT_REQUIRED = {"product_id", "name"}
REVIEW_REQUIRED = {"product_id", "rating", "comment"}


def _read_csv(path) -> pd.DataFrame:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"CSV not found: {p}")
    return pd.read_csv(p)


def prepare_products(df: pd.DataFrame) -> pd.DataFrame:
    missing = PRODUCT_REQUIRED - set(df.columns)
    if missing:
        raise ValueError(f"Missing required product columns: {sorted(missing)}")
    df = df.copy()
    df["product_id"] = pd.to_numeric(df["product_id"], errors="coerce"); df = df[df["product_id"].notna()]
    df["product_id"] = df["product_id"].astype("int64")
    df["name"] = df["name"].astype(object).where(df["name"].notna(), None)
    # aggregates are recomputed from the reviews after load
    df["average_rating"] = 0.0
    df["review_count"] = 0
    return df[PRODUCT_COLUMNS]


def prepare_reviews(df: pd.DataFrame) -> pd.DataFrame:
    missing = REVIEW_REQUIRED - set(df.columns)
    if missing:
        raise ValueError(f"Missing required review columns: {sorted(missing)}")
    df = df.copy()
    before = len(df)

    df["product_id"] = pd.to_numeric(df["product_id"], errors="coerce"); df = df[df["product_id"].notna()]
    df["product_id"] = df["product_id"].astype("int64")

    # ratings outside 1..5 are dropped; a missing rating is kept as NULL
    df["rating"] = pd.to_numeric(df["rating"], errors="coerce").round().astype("Int64")
    df = df[df["rating"].isna() | df["rating"].between(1, 5)]

    if "review_id" not in df.columns:
        df["review_id"] = range(1, len(df) + 1)
    df["review_id"] = pd.to_numeric(df["review_id"], errors="coerce").astype("Int64")

    df["comment"] = df["comment"].astype(object).where(df["comment"].notna(), None)

    if "created_at" in df.columns:
        df["created_at"] = pd.to_datetime(df["created_at"], errors="coerce", utc=True).dt.tz_localize(None)
    else:
        df["created_at"] = pd.NaT

    dropped = before - len(df)
    if dropped:
        LOGGER.info("Filtered out %s review rows with bad product_id or rating (kept %s)", dropped, len(df))
    return df[REVIEW_COLUMNS]


def run(products_csv, reviews_csv, store: ReviewStore) -> int:
    products = prepare_products(_read_csv(products_csv))
    reviews = prepare_reviews(_read_csv(reviews_csv))

    store.ensure_tables()
    store.write_df(PRODUCTS_TABLE, products)
    store.write_df(REVIEWS_TABLE, reviews)
    store.refresh_product_aggregates()
    LOGGER.info("Ingested %s products and %s reviews", len(products), len(reviews))
    return len(reviews)

from datetime import datetime

import pandas as pd
import pytest

from review_digest.io_utils import PRODUCTS_TABLE, REVIEWS_TABLE, ReviewStore


@pytest.fixture
def store():
    s = ReviewStore(":memory:")
    s.ensure_tables()
    s.write_df(PRODUCTS_TABLE, pd.DataFrame({
        "product_id": [1, 2],
        "name": ["Phone X", "Empty Box"],
        "average_rating": [0.0, 3.0],
        "review_count": [0, 9],
    }))
    s.write_df(REVIEWS_TABLE, pd.DataFrame({
        "review_id": pd.array([10, 11, 12, 13], dtype="Int64"),
        "product_id": [1, 1, 1, 1],
        "rating": pd.array([5, 4, None, 2], dtype="Int64"),
        "comment": ["oldest", "newest", None, "middle"],
        "created_at": pd.to_datetime(["2024-01-01", "2024-03-01", "2024-02-01", "2024-02-15"]),
    }))
    yield s
    s.close()


def test_find_product(store):
    product = store.find_product(1)
    assert product.name == "Phone X"
    assert store.find_product(404) is None


def test_latest_reviews_newest_first_and_limited(store):
    reviews = store.find_latest_reviews(1, 3)
    assert [r.review_id for r in reviews] == [11, 13, 12]
    assert reviews[0].created_at == datetime(2024, 3, 1)
    assert reviews[2].rating is None and reviews[2].comment is None


def test_refresh_product_aggregates(store):
    store.refresh_product_aggregates()
    phone = store.find_product(1)
    assert phone.average_rating == pytest.approx((5 + 4 + 2) / 3)
    assert phone.review_count == 4

    empty = store.find_product(2)
    assert empty.average_rating == 0.0
    assert empty.review_count == 0


def test_write_df_appends_in_chunks(store):
    more = pd.DataFrame({
        "product_id": [3, 4, 5],
        "name": ["Lamp", "Fan", "Kettle"],
        "average_rating": [0.0, 0.0, 0.0],
        "review_count": [0, 0, 0],
    })
    store.write_df(PRODUCTS_TABLE, more, chunk_rows=2)

    for pid in (1, 2, 3, 4, 5):
        assert store.find_product(pid) is not None
    assert store.find_product(5).name == "Kettle"

import pandas as pd
import pytest

from review_digest import ingest
from review_digest.io_utils import ReviewStore


def _write(tmp_path, name, rows):
    path = tmp_path / name
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


def test_expected_columns():
    assert {"product_id", "rating", "comment"}.issubset(ingest.REVIEW_REQUIRED)


def test_run_loads_tables_and_aggregates(tmp_path):
    products = _write(tmp_path, "products.csv", [
        {"product_id": 1, "name": "Phone X"},
        {"product_id": 2, "name": "Speaker"},
    ])
    reviews = _write(tmp_path, "reviews.csv", [
        {"review_id": 1, "product_id": 1, "rating": 5, "comment": "Great battery", "created_at": "2024-01-01"},
        {"review_id": 2, "product_id": 1, "rating": 3, "comment": "", "created_at": "2024-01-02"},
        {"review_id": 3, "product_id": 1, "rating": 7, "comment": "out of range", "created_at": "2024-01-03"},
        {"review_id": 4, "product_id": 2, "rating": None, "comment": "no stars", "created_at": "2024-01-04"},
    ])
    store = ReviewStore(":memory:")

    assert ingest.run(products, reviews, store) == 3

    phone = store.find_product(1)
    assert phone.average_rating == pytest.approx(4.0)
    assert phone.review_count == 2
    speaker = store.find_product(2)
    assert speaker.review_count == 1
    assert speaker.average_rating == 0.0

    latest = store.find_latest_reviews(1, 20)
    assert [r.review_id for r in latest] == [2, 1]
    assert store.find_latest_reviews(2, 20)[0].rating is None


def test_missing_columns_raise(tmp_path):
    reviews = pd.DataFrame([{"product_id": 1, "text": "x"}])
    with pytest.raises(ValueError):
        ingest.prepare_reviews(reviews)
    with pytest.raises(ValueError):
        ingest.prepare_products(pd.DataFrame([{"id": 1}]))


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ingest.run(tmp_path / "nope.csv", tmp_path / "nope2.csv", ReviewStore(":memory:"))

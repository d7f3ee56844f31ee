import json

import pandas as pd

from review_digest import __main__ as cli
from review_digest.errors import FailureKind
from review_digest.llm_client import LLMFailure


class DownClient:
    def __init__(self, settings):
        self.settings = settings

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def summarize(self, prompt):
        return LLMFailure(kind=FailureKind.PROVIDER_ERROR, status_code=502)


def test_ingest_then_summarize(tmp_path, monkeypatch, capsys):
    products = tmp_path / "products.csv"
    reviews = tmp_path / "reviews.csv"
    pd.DataFrame([{"product_id": 7, "name": "Earbuds"}]).to_csv(products, index=False)
    pd.DataFrame([
        {"review_id": 1, "product_id": 7, "rating": 5, "comment": "Sound is superb", "created_at": "2024-05-01"},
        {"review_id": 2, "product_id": 7, "rating": 1, "comment": "Battery died fast", "created_at": "2024-05-02"},
    ]).to_csv(reviews, index=False)
    db = str(tmp_path / "reviews.duckdb")
    monkeypatch.setattr(cli, "LLMClient", DownClient)

    assert cli.main(["--db", db, "ingest", "--products", str(products), "--reviews", str(reviews)]) == 0
    capsys.readouterr()
    assert cli.main(["--db", db, "summarize", "7", "8"]) == 0

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0]) == {
        "productId": 7,
        "source": "LOCAL",
        "averageRating": 3.0,
        "reviewCount": 2,
        "pros": ["Sound"],
        "cons": ["Battery life"],
    }


def test_summarize_unknown_only_exits_nonzero(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "LLMClient", DownClient)
    assert cli.main(["--db", str(tmp_path / "empty.duckdb"), "summarize", "1"]) == 1

import argparse
import json
import sys
from .config import CFG, configure_logging
from .io_utils import ReviewStore
from .llm_client import LLMClient
from .orchestration import ReviewSummaryService, summarize_products
from . import ingest


def _parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="review_digest", description="Pros/cons digests of product reviews")
    p.add_argument("--db", default=CFG.duckdb_path, help="DuckDB file (default: %(default)s)")
    sub = p.add_subparsers(dest="command", required=True)

    ing = sub.add_parser("ingest", help="load products and reviews from CSV files")
    ing.add_argument("--products", required=True)
    ing.add_argument("--reviews", required=True)

    summ = sub.add_parser("summarize", help="print a summary per product as JSON lines")
    summ.add_argument("product_ids", nargs="+", type=int)
    return p


def main(argv=None) -> int:
    args = _parser().parse_args(argv)
    configure_logging(CFG.log_level)

    store = ReviewStore(args.db)
    try:
        if args.command == "ingest":
            ingest.run(args.products, args.reviews, store)
            return 0

        store.ensure_tables()
        with LLMClient(CFG) as client:
            service = ReviewSummaryService(store, client)
            results = summarize_products(service, args.product_ids)
        for pid, resp in results.items():
            print(json.dumps({"productId": pid, **resp.model_dump(by_alias=True)}))
        return 0 if results else 1
    finally:
        store.close()


if __name__ == "__main__":
    sys.exit(main())

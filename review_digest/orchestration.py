"""
Review summary orchestration.
- look up the product (missing -> ProductNotFound, the only error callers see)
- take the latest N reviews, keep the ones with a comment
- ask the LLM client; on any classified failure use the local theme digest
- attach the product's stored averageRating / reviewCount and a source tag
"""

import logging
from typing import Dict, Iterable, Optional
from tqdm import tqdm
from .config import CFG
from .errors import ProductNotFound
from .io_utils import ReviewRepository
from .llm_client import LLMClient, LLMFailure, LLMResult, LLMSuccess
from .local_summarizer import summarize_local
from .preprocess import clean_list, is_eligible
from .prompts import build_summary_prompt
from .schemas import Product, ReviewSummaryResponse, SummaryResult

LOGGER = logging.getLogger(__name__)

SOURCE_AI = "AI"
SOURCE_LOCAL = "LOCAL"


class ReviewSummaryService:
    def __init__(self, repository: ReviewRepository, client: LLMClient,
                 review_limit: Optional[int] = None):
        self.repository = repository
        self.client = client
        self.review_limit = review_limit if review_limit is not None else CFG.review_limit

    def get_review_summary(self, product_id: int) -> ReviewSummaryResponse:
        product = self.repository.find_product(product_id)
        if product is None:
            raise ProductNotFound(product_id)

        latest = self.repository.find_latest_reviews(product_id, self.review_limit)
        usable = [r for r in latest if r is not None and is_eligible(r)]

        if not usable:
            LOGGER.info("No commented reviews for product_id=%s; using local summary", product_id)
            return _response(product, SOURCE_LOCAL, summarize_local(latest))

        prompt = build_summary_prompt(product.name, usable)
        outcome: LLMResult = self.client.summarize(prompt)

        if isinstance(outcome, LLMSuccess):
            cleaned = SummaryResult(pros=clean_list(outcome.pros), cons=clean_list(outcome.cons))
            LOGGER.info("LLM summary for product_id=%s: %s pros, %s cons",
                        product_id, len(cleaned.pros), len(cleaned.cons))
            return _response(product, SOURCE_AI, cleaned)

        if isinstance(outcome, LLMFailure):
            LOGGER.warning(
                "LLM review summary failed for product_id=%s (kind=%s, provider_status=%s): %s; "
                "falling back to local summary",
                product_id, outcome.kind.value, outcome.status_code, outcome.detail,
            )
        return _response(product, SOURCE_LOCAL, summarize_local(latest))


def _response(product: Product, source: str, summary: SummaryResult) -> ReviewSummaryResponse:
    return ReviewSummaryResponse(
        source=source,
        average_rating=product.average_rating,
        review_count=product.review_count,
        pros=summary.pros,
        cons=summary.cons,
    )


def summarize_products(service: ReviewSummaryService,
                       product_ids: Iterable[int]) -> Dict[int, ReviewSummaryResponse]:
    """Summarize several products one after another; unknown ids are logged and skipped."""
    out: Dict[int, ReviewSummaryResponse] = {}
    ids = list(product_ids)
    for pid in tqdm(ids, total=len(ids), leave=False):
        try:
            out[pid] = service.get_review_summary(pid)
        except ProductNotFound:
            LOGGER.warning("Skipping unknown product_id=%s", pid)
    return out

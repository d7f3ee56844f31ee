from collections import Counter
from typing import Iterable, List, Optional, Tuple
from .schemas import Review, SummaryResult
from .themes import CATALOG_POSITION, THEME_KEYWORDS, humanize

TOP_N = 3

def _sense(rating: Optional[int]) -> Optional[str]:
    if rating is None:
        return None
    if rating >= 4:
        return "pro"
    if rating <= 2:
        return "con"
    return None  # 3 stars is neutral

def count_themes(reviews: Optional[Iterable[Review]]) -> Tuple[Counter, Counter]:
    """
    Count theme keywords across reviews, split by rating sense.
    A keyword counts once per review however often it appears (presence, not frequency).
    """
    pros: Counter = Counter()
    cons: Counter = Counter()
    for r in reviews or []:
        if r is None or r.comment is None:
            continue
        text = r.comment.lower()
        if not text.strip():
            continue
        sense = _sense(r.rating)
        if sense is None:
            continue
        target = pros if sense == "pro" else cons
        for kw in THEME_KEYWORDS:
            if kw in text:
                target[kw] += 1
    return pros, cons

def top_themes(counts: Counter, limit: int = TOP_N) -> List[str]:
    """Highest counts first, ties in catalog order; keywords sharing a label collapse to one entry."""
    ranked = sorted(counts, key=lambda kw: (-counts[kw], CATALOG_POSITION.get(kw, len(CATALOG_POSITION))))
    out: List[str] = []
    for kw in ranked:
        label = humanize(kw)
        if label in out:
            continue
        out.append(label)
        if len(out) >= limit:
            break
    return out

def summarize_local(reviews: Optional[Iterable[Review]]) -> SummaryResult:
    """
    Deterministic keyword-theme digest:
      1) substring-match the theme catalog in each rated comment
      2) rank by count (catalog order on ties)
      3) label and dedupe, up to 3 pros and 3 cons
    Never raises; no input means empty lists.
    """
    pros, cons = count_themes(reviews)
    return SummaryResult(pros=top_themes(pros), cons=top_themes(cons))

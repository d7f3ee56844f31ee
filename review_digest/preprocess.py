"""
Text clean-up applied before reviews go to the LLM and after bullets come back.
- sanitize(): flatten line breaks, trim, cap at 500 chars (prompt input only)
- clean_list(): trim / cap / dedupe / bound a list of bullet strings
- is_eligible(): a review counts as input only if its comment has text
"""

from __future__ import annotations
from typing import Iterable, List, Optional

PROMPT_COMMENT_CHARS = 500
MAX_ITEMS = 3
MAX_ITEM_CHARS = 120


def sanitize(text: Optional[str]) -> str:
    if text is None:
        return ""
    t = text.replace("\r", " ").replace("\n", " ").strip()
    return t[:PROMPT_COMMENT_CHARS]


def is_eligible(review) -> bool:
    comment = getattr(review, "comment", None)
    return comment is not None and bool(comment.strip())


def clean_list(items: Optional[Iterable[Optional[str]]],
               max_items: int = MAX_ITEMS,
               max_chars: int = MAX_ITEM_CHARS) -> List[str]:
    """Trim, drop blanks, cap each entry at max_chars, drop repeats (first wins), keep max_items."""
    out: List[str] = []
    if not items:
        return out
    for item in items:
        if item is None:
            continue
        t = str(item).strip()
        if not t:
            continue
        t = t[:max_chars]
        if t in out:
            continue
        out.append(t)
        if len(out) >= max_items:
            break
    return out

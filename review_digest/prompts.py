from typing import Iterable, Optional
from .preprocess import sanitize
from .schemas import Review

SYSTEM_PROMPT = (
    "Output JSON only: {\"pros\":[max 3],\"cons\":[max 3]}. "
    "Do NOT mention AI. Do NOT hallucinate. Base strictly on provided reviews."
)

SUMMARY_INSTRUCTIONS = (
    "\nReturn JSON only: {\"pros\":[max 3 short bullet points],\"cons\":[max 3 short bullet points]}.\n"
    "Do not hallucinate features. Base statements strictly on reviews.\n"
    "Do not mention AI.\n"
)

def build_summary_prompt(product_name: Optional[str], reviews: Iterable[Review]) -> str:
    lines = [f"Product: {product_name or ''}", "Reviews (rating + comment):"]
    for r in reviews:
        rating = "?" if r.rating is None else r.rating
        lines.append(f"- {rating}/5: {sanitize(r.comment)}")
    return "\n".join(lines) + "\n" + SUMMARY_INSTRUCTIONS

"""Pros/cons digests of recent product reviews, LLM first with a local fallback."""

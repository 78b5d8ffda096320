"""
Agent implementations for the review dashboard.

- Issue Detection Agent (LLM with heuristic fallback)
- Response parser for model output
"""

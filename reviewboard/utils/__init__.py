"""
Utility modules for the review dashboard.

Cross-cutting concerns:
- Dates: Timestamp parsing and month bucketing
"""

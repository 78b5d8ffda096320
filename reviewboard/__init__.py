"""
Review Dashboard.

Groups guest reviews by listing, computes rating aggregates and monthly
trends under arbitrary filters, and curates which reviews are public.
"""

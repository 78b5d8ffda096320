"""
Review Store Module.

Durable read/write of the review record list.
"""

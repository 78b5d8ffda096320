"""
Review normalization and aggregation engine.

Rating Resolver -> Filter Engine -> Aggregation -> Bundle Assembler
"""

"""Core business logic layer.

Subpackages:
- shopping: merge keys, merge resolver, aggregation, purchase state, list snapshots
- recipes: serving-size scaling and catalogue deletes
- reporting: dashboard summary and list orderings
"""
__all__ = ["shopping", "recipes", "reporting"]

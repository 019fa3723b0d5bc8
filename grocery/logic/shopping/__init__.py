__all__ = ["keys", "merge", "aggregator", "purchases", "list_builder"]

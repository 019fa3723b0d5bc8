__all__ = ["summary"]

__all__ = ["scaling", "catalog"]

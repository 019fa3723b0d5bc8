"""Grocery aggregation and recipe scaling engine.

Typical use:
    from grocery import GroceryService
    service = GroceryService()
    service.aggregate_from_recipes([1, 2], "19-10-2026", owner="household-1")
"""
import logging

from grocery.utilities.config import LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Basic logging setup for scripts; libraries embedding the engine configure their own."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


from grocery.service import GroceryService  # noqa: E402

__all__ = ["GroceryService", "configure_logging"]

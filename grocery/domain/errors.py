"""Error taxonomy raised by the engine.

Each error carries a ``kind`` string so thin callers (HTTP controllers, CLIs)
can map it to their own status codes without inspecting the class hierarchy.
"""
from grocery.utilities.constants import NOT_FOUND, INVALID_ARGUMENT, CONFLICT


class GroceryError(Exception):
    kind = "error"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"kind": self.kind, "message": self.message}


class NotFound(GroceryError, LookupError):
    """A referenced recipe, meal plan or item does not exist for the owner."""
    kind = NOT_FOUND


class InvalidArgument(GroceryError, ValueError):
    """Request rejected by validation (servings range, empty list, bad quantity)."""
    kind = INVALID_ARGUMENT


class Conflict(GroceryError, RuntimeError):
    """Delete refused because the entity is still referenced elsewhere."""
    kind = CONFLICT


__all__ = ["GroceryError", "NotFound", "InvalidArgument", "Conflict"]

"""Portal lifecycle engine: add, update and remove.

Every operation takes a PortalContext, raises a PortalError subclass on
fatal failure, and reports best-effort steps through ctx.feedback.
"""

from edutech.core.lifecycle.add import add_portal
from edutech.core.lifecycle.remove import remove_portal
from edutech.core.lifecycle.types import AddResult, RemoveResult, UpdateOutcome, UpdateResult
from edutech.core.lifecycle.update import update_all, update_portal

__all__ = [
    "AddResult",
    "RemoveResult",
    "UpdateOutcome",
    "UpdateResult",
    "add_portal",
    "remove_portal",
    "update_all",
    "update_portal",
]

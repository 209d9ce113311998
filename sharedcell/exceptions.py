"""sharedcell exception hierarchy.

Every error here is a contract violation by the caller. The library raises them
immediately and never catches them; only the CLI turns them into a fatal
diagnostic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sharedcell.handle import LeaseState


class SharedCellError(Exception):
    """Base exception for all sharedcell errors."""


class BorrowConflict(SharedCellError):
    """Raised when a lease request overlaps an incompatible outstanding lease.

    A write lease conflicts with any outstanding lease; a read lease conflicts
    with an outstanding write lease.
    """

    def __init__(self, record_id: str, requested: str, state: LeaseState, readers: int) -> None:
        self.record_id = record_id
        self.requested = requested
        self.state = state
        self.readers = readers
        if readers:
            held = f"{readers} read lease(s)"
        else:
            held = "a write lease"
        super().__init__(
            f"Borrow conflict on '{record_id}': {requested} lease requested "
            f"while {held} outstanding"
        )


class HandleReleased(SharedCellError):
    """Raised when a handle is used after it gave up its ownership."""

    def __init__(self, record_id: str, operation: str) -> None:
        self.record_id = record_id
        self.operation = operation
        super().__init__(f"Cannot {operation} '{record_id}': handle already released")


class LeaseReleased(SharedCellError):
    """Raised when a guard, or a view obtained through it, is used after its lease ended."""

    def __init__(self, record_id: str, mode: str) -> None:
        self.record_id = record_id
        self.mode = mode
        super().__init__(f"{mode.capitalize()} lease on '{record_id}' already released")


__all__ = ["SharedCellError", "BorrowConflict", "HandleReleased", "LeaseReleased"]

"""
Reference-counted, interior-mutable handle around a `SharedRecord`.

Every clone of a `SharedHandle` points at the same `_SharedCell`, which owns the
record, counts live owners and tracks outstanding leases:

    Idle --read--> ReadLeased(1) --read--> ReadLeased(n+1)
    ReadLeased(n) --release--> ReadLeased(n-1) | Idle
    Idle --write--> WriteLeased --release--> Idle

Any request that finds an incompatible lease raises `BorrowConflict` at once;
nothing waits. When the owner count reaches zero and no lease is outstanding the
record is dropped, exactly once.

Usage:
    handle = SharedHandle(SharedRecord.new("ConfigItem", 10))
    other = handle.clone()
    with other.write() as record:
        record.set_value(25)
    with handle.read() as view:
        view.display()
    other.release()
    handle.release()
"""

from __future__ import annotations

import enum
from typing import Callable, ClassVar, List, Optional

from sharedcell.domain.models import RecordView, RecordWriter, SharedRecord
from sharedcell.exceptions import BorrowConflict, HandleReleased, LeaseReleased
from sharedcell.utils.logging import get_logger, get_trace_logger

log = get_logger(__name__)
trace = get_trace_logger()

READ = "read"
WRITE = "write"


class LeaseState(str, enum.Enum):
    IDLE = "idle"
    READ_LEASED = "read_leased"
    WRITE_LEASED = "write_leased"


class _SharedCell:
    """Owner count, lease flags and the record itself, shared by all clones."""

    __slots__ = ("record", "record_id", "owners", "readers", "writing", "destroyed", "_on_destroy")

    def __init__(self, record: SharedRecord) -> None:
        self.record = record
        self.record_id = record.id
        self.owners = 1
        self.readers = 0
        self.writing = False
        self.destroyed = False
        self._on_destroy: List[Callable[[SharedRecord], None]] = []

    @property
    def state(self) -> LeaseState:
        if self.writing:
            return LeaseState.WRITE_LEASED
        if self.readers:
            return LeaseState.READ_LEASED
        return LeaseState.IDLE

    def conflicts(self, mode: str) -> bool:
        if mode == READ:
            return self.writing
        return self.writing or self.readers > 0

    def acquire(self, mode: str) -> None:
        if self.conflicts(mode):
            log.debug(
                "Lease refused",
                extra={"record_id": self.record_id, "mode": mode, "state": self.state.value},
            )
            raise BorrowConflict(self.record_id, mode, self.state, self.readers)
        if mode == READ:
            self.readers += 1
        else:
            self.writing = True
        log.debug(
            "Lease acquired",
            extra={"record_id": self.record_id, "mode": mode, "readers": self.readers},
        )

    def release_lease(self, mode: str) -> None:
        if mode == READ:
            self.readers -= 1
        else:
            self.writing = False
        log.debug(
            "Lease released",
            extra={"record_id": self.record_id, "mode": mode, "readers": self.readers},
        )
        self._maybe_destroy()

    def add_owner(self) -> None:
        self.owners += 1
        log.debug("Owner added", extra={"record_id": self.record_id, "owners": self.owners})

    def drop_owner(self) -> None:
        self.owners -= 1
        log.debug("Owner dropped", extra={"record_id": self.record_id, "owners": self.owners})
        self._maybe_destroy()

    def on_destroy(self, callback: Callable[[SharedRecord], None]) -> None:
        self._on_destroy.append(callback)

    def _maybe_destroy(self) -> None:
        # Outstanding leases keep the record alive past its last owner.
        if self.destroyed or self.owners > 0 or self.state is not LeaseState.IDLE:
            return
        self.destroyed = True
        record = self.record
        trace.info(
            "Dropping record '%s' (final value %s)",
            record.id,
            record.value,
            extra={"record_id": record.id, "value": record.value},
        )
        callbacks, self._on_destroy = self._on_destroy, []
        # Every callback runs; the first failure is re-raised afterwards.
        failures: List[Exception] = []
        for callback in callbacks:
            try:
                callback(record)
            except Exception as exc:
                log.exception("on_destroy callback failed", extra={"record_id": record.id})
                failures.append(exc)
        if failures:
            raise failures[0]


class _Lease:
    """A scoped lease; released on `with` exit or by an explicit `release()`."""

    mode: ClassVar[str]

    def __init__(self, cell: _SharedCell) -> None:
        cell.acquire(self.mode)
        self._cell = cell
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def release(self) -> None:
        if not self._active:
            return
        self._active = False
        self._cell.release_lease(self.mode)

    def _ensure_active(self) -> None:
        if not self._active:
            raise LeaseReleased(self._cell.record_id, self.mode)

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class ReadGuard(_Lease):
    """Shared, read-only lease. Any number may be outstanding at once."""

    mode = READ

    @property
    def view(self) -> RecordView:
        self._ensure_active()
        return RecordView(self._cell.record, check=self._ensure_active)

    def __enter__(self) -> RecordView:
        return self.view


class WriteGuard(_Lease):
    """
    Exclusive lease. Gives access to the record's mutators through a
    `RecordWriter` that stops working once the lease is released.
    """

    mode = WRITE

    @property
    def record(self) -> RecordWriter:
        self._ensure_active()
        return RecordWriter(self._cell.record, check=self._ensure_active)

    def __enter__(self) -> RecordWriter:
        return self.record


class SharedHandle:
    """
    One owner's reference to a shared record.

    `clone()` registers a new owner of the same record; `release()` (or leaving
    a `with handle:` block) gives this owner's share up. Each handle releases at
    most once, so the record can only be dropped once.

    The handle keeps its own copy of the record it is given; the caller's object
    is not shared, so every change has to go through a write lease.
    """

    __slots__ = ("_cell", "_released")

    def __init__(self, record: SharedRecord) -> None:
        self._cell = _SharedCell(record.model_copy())
        self._released = False
        log.debug("Handle created", extra={"record_id": record.id, "owners": 1})

    @classmethod
    def create(cls, record: SharedRecord) -> "SharedHandle":
        return cls(record)

    @classmethod
    def _attach(cls, cell: _SharedCell) -> "SharedHandle":
        handle = cls.__new__(cls)
        handle._cell = cell
        handle._released = False
        return handle

    def _ensure_live(self, operation: str) -> None:
        if self._released:
            raise HandleReleased(self._cell.record_id, operation)

    def clone(self) -> "SharedHandle":
        self._ensure_live("clone")
        self._cell.add_owner()
        return SharedHandle._attach(self._cell)

    def read(self) -> ReadGuard:
        self._ensure_live("read")
        return ReadGuard(self._cell)

    def write(self) -> WriteGuard:
        self._ensure_live("write")
        return WriteGuard(self._cell)

    def try_read(self) -> Optional[ReadGuard]:
        """Like `read()`, but returns None instead of raising on a conflict."""
        self._ensure_live("read")
        if self._cell.conflicts(READ):
            return None
        return ReadGuard(self._cell)

    def try_write(self) -> Optional[WriteGuard]:
        """Like `write()`, but returns None instead of raising on a conflict."""
        self._ensure_live("write")
        if self._cell.conflicts(WRITE):
            return None
        return WriteGuard(self._cell)

    def on_destroy(self, callback: Callable[[SharedRecord], None]) -> None:
        """Register `callback(record)` to run once, when the record is dropped."""
        self._ensure_live("watch")
        self._cell.on_destroy(callback)

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._cell.drop_owner()

    @property
    def owner_count(self) -> int:
        return self._cell.owners

    @property
    def lease_state(self) -> LeaseState:
        return self._cell.state

    @property
    def reader_count(self) -> int:
        return self._cell.readers

    @property
    def record_id(self) -> str:
        return self._cell.record_id

    @property
    def is_released(self) -> bool:
        return self._released

    @property
    def is_destroyed(self) -> bool:
        return self._cell.destroyed

    def same_record(self, other: "SharedHandle") -> bool:
        return self._cell is other._cell

    def __enter__(self) -> "SharedHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        status = "released" if self._released else "live"
        return (
            f"SharedHandle(id={self._cell.record_id!r}, owners={self._cell.owners}, "
            f"state={self._cell.state.value}, {status})"
        )


__all__ = [
    "LeaseState",
    "ReadGuard",
    "SharedHandle",
    "WriteGuard",
]

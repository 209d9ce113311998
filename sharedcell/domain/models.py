"""
Domain models for sharedcell.

`SharedRecord` is the single piece of data shared between owners. Its `id` is
fixed at construction; its `value` is mutated in place by whichever owner holds
the exclusive lease. `RecordView` is the read-only face handed out under a
read lease and `RecordWriter` its mutating counterpart under a write lease.
"""
from __future__ import annotations

from typing import Callable, Optional

from pydantic import BaseModel, Field

from sharedcell.utils.logging import get_trace_logger

trace = get_trace_logger()


class SharedRecord(BaseModel):
    """
    A mutable record with an immutable identifier.

    Mutators assume the caller holds exclusive access (a write lease on the
    owning handle); they do not check it themselves.
    """

    id: str = Field(..., frozen=True, description="Identifier, fixed at construction.")
    value: int = Field(..., description="Mutable integer payload.")

    model_config = {
        "validate_assignment": True,
        "strict": True,
    }

    @classmethod
    def new(cls, record_id: str, initial_value: int) -> "SharedRecord":
        return cls(id=record_id, value=initial_value)

    def set_value(self, new_value: int) -> None:
        old_value = self.value
        self.value = new_value
        trace.info(
            "Updating value for '%s' from %s to %s",
            self.id,
            old_value,
            new_value,
            extra={"record_id": self.id, "old_value": old_value, "new_value": new_value},
        )

    def increment(self) -> None:
        old_value = self.value
        self.value = old_value + 1
        trace.info(
            "Incrementing value for '%s' from %s to %s",
            self.id,
            old_value,
            self.value,
            extra={"record_id": self.id, "old_value": old_value, "new_value": self.value},
        )

    def display(self) -> str:
        """Log and return the current state of the record."""
        line = f"Data ID: {self.id}, Current Value: {self.value}"
        trace.info(line, extra={"record_id": self.id, "value": self.value})
        return line


class RecordView:
    """
    Read-only proxy over a `SharedRecord`.

    When handed out under a lease, `check` is called before every access and
    raises once the lease is gone, so a reference kept past its `with` block
    cannot be used.
    """

    __slots__ = ("_record", "_check")

    def __init__(self, record: SharedRecord, check: Optional[Callable[[], None]] = None) -> None:
        self._record = record
        self._check = check

    def _target(self) -> SharedRecord:
        if self._check is not None:
            self._check()
        return self._record

    @property
    def id(self) -> str:
        return self._target().id

    @property
    def value(self) -> int:
        return self._target().value

    def display(self) -> str:
        return self._target().display()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._record.id!r}, value={self._record.value!r})"


class RecordWriter(RecordView):
    """Mutating proxy handed out under an exclusive lease."""

    __slots__ = ()

    def set_value(self, new_value: int) -> None:
        self._target().set_value(new_value)

    def increment(self) -> None:
        self._target().increment()


__all__ = ["SharedRecord", "RecordView", "RecordWriter"]

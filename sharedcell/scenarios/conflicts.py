"""
Faulting scenarios: two owners request overlapping, incompatible leases.

Each one ends in `BorrowConflict`, which is left to propagate. Handles and the
lease that was granted are still released on the way out, so the record is
dropped before the error reaches the caller.
"""

from __future__ import annotations

import abc
import contextlib

from sharedcell.domain.models import SharedRecord
from sharedcell.handle import SharedHandle
from sharedcell.scenarios.abstract import AbstractScenario, ScenarioResult


class ConflictScenario(AbstractScenario):
    """The original owner takes a lease, then component A asks for a conflicting one."""

    faulting = True

    def execute(self) -> ScenarioResult:
        with contextlib.ExitStack() as owners:
            original = owners.enter_context(
                SharedHandle(SharedRecord.new(self.record_id, self.initial_value))
            )
            component = owners.enter_context(original.clone())
            self.section(self.description)
            self.report_owner_count(original)
            self.provoke(original, component)
        raise AssertionError(f"scenario '{self.name}' finished without a borrow conflict")

    @abc.abstractmethod
    def provoke(self, original: SharedHandle, component: SharedHandle) -> None:
        raise NotImplementedError


class WriteDuringReadScenario(ConflictScenario):
    name: str = "write_during_read"
    description: str = "Component A requests a write lease while the original owner reads."

    def provoke(self, original: SharedHandle, component: SharedHandle) -> None:
        with original.read() as view:
            view.display()
            with component.write() as record:
                record.set_value(self.updated_value)


class DoubleWriteScenario(ConflictScenario):
    name: str = "double_write"
    description: str = "Component A requests a write lease while the original owner writes."

    def provoke(self, original: SharedHandle, component: SharedHandle) -> None:
        with original.write() as record:
            record.set_value(self.updated_value)
            with component.write() as other:
                other.increment()


class ReadDuringWriteScenario(ConflictScenario):
    name: str = "read_during_write"
    description: str = "Component A requests a read lease while the original owner writes."

    def provoke(self, original: SharedHandle, component: SharedHandle) -> None:
        with original.write() as record:
            record.set_value(self.updated_value)
            with component.read() as view:
                view.display()


__all__ = [
    "ConflictScenario",
    "DoubleWriteScenario",
    "ReadDuringWriteScenario",
    "WriteDuringReadScenario",
]

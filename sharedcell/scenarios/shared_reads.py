"""
Shared-reads scenario: every owner holds a read lease at the same time.

Read leases never exclude each other, so all owners can display the record
concurrently; once they are all released the record is idle again.
"""

from __future__ import annotations

import contextlib
from typing import Dict, List

from sharedcell.domain.models import SharedRecord
from sharedcell.handle import SharedHandle
from sharedcell.scenarios.abstract import (
    ORIGINAL_OWNER,
    AbstractScenario,
    ScenarioResult,
    component_label,
)
from sharedcell.utils.logging import get_trace_logger

trace = get_trace_logger()


class SharedReadsScenario(AbstractScenario):
    name: str = "shared_reads"
    description: str = "All owners hold read leases on the record simultaneously."

    def execute(self) -> ScenarioResult:
        owner_counts: List[int] = []
        observed: Dict[str, int] = {}
        dropped: List[SharedRecord] = []

        with contextlib.ExitStack() as owners:
            original = owners.enter_context(
                SharedHandle(SharedRecord.new(self.record_id, self.initial_value))
            )
            original.on_destroy(dropped.append)
            self.section("Initial state")
            owner_counts.append(self.report_owner_count(original))

            handles: Dict[str, SharedHandle] = {ORIGINAL_OWNER: original}
            for index in range(self.owners):
                label = component_label(index)
                handles[label] = owners.enter_context(original.clone())
                owner_counts.append(handles[label].owner_count)
            self.report_owner_count(original, "Owner count after clones")

            self.section("Every owner reads at once")
            with contextlib.ExitStack() as leases:
                for label, handle in handles.items():
                    view = leases.enter_context(handle.read())
                    observed[label] = view.value
                peak_readers = original.reader_count
                trace.info("Concurrent readers: %s", peak_readers, extra={"readers": peak_readers})
                for label in handles:
                    with handles[label].read() as view:
                        view.display()
            trace.info("Lease state after reads: %s", original.lease_state.value)

            final_owner_count = self.report_owner_count(
                original, "Final owner count before release"
            )
            self.section("Owners release their handles")

        return ScenarioResult(
            scenario=self.name,
            record_id=self.record_id,
            owners=self.owners + 1,
            owner_counts=owner_counts,
            initial_value=self.initial_value,
            final_value=observed[ORIGINAL_OWNER],
            observed_values=observed,
            final_owner_count=final_owner_count,
            peak_readers=peak_readers,
            destroyed=len(dropped) == 1,
        )


__all__ = ["SharedReadsScenario"]

"""
Nominal scenario: several components share one record, one of them mutates it
and every owner observes the change.

Trace, in order: initial state and owner count, one section per component
(clone, new owner count, display), the mutation lines, every owner's
post-mutation display, the owner count before release, and finally the drop of
the record once every owner has let go.
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


class NominalScenario(AbstractScenario):
    """
    Create, clone for each component, mutate through the last component, then
    read back through every owner.
    """

    name: str = "nominal"
    description: str = "Components share one record; the last one updates it, all observe it."

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
            with original.read() as view:
                view.display()

            components: Dict[str, SharedHandle] = {}
            for index in range(self.owners):
                label = component_label(index)
                self.section(f"Component {label} gets shared access")
                components[label] = owners.enter_context(original.clone())
                owner_counts.append(
                    self.report_owner_count(components[label], "Owner count after clone")
                )
                with components[label].read() as view:
                    view.display()

            writer = component_label(self.owners - 1)
            self.section(f"Component {writer} modifies the data")
            with components[writer].write() as record:
                record.set_value(self.updated_value)
                record.increment()

            # The writer confirms first, then the other components, then the original.
            readers = [writer] + [label for label in components if label != writer]
            for label in readers:
                self.section(f"Component {label} observes the data")
                with components[label].read() as view:
                    view.display()
                    observed[label] = view.value

            self.section("Original owner observes the data")
            with original.read() as view:
                view.display()
                observed[ORIGINAL_OWNER] = view.value
                final_value = view.value

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
            final_value=final_value,
            observed_values=observed,
            final_owner_count=final_owner_count,
            peak_readers=1,
            destroyed=len(dropped) == 1,
        )


__all__ = ["NominalScenario"]

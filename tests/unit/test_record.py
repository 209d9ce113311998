from __future__ import annotations

import pytest
from pydantic import ValidationError

from sharedcell.domain.models import RecordView, SharedRecord

INITIAL_VALUE = 10
UPDATED_VALUE = 25


def test_new_stores_id_and_initial_value():
    record = SharedRecord.new("ConfigItem", INITIAL_VALUE)
    assert record.id == "ConfigItem"
    assert record.value == INITIAL_VALUE


@pytest.mark.parametrize(
    ("first", "second"),
    [(1, 2), (25, 10), (-3, 0), (7, 7)],
)
def test_set_value_is_last_write_wins(first: int, second: int):
    record = SharedRecord.new("ConfigItem", INITIAL_VALUE)
    record.set_value(first)
    record.set_value(second)
    assert record.value == second


@pytest.mark.parametrize("start", [-1, 0, 10, 2**40])
def test_increment_matches_set_value_plus_one(start: int):
    incremented = SharedRecord.new("a", start)
    assigned = SharedRecord.new("b", start)

    incremented.increment()
    assigned.set_value(assigned.value + 1)

    assert incremented.value == assigned.value == start + 1


def test_mutators_log_old_and_new_values(trace_lines):
    record = SharedRecord.new("ConfigItem", INITIAL_VALUE)
    record.set_value(UPDATED_VALUE)
    record.increment()

    assert trace_lines() == [
        "Updating value for 'ConfigItem' from 10 to 25",
        "Incrementing value for 'ConfigItem' from 25 to 26",
    ]


def test_display_logs_and_returns_current_state(trace_lines):
    record = SharedRecord.new("ConfigItem", INITIAL_VALUE)
    line = record.display()

    assert line == "Data ID: ConfigItem, Current Value: 10"
    assert trace_lines() == [line]
    assert record.value == INITIAL_VALUE


def test_id_cannot_be_reassigned():
    record = SharedRecord.new("ConfigItem", INITIAL_VALUE)
    with pytest.raises(ValidationError):
        record.id = "Other"
    assert record.id == "ConfigItem"


def test_value_must_stay_an_integer():
    record = SharedRecord.new("ConfigItem", INITIAL_VALUE)
    with pytest.raises(ValidationError):
        record.value = "twenty"  # type: ignore[assignment]
    assert record.value == INITIAL_VALUE


def test_view_exposes_state_without_mutators():
    record = SharedRecord.new("ConfigItem", INITIAL_VALUE)
    view = RecordView(record)

    assert (view.id, view.value) == ("ConfigItem", INITIAL_VALUE)
    assert not hasattr(view, "set_value")
    assert not hasattr(view, "increment")
    with pytest.raises(AttributeError):
        view.value = UPDATED_VALUE  # type: ignore[misc]


def test_view_tracks_the_underlying_record():
    record = SharedRecord.new("ConfigItem", INITIAL_VALUE)
    view = RecordView(record)
    record.set_value(UPDATED_VALUE)
    assert view.value == UPDATED_VALUE
    assert view.display() == "Data ID: ConfigItem, Current Value: 25"


def test_rejected_value_leaves_no_update_line(trace_lines):
    record = SharedRecord.new("ConfigItem", INITIAL_VALUE)
    with pytest.raises(ValidationError):
        record.set_value("twenty")  # type: ignore[arg-type]
    assert record.value == INITIAL_VALUE
    assert trace_lines() == []

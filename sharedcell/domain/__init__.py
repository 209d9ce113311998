"""
Domain package for sharedcell.

Exports the record shared between owners and the views leased out over it.
Keep this package focused on data definitions and their behaviours.
"""

from sharedcell.domain.models import RecordView, RecordWriter, SharedRecord

__all__ = [
    "RecordView",
    "RecordWriter",
    "SharedRecord",
]

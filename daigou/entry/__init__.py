"""Mini README: Interactive entry workflow for the ledger.

``form`` models the "record a sale" form with its country pre-fill and
suggested price rules; ``confirmation`` gates deletions behind an explicit
confirm step. Both are UI state only and hand finished work to the store.
"""

from .confirmation import ConfirmationGate, PendingAction, PendingActionKind
from .form import EDITABLE_FIELDS, EntryDraft, EntryPreview

__all__ = [
    "ConfirmationGate",
    "EDITABLE_FIELDS",
    "EntryDraft",
    "EntryPreview",
    "PendingAction",
    "PendingActionKind",
]

"""Mini README: Two-step confirmation for destructive ledger actions.

Structure:
    * PendingActionKind - delete one entry or clear the ledger.
    * PendingAction - the recorded intent awaiting confirmation.
    * ConfirmationGate - Idle / PendingConfirmation state machine.

A delete or clear request only records intent. ``confirm`` applies it to
the store and returns to idle; ``cancel`` returns to idle without touching
the store. A new request replaces any intent still pending.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from ..logging_utils import get_logger
from ..storage.ledger_store import LedgerStore

LOGGER = get_logger(__name__)


class PendingActionKind(str, Enum):
    DELETE = "delete"
    CLEAR_ALL = "clear_all"


@dataclass(frozen=True, slots=True)
class PendingAction:
    kind: PendingActionKind
    target_id: Optional[str] = None


_DIALOG_TEXT: Dict[PendingActionKind, tuple] = {
    PendingActionKind.DELETE: ("刪除交易紀錄", "您確定要刪除這筆交易紀錄嗎？"),
    PendingActionKind.CLEAR_ALL: (
        "清空所有資料",
        "警告：此動作將「永久刪除」所有交易紀錄，無法復原！\n\n您確定要清空嗎？",
    ),
}


class ConfirmationGate:
    """Hold at most one destructive action until it is confirmed."""

    def __init__(self) -> None:
        self.pending: Optional[PendingAction] = None

    @property
    def is_pending(self) -> bool:
        return self.pending is not None

    @property
    def title(self) -> str:
        return _DIALOG_TEXT[self.pending.kind][0] if self.pending else ""

    @property
    def message(self) -> str:
        return _DIALOG_TEXT[self.pending.kind][1] if self.pending else ""

    def request_delete(self, transaction_id: object) -> PendingAction:
        self.pending = PendingAction(PendingActionKind.DELETE, str(transaction_id))
        LOGGER.debug("Delete of %s awaiting confirmation", transaction_id)
        return self.pending

    def request_clear_all(self) -> PendingAction:
        self.pending = PendingAction(PendingActionKind.CLEAR_ALL)
        LOGGER.debug("Clearing the ledger awaits confirmation")
        return self.pending

    def cancel(self) -> None:
        if self.pending:
            LOGGER.debug("Cancelled pending %s", self.pending.kind.value)
        self.pending = None

    def confirm(self, store: LedgerStore) -> bool:
        """Apply the pending action; returns False when nothing was pending."""

        action = self.pending
        if action is None:
            return False
        if action.kind is PendingActionKind.DELETE and action.target_id:
            store.remove(action.target_id)
        elif action.kind is PendingActionKind.CLEAR_ALL:
            store.clear()
        self.pending = None
        return True

    def as_dict(self) -> Dict[str, object]:
        return {
            "pending": self.is_pending,
            "kind": self.pending.kind.value if self.pending else None,
            "target_id": self.pending.target_id if self.pending else None,
            "title": self.title,
            "message": self.message,
        }

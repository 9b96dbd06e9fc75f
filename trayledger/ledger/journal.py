"""Mini README: Write-ahead journal for multi-step purchase commits.

A finalized purchase needs several independent store writes: one stock
update per product, the order, and the automatic stock-cost expense. Each
intended write is recorded here before it is sent. ``flush`` sends them in
order and drops each one only after the store confirms it; the first
failure stops the flush and leaves that write and everything after it in
the journal for a later retry.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Deque, Dict, List, Optional

from ..errors import PersistenceFailure
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class WriteKind(str, Enum):
    UPDATE_PRODUCT = "update_product"
    CREATE_ORDER = "create_order"
    CREATE_EXPENSE = "create_expense"


@dataclass(slots=True)
class PendingWrite:
    """One intended store write plus its delivery history."""

    kind: WriteKind
    key: str
    payload: Dict[str, Any]
    attempts: int = 0
    last_error: Optional[str] = None
    result: Any = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "key": self.key,
            "attempts": self.attempts,
            "last_error": self.last_error,
        }


class WriteJournal:
    """FIFO of writes that have not yet been confirmed by the store."""

    def __init__(self) -> None:
        self._entries: Deque[PendingWrite] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def entries(self) -> List[PendingWrite]:
        return list(self._entries)

    def record(self, write: PendingWrite) -> PendingWrite:
        self._entries.append(write)
        return write

    def flush(self, apply: Callable[[PendingWrite], Any]) -> int:
        """Deliver pending writes in order, returning how many succeeded.

        Raises the first ``PersistenceFailure`` encountered after updating
        that write's attempt count and error text.
        """

        delivered = 0
        while self._entries:
            write = self._entries[0]
            write.attempts += 1
            try:
                write.result = apply(write)
            except PersistenceFailure as error:
                write.last_error = error.message
                LOGGER.warning(
                    "Store write %s(%s) failed on attempt %s; %s write(s) left pending",
                    write.kind.value,
                    write.key,
                    write.attempts,
                    len(self._entries),
                )
                raise
            self._entries.popleft()
            delivered += 1
        return delivered

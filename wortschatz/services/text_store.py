"""Saved-text collection persisted as one JSON document in a storage slot.

The whole list is written on every change; nothing is edited in place.
Unreadable slot contents load as an empty collection.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Callable, Iterable, List, Optional

from sqlalchemy.orm import Session

from ..config import SAVED_TEXTS_SLOT
from ..models import StorageSlot

logger = logging.getLogger(__name__)


class TextStore:
    def __init__(self, session_factory: Callable[[], Session], slot: str = SAVED_TEXTS_SLOT):
        self._session_factory = session_factory
        self.slot = slot
        self._lock = threading.Lock()
        self._texts: List[str] = []

    @property
    def texts(self) -> List[str]:
        return list(self._texts)

    def __len__(self) -> int:
        return len(self._texts)

    def get(self, index: int) -> Optional[str]:
        if 0 <= index < len(self._texts):
            return self._texts[index]
        return None

    def load(self) -> List[str]:
        """Replace the in-memory collection with the persisted one."""
        with self._lock:
            with self._session_factory() as db:
                row = db.get(StorageSlot, self.slot)
                raw = row.value if row is not None else None
            self._texts = _decode(raw, self.slot)
            logger.debug(f"Loaded {len(self._texts)} saved texts from slot {self.slot!r}")
            return list(self._texts)

    def add(self, text: str) -> List[str]:
        with self._lock:
            updated = self._texts + [text]
            self._persist(updated)
            self._texts = updated
            return list(updated)

    def replace(self, texts: Iterable[str]) -> List[str]:
        updated = [str(t) for t in texts]
        with self._lock:
            self._persist(updated)
            self._texts = updated
            return list(updated)

    def _persist(self, texts: List[str]) -> None:
        payload = json.dumps(texts, ensure_ascii=False)
        with self._session_factory() as db:
            row = db.get(StorageSlot, self.slot)
            if row is None:
                db.add(StorageSlot(key=self.slot, value=payload))
            else:
                row.value = payload
            db.commit()


def _decode(raw: Optional[str], slot: str) -> List[str]:
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning(f"Slot {slot!r} holds unparsable data, starting empty: {e}")
        return []
    if not isinstance(data, list) or not all(isinstance(t, str) for t in data):
        logger.warning(f"Slot {slot!r} does not hold a list of strings, starting empty")
        return []
    return data

"""
State of the reading surface.

One ReadingSession backs the single-user reading page: the saved texts,
which text is open, the clicked word and its analysis, the notification
banner and the add-text dialog. Routes mutate it through methods only.

Overlapping analyses are ordered by ticket: every click takes the next
ticket and a result is applied only if its ticket is still the newest, so a
slow earlier request can never overwrite a later one.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from ..utils.exceptions import WortschatzError
from ..utils.llm_validation import ExampleSentence, WordAnalysis
from .text_store import TextStore

logger = logging.getLogger(__name__)

NOTIFICATION_KINDS = ("error", "success", "info")

FALLBACK_ANALYSIS = WordAnalysis(
    grammarDetailsAndUsage='Reflexive Verb (sich erkundigen) - Used with preposition "nach"',
    example=ExampleSentence(
        german="Ich erkundige mich nach den Öffnungszeiten.",
        russian="Я узнаю часы работы.",
    ),
)

MSG_TEXT_SAVED = "Text saved successfully"
MSG_ANKI_SAVED = "Successfully saved to Anki"
MSG_ANKI_FAILED = "Error saving to Anki - Please check if Anki is running"
MSG_SPEECH_FAILED = "Unable to read text aloud"
MSG_ANALYSIS_FALLBACK = "Error analyzing word - Using fallback data"

Analyzer = Callable[[str, str], Awaitable[WordAnalysis]]
Exporter = Callable[[str, str], Awaitable[object]]


@dataclass
class Notification:
    message: str
    kind: str = "info"
    expires_at: Optional[float] = None

    @property
    def sticky(self) -> bool:
        return self.expires_at is None


class ReadingSession:
    def __init__(
        self,
        store: TextStore,
        *,
        notification_ttl: float = 3.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.notification_ttl = notification_ttl
        self._clock = clock

        self.selected_index: Optional[int] = None
        self.selected_word: Optional[str] = None
        self.analysis: Optional[WordAnalysis] = None
        self.is_adding_new: bool = False
        self._notification: Optional[Notification] = None
        self._ticket: int = 0
        self._pending: set[int] = set()

    # ---- texts ----

    @property
    def texts(self) -> list[str]:
        return self.store.texts

    @property
    def selected_text(self) -> Optional[str]:
        if self.selected_index is None:
            return None
        return self.store.get(self.selected_index)

    def select_text(self, index: int) -> bool:
        if self.store.get(index) is None:
            return False
        self.selected_index = index
        return True

    def open_add_text(self) -> None:
        self.is_adding_new = True

    def close_add_text(self) -> None:
        self.is_adding_new = False

    def save_new_text(self, text: str) -> bool:
        """Append a non-blank text, close the dialog and confirm. Blank input is ignored."""
        if not text or not text.strip():
            return False
        self.store.add(text)
        self.is_adding_new = False
        self.notify(MSG_TEXT_SAVED, "success")
        return True

    # ---- analysis ----

    @property
    def is_loading(self) -> bool:
        return self._ticket in self._pending

    def begin_analysis(self, word: str) -> int:
        self._ticket += 1
        self._pending.add(self._ticket)
        self.selected_word = word
        return self._ticket

    def is_current(self, ticket: int) -> bool:
        return ticket == self._ticket

    def complete_analysis(self, ticket: int, analysis: WordAnalysis) -> bool:
        self._pending.discard(ticket)
        if not self.is_current(ticket):
            logger.debug(f"Discarding stale analysis for ticket {ticket} (current {self._ticket})")
            return False
        self.analysis = analysis
        return True

    def fail_analysis(self, ticket: int, message: str = MSG_ANALYSIS_FALLBACK) -> bool:
        self._pending.discard(ticket)
        if not self.is_current(ticket):
            logger.debug(f"Discarding stale failure for ticket {ticket} (current {self._ticket})")
            return False
        self.analysis = FALLBACK_ANALYSIS
        self.notify(message, "error")
        return True

    async def run_analysis(self, word: str, context: str, analyzer: Analyzer) -> bool:
        """Analyze ``word`` and apply the outcome. Returns False if superseded meanwhile."""
        ticket = self.begin_analysis(word)
        try:
            analysis = await analyzer(word, context)
        except WortschatzError as e:
            return self.fail_analysis(ticket, f"{e.public_message} - Using fallback data")
        except Exception as e:
            logger.error(f"Error analyzing word {word!r}: {e}", exc_info=True)
            return self.fail_analysis(ticket)
        return self.complete_analysis(ticket, analysis)

    # ---- flashcards ----

    async def export_example(self, exporter: Exporter) -> bool:
        example = self.analysis.example if self.analysis is not None else None
        if example is None:
            return False
        try:
            await exporter(example.german, example.russian)
        except Exception as e:
            logger.error(f"Error saving to Anki: {e}")
            self.notify(MSG_ANKI_FAILED, "error")
            return False
        self.notify(MSG_ANKI_SAVED, "success")
        return True

    # ---- notifications ----

    def notify(self, message: str, kind: str = "info") -> Notification:
        if kind not in NOTIFICATION_KINDS:
            kind = "info"
        expires_at = None if kind == "error" else self._clock() + self.notification_ttl
        self._notification = Notification(message=message, kind=kind, expires_at=expires_at)
        return self._notification

    def current_notification(self, now: Optional[float] = None) -> Optional[Notification]:
        n = self._notification
        if n is None:
            return None
        if n.expires_at is not None and (self._clock() if now is None else now) >= n.expires_at:
            self._notification = None
            return None
        return n

    def dismiss_notification(self) -> None:
        self._notification = None

    def speech_failed(self) -> Notification:
        return self.notify(MSG_SPEECH_FAILED, "error")

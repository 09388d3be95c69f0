"""
Practice-session engine.

Drives the present → await input → judge → record cycle as an explicit
state machine. The presenter's ``read_line`` is the only blocking call;
latency is measured with a monotonic clock and never enforced as a limit.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from contracts.v1.adapters import build_feedback, build_prompt, build_summary
from kana_platform.catalog import KanaCatalog, normalize_romaji
from kana_platform.models import (
    AttemptRecord,
    Category,
    KanaEntry,
    Script,
    SessionStats,
    UnknownGlyph,
)
from kana_platform.persistence import AttemptStore
from kana_platform.runtime.config import DEFAULT_RECENT_WINDOW
from kana_platform.selector import Selector
from kana_platform.session_state_machine import (
    EngineState,
    apply_attempt,
    can_transition,
    elapsed_ms,
    is_stop_signal,
    snapshot,
)

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PracticeSession:
    """One run of the trainer over a single category.

    *presenter* must provide ``read_line()``, ``show_prompt()``,
    ``show_feedback()``, ``show_summary()`` and ``show_warning()``.
    *clock* returns monotonic seconds and is used for latency only; *now*
    supplies the wall-clock timestamp stored on each record.
    """

    def __init__(
        self,
        catalog: KanaCatalog,
        category: Category,
        store: AttemptStore,
        presenter,
        *,
        script: Script = Script.HIRAGANA,
        selector: Optional[Selector] = None,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = utc_now,
        recent_window: int = DEFAULT_RECENT_WINDOW,
    ):
        # Fails fast with EmptyCategory before any session state exists.
        catalog.entries_for(category, script)

        self.catalog = catalog
        self.category = category
        self.script = script
        self.store = store
        self.presenter = presenter
        self.selector = selector or Selector(catalog, script)
        self.clock = clock
        self.now = now
        self.recent_window = recent_window

        self.state = EngineState.AWAITING_PRESENTATION
        self.stats = SessionStats()
        self.stop_requested = False

        self._entry: Optional[KanaEntry] = None
        self._started_at: Optional[float] = None
        self._line: Optional[str] = None
        self._record: Optional[AttemptRecord] = None

        store.set_warning_handler(presenter.show_warning)

    def request_stop(self) -> None:
        """Ask the loop to finish; honoured before the next presentation."""
        self.stop_requested = True

    def run(self) -> SessionStats:
        """Run until a stop signal and return the final session counters."""
        logger.info("Session started: %s/%s", self.script.value, self.category.value)
        try:
            while self.state is not EngineState.TERMINAL:
                self.step()
        except UnknownGlyph:
            logger.error("Catalog invariant violated; aborting session", exc_info=True)
            self.store.flush()
            raise
        logger.info(
            "Session finished: %d attempts, %d correct",
            self.stats.attempts, self.stats.correct,
        )
        return self.stats

    def step(self) -> EngineState:
        """Execute the handler for the current state and return the new state."""
        handler = {
            EngineState.AWAITING_PRESENTATION: self._present,
            EngineState.AWAITING_INPUT: self._await_input,
            EngineState.JUDGING: self._judge,
            EngineState.RECORDED: self._record_attempt,
        }.get(self.state)
        if handler is None:
            raise RuntimeError(f"No handler for state {self.state.value}")
        handler()
        return self.state

    def _transition(self, target: EngineState) -> None:
        if not can_transition(self.state, target):
            raise RuntimeError(f"Illegal transition {self.state.value} -> {target.value}")
        self.state = target

    # --- state handlers ---

    def _present(self) -> None:
        if self.stop_requested:
            self._finish()
            return

        self._entry = self.selector.next(self.category)
        self.presenter.show_prompt(build_prompt(self._entry, self.category, snapshot(self.stats)))
        self._started_at = self.clock()
        self._transition(EngineState.AWAITING_INPUT)

    def _await_input(self) -> None:
        """Block on the presenter for one line.

        End-of-input or an exit command is not an answer: the pending
        presentation is dropped unrecorded and the stop takes effect at the
        next AwaitingPresentation. Any line that is read, empty included,
        is always judged and recorded.
        """
        line = self.presenter.read_line()
        if is_stop_signal(line):
            # The pending presentation was never answered, so nothing is recorded.
            logger.debug("Stop signal received while awaiting input")
            self.request_stop()
            self._entry = None
            self._started_at = None
            self._transition(EngineState.AWAITING_PRESENTATION)
            return
        self._line = line
        self._transition(EngineState.JUDGING)

    def _judge(self) -> None:
        latency = elapsed_ms(self._started_at, self.clock())
        correct = self.catalog.is_correct(self._entry.glyph, self._line)
        self._record = AttemptRecord(
            glyph=self._entry.glyph,
            presented_category=self.category,
            correct=correct,
            latency_ms=latency,
            timestamp=self.now(),
            response=normalize_romaji(self._line),
            script=self.script,
        )
        self._transition(EngineState.RECORDED)

    def _record_attempt(self) -> None:
        record = self._record
        apply_attempt(self.stats, record)
        self.store.append(record)
        logger.debug(
            "Attempt %s '%s' correct=%s %dms",
            record.glyph, record.response, record.correct, record.latency_ms,
        )
        self.presenter.show_feedback(build_feedback(record, self._entry, snapshot(self.stats)))

        self._line = None
        self._record = None
        self._transition(EngineState.AWAITING_PRESENTATION)

    def _finish(self) -> None:
        self._transition(EngineState.TERMINAL)
        self.store.flush()
        recent = self.store.recent(self.recent_window)
        self.presenter.show_summary(
            build_summary(snapshot(self.stats), recent, self.recent_window, self.store.persistent)
        )

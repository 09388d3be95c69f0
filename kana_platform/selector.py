"""Next-kana selection: uniform draw that avoids immediate repeats."""

import logging
import random
from typing import Optional

from kana_platform.catalog import KanaCatalog
from kana_platform.models import Category, KanaEntry, Script, SelectorState
from kana_platform.runtime.config import RESAMPLE_LIMIT

logger = logging.getLogger(__name__)


def next_entry(
    catalog: KanaCatalog,
    category: Category,
    state: SelectorState,
    *,
    script: Script = Script.HIRAGANA,
    rng: Optional[random.Random] = None,
    resample_limit: int = RESAMPLE_LIMIT,
) -> tuple[KanaEntry, SelectorState]:
    """Pick the next entry for *category* and return it with the new state.

    A draw equal to ``state.last_glyph`` is redrawn up to *resample_limit*
    times when the category has more than one entry. If every redraw hits
    the same glyph, the final draw is taken from the other entries, which
    has the same distribution as resampling until different. A
    single-entry category repeats its only glyph.
    """
    rng = rng or random.Random()
    entries = catalog.entries_for(category, script)
    entry = rng.choice(entries)

    if len(entries) > 1:
        retries = 0
        while entry.glyph == state.last_glyph and retries < resample_limit:
            entry = rng.choice(entries)
            retries += 1
        if entry.glyph == state.last_glyph:
            logger.debug("Resample limit hit for %s, drawing from the rest", entry.glyph)
            entry = rng.choice([e for e in entries if e.glyph != state.last_glyph])

    return entry, SelectorState(last_glyph=entry.glyph)


class Selector:
    """Stateful wrapper over :func:`next_entry` for one session."""

    def __init__(self, catalog: KanaCatalog, script: Script = Script.HIRAGANA,
                 rng: Optional[random.Random] = None):
        self.catalog = catalog
        self.script = script
        self.rng = rng or random.Random()
        self.state = SelectorState()

    def next(self, category: Category) -> KanaEntry:
        entry, self.state = next_entry(
            self.catalog, category, self.state, script=self.script, rng=self.rng,
        )
        return entry

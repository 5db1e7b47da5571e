"""Time-boxed cosmetic highlight for slots touched by a successful mutation."""

import time
from typing import Callable, Dict, Set

from config.defaults import FLASH_DURATION_SECONDS


class FlashTracker:
    """Marks slot ids for a short period.

    Expiry is checked lazily against the clock on each read; nothing is
    scheduled, so a highlight ends at the first read after the window.
    """

    def __init__(
        self,
        duration: float = FLASH_DURATION_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._duration = duration
        self._clock = clock
        self._until: Dict[int, float] = {}

    def flash(self, slot_id: int):
        if slot_id:
            self._until[slot_id] = self._clock() + self._duration

    def _expire(self):
        now = self._clock()
        for slot_id in [s for s, until in self._until.items() if until <= now]:
            del self._until[slot_id]

    def is_flashing(self, slot_id: int) -> bool:
        self._expire()
        return slot_id in self._until

    def active(self) -> Set[int]:
        self._expire()
        return set(self._until)

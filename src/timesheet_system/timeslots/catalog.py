from __future__ import annotations

from typing import Sequence

from ..core.exceptions import SlotNotFoundError

# Fixed working-day slots. Order defines adjacency; the first slot carries
# the full-day leave marker.
TIME_SLOTS: tuple[str, ...] = (
    "9:00-10:00",
    "10:00-11:00",
    "11:00-11:10",
    "11:10-12:00",
    "12:00-01:00",
    "01:00-01:40",
    "01:40-03:00",
    "03:00-03:50",
    "03:50-04:00",
    "04:00-05:00",
    "05:00-06:00",
    "06:00-07:00",
    "07:00-08:00",
)


class SlotCatalog:
    """Ordered list of the day's time slots plus lookup helpers."""

    def __init__(self, slots: Sequence[str] = TIME_SLOTS):
        if not slots:
            raise ValueError("Slot catalog cannot be empty")
        self._slots = tuple(slots)
        self._index = {slot: i for i, slot in enumerate(self._slots)}

    def slots(self) -> tuple[str, ...]:
        return self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self):
        return iter(self._slots)

    def contains(self, slot: str) -> bool:
        return slot in self._index

    def index_of(self, slot: str) -> int:
        try:
            return self._index[slot]
        except KeyError:
            raise SlotNotFoundError(f"Unknown time slot {slot!r}") from None

    def first(self) -> str:
        return self._slots[0]

    def last(self) -> str:
        return self._slots[-1]

    def span(self, start_index: int, end_index: int) -> tuple[str, ...]:
        """Slots from start_index to end_index inclusive, in catalog order."""
        return self._slots[start_index : end_index + 1]


DEFAULT_CATALOG = SlotCatalog()

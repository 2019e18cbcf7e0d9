"""Buffer id scans used by the navigator."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from .host import BufferId, Direction

Accept = Callable[[BufferId], bool]


def circular_scan(
    start: BufferId,
    direction: Direction | int,
    last: BufferId,
    accept: Accept,
) -> Optional[BufferId]:
    """Step from ``start`` through ``1..last`` with wraparound.

    The first id for which ``accept`` returns true is returned. Once the
    scan has wrapped it stops as soon as the candidate reaches ``start``
    again in the scan direction (non-strict comparison), so at most
    ``2 * last`` ids are visited and ``start`` itself is never re-probed
    after a full lap. A ``start`` outside ``1..last`` never matches.
    """

    step = int(Direction.coerce(direction))
    if not 1 <= start <= last:
        return None

    candidate = start + step
    loop_overflow = False
    while True:
        if candidate < 1:
            candidate = last
            loop_overflow = True
        elif candidate > last:
            candidate = 1
            loop_overflow = True

        if loop_overflow:
            if step > 0 and start <= candidate:
                return None
            if step < 0 and candidate <= start:
                return None

        if accept(candidate):
            return candidate
        candidate += step


def linear_scan(ids: Iterable[BufferId], accept: Accept) -> Optional[BufferId]:
    """Return the first id in ``ids`` accepted by ``accept``."""

    for buffer_id in ids:
        if accept(buffer_id):
            return buffer_id
    return None


def ascending(last: BufferId) -> range:
    return range(1, last + 1)


def descending(last: BufferId) -> range:
    return range(last, 0, -1)


__all__ = ["circular_scan", "linear_scan", "ascending", "descending"]

"""National holiday table: fixed dates, equinoxes, Nth-Monday rules,
substitute holidays and the September sandwich holiday.

Tables are derived per year and memoized in a bounded cache. The ruleset
never changes at runtime, so a computed year is stable for the life of the
process.
"""

from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from functools import lru_cache

logger = logging.getLogger(__name__)

# (month, day) pairs observed every year
FIXED_HOLIDAYS: tuple[tuple[int, int], ...] = (
    (1, 1),
    (2, 11),
    (2, 23),
    (4, 29),
    (5, 3),
    (5, 4),
    (5, 5),
    (8, 11),
    (11, 3),
    (11, 23),
)

# (month, n): the nth Monday of the month
MONDAY_HOLIDAYS: tuple[tuple[int, int], ...] = (
    (1, 2),
    (7, 3),
    (9, 3),
    (10, 2),
)

_VERNAL_BASE = 20.8431
_AUTUMNAL_BASE = 23.2488
_EQUINOX_DRIFT = 0.242194

_CACHE_YEARS = 64


def _equinox_day(base: float, year: int) -> int:
    offset = year - 1980
    return math.floor(base + _EQUINOX_DRIFT * offset - math.floor(offset / 4))


def vernal_equinox_day(year: int) -> int:
    """Day of March on which the Vernal Equinox holiday falls."""
    return _equinox_day(_VERNAL_BASE, year)


def autumnal_equinox_day(year: int) -> int:
    """Day of September on which the Autumnal Equinox holiday falls."""
    return _equinox_day(_AUTUMNAL_BASE, year)


def nth_monday(year: int, month: int, n: int) -> date:
    """Date of the nth Monday (1-based) of a month."""
    first_weekday = date(year, month, 1).weekday()
    first_monday = 1 + (0 - first_weekday) % 7
    return date(year, month, first_monday + (n - 1) * 7)


@lru_cache(maxsize=_CACHE_YEARS)
def holidays_for_year(year: int) -> frozenset[date]:
    """Every national holiday of `year`, substitutes and sandwich day included.

    Rules, in order:
      1. Fixed-date holidays and the two equinox days.
      2. Nth-Monday holidays.
      3. A base holiday on a Sunday is observed on the first later date that
         is not itself a base holiday.
      4. When Respect for the Aged Day and the Autumnal Equinox are exactly
         two days apart, the weekday between them becomes a holiday.
    """
    base: set[date] = {date(year, m, d) for m, d in FIXED_HOLIDAYS}
    base.add(date(year, 3, vernal_equinox_day(year)))
    base.add(date(year, 9, autumnal_equinox_day(year)))
    for month, n in MONDAY_HOLIDAYS:
        base.add(nth_monday(year, month, n))

    substitutes: set[date] = set()
    for d in sorted(base):
        if d.weekday() == 6:
            observed = d + timedelta(days=1)
            while observed in base:
                observed += timedelta(days=1)
            substitutes.add(observed)

    combined = base | substitutes

    respect_aged = nth_monday(year, 9, 3)
    autumn = date(year, 9, autumnal_equinox_day(year))
    if (autumn - respect_aged).days == 2:
        sandwich = respect_aged + timedelta(days=1)
        if sandwich not in combined:
            combined.add(sandwich)

    logger.debug("Computed %d national holidays for %d", len(combined), year)
    return frozenset(combined)


def is_national_holiday(d: date) -> bool:
    return d in holidays_for_year(d.year)

from __future__ import annotations

import math
from datetime import date, datetime, timezone, tzinfo
from decimal import Decimal, ROUND_HALF_UP


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def round_half_up(value: float, places: int = 0) -> float | int:
    """Round like a calculator: 0.5 always goes away from zero.

    Returns an int when ``places`` is 0. Non-finite input rounds to 0.
    """
    if value is None or not math.isfinite(value):
        return 0
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    if places == 0:
        return int(rounded)
    return float(rounded)


def to_local_date(moment: datetime | date, tz: tzinfo = timezone.utc) -> date:
    """Calendar day of ``moment``; aware datetimes are converted to ``tz`` first."""
    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            moment = moment.astimezone(tz)
        return moment.date()
    return moment


def percent_half_up(part: float, whole: float, places: int = 0) -> float | int:
    """``part / whole * 100`` rounded half-up, computed in Decimal so that
    exact halves like 23/40 land on 58 rather than 57.4999..."""
    if not whole:
        return 0
    ratio = Decimal(str(part)) * 100 / Decimal(str(whole))
    rounded = ratio.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    if places == 0:
        return int(rounded)
    return float(rounded)

from datetime import date, datetime, timedelta, timezone

import pytest

from quizzy.utils.helpers import percent_half_up, round_half_up, to_local_date


def exact_half_up(part, whole):
    # integer-only reference: floor((200 * part + whole) / (2 * whole))
    return (200 * part + whole) // (2 * whole)


def test_percent_matches_integer_half_up():
    for whole in range(1, 201):
        for part in range(whole + 1):
            assert percent_half_up(part, whole) == exact_half_up(part, whole), (part, whole)


@pytest.mark.parametrize(
    "part, whole, expected",
    [(23, 40, 58), (46, 80, 58), (29, 200, 15), (57, 200, 29), (1, 8, 13), (0, 0, 0)],
)
def test_percent_known_halves(part, whole, expected):
    assert percent_half_up(part, whole) == expected


def test_percent_with_places():
    assert percent_half_up(2, 3, 2) == 66.67
    assert percent_half_up(1, 2, 2) == 50.0


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(float("nan")) == 0


def test_to_local_date_converts_aware_moments():
    ist = timezone(timedelta(hours=5, minutes=30))
    moment = datetime(2025, 6, 14, 20, 0, tzinfo=timezone.utc)

    assert to_local_date(moment) == date(2025, 6, 14)
    assert to_local_date(moment, ist) == date(2025, 6, 15)
    assert to_local_date(date(2025, 1, 1)) == date(2025, 1, 1)

from datetime import datetime, timedelta, timezone

import pytest

from nightcalc.dst import (
    DST_REGION, DST_RULES, SUNDAY, ActiveWindow, dst_adjustment, is_dst_active,
    last_weekday_of_month, nth_weekday, nth_weekday_of_month, parse_region)


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


@pytest.mark.parametrize('month,n,day', [
    (3, 1, 2),
    (3, 2, 9),
    (3, 3, 16),
    (3, -1, 30),
    (4, 1, 6),
    (9, -1, 28),
    (10, 1, 5),
    (10, 3, 19),
    (10, -1, 26),
    (11, 1, 2),
])
def test_nth_sunday_2025(month, n, day):
    assert nth_weekday(2025, month, SUNDAY, n) == utc(2025, month, day)


def test_last_weekday_of_december_rolls_into_next_year():
    # Wednesday 31 December 2025
    assert last_weekday_of_month(3, 12, 2025) == utc(2025, 12, 31)
    assert last_weekday_of_month(SUNDAY, 12, 2025) == utc(2025, 12, 28)


def test_wrappers_match_nth_weekday():
    assert nth_weekday_of_month(SUNDAY, 3, 2025, 2) == nth_weekday(2025, 3, SUNDAY, 2)
    assert last_weekday_of_month(SUNDAY, 10, 2025) == nth_weekday(2025, 10, SUNDAY, -1)


def test_nth_weekday_rejects_zero():
    with pytest.raises(ValueError):
        nth_weekday(2025, 3, SUNDAY, 0)


@pytest.mark.parametrize('code,region', [
    ('E', DST_REGION.EUROPE),
    ('A', DST_REGION.US_CANADA),
    ('S', DST_REGION.SOUTH_AMERICA),
    ('O', DST_REGION.AUSTRALIA),
    ('Z', DST_REGION.NEW_ZEALAND),
    ('N', DST_REGION.NONE),
    ('U', DST_REGION.UNKNOWN),
    ('e', DST_REGION.EUROPE),
    ('X', DST_REGION.UNKNOWN),
    ('', DST_REGION.UNKNOWN),
    (None, DST_REGION.UNKNOWN),
    (DST_REGION.AUSTRALIA, DST_REGION.AUSTRALIA),
])
def test_parse_region(code, region):
    assert parse_region(code) is region


def test_every_region_has_a_rule():
    assert set(DST_RULES) == set(DST_REGION)


@pytest.mark.parametrize('year', range(2023, 2031))
def test_europe_summer_and_winter(year):
    assert is_dst_active(utc(year, 7, 15, 12), DST_REGION.EUROPE)
    assert not is_dst_active(utc(year, 1, 15, 12), DST_REGION.EUROPE)


@pytest.mark.parametrize('year', range(2023, 2031))
def test_australia_wraps_the_new_year(year):
    assert is_dst_active(utc(year, 11, 15, 12), DST_REGION.AUSTRALIA)
    assert not is_dst_active(utc(year, 6, 15, 12), DST_REGION.AUSTRALIA)
    assert is_dst_active(utc(year, 2, 15, 12), DST_REGION.AUSTRALIA)


@pytest.mark.parametrize('region,start,end', [
    (DST_REGION.EUROPE, utc(2025, 3, 30), utc(2025, 10, 26)),
    (DST_REGION.US_CANADA, utc(2025, 3, 9), utc(2025, 11, 2)),
])
def test_northern_boundaries(region, start, end):
    second = timedelta(seconds=1)

    assert not is_dst_active(start - second, region)
    assert is_dst_active(start, region)
    assert is_dst_active(end - second, region)
    assert not is_dst_active(end, region)


@pytest.mark.parametrize('region,end,start', [
    (DST_REGION.SOUTH_AMERICA, utc(2025, 3, 16), utc(2025, 10, 19)),
    (DST_REGION.AUSTRALIA, utc(2025, 4, 6), utc(2025, 10, 5)),
    (DST_REGION.NEW_ZEALAND, utc(2025, 4, 6), utc(2025, 9, 28)),
])
def test_southern_boundaries(region, end, start):
    second = timedelta(seconds=1)

    assert is_dst_active(end - second, region)
    assert not is_dst_active(end, region)
    assert not is_dst_active(start - second, region)
    assert is_dst_active(start, region)


@pytest.mark.parametrize('region', [
    DST_REGION.SOUTH_AMERICA, DST_REGION.AUSTRALIA, DST_REGION.NEW_ZEALAND])
def test_southern_new_year_wraparound(region):
    assert is_dst_active(utc(2025, 12, 31, 23, 59, 59), region)
    assert is_dst_active(utc(2026, 1, 1, 0, 0, 0), region)
    assert is_dst_active(utc(2024, 12, 31, 23, 59, 59), region)
    assert is_dst_active(utc(2025, 1, 1, 0, 0, 0), region)


def test_australia_boundaries_follow_the_tested_year():
    # first Sunday of October 2024 is the 6th, in 2025 the 5th
    assert not is_dst_active(utc(2024, 10, 5, 23), DST_REGION.AUSTRALIA)
    assert is_dst_active(utc(2024, 10, 6, 1), DST_REGION.AUSTRALIA)
    assert is_dst_active(utc(2025, 10, 5, 1), DST_REGION.AUSTRALIA)
    # first Sunday of April 2026 is the 5th
    assert is_dst_active(utc(2026, 4, 4, 23, 59), DST_REGION.AUSTRALIA)
    assert not is_dst_active(utc(2026, 4, 5, 0, 0), DST_REGION.AUSTRALIA)


@pytest.mark.parametrize('region', [DST_REGION.NONE, DST_REGION.UNKNOWN])
def test_no_dst_regions(region):
    for month in range(1, 13):
        assert not is_dst_active(utc(2025, month, 15), region)
        assert dst_adjustment(utc(2025, month, 15), region) == 0.0


def test_dst_adjustment():
    assert dst_adjustment(utc(2025, 7, 15), DST_REGION.EUROPE) == 1.0
    assert dst_adjustment(utc(2025, 7, 15), 'E') == 1.0
    assert dst_adjustment(utc(2025, 1, 15), 'E') == 0.0


def test_instant_is_read_in_utc():
    # 00:30 on 30 March in Paris winter time is still 29 March in UTC
    paris = datetime(2025, 3, 30, 0, 30, tzinfo=timezone(timedelta(hours=1)))
    assert not is_dst_active(paris, DST_REGION.EUROPE)

    # naive datetimes are UTC
    assert is_dst_active(datetime(2025, 3, 30, 0, 30), DST_REGION.EUROPE)


def test_window_shapes():
    north = DST_RULES[DST_REGION.EUROPE].window(2025)
    south = DST_RULES[DST_REGION.AUSTRALIA].window(2025)

    assert north == ActiveWindow(start=utc(2025, 3, 30), end=utc(2025, 10, 26))
    assert not north.wraps
    assert south.wraps
    assert utc(2025, 12, 25) in south
    assert utc(2025, 7, 1) not in south
    assert DST_RULES[DST_REGION.NONE].window(2025) is None

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from .astro import as_utc

SUNDAY = 0


def nth_weekday(year, month, weekday, n):
    '''
    year: the calendar year of the instant being tested
    month: 1=jan, 12=dec
    weekday: 0=sunday, 6=saturday
    n: 1=first, 2=second, -1=last, -2=second-last

    Returns a UTC-aware datetime at midnight of the matching day.
    '''
    if n == 0:
        raise ValueError('n must be nonzero')

    if n < 0:
        month += 1
        if month > 12:
            month = 1
            year += 1

    dt = datetime(year, month, 1, tzinfo=timezone.utc)

    while (dt.isoweekday() % 7) != weekday:
        dt += timedelta(days=1)

    while n > 1:
        dt += timedelta(days=7)
        n -= 1

    while n < 0:
        dt -= timedelta(days=7)
        n += 1

    return dt


def nth_weekday_of_month(weekday, month, year, n):
    return nth_weekday(year, month, weekday, n)


def last_weekday_of_month(weekday, month, year):
    return nth_weekday(year, month, weekday, -1)


class DST_REGION(Enum):
    EUROPE = 'E'
    US_CANADA = 'A'
    SOUTH_AMERICA = 'S'
    AUSTRALIA = 'O'
    NEW_ZEALAND = 'Z'
    NONE = 'N'
    UNKNOWN = 'U'


def parse_region(code):
    '''Map an OpenFlights DST letter onto a region. Anything unrecognized is UNKNOWN.'''
    if isinstance(code, DST_REGION):
        return code

    try:
        return DST_REGION((code or '').strip().upper())
    except ValueError:
        return DST_REGION.UNKNOWN


@dataclass(frozen=True)
class ActiveWindow:
    '''
    DST boundaries for one calendar year. When `start` falls after `end` the
    window wraps the new year (southern hemisphere): DST is in effect from
    `start` through December, and from January until `end`.
    '''
    start: datetime
    end: datetime

    @property
    def wraps(self):
        return self.start > self.end

    def __contains__(self, instant):
        if self.wraps:
            return instant >= self.start or instant < self.end

        return self.start <= instant < self.end


class DSTRule:
    def window(self, year):
        raise NotImplementedError

    def is_active(self, instant):
        instant = as_utc(instant)
        window = self.window(instant.year)

        return window is not None and instant in window


class NoDST(DSTRule):
    def window(self, year):
        return None


class SundayRule(DSTRule):
    '''
    DST bounded by two "Nth Sunday of month" transitions. Both boundaries are
    always derived from the tested instant's own year, so a southern-hemisphere
    season is read as two halves: October..December against this year's start,
    January..April against this year's end.
    '''

    def __init__(self, start, end):
        self.start_month, self.start_n = start
        self.end_month, self.end_n = end

    def window(self, year):
        return ActiveWindow(
            start=nth_weekday(year, self.start_month, SUNDAY, self.start_n),
            end=nth_weekday(year, self.end_month, SUNDAY, self.end_n))

    def __repr__(self):
        return f'{type(self).__name__}(start={(self.start_month, self.start_n)}, end={(self.end_month, self.end_n)})'


DST_RULES = {
    DST_REGION.EUROPE: SundayRule(start=(3, -1), end=(10, -1)),
    DST_REGION.US_CANADA: SundayRule(start=(3, 2), end=(11, 1)),
    DST_REGION.SOUTH_AMERICA: SundayRule(start=(10, 3), end=(3, 3)),
    DST_REGION.AUSTRALIA: SundayRule(start=(10, 1), end=(4, 1)),
    DST_REGION.NEW_ZEALAND: SundayRule(start=(9, -1), end=(4, 1)),
    DST_REGION.NONE: NoDST(),
    DST_REGION.UNKNOWN: NoDST(),
}


def is_dst_active(instant, region):
    return DST_RULES[parse_region(region)].is_active(instant)


def dst_adjustment(instant, region):
    '''Hours to add to the standard offset at `instant`.'''
    return 1.0 if is_dst_active(instant, region) else 0.0

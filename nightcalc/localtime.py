'''
UTC <-> airport local time conversion for logbook strings.

Every conversion here fails soft: an unknown airport, a date or time that
doesn't parse, or an offset that can't be built all hand the caller's input
back untouched. Callers that need to know whether anything happened compare
the output against the input.

Formats are fixed by the records these strings end up in:

    dates           dd/MM/yyyy
    times in        HHMM, HMM or HH:MM
    local time out  HHMM
    UTC time out    HH:MM
'''

import re
from datetime import datetime, timedelta, timezone

from .airports import directory
from .dst import dst_adjustment
from .log import log

DATE_FMT = '%d/%m/%Y'
AUSTRALIAN_ICAO_PREFIXES = ('YB', 'YM', 'YP', 'YS')

TIME_DIGITS_RE = re.compile(r'(\d{1,2})(\d{2})')
TIME_COLON_RE = re.compile(r'(\d{0,2}):(\d{2})')


def parse_time(value):
    '''
    (hour, minute) from "HHMM", "HMM" or "HH:MM", or None. The colon is simply
    dropped, so "H:MM" reads the same as "HMM".
    '''
    clean = (value or '').strip().replace(':', '')

    if len(clean) not in (3, 4) or not clean.isdecimal():
        return None

    hour, minute = int(clean[:-2]), int(clean[-2:])
    if hour >= 24 or minute >= 60:
        return None

    return hour, minute


def parse_date(value):
    try:
        return datetime.strptime((value or '').strip(), DATE_FMT)
    except ValueError:
        return None


def normalize_time(value, separator=':'):
    '''
    Zero-pad a loosely typed time. Accepts "HHMM", "HMM", "H:MM", "HH:MM" and
    ":MM"; emits "HH:MM" (or "HHMM" with separator=''). Minutes must be two
    digits, so something like "7:5" is returned as-is, as is anything out of
    range.
    '''
    text = (value or '').strip()

    match = TIME_COLON_RE.fullmatch(text) or TIME_DIGITS_RE.fullmatch(text)
    if not match:
        return value

    hour = int(match[1] or 0)
    minute = int(match[2])
    if hour >= 24 or minute >= 60:
        return value

    return f'{hour:02d}{separator}{minute:02d}'


def total_offset(profile, instant):
    '''Standard offset plus any DST in effect at the UTC `instant`, in hours.'''
    return profile.utc_offset + dst_adjustment(instant, profile.dst_region)


def _fixed_zone(hours):
    try:
        return timezone(timedelta(hours=hours))
    except ValueError:
        return None


def utc_to_local(utc_date, utc_time, code):
    '''
    Returns (local date "dd/MM/yyyy", local time "HHMM"), or the inputs
    unchanged if the conversion can't be made.
    '''
    profile = directory.lookup(code)
    if profile is None:
        log.debug(f'utc_to_local: unknown airport {code!r}')
        return utc_date, utc_time

    day = parse_date(utc_date)
    hm = parse_time(utc_time)
    if day is None or hm is None:
        log.debug(f'utc_to_local: cannot parse {utc_date!r} {utc_time!r}')
        return utc_date, utc_time

    utc = day.replace(hour=hm[0], minute=hm[1], tzinfo=timezone.utc)

    tz = _fixed_zone(total_offset(profile, utc))
    if tz is None:
        return utc_date, utc_time

    try:
        local = utc.astimezone(tz)
    except OverflowError:
        return utc_date, utc_time

    return local.strftime(DATE_FMT), local.strftime('%H%M')


def local_to_utc(local_date, local_time, code):
    '''
    Returns (UTC date "dd/MM/yyyy", UTC time "HH:MM"), or the inputs unchanged
    if the conversion can't be made.

    Whether DST applies is decided on a provisional instant that reads the
    local wall clock as if it were UTC. Within a few hours of a transition this
    can pick the wrong side; the error is bounded by the offset and accepted.
    '''
    profile = directory.lookup(code)
    if profile is None:
        log.debug(f'local_to_utc: unknown airport {code!r}')
        return local_date, local_time

    day = parse_date(local_date)
    hm = parse_time(local_time)
    if day is None or hm is None:
        log.debug(f'local_to_utc: cannot parse {local_date!r} {local_time!r}')
        return local_date, local_time

    provisional = day.replace(hour=hm[0], minute=hm[1], tzinfo=timezone.utc)

    tz = _fixed_zone(total_offset(profile, provisional))
    if tz is None:
        return local_date, local_time

    try:
        utc = provisional.replace(tzinfo=tz).astimezone(timezone.utc)
    except OverflowError:
        return local_date, local_time

    return utc.strftime(DATE_FMT), utc.strftime('%H:%M')


def is_australian_airport(code):
    icao = directory.to_icao(code)
    return bool(icao) and icao.upper().startswith(AUSTRALIAN_ICAO_PREFIXES)

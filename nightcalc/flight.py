import math
from datetime import timezone

from .airports import directory
from .localtime import parse_date, parse_time
from .log import log
from .route import night_hours


def block_hours(value):
    '''
    Decimal hours from "H:MM" / "HH:MM" or a plain decimal like "13.67".
    Returns None for anything else, including negative or non-finite numbers.
    '''
    text = (value or '').strip()

    if ':' in text:
        parts = text.split(':')
        if len(parts) != 2:
            return None
        try:
            hours, minutes = int(parts[0]), int(parts[1])
        except ValueError:
            return None
        if hours < 0 or not 0 <= minutes < 60 or parts[0].lstrip().startswith('-'):
            return None
        return hours + minutes / 60

    try:
        hours = float(text)
    except ValueError:
        return None

    if not math.isfinite(hours) or hours < 0:
        return None

    return hours


def is_valid_time_hhmm(value):
    parts = (value or '').split(':')

    if len(parts) != 2 or len(parts[0]) != 2 or len(parts[1]) != 2:
        return False
    if not (parts[0].isdecimal() and parts[1].isdecimal()):
        return False

    return int(parts[0]) < 24 and int(parts[1]) < 60


def flight_time(out_time, in_time):
    '''
    Block time between two "HH:MM" times as decimal hours to two places,
    wrapping past midnight. "0.0" when either time is missing or invalid.
    '''
    if not (is_valid_time_hhmm(out_time) and is_valid_time_hhmm(in_time)):
        return '0.0'

    out_h, out_m = parse_time(out_time)
    in_h, in_m = parse_time(in_time)

    minutes = (in_h * 60 + in_m) - (out_h * 60 + out_m)
    if minutes < 0:
        minutes += 24 * 60

    return f'{minutes / 60:.2f}'


def departure_instant(flight_date, out_time):
    '''UTC datetime for a "dd/MM/yyyy" date and an OUT time, or None.'''
    day = parse_date(flight_date)
    hm = parse_time(out_time)

    if day is None or hm is None:
        return None

    return day.replace(hour=hm[0], minute=hm[1], tzinfo=timezone.utc)


def night_time(from_code, to_code, out_time, block_time, flight_date):
    '''
    Night time for a logbook entry as decimal hours to two places, never more
    than the block time. Returns '' when anything needed is missing or can't be
    resolved; the caller keeps whatever value it already had.

    Params:
        from_code, to_code: ICAO or IATA airport codes.
        out_time: OUT (departure) time in UTC, "HH:MM" or "HHMM".
        block_time: "H:MM" or decimal hours.
        flight_date: UTC date of departure, "dd/MM/yyyy".
    '''
    if not all((from_code, to_code, out_time, block_time, flight_date)):
        return ''

    from_coord = directory.coordinates(from_code)
    to_coord = directory.coordinates(to_code)
    if from_coord is None or to_coord is None:
        log.debug(f'night_time: no coordinates for {from_code!r} or {to_code!r}')
        return ''

    hours = block_hours(block_time)
    if hours is None:
        log.debug(f'night_time: cannot read block time {block_time!r}')
        return ''

    departure = departure_instant(flight_date, out_time)
    if departure is None:
        log.debug(f'night_time: cannot read departure {flight_date!r} {out_time!r}')
        return ''

    night = night_hours(from_coord, to_coord, departure, hours)
    log.debug(f'night_time: {from_code}-{to_code} dep {departure.isoformat()} block {hours:.2f}h night {night:.2f}h')

    return f'{min(night, hours):.2f}'

import argparse
import sys

import requests

from .airports import AirportDataError, directory
from .airports.fetch import fetch_airports
from .flight import night_time
from .localtime import local_to_utc, utc_to_local
from .log import log


def cmd_night(args):
    night = night_time(args.origin, args.destination, args.out_time, args.block_time, args.date)
    if not night:
        log.print(f'could not calculate night time for {args.origin}-{args.destination}')
        return 1

    print(night)
    return 0


def cmd_local(args):
    result = utc_to_local(args.date, args.time, args.airport)
    if result == (args.date, args.time):
        log.print(f'could not convert {args.date} {args.time} UTC at {args.airport}')
        return 1

    print(*result)
    return 0


def cmd_utc(args):
    result = local_to_utc(args.date, args.time, args.airport)
    if result == (args.date, args.time):
        log.print(f'could not convert {args.date} {args.time} local at {args.airport}')
        return 1

    print(*result)
    return 0


def cmd_fetch_airports(args):
    try:
        dest = fetch_airports(url=args.url, dest=args.dest)
    except (AirportDataError, requests.RequestException) as e:
        log.print(f'could not fetch airport data: {e}')
        return 1

    directory.load(dest)
    return 0


def build_arg_parser():
    p = argparse.ArgumentParser(prog='nightcalc', description='Flight night time and airport local time')
    sub = p.add_subparsers(dest='command', required=True)

    night = sub.add_parser('night', help='night time for a flight, in decimal hours')
    night.add_argument('origin', help='departure airport, ICAO or IATA')
    night.add_argument('destination', help='arrival airport, ICAO or IATA')
    night.add_argument('date', help='UTC departure date, dd/mm/yyyy')
    night.add_argument('out_time', help='UTC OUT time, HHMM or HH:MM')
    night.add_argument('block_time', help='block time, H:MM or decimal hours')
    night.set_defaults(func=cmd_night)

    local = sub.add_parser('local', help='UTC to airport local time')
    local.add_argument('airport')
    local.add_argument('date', help='dd/mm/yyyy')
    local.add_argument('time', help='HHMM or HH:MM')
    local.set_defaults(func=cmd_local)

    utc = sub.add_parser('utc', help='airport local time to UTC')
    utc.add_argument('airport')
    utc.add_argument('date', help='dd/mm/yyyy')
    utc.add_argument('time', help='HHMM or HH:MM')
    utc.set_defaults(func=cmd_utc)

    fetch = sub.add_parser('fetch-airports', help='download a fresh airports.dat')
    fetch.add_argument('--url', default=None)
    fetch.add_argument('--dest', default=None)
    fetch.set_defaults(func=cmd_fetch_airports)

    return p


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())

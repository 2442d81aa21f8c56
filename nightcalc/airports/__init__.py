import csv
import pathlib
import threading
from dataclasses import dataclass

from ..config import config
from ..dst import DST_REGION, parse_region
from ..log import log
from ..route import GeoCoordinate

SELF_DIR = pathlib.Path(__file__).parent.resolve()
BUNDLED_DATA_FILE = SELF_DIR / 'data' / 'airports.dat'
NULL = '\\N'

# OpenFlights airports.dat column positions
COL_IATA = 4
COL_ICAO = 5
COL_LATITUDE = 6
COL_LONGITUDE = 7
COL_TIMEZONE = 9
COL_DST = 10


class AirportDataError(Exception):
    pass


@dataclass(frozen=True)
class AirportTimeProfile:
    icao: str
    iata: str | None
    latitude: float
    longitude: float
    utc_offset: float  # standard time, hours
    dst_region: DST_REGION

    @property
    def coordinates(self):
        return GeoCoordinate(latitude=self.latitude, longitude=self.longitude)


def _clean(value):
    value = value.strip().strip('"').strip()
    return None if value in ('', NULL) else value


def parse_row(row):
    '''Build a profile from one airports.dat row, or None if the row is unusable.'''
    if len(row) <= COL_DST:
        return None

    icao = _clean(row[COL_ICAO])
    if icao is None:
        return None

    try:
        latitude = float(row[COL_LATITUDE])
        longitude = float(row[COL_LONGITUDE])
        utc_offset = float(row[COL_TIMEZONE])
    except ValueError:
        return None

    iata = _clean(row[COL_IATA])

    return AirportTimeProfile(
        icao=icao.upper(),
        iata=iata.upper() if iata else None,
        latitude=latitude,
        longitude=longitude,
        utc_offset=utc_offset,
        dst_region=parse_region(_clean(row[COL_DST])))


def parse_lines(lines):
    yield from (
        profile for profile in map(parse_row, csv.reader(lines))
        if profile is not None)


class AirportDirectory:
    '''
    Read-only airport lookup by ICAO or IATA code. Data is loaded once, on the
    first lookup, and never modified afterwards; concurrent readers need no
    locking beyond that first load.
    '''

    def __init__(self, data_file=None):
        self.data_file = data_file
        # reentrant: ensure_loaded() holds it across load()
        self.lock = threading.RLock()
        self.reset()

    def reset(self):
        self.by_icao = {}
        self.iata_to_icao = {}
        self.loaded = False

    def load(self, data_file=None):
        if data_file is None:
            data_file = self.data_file or config.gimme('airports.data_file') or BUNDLED_DATA_FILE

        with open(data_file, 'rt', encoding='utf-8') as f:
            by_icao = {p.icao: p for p in parse_lines(f)}

        self.lock.acquire()
        self.by_icao = by_icao
        self.iata_to_icao = {p.iata: p.icao for p in by_icao.values() if p.iata}
        self.loaded = True
        self.lock.release()

        log.debug(f'loaded {len(self.by_icao)} airports, {len(self.iata_to_icao)} IATA/ICAO mappings from {data_file}')

    def ensure_loaded(self):
        if self.loaded:
            return

        self.lock.acquire()
        try:
            if not self.loaded:
                self.load()
        finally:
            self.lock.release()

    @staticmethod
    def _normalize(code):
        return (code or '').strip().upper()

    def to_icao(self, code):
        '''
        ICAO code for an ICAO or IATA code. Codes that aren't in the directory
        come back upper-cased but otherwise untouched, so private airfields
        survive the trip.
        '''
        self.ensure_loaded()
        upper = self._normalize(code)

        if not upper:
            return code

        if len(upper) == 4 and upper in self.by_icao:
            return upper

        if len(upper) == 3 and upper in self.iata_to_icao:
            return self.iata_to_icao[upper]

        return upper

    def to_iata(self, icao):
        self.ensure_loaded()
        profile = self.by_icao.get(self._normalize(icao))
        return profile.iata if profile else None

    def display_code(self, icao, use_iata):
        if not use_iata:
            return icao

        return self.to_iata(icao) or icao

    def is_valid_code(self, code):
        self.ensure_loaded()
        upper = self._normalize(code)
        return upper in self.by_icao or upper in self.iata_to_icao

    def lookup(self, code):
        icao = self.to_icao(code)
        return self.by_icao.get(icao)

    def coordinates(self, code):
        profile = self.lookup(code)
        return profile.coordinates if profile else None

    def utc_offset(self, code):
        profile = self.lookup(code)
        return profile.utc_offset if profile else None

    def __len__(self):
        self.ensure_loaded()
        return len(self.by_icao)


directory = AirportDirectory()

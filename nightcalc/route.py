from dataclasses import dataclass
from datetime import datetime, timedelta
from math import degrees, radians, sin, cos, acos, atan2, sqrt, pi

from .astro import as_utc, sun
from .config import config

# Within about six metres of coincident or antipodal, slerp weights are mostly rounding error.
DEGENERATE_ANGLE = 1e-6


@dataclass(frozen=True)
class GeoCoordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class FlightPathSegment:
    position: GeoCoordinate
    instant: datetime
    is_night: bool


def _to_vector(coord):
    lat = radians(coord.latitude)
    lon = radians(coord.longitude)
    return (cos(lat) * cos(lon), cos(lat) * sin(lon), sin(lat))


def _to_coordinate(x, y, z):
    return GeoCoordinate(
        latitude=degrees(atan2(z, sqrt(x * x + y * y))),
        longitude=degrees(atan2(y, x)))


def angular_distance(a, b):
    '''Central angle between two coordinates, in radians (spherical law of cosines).'''
    lat1, lon1 = radians(a.latitude), radians(a.longitude)
    lat2, lon2 = radians(b.latitude), radians(b.longitude)

    c = sin(lat1) * sin(lat2) + cos(lat1) * cos(lat2) * cos(lon1 - lon2)

    return acos(max(-1, min(1, c)))


def _northward(coord):
    '''
    Unit vector tangent to the sphere at `coord`, pointing along its meridian
    toward the north pole. At either pole there is no meridian to follow, so
    head down the Greenwich meridian instead.
    '''
    lat = radians(coord.latitude)
    lon = radians(coord.longitude)

    if abs(cos(lat)) < DEGENERATE_ANGLE:
        return (-1.0 if lat > 0 else 1.0, 0.0, 0.0)

    return (-sin(lat) * cos(lon), -sin(lat) * sin(lon), cos(lat))


def interpolate(a, b, fraction, distance=None):
    '''
    Position `fraction` (0..1) of the way along the great circle from `a` to
    `b`.

    Coincident points stay put. Antipodal points have no unique great circle;
    the path taken is the one along `a`'s meridian, heading north (or south
    from the north pole).
    '''
    if distance is None:
        distance = angular_distance(a, b)

    if distance < DEGENERATE_ANGLE:
        return a

    ax, ay, az = _to_vector(a)

    if pi - distance < DEGENERATE_ANGLE:
        nx, ny, nz = _northward(a)
        theta = fraction * pi
        return _to_coordinate(
            cos(theta) * ax + sin(theta) * nx,
            cos(theta) * ay + sin(theta) * ny,
            cos(theta) * az + sin(theta) * nz)

    bx, by, bz = _to_vector(b)
    sin_d = sin(distance)
    wa = sin((1 - fraction) * distance) / sin_d
    wb = sin(fraction * distance) / sin_d

    return _to_coordinate(
        wa * ax + wb * bx,
        wa * ay + wb * by,
        wa * az + wb * bz)


def flight_path(from_coord, to_coord, departure, duration_hours, segments=None, depression=None):
    '''
    Yield one FlightPathSegment per equal-time slice of the flight, sampled at
    the start of each slice.
    '''
    if segments is None:
        segments = config.gimme('night.segments')
    if depression is None:
        depression = config.gimme('night.depression')

    if segments < 1:
        raise ValueError(f'segments must be at least 1, got {segments}')

    departure = as_utc(departure)
    distance = angular_distance(from_coord, to_coord)
    step = timedelta(seconds=duration_hours * 3600 / segments)

    for i in range(segments):
        position = interpolate(from_coord, to_coord, i / segments, distance)
        instant = departure + i * step

        yield FlightPathSegment(
            position=position,
            instant=instant,
            is_night=sun.is_night(position.latitude, position.longitude, instant, depression))


def night_hours(from_coord, to_coord, departure, duration_hours, segments=None, depression=None):
    '''
    Hours of the flight spent in darkness, assuming it follows the great circle
    at constant ground speed. Converges on the true figure as `segments` grows;
    each segment costs one solar position evaluation.
    '''
    if segments is None:
        segments = config.gimme('night.segments')

    if segments < 1:
        raise ValueError(f'segments must be at least 1, got {segments}')

    if duration_hours <= 0:
        return 0.0

    segment_seconds = duration_hours * 3600 / segments
    night_seconds = 0.0

    for segment in flight_path(from_coord, to_coord, departure, duration_hours, segments, depression):
        if segment.is_night:
            night_seconds += segment_seconds

    return night_seconds / 3600

'''
Adapted from the Astral project
Copyright 2009-2016, Simon Kennedy, sffjunkie+code@gmail.com
Published under the Apache License 2.0
https://astral.readthedocs.io/en/latest/
https://github.com/sffjunkie/astral/blob/535a84b7cf83fbb7b40be32f621c5d9ab4b7472b/LICENSE
https://github.com/sffjunkie/astral/blob/535a84b7cf83fbb7b40be32f621c5d9ab4b7472b/src/astral.py

Reworked to answer a single question -- where is the sun right now, and is it
dark? -- rather than solving for the time of dawn or dusk:

    from datetime import datetime, timezone
    from nightcalc.astro import is_night, solar_elevation

    solar_elevation(-33.9461, 151.1770, datetime(2025, 6, 21, 12, tzinfo=timezone.utc))
    # roughly -62 (ten at night in Sydney, mid-winter)

    is_night(-33.9461, 151.1770, datetime(2025, 6, 21, 12, tzinfo=timezone.utc))
    # True
'''

from datetime import timezone
from math import degrees, radians, sin, cos, asin, atan2

from .config import config


def as_utc(instant):
    '''
    Normalize a datetime to an aware UTC datetime. Naive datetimes are taken to
    already be in UTC; nothing in this package ever interprets wall-clock time
    in the machine's local zone.
    '''
    if instant.tzinfo is None or instant.tzinfo.utcoffset(instant) is None:
        return instant.replace(tzinfo=timezone.utc)

    return instant.astimezone(timezone.utc)


class SolarPosition:
    '''
    Low-precision solar ephemeris, good to roughly 0.01 degrees, which is all
    that's needed to tell day from night on a flight deck.

    The depression angle is expressed in positive degrees below the horizon and
    refers to the center of the sun's disk. No atmospheric refraction
    correction is applied; the sun is where the geometry says it is. For civil
    twilight use 6; nautical is 12; astronomical is 18.

    Nothing here raises for numeric input. NaN coordinates produce a NaN
    elevation, which compares False against any threshold and therefore reads
    as "not night".
    '''

    J2000 = 2451545.0
    UNIX_EPOCH_JD = 2440587.5

    def elevation(self, latitude, longitude, instant):
        '''
        Params:
            latitude: -90 to 90; negatives are on the southern hemisphere.
            longitude: -180 to 180; negatives are on the western hemisphere.
            instant: datetime.datetime; naive values are treated as UTC.

        Returns:
            Elevation of the center of the sun above the ideal horizon, in
            degrees. Negative when the sun is below the horizon.
        '''
        julianday = self._julianday(instant)
        t = self._jday_to_jcentury(julianday)

        declination = radians(self._sun_declination(t))
        right_ascension = self._sun_right_ascension(t)

        lst = self._greenwich_sidereal_time(julianday) + radians(longitude)
        hour_angle = lst - right_ascension

        latitude_rad = radians(latitude)
        sin_elev = sin(latitude_rad) * sin(declination) + \
            cos(latitude_rad) * cos(declination) * cos(hour_angle)

        # Rounding can nudge this a hair past +/-1 right at the subsolar point.
        if sin_elev > 1:
            sin_elev = 1
        elif sin_elev < -1:
            sin_elev = -1

        return degrees(asin(sin_elev))

    def is_night(self, latitude, longitude, instant, depression=None):
        '''
        True when the sun is more than `depression` degrees below the horizon.
        Defaults to the configured depression (civil twilight unless changed).
        '''
        if depression is None:
            depression = config.gimme('night.depression')

        return self.elevation(latitude, longitude, instant) < -depression

    @classmethod
    def _julianday(cls, instant):
        return cls.UNIX_EPOCH_JD + (as_utc(instant).timestamp() / 86400)

    @classmethod
    def _jday_to_jcentury(cls, julianday):
        return (julianday - cls.J2000) / 36525

    @staticmethod
    def _mean_obliquity_of_ecliptic(juliancentury):
        seconds = 21.448 - juliancentury * (46.815 + juliancentury * (0.00059 - juliancentury * 0.001813))
        return 23 + (26 + (seconds / 60)) / 60

    def _obliquity_correction(self, juliancentury):
        e0 = self._mean_obliquity_of_ecliptic(juliancentury)
        omega = 125.04 - 1934.136 * juliancentury
        return e0 + 0.00256 * cos(radians(omega))

    @staticmethod
    def _geom_mean_long_sun(juliancentury):
        l0 = 280.46646 + juliancentury * (36000.76983 + 0.0003032 * juliancentury)
        return l0 % 360

    @staticmethod
    def _geom_mean_anomaly_sun(juliancentury):
        return 357.52911 + juliancentury * (35999.05029 - 0.0001537 * juliancentury)

    def _sun_eq_of_center(self, juliancentury):
        m = self._geom_mean_anomaly_sun(juliancentury)

        m_rad = radians(m)
        sinm = sin(m_rad)
        sin2m = sin(2 * m_rad)
        sin3m = sin(3 * m_rad)

        c = sinm * (1.914602 - juliancentury * (0.004817 + 0.000014 * juliancentury)) + \
            sin2m * (0.019993 - 0.000101 * juliancentury) + \
            sin3m * 0.000289

        return c

    def _sun_true_long(self, juliancentury):
        l0 = self._geom_mean_long_sun(juliancentury)
        c = self._sun_eq_of_center(juliancentury)
        return l0 + c

    def _sun_apparent_long(self, juliancentury):
        o = self._sun_true_long(juliancentury)
        omega = 125.04 - 1934.136 * juliancentury
        return o - 0.00569 - 0.00478 * sin(radians(omega))

    def _sun_declination(self, juliancentury):
        e = self._obliquity_correction(juliancentury)
        lambd = self._sun_apparent_long(juliancentury)
        sint = sin(radians(e)) * sin(radians(lambd))
        return degrees(asin(sint))

    def _sun_right_ascension(self, juliancentury):
        '''Radians, in (-pi, pi].'''
        e_rad = radians(self._obliquity_correction(juliancentury))
        lambd_rad = radians(self._sun_apparent_long(juliancentury))
        return atan2(cos(e_rad) * sin(lambd_rad), cos(lambd_rad))

    def _greenwich_sidereal_time(self, julianday):
        '''Radians, in [0, 2pi).'''
        t = self._jday_to_jcentury(julianday)
        theta = 280.46061837 + \
            360.98564736629 * (julianday - self.J2000) + \
            0.000387933 * t * t - \
            t * t * t / 38710000
        return radians(theta % 360)


sun = SolarPosition()


def solar_elevation(latitude, longitude, instant):
    return sun.elevation(latitude, longitude, instant)


def is_night(latitude, longitude, instant, depression=None):
    return sun.is_night(latitude, longitude, instant, depression)

"""Solar computation layer — location resolution, timezone lookup, and sunrise/sunset formulas."""

import calendar
import logging
import math
from datetime import date, datetime, timedelta
from functools import lru_cache

import httpx
from pytz import timezone, utc
from timezonefinder import TimezoneFinder

from suntimes.models import DayReport, ObserverContext, QueryInput, SunTimes

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "suntimes/0.1 (sunrise and sunset tables for the terminal)"

# Sun's apparent radius + atmospheric refraction at the horizon
_ZENITH_DEG = 90.833


class LocationError(Exception):
    """Location input that cannot be resolved to a point on Earth."""


class GeocodingError(LocationError):
    """Geocoder or timezone lookup failure."""


class UnknownCityError(GeocodingError):
    """City name with no geocoder match."""


class AmbiguousCityError(UnknownCityError):
    """City name matching more than one place."""


class SolarEventError(ValueError):
    """The sun does not rise or set at this latitude on this date."""


# --- Location ---------------------------------------------------------------


def _geocode_nominatim(city: str, user_agent: str) -> list[tuple[float, float, str]]:
    """Nominatim (OpenStreetMap) geocoder. Returns every (lat, lng, display_name) match."""
    params = {"q": city, "format": "json", "limit": 5, "featureType": "city"}
    resp = httpx.get(
        "https://nominatim.openstreetmap.org/search",
        params=params,
        headers={"User-Agent": user_agent},
        timeout=10,
    )
    resp.raise_for_status()
    return [(float(r["lat"]), float(r["lon"]), r["display_name"]) for r in resp.json()]


@lru_cache(maxsize=1)
def _timezone_finder() -> TimezoneFinder:
    return TimezoneFinder()


def _timezone_at(lat: float, lng: float) -> str:
    tz_name = _timezone_finder().timezone_at(lat=lat, lng=lng)
    if tz_name is None:
        raise GeocodingError(f"Timezone not found: lat={lat}, lng={lng}")
    return tz_name


def resolve_observer(
    query: QueryInput, user_agent: str = DEFAULT_USER_AGENT
) -> ObserverContext:
    """Resolve raw location input to an ObserverContext.

    A city name wins over a partial coordinate pair. A full coordinate pair
    together with a city is ambiguous.

    Args:
        query: Latitude/longitude and/or city name.
        user_agent: User-Agent sent to the Nominatim geocoder.

    Returns:
        ObserverContext containing lat/lng, IANA timezone, and display name.

    Raises:
        LocationError: On missing, partial, ambiguous, or out-of-range input.
        UnknownCityError: When the city cannot be found.
        AmbiguousCityError: When the city matches several places.
        GeocodingError: When no timezone covers the location.
        httpx.HTTPError: On geocoder transport or HTTP failure.
    """
    lat, lng, city = query.lat, query.lng, query.city
    has_coords = lat is not None and lng is not None

    if city and has_coords:
        raise LocationError(
            "You must provide only one of a city name, or a lat/long coordinate"
        )
    if city:
        matches = _geocode_nominatim(city, user_agent)
        if not matches:
            raise UnknownCityError(f"Unknown city {city}")
        if len(matches) > 1:
            suggestions = "\n".join(f"  * {name}" for _, _, name in matches)
            raise AmbiguousCityError(
                f"Multiple cities matched '{city}'. Did you mean:\n{suggestions}"
            )
        lat, lng, display_name = matches[0]
    elif lat is None and lng is None:
        raise LocationError("No location was supplied")
    elif not has_coords:
        raise LocationError("Both lat or long must be provided, or neither")
    elif not (-90 <= lat <= 90 and -180 <= lng <= 180):
        raise LocationError(
            f"Either latitude ({lat}) or longitude ({lng}) were out of range"
        )
    else:
        display_name = f"{lat:.4f}, {lng:.4f}"

    assert lat is not None and lng is not None
    return ObserverContext(
        lat=lat, lng=lng, tz_name=_timezone_at(lat, lng), display_name=display_name
    )


# --- Solar position (NOAA general solar position approximations) -----------


def _fractional_year(dt: datetime) -> float:
    """Fractional year in radians for a UTC instant."""
    day = dt.timetuple().tm_yday - 1 + (dt.hour - 12) / 24
    return day / 365 * math.tau


def _eqtime(gamma: float) -> float:
    """Equation of time in minutes: true solar time minus mean solar time."""
    return 229.18 * (
        0.000075
        + 0.001868 * math.cos(gamma)
        - 0.032077 * math.sin(gamma)
        - 0.014615 * math.cos(2 * gamma)
        - 0.040849 * math.sin(2 * gamma)
    )


def _declination(gamma: float) -> float:
    """Solar declination in radians."""
    return (
        0.006918
        - 0.399912 * math.cos(gamma)
        + 0.070257 * math.sin(gamma)
        - 0.006758 * math.cos(2 * gamma)
        + 0.000907 * math.sin(2 * gamma)
        - 0.002697 * math.cos(3 * gamma)
        + 0.001480 * math.sin(3 * gamma)
    )


def _hour_angle(lat: float, gamma: float) -> float:
    """Hour angle of sunrise in degrees (sunset is the negative)."""
    decl = _declination(gamma)
    lat_rad = math.radians(lat)
    cos_ha = math.cos(math.radians(_ZENITH_DEG)) / (
        math.cos(lat_rad) * math.cos(decl)
    ) - math.tan(lat_rad) * math.tan(decl)
    if not -1 <= cos_ha <= 1:
        kind = "polar night" if cos_ha > 1 else "midnight sun"
        raise SolarEventError(f"No sunrise or sunset at latitude {lat} ({kind})")
    return math.degrees(math.acos(cos_ha))


def _minutes_to_utc(day: date, minutes: float) -> datetime:
    """UTC instant `minutes` after midnight of `day`, truncated to the second."""
    midnight = utc.localize(datetime(day.year, day.month, day.day))
    return midnight + timedelta(seconds=math.floor(minutes * 60))


def _event_minutes(lat: float, lng: float, at: datetime, sign: int) -> float:
    """Minutes after UTC midnight of the event; sign +1 sunrise, -1 sunset, 0 noon."""
    gamma = _fractional_year(at)
    ha = _hour_angle(lat, gamma) * sign if sign else 0.0
    return 720 - 4 * (lng + ha) - _eqtime(gamma)


def _solar_event(lat: float, lng: float, day: date, at: datetime, sign: int) -> datetime:
    """Two-pass estimate: the first result's instant refines the fractional year.

    Minutes are counted from UTC midnight of the observer's local date.
    """
    first = _minutes_to_utc(day, _event_minutes(lat, lng, at, sign))
    return _minutes_to_utc(day, _event_minutes(lat, lng, first, sign))


def compute_sun_times(context: ObserverContext, day: date) -> SunTimes:
    """Compute sunrise, solar noon and sunset for `day` at the observer's location.

    The reference instant is local noon; the noon estimate then anchors
    the sunrise and sunset calculations.

    Args:
        context: Resolved observer (lat/lng, timezone).
        day: Local calendar date.

    Returns:
        SunTimes in the observer's local timezone.

    Raises:
        SolarEventError: If the sun does not cross the horizon that day.
    """
    local_tz = timezone(context.tz_name)
    local_noon = local_tz.localize(datetime(day.year, day.month, day.day, 12))
    at = _solar_event(context.lat, context.lng, day, local_noon.astimezone(utc), 0)
    sunrise, noon, sunset = (
        _solar_event(context.lat, context.lng, day, at, sign).astimezone(local_tz)
        for sign in (1, 0, -1)
    )
    return SunTimes(sunrise=sunrise, noon=noon, sunset=sunset)


def day_report(context: ObserverContext, day: date) -> DayReport:
    """SunTimes for `day` and the following day."""
    return DayReport(
        day=day,
        today=compute_sun_times(context, day),
        tomorrow=compute_sun_times(context, day + timedelta(days=1)),
    )


# --- Date ranges ------------------------------------------------------------

def date_range(mode: str, today: date, days: int | None = None) -> list[date]:
    """Return the calendar dates covered by a CLI mode.

    Args:
        mode: One of today, week, month, year, next, last.
        today: The current local date.
        days: Day count for "next" (today plus `days` following days, so 0
            is today only) and "last" (`days` days ending today).

    Returns:
        Consecutive dates in ascending order.
    """
    if mode == "today":
        start, end = today, today
    elif mode == "week":
        start = today - timedelta(days=today.weekday())
        end = start + timedelta(days=6)
    elif mode == "month":
        last_day = calendar.monthrange(today.year, today.month)[1]
        start, end = today.replace(day=1), today.replace(day=last_day)
    elif mode == "year":
        start, end = date(today.year, 1, 1), date(today.year, 12, 31)
    elif mode in ("next", "last"):
        lowest = 0 if mode == "next" else 1
        if days is None or days < lowest:
            raise ValueError(f"{mode} needs at least {lowest} days, got {days!r}")
        if mode == "next":
            start, end = today, today + timedelta(days=days)
        else:
            start, end = today - timedelta(days=days - 1), today
    else:
        raise ValueError(f"Unknown mode {mode}")
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]

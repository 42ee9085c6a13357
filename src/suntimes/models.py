"""Data model definitions — explicit boundaries between input, compute, and render layers."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta


@dataclass(frozen=True)
class QueryInput:
    """Raw location input from the command line or environment. Not yet validated."""

    lat: float | None = None  # Latitude (decimal degrees)
    lng: float | None = None  # Longitude (decimal degrees)
    city: str | None = None  # "City", "City, Country" or "City, State, Country"


@dataclass(frozen=True)
class ObserverContext:
    """Result of geocoding + timezone lookup. Input to solar computation."""

    lat: float  # Latitude (decimal degrees)
    lng: float  # Longitude (decimal degrees)
    tz_name: str  # IANA timezone name ("Europe/London")
    display_name: str  # Normalized place name returned by geocoder (for display)


@dataclass(frozen=True)
class SunTimes:
    """Sunrise, solar noon and sunset for one day, in the observer's local time."""

    sunrise: datetime
    noon: datetime
    sunset: datetime

    @property
    def day_length(self) -> timedelta:
        return self.sunset - self.sunrise


@dataclass(frozen=True)
class DayReport:
    """One day's sun times plus the change until the next day."""

    day: date
    today: SunTimes
    tomorrow: SunTimes

    @property
    def sunrise_delta(self) -> timedelta:
        return self.tomorrow.sunrise - self.today.sunrise - timedelta(days=1)

    @property
    def sunset_delta(self) -> timedelta:
        return self.tomorrow.sunset - self.today.sunset - timedelta(days=1)

    @property
    def day_length_delta(self) -> timedelta:
        return self.tomorrow.day_length - self.today.day_length


@dataclass(frozen=True)
class Chart:
    """A single-series Braille line chart request. The sole input to the plot renderer."""

    label: str  # Shown halfway down the label column
    width: int  # Grid width in character columns
    height: int  # Grid height in character rows (the grid has height + 1 rows)
    samples: tuple[time, ...]  # One time-of-day value per x-axis tick

    @property
    def min(self) -> time:
        return min(self.samples)

    @property
    def max(self) -> time:
        return max(self.samples)

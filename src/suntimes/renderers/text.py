"""Line-oriented text renderers: human-readable table, CSV, and JSON."""

import json
from datetime import timedelta

from suntimes.models import DayReport, SunTimes

_CLOCK = "%H:%M:%S"


def _split_seconds(duration: timedelta) -> tuple[str, int]:
    """Return the sign prefix and the absolute whole seconds of `duration`."""
    seconds = int(duration.total_seconds())
    return ("-" if seconds < 0 else ""), abs(seconds)


def format_duration_ms(duration: timedelta) -> str:
    """Format as [-]M:SS, minutes unbounded."""
    sign, seconds = _split_seconds(duration)
    return f"{sign}{seconds // 60}:{seconds % 60:02}"


def format_duration_hms(duration: timedelta) -> str:
    """Format as [-]H:MM:SS."""
    sign, seconds = _split_seconds(duration)
    return f"{sign}{seconds // 3600}:{seconds // 60 % 60:02}:{seconds % 60:02}"


def human_line(report: DayReport) -> str:
    """One table row: sunrise, noon with day length, sunset, each with its daily change."""
    times = report.today
    return (
        f"{report.day:%Y-%m-%d}"
        f" 🌅 {times.sunrise.strftime(_CLOCK)}"
        f" (Δ{format_duration_ms(report.sunrise_delta):>5})"
        f" 🌞 {times.noon.strftime(_CLOCK)}"
        f" ({format_duration_hms(times.day_length)}"
        f" Δ{format_duration_ms(report.day_length_delta):>5})"
        f" 🌇 {times.sunset.strftime(_CLOCK)}"
        f" (Δ{format_duration_ms(report.sunset_delta):>5})"
    )


def csv_line(report: DayReport) -> str:
    """date,sunrise,noon,sunset,day_length — times as seconds after local midnight."""
    times = report.today
    day_start = times.sunrise.replace(hour=0, minute=0, second=0, microsecond=0)
    fields = [
        f"{report.day:%Y-%m-%d}",
        *(
            str(int((t - day_start).total_seconds()))
            for t in (times.sunrise, times.noon, times.sunset)
        ),
        str(int(times.day_length.total_seconds())),
    ]
    return ",".join(fields)


def to_json(series: list[SunTimes]) -> str:
    """Pretty-printed JSON list of {sunrise, noon, sunset} ISO-8601 strings."""
    payload = [
        {
            "sunrise": s.sunrise.isoformat(),
            "noon": s.noon.isoformat(),
            "sunset": s.sunset.isoformat(),
        }
        for s in series
    ]
    return json.dumps(payload, indent=2)

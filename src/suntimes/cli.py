"""Command-line entry point: sunrise/sunset tables and Braille plots.

    uv run suntimes --city "Busan, KR" --format plot month

Uses place search from https://nominatim.openstreetmap.org
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from datetime import datetime

import httpx
from dotenv import load_dotenv
from pytz import timezone

from suntimes.compute import (
    LocationError,
    SolarEventError,
    compute_sun_times,
    date_range,
    day_report,
    resolve_observer,
)
from suntimes.config import Settings
from suntimes.i18n import LANGS, t
from suntimes.models import Chart, QueryInput
from suntimes.renderers.plot import ChartError, print_chart
from suntimes.renderers.text import csv_line, human_line, to_json

logger = logging.getLogger(__name__)

FORMATS = ("human", "csv", "json", "plot")


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {raw}")
    return value


def _non_negative_int(raw: str) -> int:
    value = int(raw)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be zero or more, got {raw}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="suntimes",
        description="Sunrise/set table generator",
        epilog="Location falls back to SUNTIME_LAT / SUNTIME_LONG / SUNTIME_CITY.",
    )
    parser.add_argument(
        "-c",
        "--city",
        help='Location name: "City", "City, Country" or "City, State, Country"',
    )
    parser.add_argument(
        "--lat", type=float, help="Latitude; requires --long, incompatible with --city"
    )
    parser.add_argument(
        "--long", type=float, help="Longitude; requires --lat, incompatible with --city"
    )
    parser.add_argument("--width", type=_positive_int, help="Plot width. Default: 120")
    parser.add_argument("--height", type=_positive_int, help="Plot height. Default: 10")
    parser.add_argument(
        "-f", "--format", choices=FORMATS, default="human", help="Output format"
    )
    parser.add_argument("--lang", choices=LANGS, default="en", help="Label language")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    modes = parser.add_subparsers(dest="mode", metavar="MODE")
    modes.add_parser("today", help="Shows times for today")
    modes.add_parser("week", help="Shows times for the current week")
    modes.add_parser("month", help="Shows times for the current month")
    modes.add_parser("year", help="Shows times for the current year")
    for name, help_text, days_type in (
        ("next", "Shows times for today and the next given number of days",
         _non_negative_int),
        ("last", "Shows times for the previous given number of days",
         _positive_int),
    ):
        sub = modes.add_parser(name, help=help_text)
        sub.add_argument("days", type=days_type)
    return parser


def _query(args: argparse.Namespace, settings: Settings) -> QueryInput:
    """CLI location if any part of it was given, otherwise the environment's."""
    if args.lat is None and args.long is None and args.city is None:
        return QueryInput(lat=settings.lat, lng=settings.lng, city=settings.city)
    return QueryInput(lat=args.lat, lng=args.long, city=args.city)


def run(args: argparse.Namespace, settings: Settings) -> None:
    """Resolve the location, compute the requested days, and write them to stdout."""
    context = resolve_observer(_query(args, settings), user_agent=settings.user_agent)
    logger.debug("observer: %s", context)

    mode = args.mode or "today"
    today = datetime.now(timezone(context.tz_name)).date()
    days = date_range(mode, today, getattr(args, "days", None))

    if args.format == "human":
        for day in days:
            print(human_line(day_report(context, day)))
    elif args.format == "csv":
        for day in days:
            print(csv_line(day_report(context, day)))
    elif args.format == "json":
        print(to_json([compute_sun_times(context, day) for day in days]))
    else:
        if len(days) < 2:
            raise ChartError(t("error_plot_days", args.lang))
        series = [compute_sun_times(context, day) for day in days]
        width = args.width or settings.width
        height = args.height or settings.height
        for key, samples in (
            ("label_sunsets", [s.sunset.time() for s in series]),
            ("label_sunrises", [s.sunrise.time() for s in series]),
        ):
            print_chart(
                Chart(
                    label=t(key, args.lang),
                    width=width,
                    height=height,
                    samples=tuple(samples),
                )
            )


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(name)s] %(message)s",
    )
    try:
        run(args, Settings.from_env())
    except (LocationError, httpx.HTTPError) as exc:
        print(t("error_location", args.lang).format(error=exc), file=sys.stderr)
        return 1
    except (ChartError, SolarEventError) as exc:
        print(f"{t('error_prefix', args.lang)}: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

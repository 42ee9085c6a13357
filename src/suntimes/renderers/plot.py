"""Braille line chart renderer for time-of-day series.

Samples are spread evenly across the grid width; their values are scaled so
the earliest time sits on the bottom sub-row and the latest on the top
sub-row of the bottom `height` character rows.
"""

import logging
import sys
from collections.abc import Sequence
from datetime import time, timedelta
from typing import TextIO

from suntimes.models import Chart
from suntimes.renderers.canvas import CellBuffer
from suntimes.renderers.rasterizer import (
    SUBPIXELS_X,
    SUBPIXELS_Y,
    SubpixelPoint,
    draw_segment,
)

logger = logging.getLogger(__name__)

LABEL_WIDTH = 10
TIME_FORMAT = "%H:%M:%S"


class ChartError(ValueError):
    """Chart request that cannot be rendered."""


def _since_midnight(value: time) -> timedelta:
    return timedelta(
        hours=value.hour,
        minutes=value.minute,
        seconds=value.second,
        microseconds=value.microsecond,
    )


def _validate(chart: Chart) -> None:
    for name in ("width", "height"):
        value = getattr(chart, name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ChartError(f"{name} must be a positive integer, got {value!r}")
    if len(chart.samples) < 2:
        raise ChartError(
            f"at least 2 samples are needed to draw a line, got {len(chart.samples)}"
        )


def _quantize(chart: Chart) -> list[SubpixelPoint]:
    """Map each sample to the sub-pixel coordinate of its tick."""
    count = len(chart.samples)
    low = _since_midnight(chart.min)
    span = _since_midnight(chart.max) - low
    sub_rows = chart.height * SUBPIXELS_Y
    if not span:
        logger.info("flat series %r: all samples equal %s", chart.label, chart.min)

    points: list[SubpixelPoint] = []
    for i, sample in enumerate(chart.samples):
        x = (i * chart.width // count) * SUBPIXELS_X
        y = (_since_midnight(sample) - low) * sub_rows // span if span else 0
        points.append(SubpixelPoint(x, y))
    return points


def _row_tag(chart: Chart, row: int) -> str:
    if row == 1:
        return chart.max.strftime(TIME_FORMAT)
    if row == chart.height:
        return chart.min.strftime(TIME_FORMAT)
    if row == chart.height // 2:
        return chart.label
    return ""


def render(chart: Chart) -> list[str]:
    """Render a Chart into `height + 1` labelled text lines.

    Args:
        chart: The chart request.

    Returns:
        Lines of exactly `LABEL_WIDTH + 1 + width` characters, top row first.

    Raises:
        ChartError: On fewer than 2 samples or a non-positive width/height.
    """
    _validate(chart)
    buffer = CellBuffer(chart.width, chart.height + 1)
    points = _quantize(chart)
    for start, end in zip(points, points[1:]):
        draw_segment(buffer, start, end)
    logger.debug(
        "rendered %r: %d samples on %dx%d", chart.label, len(points), chart.width, chart.height
    )
    return [
        f"{_row_tag(chart, row)[:LABEL_WIDTH]:>{LABEL_WIDTH}} {cells}"
        for row, cells in enumerate(buffer.render())
    ]


def render_chart(label: str, width: int, height: int, samples: Sequence[time]) -> list[str]:
    """Build a Chart from plain arguments and render it. See `render`."""
    return render(Chart(label=label, width=width, height=height, samples=tuple(samples)))


def print_chart(chart: Chart, out: TextIO | None = None) -> None:
    """Write the rendered chart to `out`, one newline-terminated line per row."""
    out = out or sys.stdout
    for line in render(chart):
        out.write(line + "\n")

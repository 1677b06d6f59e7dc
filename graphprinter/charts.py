"""Chart builders that draw a (datetime, value) series onto a matplotlib figure."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Sequence

from matplotlib.axes import Axes
from matplotlib.dates import DateFormatter
from matplotlib.figure import Figure
from matplotlib.ticker import LinearLocator

Point = tuple[datetime, float]

AXIS_DATE_FORMAT = "%d.%m.%Y %H:%M"
X_TICK_COUNT = 8
IMPULSE_BASE_OFFSET = 100.0

LINE_COLOR = "#000080"
IMPULSE_COLOR = "#008080"
SCATTER_COLOR = "#800080"


def empty_chart() -> Figure:
    """Return a figure with nothing plotted on it."""
    return Figure()


def chart_is_empty(figure: Figure) -> bool:
    """Tell whether no series has been plotted on ``figure``."""
    return not any(len(ax.lines) or len(ax.collections) for ax in figure.axes)


_Draw = Callable[[Axes, list[datetime], list[float], float], None]


def _build(data: Sequence[Point], draw: _Draw) -> Figure:
    points = list(data)
    if not points:
        return empty_chart()

    dates = [date for date, _ in points]
    values = [value for _, value in points]
    min_y = min(values)
    # The upper bound starts at the smallest positive double, not at -inf.
    max_y = max(sys.float_info.min, max(values))

    figure = Figure()
    axes = figure.add_subplot()
    draw(axes, dates, values, min_y)

    axes.xaxis.set_major_locator(LinearLocator(X_TICK_COUNT))
    axes.xaxis.set_major_formatter(DateFormatter(AXIS_DATE_FORMAT))
    first, last = dates[0], dates[-1]
    if first < last:
        axes.set_xlim(first, last)
    if min_y < max_y:
        axes.set_ylim(min_y, max_y)
    return figure


class ChartBuilder(ABC):
    """Turns a series of points into a chart figure."""

    @abstractmethod
    def build_chart(self, data: Sequence[Point]) -> Figure:
        """Return a figure for ``data``; an empty series gives an empty chart."""


class LineChartBuilder(ChartBuilder):
    """Joins the points with a thin line."""

    def build_chart(self, data: Sequence[Point]) -> Figure:
        return _build(data, self._draw)

    @staticmethod
    def _draw(axes: Axes, dates: list[datetime], values: list[float], min_y: float) -> None:
        axes.plot(dates, values, color=LINE_COLOR, linewidth=1)


class ImpulseChartBuilder(ChartBuilder):
    """Draws a vertical stroke from below the lowest value up to each point."""

    def build_chart(self, data: Sequence[Point]) -> Figure:
        return _build(data, self._draw)

    @staticmethod
    def _draw(axes: Axes, dates: list[datetime], values: list[float], min_y: float) -> None:
        base = min_y - IMPULSE_BASE_OFFSET
        xs = [date for date in dates for _ in range(3)]
        ys = [y for value in values for y in (base, value, base)]
        axes.plot(xs, ys, color=IMPULSE_COLOR, linewidth=3)


class ScatterChartBuilder(ChartBuilder):
    """Marks each point with a small dot."""

    MARKER_SIZE = 3

    def build_chart(self, data: Sequence[Point]) -> Figure:
        return _build(data, self._draw)

    @classmethod
    def _draw(cls, axes: Axes, dates: list[datetime], values: list[float], min_y: float) -> None:
        axes.scatter(
            dates,
            values,
            s=cls.MARKER_SIZE ** 2,
            color=SCATTER_COLOR,
            edgecolors=SCATTER_COLOR,
        )
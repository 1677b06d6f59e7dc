"""Wires the application together and prints charts of data files to PDF."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Sequence, Union

from matplotlib.colors import to_rgba
from matplotlib.figure import Figure

from .charts import (
    ChartBuilder,
    ImpulseChartBuilder,
    LineChartBuilder,
    ScatterChartBuilder,
    chart_is_empty,
)
from .dateparsing import (
    AggregatedParser,
    DateAndMinutesParser,
    DateTimeParser,
    MultiformatParser,
)
from .ioc import IOCContainer
from .managers import ChartTypeManager, DataTypeManager
from .processing import DataProcessing
from .readers import JsonDataReader, SqliteDataReader

DATE_FORMATS = (
    "dd.MM.yyyy hh:mm",
    "dd.MM.yyyy",
    "yyyy-MM-dd hh:mm",
    "yyyy-MM-dd",
)
DEFAULT_OUTPUT = "result.pdf"
INVALID_DATA_MESSAGE = "Invalid data"


def build_container() -> IOCContainer:
    """Return a container with the parsers, readers, charts and processing registered."""
    ioc = IOCContainer()
    ioc.register_instance(IOCContainer, ioc)

    ioc.register_singleton(MultiformatParser, MultiformatParser)
    multiformat = ioc.get_instance(MultiformatParser)
    for fmt in DATE_FORMATS:
        multiformat.add_format(fmt)

    ioc.register_factory(DateAndMinutesParser, DateAndMinutesParser, MultiformatParser)

    ioc.register_singleton(AggregatedParser, AggregatedParser)
    aggregated = ioc.get_instance(AggregatedParser)
    aggregated.add_parser(ioc.get_instance(MultiformatParser))
    aggregated.add_parser(ioc.get_instance(DateAndMinutesParser))
    ioc.register_instance(DateTimeParser, aggregated)

    ioc.register_singleton(DataTypeManager, DataTypeManager, IOCContainer)
    data_manager = ioc.get_instance(DataTypeManager)
    data_manager.add_data_type("sqlite", SqliteDataReader, DateTimeParser)
    data_manager.add_data_type("json", JsonDataReader, DateTimeParser)

    ioc.register_singleton(ChartTypeManager, ChartTypeManager, IOCContainer)
    chart_manager = ioc.get_instance(ChartTypeManager)
    chart_manager.add_chart_type("Line", LineChartBuilder)
    chart_manager.add_chart_type("Impulse", ImpulseChartBuilder)
    chart_manager.add_chart_type("Scatter", ScatterChartBuilder)

    ioc.register_singleton(DataProcessing, DataProcessing, IOCContainer)
    return ioc


def _gray(color: Any) -> tuple[float, float, float, float]:
    red, green, blue, alpha = to_rgba(color)
    level = 0.299 * red + 0.587 * green + 0.114 * blue
    return (level, level, level, alpha)


def _grayscale(figure: Figure) -> list[tuple[Any, str, Any]]:
    """Turn every plotted colour grey; return what is needed to undo it."""
    saved: list[tuple[Any, str, Any]] = []
    for axes in figure.axes:
        for line in axes.lines:
            saved.append((line, "color", line.get_color()))
            line.set_color(_gray(line.get_color()))
        for collection in axes.collections:
            faces = collection.get_facecolor()
            edges = collection.get_edgecolor()
            saved.append((collection, "facecolor", faces.copy()))
            saved.append((collection, "edgecolor", edges.copy()))
            collection.set_facecolor([_gray(c) for c in faces])
            collection.set_edgecolor([_gray(c) for c in edges])
    return saved


def _restore(saved: list[tuple[Any, str, Any]]) -> None:
    for artist, prop, value in saved:
        getattr(artist, f"set_{prop}")(value)


def print_chart(figure: Figure, path: Union[str, Path], black_and_white: bool) -> None:
    """Write ``figure`` to ``path`` as PDF, optionally in shades of grey.

    Raises ValueError if nothing has been plotted on the figure.
    """
    if chart_is_empty(figure):
        raise ValueError("the chart has no data to print")
    saved = _grayscale(figure) if black_and_white else []
    try:
        figure.savefig(path, format="pdf")
    finally:
        _restore(saved)


def _argument_parser(chart_types: Sequence[str], data_types: Sequence[str]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graphprinter",
        description="Chart a time series from a data file and print it to PDF.",
    )
    parser.add_argument(
        "file",
        help="data file to chart (types: " + ", ".join(data_types) + ")",
    )
    parser.add_argument(
        "-c", "--chart",
        choices=list(chart_types),
        default=chart_types[0] if chart_types else None,
        help="chart style",
    )
    parser.add_argument("--bw", action="store_true", help="print in black and white")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT, help="PDF file to write")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Chart the given file and print it to PDF; return the exit status."""
    ioc = build_container()
    chart_manager: ChartTypeManager = ioc.get_instance(ChartTypeManager)
    data_manager: DataTypeManager = ioc.get_instance(DataTypeManager)

    args = _argument_parser(chart_manager.chart_types(), data_manager.data_types()).parse_args(argv)

    chart_manager.switch_chart_type(args.chart)

    source = Path(args.file)
    if not source.is_file():
        print(f"not a file: {source}", file=sys.stderr)
        return 2
    try:
        data_manager.switch_data_type(source.suffix[1:])
    except KeyError:
        print(f"unsupported data type: {source.suffix or '(none)'}", file=sys.stderr)
        return 2

    processing: DataProcessing = ioc.get_instance(DataProcessing)
    figure = processing.make_data(source.absolute())
    if chart_is_empty(figure):
        print(INVALID_DATA_MESSAGE, file=sys.stderr)
        return 1

    print_chart(figure, args.output, args.bw)
    return 0
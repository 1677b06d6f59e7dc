from datetime import datetime

import pytest

from graphprinter.charts import (
    ChartBuilder,
    LineChartBuilder,
    ScatterChartBuilder,
    chart_is_empty,
)
from graphprinter.ioc import IOCContainer, ResolutionError
from graphprinter.processing import DataProcessing
from graphprinter.readers import DataReader

POINTS = [
    (datetime(2024, 2, 1, 8, 0), 1.0),
    (datetime(2024, 2, 2, 9, 0), 4.0),
]


class FixedReader(DataReader):
    def __init__(self, points):
        self.points = points
        self.paths = []

    def read_data(self, path):
        self.paths.append(path)
        return list(self.points)


@pytest.fixture
def ioc():
    container = IOCContainer()
    container.register_factory(ChartBuilder, LineChartBuilder)
    return container


def test_make_data_reads_path_and_emits_chart(ioc):
    reader = FixedReader(POINTS)
    ioc.register_instance(DataReader, reader)
    processing = DataProcessing(ioc)
    received = []
    processing.connect(received.append)
    chart = processing.make_data("some/file.json")
    assert reader.paths == ["some/file.json"]
    assert received == [chart]
    assert chart_is_empty(chart) is False
    assert list(chart.axes[0].lines[0].get_ydata()) == [1.0, 4.0]
    assert processing.data == POINTS


def test_empty_data_emits_empty_chart(ioc):
    ioc.register_instance(DataReader, FixedReader([]))
    processing = DataProcessing(ioc)
    received = []
    processing.connect(received.append)
    processing.make_data("empty.json")
    assert len(received) == 1
    assert chart_is_empty(received[0]) is True


def test_empty_data_does_not_need_builder():
    ioc = IOCContainer()
    ioc.register_instance(DataReader, FixedReader([]))
    chart = DataProcessing(ioc).make_data("x")
    assert chart_is_empty(chart) is True


def test_make_chart_without_data_is_empty(ioc):
    processing = DataProcessing(ioc)
    assert chart_is_empty(processing.make_chart()) is True


def test_make_chart_uses_current_builder(ioc):
    ioc.register_instance(DataReader, FixedReader(POINTS))
    processing = DataProcessing(ioc)
    first = processing.make_data("a")
    assert len(first.axes[0].lines) == 1
    ioc.register_factory(ChartBuilder, ScatterChartBuilder)
    second = processing.make_chart()
    assert len(second.axes[0].collections) == 1
    assert len(second.axes[0].lines) == 0


def test_every_listener_is_notified(ioc):
    ioc.register_instance(DataReader, FixedReader(POINTS))
    processing = DataProcessing(ioc)
    first, second = [], []
    processing.connect(first.append)
    processing.connect(second.append)
    chart = processing.make_data("a")
    assert first == [chart]
    assert second == [chart]


def test_missing_reader_raises(ioc):
    processing = DataProcessing(ioc)
    with pytest.raises(ResolutionError):
        processing.make_data("a")


def test_new_file_replaces_data(ioc):
    reader = FixedReader(POINTS)
    ioc.register_instance(DataReader, reader)
    processing = DataProcessing(ioc)
    processing.make_data("a")
    reader.points = POINTS[:1]
    processing.make_data("b")
    assert processing.data == POINTS[:1]
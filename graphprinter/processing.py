"""Reads the selected file and builds a chart for it, notifying listeners."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Union

from matplotlib.figure import Figure

from .charts import ChartBuilder, empty_chart
from .ioc import IOCContainer
from .readers import DataReader, Series

ChartListener = Callable[[Figure], None]


class DataProcessing:
    """Holds the current series and turns it into charts on demand.

    The reader and chart builder are taken from the container each time, so
    switching them there takes effect on the next call.
    """

    def __init__(self, ioc: IOCContainer) -> None:
        self._ioc = ioc
        self._data: Series = []
        self._listeners: list[ChartListener] = []

    @property
    def data(self) -> Series:
        return list(self._data)

    def connect(self, callback: ChartListener) -> None:
        """Call ``callback`` with every new chart."""
        self._listeners.append(callback)

    def make_data(self, path: Union[str, Path]) -> Figure:
        """Read ``path`` with the current reader and build its chart."""
        self._data = self._ioc.get_instance(DataReader).read_data(path)
        return self.make_chart()

    def make_chart(self) -> Figure:
        """Build a chart of the current series with the current builder."""
        if not self._data:
            chart = empty_chart()
        else:
            chart = self._ioc.get_instance(ChartBuilder).build_chart(self._data)
        for listener in self._listeners:
            listener(chart)
        return chart
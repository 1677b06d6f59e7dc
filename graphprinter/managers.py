"""Named choices of chart builder and data reader, switched into a container."""

from __future__ import annotations

from typing import Any, Callable

from .charts import ChartBuilder
from .ioc import IOCContainer
from .readers import DataReader


class _TypeRegistry:
    """Names mapped to a constructor and the interfaces its arguments come from."""

    def __init__(self, ioc: IOCContainer, interface: Any) -> None:
        self._ioc = ioc
        self._interface = interface
        self._types: dict[str, tuple[Callable[..., Any], tuple[Any, ...]]] = {}

    def _add(self, name: str, concrete: Callable[..., Any], args: tuple[Any, ...]) -> None:
        self._types[name] = (concrete, args)

    def _remove(self, name: str) -> None:
        self._types.pop(name, None)

    def _names(self) -> list[str]:
        return list(self._types)

    def _switch(self, name: str) -> None:
        try:
            concrete, args = self._types[name]
        except KeyError:
            raise KeyError(f"unknown type {name!r}") from None
        self._ioc.register_factory(self._interface, concrete, *args)


class ChartTypeManager(_TypeRegistry):
    """Chooses which chart builder the container provides."""

    def __init__(self, ioc: IOCContainer) -> None:
        super().__init__(ioc, ChartBuilder)

    def add_chart_type(self, name: str, builder: Callable[..., ChartBuilder], *args: Any) -> None:
        """Offer ``builder`` under ``name``; ``args`` name the interfaces it is built from."""
        self._add(name, builder, args)

    def remove_chart_type(self, name: str) -> None:
        self._remove(name)

    def chart_types(self) -> list[str]:
        return self._names()

    def switch_chart_type(self, name: str) -> None:
        """Make the container build the chart builder registered as ``name``."""
        self._switch(name)


class DataTypeManager(_TypeRegistry):
    """Chooses which data reader the container provides."""

    def __init__(self, ioc: IOCContainer) -> None:
        super().__init__(ioc, DataReader)

    def add_data_type(self, name: str, reader: Callable[..., DataReader], *args: Any) -> None:
        """Offer ``reader`` under ``name``; ``args`` name the interfaces it is built from."""
        self._add(name, reader, args)

    def remove_data_type(self, name: str) -> None:
        self._remove(name)

    def data_types(self) -> list[str]:
        return self._names()

    def switch_data_type(self, name: str) -> None:
        """Make the container build the data reader registered as ``name``."""
        self._switch(name)
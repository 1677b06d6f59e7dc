# graphprinter

graphprinter reads a time series from a JSON or SQLite file, draws it as a
line, impulse or scatter chart with matplotlib, and prints the chart to PDF
in colour or in shades of grey.

## Installation

```
pip install .
```

To run the tests, install the test extra and run pytest:

```
pip install ".[test]"
pytest
```

## Input data

Each record is a timestamp with a numeric value. The file type is chosen by
the file's suffix, which must be exactly `json` or `sqlite`.

- **JSON** (`*.json`): an array of objects. In each object the string member
  is read as the timestamp and the numeric member as the value; members are
  looked at in key order, and a later one of the same kind replaces an
  earlier one. Records without a valid timestamp or a number are skipped and
  a warning is logged.
- **SQLite** (`*.sqlite`): the first table in the database is opened
  read-only and read. Its first column is the timestamp and its second column
  is the value. Invalid rows are skipped with a logged warning, and the points
  are sorted by time.

Timestamps are accepted in these forms, tried in this order:

- `dd.MM.yyyy hh:mm`, for example `24.12.2023 18:30`
- `dd.MM.yyyy`, for example `24.12.2023`
- `yyyy-MM-dd hh:mm`, for example `2023-12-24 18:30`
- `yyyy-MM-dd`, for example `2023-12-24`
- a date in one of the forms above followed by a space and the minutes since
  midnight (0 to 1440), for example `24.12.2023 1110`

## Command line

```
graphprinter measurements.json
graphprinter measurements.sqlite --chart Scatter --bw -o scatter.pdf
```

- `file`: the data file to chart.
- `-c`, `--chart`: chart style, one of `Line`, `Impulse`, `Scatter`
  (default `Line`).
- `--bw`: print in shades of grey.
- `-o`, `--output`: the PDF file to write (default `result.pdf`).

The command exits with status 0 when the PDF was written, 2 when the path is
not a file or its suffix is not a supported type, and 1, printing
`Invalid data`, when the file holds no valid points.

## Library use

The parts can be assembled through the container that
`graphprinter.app.build_container()` returns, or used directly:

```python
from graphprinter.dateparsing import MultiformatParser
from graphprinter.readers import JsonDataReader
from graphprinter.charts import LineChartBuilder
from graphprinter.app import print_chart

parser = MultiformatParser()
parser.add_format("yyyy-MM-dd")

data = JsonDataReader(parser).read_data("measurements.json")
figure = LineChartBuilder().build_chart(data)
print_chart(figure, "result.pdf", black_and_white=False)
```

- `graphprinter.ioc.IOCContainer` maps interfaces to providers with
  `register_instance`, `register_functor`, `register_factory` and
  `register_singleton`; `get_instance` resolves one and raises
  `ResolutionError` when nothing is registered.
- `graphprinter.dateparsing` has `MultiformatParser`,
  `DateAndMinutesParser` and `AggregatedParser`; each `parse` returns a
  `datetime`, or `None` when the text does not match.
- `graphprinter.readers` has `JsonDataReader` and `SqliteDataReader`; their
  `read_data` returns a list of `(datetime, float)` pairs, empty when the file
  cannot be read.
- `graphprinter.charts` has `LineChartBuilder`, `ImpulseChartBuilder` and
  `ScatterChartBuilder`, whose `build_chart` returns a matplotlib `Figure`,
  plus `empty_chart()` and `chart_is_empty(figure)`.
- `graphprinter.managers` has `ChartTypeManager` and `DataTypeManager`, which
  keep named chart styles and file types and switch the one the container
  provides.
- `graphprinter.processing.DataProcessing` reads a file with the current
  reader and builds a chart with the current builder: register a callback
  with `connect`, then call `make_data(path)`, or `make_chart()` to redraw the
  loaded data with the current chart type.
- `graphprinter.app.print_chart` writes a figure to PDF and raises
  `ValueError` if nothing is plotted on it.

## What it does not do

graphprinter has no interactive window: there is no file browser, no on-screen
chart view and no print dialog. Charts are built and written to PDF from the
command line or from Python code.
import json
import logging
import sqlite3

import pytest

from graphprinter.dateparsing import DateAndMinutesParser, AggregatedParser, MultiformatParser
from graphprinter.readers import DataReader, JsonDataReader, SqliteDataReader

FMT = "%d.%m.%Y %H:%M"


@pytest.fixture
def parser():
    multiformat = MultiformatParser(["dd.MM.yyyy hh:mm", "dd.MM.yyyy", "yyyy-MM-dd hh:mm", "yyyy-MM-dd"])
    return AggregatedParser([multiformat, DateAndMinutesParser(multiformat)])


def write_json(tmp_path, document):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_json_reads_records_in_file_order(tmp_path, parser):
    records = [
        {"date": "18.05.2023 10:30", "value": 1.5},
        {"date": "17.05.2023 09:00", "value": -2},
    ]
    result = JsonDataReader(parser).read_data(write_json(tmp_path, records))
    assert [d.strftime(FMT) for d, _ in result] == ["18.05.2023 10:30", "17.05.2023 09:00"]
    assert [v for _, v in result] == [1.5, -2.0]
    assert all(isinstance(v, float) for _, v in result)


def test_json_skips_invalid_records(tmp_path, parser, caplog):
    records = [
        {"date": "17.05.2023", "value": 1.0},
        {"date": "17.05.2023"},
        {"date": "17.05.2023", "value": True},
        {"date": "garbage", "value": 3.0},
        "not an object",
        {"date": "2023-05-18", "value": 4.0},
    ]
    with caplog.at_level(logging.WARNING):
        result = JsonDataReader(parser).read_data(write_json(tmp_path, records))
    assert [v for _, v in result] == [1.0, 4.0]
    assert "Invalid data at record 3" in caplog.text


def test_json_members_are_visited_in_key_order(tmp_path, parser):
    records = [
        {"b": "garbage", "a": "17.05.2023", "v": 1.0},
        {"b": "17.05.2023", "a": "garbage", "v": 2.0},
    ]
    result = JsonDataReader(parser).read_data(write_json(tmp_path, records))
    assert [v for _, v in result] == [2.0]


def test_json_date_and_minutes_records(tmp_path, parser):
    records = [{"date": "17.05.2023 90", "value": 5.0}]
    result = JsonDataReader(parser).read_data(write_json(tmp_path, records))
    assert result == [(parser.parse("17.05.2023 01:30"), 5.0)]


def test_json_missing_file(tmp_path, parser, caplog):
    with caplog.at_level(logging.WARNING):
        assert JsonDataReader(parser).read_data(tmp_path / "absent.json") == []
    assert "Failed to open file" in caplog.text


@pytest.mark.parametrize("content", ["{not json", "", "5", '"text"', "[NaN]"])
def test_json_invalid_document(tmp_path, parser, content, caplog):
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert JsonDataReader(parser).read_data(path) == []
    assert "Invalid JSON document" in caplog.text


def test_json_top_level_object_gives_no_data(tmp_path, parser):
    path = write_json(tmp_path, {"date": "17.05.2023", "value": 1.0})
    assert JsonDataReader(parser).read_data(path) == []


def make_db(tmp_path, rows, columns="date TEXT, value"):
    path = tmp_path / "data.sqlite"
    with sqlite3.connect(path) as connection:
        connection.execute(f"CREATE TABLE measurements ({columns})")
        placeholders = ", ".join("?" * len(rows[0])) if rows else ""
        connection.executemany(f"INSERT INTO measurements VALUES ({placeholders})", rows)
    connection.close()
    return path


def test_sqlite_reads_and_sorts(tmp_path, parser):
    rows = [("18.05.2023 10:00", 3.0), ("17.05.2023 12:00", 1.0), ("2023-05-17 08:00", 2)]
    result = SqliteDataReader(parser).read_data(make_db(tmp_path, rows))
    dates = [d for d, _ in result]
    assert dates == sorted(dates)
    assert [d.strftime(FMT) for d in dates] == ["17.05.2023 08:00", "17.05.2023 12:00", "18.05.2023 10:00"]
    assert [v for _, v in result] == [2.0, 1.0, 3.0]


def test_sqlite_equal_dates_sorted_by_value(tmp_path, parser):
    rows = [("17.05.2023", 9.0), ("17.05.2023", -1.0)]
    result = SqliteDataReader(parser).read_data(make_db(tmp_path, rows))
    assert [v for _, v in result] == [-1.0, 9.0]


def test_sqlite_converts_text_values_and_skips_invalid(tmp_path, parser, caplog):
    rows = [
        ("17.05.2023", "2.5"),
        ("17.05.2023", None),
        ("17.05.2023", "abc"),
        ("garbage", 1.0),
        (None, 1.0),
    ]
    with caplog.at_level(logging.WARNING):
        result = SqliteDataReader(parser).read_data(make_db(tmp_path, rows))
    assert [v for _, v in result] == [2.5]
    assert "Invalid data at row 2" in caplog.text


def test_sqlite_single_column_rows_are_invalid(tmp_path, parser):
    path = make_db(tmp_path, [("17.05.2023",)], columns="date TEXT")
    assert SqliteDataReader(parser).read_data(path) == []


def test_sqlite_no_tables(tmp_path, parser, caplog):
    path = tmp_path / "empty.sqlite"
    sqlite3.connect(path).close()
    with caplog.at_level(logging.WARNING):
        assert SqliteDataReader(parser).read_data(path) == []
    assert "Query error" in caplog.text


def test_sqlite_missing_file_is_not_created(tmp_path, parser):
    path = tmp_path / "absent.sqlite"
    assert SqliteDataReader(parser).read_data(path) == []
    assert not path.exists()


def test_sqlite_not_a_database(tmp_path, parser):
    path = tmp_path / "text.sqlite"
    path.write_text("plain text, not a database " * 20, encoding="utf-8")
    assert SqliteDataReader(parser).read_data(path) == []


def test_reader_interface_is_abstract():
    with pytest.raises(TypeError):
        DataReader()
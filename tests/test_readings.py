import time

import pytest

from sensorlog.readings import (
    MAX_SENSOR_ID_LENGTH,
    MAX_STRING_VALUE_LENGTH,
    DataType,
    MalformedLineError,
    Reading,
    datetime_to_epoch,
    format_value,
    infer_type,
    parse_line,
    parse_value,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("true", DataType.BOOLEAN),
        ("false", DataType.BOOLEAN),
        ("True", DataType.STRING),
        ("12.5", DataType.REAL),
        ("-0.25", DataType.REAL),
        (".5", DataType.REAL),
        ("42", DataType.INTEGER),
        ("-7", DataType.INTEGER),
        ("abc", DataType.STRING),
        ("1.2.3", DataType.STRING),
        ("1e5", DataType.STRING),
        ("12abc", DataType.STRING),
        (".", DataType.STRING),
    ],
)
def test_infer_type(text, expected):
    assert infer_type(text) is expected


@pytest.mark.parametrize(
    "text, label",
    [
        ("42", "INTEIRO"),
        ("true", "BOOLEANO"),
        ("1.5", "REAL"),
        ("abc", "STRING"),
    ],
)
def test_inferred_type_labels_match_report_names(text, label):
    assert infer_type(text).value == label


def test_parse_value_integer_takes_leading_digits():
    assert parse_value("42", DataType.INTEGER) == 42
    assert parse_value("3.7", DataType.INTEGER) == 3
    assert parse_value("abc", DataType.INTEGER) == 0


def test_parse_value_real_is_lenient():
    assert parse_value("12.5", DataType.REAL) == 12.5
    assert parse_value("abc", DataType.REAL) == 0.0
    assert parse_value("7", DataType.REAL) == 7.0


def test_parse_value_boolean():
    assert parse_value("true", DataType.BOOLEAN) is True
    assert parse_value("false", DataType.BOOLEAN) is False
    assert parse_value("yes", DataType.BOOLEAN) is False


def test_parse_value_string_is_truncated():
    text = "abcdefghijklmnopqrstuvwxyz"
    value = parse_value(text, DataType.STRING)
    assert len(value) == MAX_STRING_VALUE_LENGTH
    assert text.startswith(value)
    assert parse_value("short", DataType.STRING) == "short"


def test_format_value():
    assert format_value(True, DataType.BOOLEAN) == "true"
    assert format_value(False, DataType.BOOLEAN) == "false"
    assert format_value(3.14159, DataType.REAL) == "3.14"
    assert format_value(-15, DataType.INTEGER) == "-15"
    assert format_value("hello", DataType.STRING) == "hello"


def test_parse_line_basic():
    assert parse_line("1700000000 s1 42\n") == (1700000000, "s1", "42")


def test_parse_line_ignores_extra_fields():
    assert parse_line("  5 temp 1.5 trailing stuff") == (5, "temp", "1.5")


def test_parse_line_truncates_sensor_id():
    long_id = "x" * 80
    _, sensor_id, _ = parse_line(f"1 {long_id} 3")
    assert len(sensor_id) == MAX_SENSOR_ID_LENGTH
    assert long_id.startswith(sensor_id)


@pytest.mark.parametrize("line", ["", "\n", "abc s1 1", "12 onlyone", "12"])
def test_parse_line_rejects_malformed(line):
    with pytest.raises(MalformedLineError):
        parse_line(line)


@pytest.mark.parametrize(
    "value, data_type",
    [
        (123, DataType.INTEGER),
        (True, DataType.BOOLEAN),
        (False, DataType.BOOLEAN),
        (2.5, DataType.REAL),
        ("word", DataType.STRING),
    ],
)
def test_reading_line_round_trip(value, data_type):
    reading = Reading(1700000000, "sensor", value, data_type)
    timestamp, sensor_id, raw = parse_line(reading.format_line())
    assert timestamp == reading.timestamp
    assert sensor_id == reading.sensor_id
    assert infer_type(raw) is data_type
    assert parse_value(raw, data_type) == value


def test_datetime_to_epoch_matches_local_time():
    epoch = datetime_to_epoch(15, 1, 2024, 10, 30, 45)
    local = time.localtime(epoch)
    assert (local.tm_mday, local.tm_mon, local.tm_year) == (15, 1, 2024)
    assert (local.tm_hour, local.tm_min, local.tm_sec) == (10, 30, 45)


def test_datetime_to_epoch_seconds_are_linear():
    first = datetime_to_epoch(15, 1, 2024, 10, 0, 0)
    later = datetime_to_epoch(15, 1, 2024, 10, 0, 30)
    assert later - first == 30


def test_datetime_to_epoch_normalises_overflowing_day():
    assert datetime_to_epoch(32, 1, 2024, 12, 0, 0) == datetime_to_epoch(1, 2, 2024, 12, 0, 0)
"""Sensor readings: value typing, parsing and formatting of reading lines."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import Union

MAX_SENSOR_ID_LENGTH = 49
MAX_STRING_VALUE_LENGTH = 16

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_HEX_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?)"
)
_DEC_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_SPECIAL_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:inf(?:inity)?|nan)(?:\([0-9A-Za-z_]*\))?)", re.IGNORECASE
)

Value = Union[int, bool, float, str]


class DataType(Enum):
    """Kind of value a sensor reports; the value is the label shown to users."""

    INTEGER = "INTEIRO"
    BOOLEAN = "BOOLEANO"
    REAL = "REAL"
    STRING = "STRING"


class MalformedLineError(ValueError):
    """A line does not hold a timestamp, a sensor id and a value."""

    def __init__(self, line: str) -> None:
        super().__init__(f"malformed reading line: {line!r}")
        self.line = line


def _clamp_int64(number: int) -> int:
    return max(_INT64_MIN, min(_INT64_MAX, number))


def _float_prefix(text: str) -> tuple[float, int] | None:
    """Parse the longest leading float, returning the value and where it ends."""
    match = _HEX_FLOAT_PREFIX.match(text)
    if match:
        return float.fromhex(match.group(1)), match.end()
    match = _DEC_FLOAT_PREFIX.match(text)
    if match:
        return float(match.group(1)), match.end()
    match = _SPECIAL_FLOAT_PREFIX.match(text)
    if match:
        numeral = match.group(1).split("(", 1)[0]
        return float(numeral), match.end()
    return None


def infer_type(text: str) -> DataType:
    """Guess the data type of a raw value."""
    if text in ("true", "false"):
        return DataType.BOOLEAN
    if "." in text:
        parsed = _float_prefix(text)
        if parsed is not None and parsed[1] == len(text):
            return DataType.REAL
    if text == "":
        return DataType.INTEGER
    match = _INT_PREFIX.match(text)
    if match and match.end() == len(text):
        return DataType.INTEGER
    return DataType.STRING


def parse_value(text: str, data_type: DataType) -> Value:
    """Convert a raw value to the given type, leniently like the C converters."""
    if data_type is DataType.INTEGER:
        match = _INT_PREFIX.match(text)
        return _clamp_int64(int(match.group(1))) if match else 0
    if data_type is DataType.BOOLEAN:
        return text == "true"
    if data_type is DataType.REAL:
        parsed = _float_prefix(text)
        return parsed[0] if parsed is not None else 0.0
    return text[:MAX_STRING_VALUE_LENGTH]


def format_value(value: Value, data_type: DataType) -> str:
    """Render a typed value the way reading files store it."""
    if data_type is DataType.INTEGER:
        return str(int(value))
    if data_type is DataType.BOOLEAN:
        return "true" if value else "false"
    if data_type is DataType.REAL:
        return f"{float(value):.2f}"
    return str(value)


def parse_line(line: str) -> tuple[int, str, str]:
    """Split a reading line into timestamp, sensor id and raw value."""
    match = _INT_PREFIX.match(line)
    if match is None:
        raise MalformedLineError(line)
    fields = line[match.end():].split()
    if len(fields) < 2:
        raise MalformedLineError(line)
    timestamp = _clamp_int64(int(match.group(1)))
    return timestamp, fields[0][:MAX_SENSOR_ID_LENGTH], fields[1]


def datetime_to_epoch(
    day: int, month: int, year: int, hour: int, minute: int, second: int
) -> int:
    """Convert a local date and time to epoch seconds, normalising out-of-range fields."""
    try:
        return int(time.mktime((year, month, day, hour, minute, second, 0, 0, -1)))
    except (OverflowError, ValueError) as exc:
        raise ValueError(
            f"cannot convert {day:02d}/{month:02d}/{year:04d} "
            f"{hour:02d}:{minute:02d}:{second:02d} to a timestamp"
        ) from exc


@dataclass(frozen=True)
class Reading:
    """One timestamped value from one sensor."""

    timestamp: int
    sensor_id: str
    value: Value
    data_type: DataType

    def format_line(self) -> str:
        """The reading as a line of a sensor file, without the newline."""
        return f"{self.timestamp} {self.sensor_id} {format_value(self.value, self.data_type)}"
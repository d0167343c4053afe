# sensorlog

Tools for working with plain-text logs of sensor readings. Each line of a log
holds three whitespace-separated fields:

```
<epoch timestamp> <sensor id> <value>
```

A value is one of four kinds (`sensorlog.readings.DataType`):

| Kind       | Recognised when                                   |
|------------|---------------------------------------------------|
| `BOOLEAN`  | the value is exactly `true` or `false`            |
| `REAL`     | it contains a `.` and is a whole number literal   |
| `INTEGER`  | it is a whole integer                             |
| `STRING`   | anything else; only its first 16 characters kept  |

Reals are written with two decimals. Sensor ids longer than 49 characters are
cut to 49.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Commands

Messages printed by the commands are in Portuguese.

### Generate a test log

```
sensorlog-generate <dd> <mm> <yyyy> <hh> <min> <ss> <dd> <mm> <yyyy> <hh> <min> <ss> <SENSOR_ID> <TYPE> [<SENSOR_ID> <TYPE> ...]
```

The first six numbers give the start of the interval and the next six its end,
both in local time; a start after the end is an error. The command writes 2000
random readings per sensor, sensor after sensor, with timestamps inside the
interval, to `leituras.txt` in the current directory. The supported types are:

| Type      | Values                              |
|-----------|-------------------------------------|
| `CONJ_Z`  | integers from 0 to 9999             |
| `BINARIO` | `true` or `false`                   |
| `CONJ_Q`  | reals from 0 to 1000, two decimals  |
| `TEXTO`   | random 15-character alphanumerics   |

An unknown type name is reported and nothing is written.

### Split a log by sensor

```
sensorlog-split leituras.txt
```

Every sensor found in the input gets its own file, `<sensor id>.txt`, in the
current directory, with its readings ordered from newest to oldest. Existing
files of that name are overwritten. A sensor's type is inferred from its first
value, and its later values are converted to that type. Lines that lack the
three fields are reported on standard error and skipped.

### Look up the closest reading

```
sensorlog-lookup <sensor id> <dd> <mm> <yyyy> <hh> <min> <ss>
```

Reads `<sensor id>.txt`, as written by `sensorlog-split` (newest first), and
prints the reading whose timestamp is closest to the given local date and
time. The search is a binary search: only the readings it probes are
compared, and on equal distance the first one probed wins. A malformed line in
the file is reported with its line number.

## Library use

```python
from sensorlog.readings import DataType, Reading, infer_type, parse_line
from sensorlog.splitter import split_readings, write_sensor_files
from sensorlog.lookup import load_sensor_file, find_closest
from sensorlog.generator import SensorConfig, generate_lines

with open("leituras.txt") as log:
    series = split_readings(log)          # {sensor id: SensorSeries}
write_sensor_files(series, "out")         # out/<sensor id>.txt, newest first

readings = load_sensor_file("out/temp1.txt")
nearest = find_closest(readings, 1700000000)
if nearest is not None:
    print(nearest.format_line())
```

- `sensorlog.readings`: `infer_type`, `parse_value`, `format_value`,
  `parse_line` (raises `MalformedLineError`), `datetime_to_epoch` (local time,
  out-of-range fields normalised) and the frozen `Reading` dataclass.
- `sensorlog.splitter`: `SensorSeries` with `add` and `sorted_readings`,
  `split_readings`, `write_sensor_files`.
- `sensorlog.lookup`: `load_sensor_file`, which infers each value's type on its
  own, and `find_closest`, which returns `None` for no readings.
- `sensorlog.generator`: `parse_sensor_type`, `random_string`, and
  `generate_lines(start, end, sensors, count, rng)`, which yields lines from a
  given `random.Random`, so a seeded generator gives repeatable logs.
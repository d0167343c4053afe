"""Find the reading of a sensor closest to a given local date and time."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence

from sensorlog.readings import (
    MAX_SENSOR_ID_LENGTH,
    DataType,
    MalformedLineError,
    Reading,
    datetime_to_epoch,
    format_value,
    infer_type,
    parse_line,
    parse_value,
)


class _SensorFileError(MalformedLineError):
    """A line of a sensor file could not be read; carries its 1-based number."""

    def __init__(self, line: str, lineno: int) -> None:
        super().__init__(line)
        self.lineno = lineno


def _atoi(text: str) -> int:
    return int(parse_value(text, DataType.INTEGER))


def load_sensor_file(path: str | Path) -> list[Reading]:
    """Read a per-sensor file; each value's type is inferred on its own.

    Raises MalformedLineError (with a ``lineno`` attribute) on the first bad line.
    """
    readings: list[Reading] = []
    with open(path, encoding="utf-8", errors="replace") as source:
        for lineno, line in enumerate(source, start=1):
            try:
                timestamp, sensor_id, raw_value = parse_line(line)
            except MalformedLineError as exc:
                raise _SensorFileError(line, lineno) from exc
            data_type = infer_type(raw_value)
            readings.append(
                Reading(
                    timestamp=timestamp,
                    sensor_id=sensor_id,
                    value=parse_value(raw_value, data_type),
                    data_type=data_type,
                )
            )
    return readings


def find_closest(readings: Sequence[Reading], target: int) -> Reading | None:
    """Binary-search readings sorted newest first for the one nearest to target.

    Only the probed positions are considered; on equal distance the earlier
    probe wins. Returns None for an empty sequence.
    """
    left, right = 0, len(readings) - 1
    closest: int | None = None
    while left <= right:
        mid = left + (right - left) // 2
        timestamp = readings[mid].timestamp
        if timestamp == target:
            closest = mid
            break
        if timestamp > target:
            left = mid + 1
        else:
            right = mid - 1
        if closest is None or abs(timestamp - target) < abs(
            readings[closest].timestamp - target
        ):
            closest = mid
    return None if closest is None else readings[closest]


def main(argv: list[str] | None = None) -> int:
    """Print the reading of a sensor closest to the instant given on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 7:
        print("Uso: sensorlog-lookup <nome_sensor> <dd> <mm> <aaaa> <hh> <mm> <ss>", file=sys.stderr)
        return 1

    sensor_name = args[0][:MAX_SENSOR_ID_LENGTH]
    day, month, year, hour, minute, second = (_atoi(arg) for arg in args[1:])

    try:
        target = datetime_to_epoch(day, month, year, hour, minute, second)
    except ValueError as exc:
        print(f"Erro ao converter data para timestamp: {exc}", file=sys.stderr)
        return 1

    filename = f"{sensor_name}.txt"
    try:
        readings = load_sensor_file(filename)
    except MalformedLineError as exc:
        lineno = getattr(exc, "lineno", 0)
        print(f"Erro de formato na linha {lineno} do arquivo {sensor_name}.txt", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Erro ao abrir o arquivo do sensor: {exc.strerror}", file=sys.stderr)
        print(
            f"Certifique-se de que o arquivo '{filename}' existe e foi gerado pelo Programa 1.",
            file=sys.stderr,
        )
        return 1

    reading = find_closest(readings, target)
    if reading is None:
        print(f"Nenhuma leitura encontrada para o sensor '{sensor_name}' no arquivo '{filename}'.")
        return 0

    print(
        f"Leitura mais próxima para o sensor '{sensor_name}' no instante "
        f"{day:02d}/{month:02d}/{year:04d} {hour:02d}:{minute:02d}:{second:02d} "
        f"(epoch: {target}):"
    )
    print(f"  Timestamp: {reading.timestamp}")
    print(f"  ID Sensor: {reading.sensor_id}")
    print(f"  Valor: {format_value(reading.value, reading.data_type)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
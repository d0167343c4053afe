"""Split a mixed reading log into one time-sorted file per sensor."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from sensorlog.readings import (
    DataType,
    MalformedLineError,
    Reading,
    infer_type,
    parse_line,
    parse_value,
)


@dataclass
class SensorSeries:
    """All readings of one sensor, typed by the sensor's first value."""

    sensor_id: str
    data_type: DataType
    readings: list[Reading] = field(default_factory=list)

    def add(self, timestamp: int, sensor_id: str, raw_value: str) -> Reading:
        """Store a reading, converting its raw value to the series type."""
        reading = Reading(
            timestamp=timestamp,
            sensor_id=sensor_id,
            value=parse_value(raw_value, self.data_type),
            data_type=self.data_type,
        )
        self.readings.append(reading)
        return reading

    def sorted_readings(self) -> list[Reading]:
        """Readings from the newest to the oldest."""
        return sorted(self.readings, key=lambda reading: reading.timestamp, reverse=True)


def _split(
    lines: Iterable[str],
    on_new_sensor: Callable[[SensorSeries], None] | None = None,
    on_malformed: Callable[[str], None] | None = None,
) -> dict[str, SensorSeries]:
    series: dict[str, SensorSeries] = {}
    for line in lines:
        try:
            timestamp, sensor_id, raw_value = parse_line(line)
        except MalformedLineError:
            if on_malformed is not None:
                on_malformed(line)
            continue
        sensor = series.get(sensor_id)
        if sensor is None:
            sensor = SensorSeries(sensor_id, infer_type(raw_value))
            series[sensor_id] = sensor
            if on_new_sensor is not None:
                on_new_sensor(sensor)
        sensor.add(timestamp, sensor_id, raw_value)
    return series


def split_readings(lines: Iterable[str]) -> dict[str, SensorSeries]:
    """Group reading lines by sensor, in order of first appearance; bad lines are skipped."""
    return _split(lines)


def _write_series(sensor: SensorSeries, directory: Path) -> Path:
    path = directory / f"{sensor.sensor_id}.txt"
    with path.open("w", encoding="utf-8") as out:
        for reading in sensor.sorted_readings():
            out.write(reading.format_line() + "\n")
    return path


def write_sensor_files(
    series: dict[str, SensorSeries], directory: str | Path
) -> list[Path]:
    """Write one '<sensor>.txt' per series into directory and return the paths."""
    target = Path(directory)
    return [_write_series(sensor, target) for sensor in series.values()]


def main(argv: list[str] | None = None) -> int:
    """Split the input log named on the command line into per-sensor files."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Uso: sensorlog-split <nome_arquivo_entrada>", file=sys.stderr)
        return 1

    def announce(sensor: SensorSeries) -> None:
        print(
            f"Novo sensor '{sensor.sensor_id}' detectado com tipo de dado: "
            f"{sensor.data_type.value}"
        )

    def warn(line: str) -> None:
        print(f"Aviso: Linha mal formatada ignorada: {line}", end="", file=sys.stderr)

    try:
        with open(args[0], encoding="utf-8", errors="replace") as source:
            series = _split(source, announce, warn)
    except OSError as exc:
        print(f"Erro ao abrir o arquivo de entrada: {exc.strerror}", file=sys.stderr)
        return 1

    for sensor in series.values():
        try:
            path = _write_series(sensor, Path("."))
        except OSError as exc:
            print(f"Erro ao abrir arquivo de saída: {exc.strerror}", file=sys.stderr)
            return 1
        print(f"Dados do sensor '{sensor.sensor_id}' salvos em '{path.name}'")

    print("Processamento concluído.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
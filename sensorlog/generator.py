"""Generate a random test log of readings for a set of sensors."""

from __future__ import annotations

import random
import string
import sys
from dataclasses import dataclass
from typing import Iterator, Sequence

from sensorlog.readings import (
    MAX_SENSOR_ID_LENGTH,
    DataType,
    datetime_to_epoch,
    parse_value,
)

READINGS_PER_SENSOR = 2000
OUTPUT_FILE = "leituras.txt"
STRING_VALUE_LENGTH = 15

_CHARSET = string.ascii_lowercase + string.ascii_uppercase + string.digits

_TYPE_NAMES = {
    "CONJ_Z": DataType.INTEGER,
    "BINARIO": DataType.BOOLEAN,
    "CONJ_Q": DataType.REAL,
    "TEXTO": DataType.STRING,
}


@dataclass(frozen=True)
class SensorConfig:
    """A sensor to generate readings for."""

    sensor_id: str
    data_type: DataType


def parse_sensor_type(name: str) -> DataType:
    """Map a command-line type name (CONJ_Z, BINARIO, CONJ_Q, TEXTO) to a DataType."""
    try:
        return _TYPE_NAMES[name]
    except KeyError:
        raise ValueError(f"unknown data type: {name!r}") from None


def random_string(length: int, rng: random.Random) -> str:
    """Random letters and digits of the given length."""
    return "".join(rng.choice(_CHARSET) for _ in range(length))


def _random_value(data_type: DataType, rng: random.Random) -> str:
    if data_type is DataType.INTEGER:
        return str(rng.randrange(10000))
    if data_type is DataType.BOOLEAN:
        return rng.choice(("true", "false"))
    if data_type is DataType.REAL:
        return f"{rng.random() * 1000.0:.2f}"
    return random_string(STRING_VALUE_LENGTH, rng)


def generate_lines(
    start: int,
    end: int,
    sensors: Sequence[SensorConfig],
    count: int,
    rng: random.Random,
) -> Iterator[str]:
    """Yield count random reading lines per sensor, sensor by sensor, timestamps in [start, end]."""
    if start > end:
        raise ValueError("interval start is after its end")
    span = end - start + 1
    for sensor in sensors:
        for _ in range(count):
            timestamp = start + int(rng.random() * span)
            yield f"{timestamp} {sensor.sensor_id} {_random_value(sensor.data_type, rng)}"


def _usage_text(program: str) -> str:
    """The usage message for the given program name."""
    names = ", ".join(_TYPE_NAMES)
    return "\n".join(
        [
            f"Uso: {program} <dd_inicio> <mm_inicio> <aaaa_inicio> <hh_inicio> "
            "<min_inicio> <ss_inicio> \\",
            "                <dd_fim> <mm_fim> <aaaa_fim> <hh_fim> <min_fim> <ss_fim> \\",
            "                <ID_SENSOR1> <TIPO_SENSOR1> [<ID_SENSOR2> <TIPO_SENSOR2> ...]",
            f"Tipos de dados suportados: {names}",
        ]
    )


def _atoi(text: str) -> int:
    return int(parse_value(text, DataType.INTEGER))


def main(argv: list[str] | None = None) -> int:
    """Write 'leituras.txt' with random readings for the sensors on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 13 or (len(args) - 12) % 2 != 0:
        print(_usage_text("sensorlog-generate"), file=sys.stderr)
        return 1

    start_fields = [_atoi(arg) for arg in args[0:6]]
    end_fields = [_atoi(arg) for arg in args[6:12]]
    try:
        start = datetime_to_epoch(*start_fields)
        end = datetime_to_epoch(*end_fields)
    except ValueError as exc:
        print(f"Erro ao converter data para timestamp ou intervalo inválido: {exc}", file=sys.stderr)
        return 1
    if start > end:
        print("Erro ao converter data para timestamp ou intervalo inválido", file=sys.stderr)
        return 1

    pairs = list(zip(args[12::2], args[13::2]))
    sensors: list[tuple[SensorConfig, str]] = []
    for raw_id, type_name in pairs:
        sensor_id = raw_id[:MAX_SENSOR_ID_LENGTH]
        try:
            data_type = parse_sensor_type(type_name)
        except ValueError:
            print(
                f"Erro: Tipo de dado desconhecido para o sensor '{sensor_id}': '{type_name}'",
                file=sys.stderr,
            )
            return 1
        sensors.append((SensorConfig(sensor_id, data_type), type_name))

    rng = random.Random()
    try:
        with open(OUTPUT_FILE, "w", encoding="utf-8") as out:
            for sensor, type_name in sensors:
                print(
                    f"Gerando {READINGS_PER_SENSOR} leituras para o sensor "
                    f"'{sensor.sensor_id}' (Tipo: {type_name})..."
                )
                for line in generate_lines(start, end, [sensor], READINGS_PER_SENSOR, rng):
                    out.write(line + "\n")
    except OSError as exc:
        print(f"Erro ao abrir arquivo de teste: {exc.strerror}", file=sys.stderr)
        return 1

    print(f"Arquivo de teste '{OUTPUT_FILE}' gerado com sucesso.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
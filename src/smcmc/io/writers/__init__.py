"""Result writers."""

from smcmc.io.writers.base import OutputWriter, WriterConfig, format_float, format_interval
from smcmc.io.writers.csv_writer import CSVWriter
from smcmc.io.writers.json_writer import JSONWriter, NumpyEncoder

WRITERS: dict[str, type[CSVWriter] | type[JSONWriter]] = {
    "csv": CSVWriter,
    "json": JSONWriter,
}

__all__ = [
    "WRITERS",
    "CSVWriter",
    "JSONWriter",
    "NumpyEncoder",
    "OutputWriter",
    "WriterConfig",
    "format_float",
    "format_interval",
]

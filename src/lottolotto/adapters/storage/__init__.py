"""Storage adapters implementing MetricsSinkPort."""

from lottolotto.adapters.storage.csv_file import CsvMetricsSink
from lottolotto.adapters.storage.in_memory import InMemoryMetricsSink

__all__ = [
    "CsvMetricsSink",
    "InMemoryMetricsSink",
]

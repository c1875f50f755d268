"""In-memory metrics sink."""

from pathlib import Path

from lottolotto.core.encoding.csv_format import (
    encode_header,
    encode_record,
    session_filename,
)
from lottolotto.core.models import MetricRecord, RunSession


class InMemoryMetricsSink:
    """In-memory implementation of MetricsSinkPort.

    Keeps the encoded lines of the current session in a list. Suitable for
    testing and for hosts that do not want a file on disk.
    """

    def __init__(self) -> None:
        self._path: Path | None = None
        self.lines: list[str] = []
        self.records: list[MetricRecord] = []

    @property
    def path(self) -> Path | None:
        return self._path

    def open(self, session: RunSession) -> Path | None:
        """Start a new session log containing only the header line."""
        self._path = Path(session_filename(session.started_at))
        self.lines = [encode_header()]
        self.records = []
        return self._path

    def append(self, record: MetricRecord) -> bool:
        """Append one record line."""
        if self._path is None:
            return False
        self.lines.append(encode_record(record))
        self.records.append(record)
        return True

    def close(self) -> None:
        self._path = None

"""Append-only CSV file adapter for session metrics."""

import logging
from pathlib import Path

from lottolotto.core.encoding.csv_format import (
    encode_header,
    encode_record,
    session_filename,
)
from lottolotto.core.models import MetricRecord, RunSession

logger = logging.getLogger(__name__)

DEFAULT_DIRECTORY = "experiment_data"

# Upper bound on same-second filename disambiguation attempts.
_MAX_NAME_ATTEMPTS = 1000


class CsvMetricsSink:
    """CSV implementation of MetricsSinkPort.

    Writes one file per session under ``<storage_root>/<directory>/``.
    Every append reopens the file, writes a single line, flushes and closes
    it, so a crash can lose at most the line being written.

    File-system errors never propagate: a failed open leaves the sink in
    a "no logging" state and a failed append skips that row.
    """

    def __init__(
        self, storage_root: str | Path, directory: str = DEFAULT_DIRECTORY
    ) -> None:
        self._directory = Path(storage_root) / directory
        self._path: Path | None = None

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def path(self) -> Path | None:
        return self._path

    def open(self, session: RunSession) -> Path | None:
        """Create the session file and write the header row.

        If a file with the session's name already exists (two sessions in
        the same second), a numeric suffix is added; existing files are
        never opened for writing.
        """
        self._path = None
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            path = self._create_exclusive(session)
        except OSError:
            logger.exception(
                "Failed to create metrics file", extra={"directory": str(self._directory)}
            )
            return None
        self._path = path
        logger.info("Metrics file created", extra={"path": str(path)})
        return path

    def _create_exclusive(self, session: RunSession) -> Path:
        for suffix in range(_MAX_NAME_ATTEMPTS):
            path = self._directory / session_filename(session.started_at, suffix)
            try:
                with path.open("x", encoding="utf-8", newline="") as f:
                    f.write(encode_header())
            except FileExistsError:
                continue
            return path
        raise FileExistsError(f"No free metrics filename in {self._directory}")

    def append(self, record: MetricRecord) -> bool:
        """Append one record line. Returns False if nothing was written."""
        # close() may run on another thread; only the local copy is used below.
        path = self._path
        if path is None:
            return False
        line = encode_record(record)
        try:
            with path.open("a", encoding="utf-8", newline="") as f:
                f.write(line)
                f.flush()
        except OSError:
            logger.exception(
                "Failed to append metrics row",
                extra={"path": str(path), "iteration": record.iteration},
            )
            return False
        return True

    def close(self) -> None:
        """Forget the session file. The file itself is left as written."""
        self._path = None

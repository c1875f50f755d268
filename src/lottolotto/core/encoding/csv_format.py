"""CSV line encoder for the session metrics log."""

from datetime import datetime

from lottolotto.core.models import MetricRecord

CSV_HEADER = "Timestamp,Iteration,HashRate"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
FILENAME_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
FILENAME_PREFIX = "mining_data_"
FILENAME_SUFFIX = ".csv"


def encode_header() -> str:
    """Return the header row, newline terminated."""
    return CSV_HEADER + "\n"


def encode_record(record: MetricRecord) -> str:
    """Encode a metric record as one CSV line.

    The rate is always rendered with two decimal places and a ``.`` decimal
    separator, independent of the process locale.

    Args:
        record: The record to encode.

    Returns:
        A newline-terminated ``timestamp,iteration,rate`` line.
    """
    timestamp = record.timestamp.strftime(TIMESTAMP_FORMAT)
    return f"{timestamp},{record.iteration},{record.rate:.2f}\n"


def session_filename(started_at: datetime, suffix: int = 0) -> str:
    """Build the log filename for a session started at ``started_at``.

    Args:
        started_at: Session start time.
        suffix: Disambiguator for sessions started within the same second.
            Zero produces the plain ``mining_data_<stamp>.csv`` name.
    """
    stamp = started_at.strftime(FILENAME_TIMESTAMP_FORMAT)
    if suffix:
        stamp = f"{stamp}_{suffix}"
    return f"{FILENAME_PREFIX}{stamp}{FILENAME_SUFFIX}"

"""Record Store: one-shot loading of the FIR dataset.

The dataset is fetched once per process from `settings.FIR_DATA_SOURCE` (a
filesystem path or an http(s) URL) and kept as an immutable snapshot. Load
failures never propagate to views: the snapshot falls back to an empty
collection and carries a warning instead.
"""

from __future__ import annotations

import json
import logging
import threading
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path

from django.conf import settings

from analysis.records import CaseRecord
from core.parsers.fir_record import ParsedRecords, RecordParseError, parse_records

logger = logging.getLogger(__name__)


class LoadError(Exception):
    """Raised when the FIR dataset cannot be fetched or parsed."""


@dataclass(frozen=True, slots=True)
class RecordSnapshot:
    """The record collection for the current process.

    Attributes:
        records: Loaded records, or an empty tuple after a failed load.
        warnings: Non-fatal messages to surface alongside dashboard data.
    """

    records: tuple[CaseRecord, ...] = ()
    warnings: tuple[str, ...] = ()


_snapshot: RecordSnapshot | None = None
_snapshot_lock = threading.Lock()


def load_records(source: str | None = None) -> tuple[CaseRecord, ...]:
    """Fetch and parse the FIR dataset.

    Args:
        source: Path or http(s) URL. Defaults to `settings.FIR_DATA_SOURCE`.

    Returns:
        Well-formed records in document order. Malformed records are skipped
        and logged.

    Raises:
        LoadError: On any I/O, HTTP-status or JSON-decode failure, or when the
            document is not a JSON array. No retry is attempted.
    """

    return _load(source).records


def _load(source: str | None) -> ParsedRecords:
    source = source or str(settings.FIR_DATA_SOURCE)
    raw = _read_source(source)
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise LoadError(f"FIR data at {source} is not valid JSON.") from exc
    try:
        parsed = parse_records(payload)
    except RecordParseError as exc:
        raise LoadError(f"FIR data at {source} is malformed: {exc}") from exc
    for message in parsed.skipped:
        logger.warning("Skipping malformed FIR record: %s", message)
    return parsed


def get_snapshot() -> RecordSnapshot:
    """Return the process-wide record snapshot, loading it on first use.

    Returns:
        RecordSnapshot. After a `LoadError` the snapshot has no records and a
        single warning; the error is logged and not raised.
    """

    global _snapshot
    with _snapshot_lock:
        if _snapshot is None:
            _snapshot = _load_snapshot()
        return _snapshot


def reset_snapshot() -> None:
    """Discard the current snapshot so the next access reloads the dataset."""

    global _snapshot
    with _snapshot_lock:
        _snapshot = None


def _load_snapshot() -> RecordSnapshot:
    try:
        parsed = _load(None)
    except LoadError as exc:
        logger.warning("Falling back to an empty FIR dataset: %s", exc)
        return RecordSnapshot(records=(), warnings=(f"Could not load FIR data: {exc}",))
    logger.info("Loaded %d FIR records.", len(parsed.records))
    return RecordSnapshot(
        records=parsed.records,
        warnings=tuple(f"Skipped malformed FIR record. {message}" for message in parsed.skipped),
    )


def _read_source(source: str) -> str:
    if source.startswith(("http://", "https://")):
        return _fetch_url(source)
    try:
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Failed to read FIR data file: {source}") from exc


def _fetch_url(url: str) -> str:
    """Fetch a JSON document over HTTP(S).

    Raises:
        LoadError: When the request fails or returns a non-2xx status.
    """

    request = urllib.request.Request(
        url,
        headers={
            "User-Agent": "firDashboard (dataset loader)",
            "Accept": "application/json",
        },
    )
    try:
        with urllib.request.urlopen(request, timeout=settings.FIR_DATA_TIMEOUT_SECONDS) as response:
            content_type = response.headers.get("Content-Type", "")
            charset = "utf-8"
            if "charset=" in content_type:
                charset = content_type.split("charset=", 1)[1].split(";", 1)[0].strip() or "utf-8"
            return response.read().decode(charset)
    except urllib.error.HTTPError as exc:
        raise LoadError(f"FIR data request to {url} failed with HTTP {exc.code}.") from exc
    except (urllib.error.URLError, OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Failed to fetch FIR data: {url}") from exc

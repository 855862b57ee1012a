"""JSON file backup of the last good forecast per city.

The whole index is rewritten on every save. Reads and writes of one file
are serialized by a lock keyed on the resolved path, and writes go through
a temp file plus os.replace so readers never see a partial file.
"""

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path

from advisor.ingest.bundle_parser import BundleParseError, bundle_to_dict, parse_bundle
from advisor.models.forecast import BackupIndex, CityForecastBundle

logger = logging.getLogger(__name__)

LOCAL_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_locks: dict[str, threading.Lock] = {}
_locks_guard = threading.Lock()


@contextmanager
def backup_lock(path: str | Path) -> Iterator[None]:
    """Hold the mutual-exclusion region for one backup file."""
    key = str(Path(path).resolve())
    with _locks_guard:
        lock = _locks.setdefault(key, threading.Lock())
    with lock:
        yield


def load_backup(path: str | Path) -> BackupIndex:
    """Read the backup index. Missing or unreadable files yield an empty index."""
    path = Path(path)
    with backup_lock(path):
        if not path.exists():
            logger.info("Back up file %s not found, starting with an empty back up", path)
            return {}
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Error loading back up from %s: %s", path, e)
            return {}

    if not isinstance(raw, dict):
        logger.warning("Back up file %s does not hold a JSON object, ignoring it", path)
        return {}

    try:
        return {str(city): parse_bundle(data) for city, data in raw.items()}
    except BundleParseError as e:
        logger.warning("Error loading back up from %s: %s", path, e)
        return {}


def save_backup(path: str | Path, index: BackupIndex) -> None:
    """Atomically replace the backup file with the full index."""
    path = Path(path)
    payload = {city: bundle_to_dict(bundle) for city, bundle in index.items()}
    path.parent.mkdir(parents=True, exist_ok=True)

    with backup_lock(path):
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, delete=False, suffix=".tmp"
        ) as tmp:
            json.dump(payload, tmp, ensure_ascii=False)
            tmp.flush()
            os.fsync(tmp.fileno())
            temp_name = tmp.name
        try:
            os.replace(temp_name, path)
        except OSError:
            os.unlink(temp_name)
            raise
    logger.info("Back up data file updated (%d cities)", len(index))


def get_bundle(index: BackupIndex, city: str) -> CityForecastBundle | None:
    return index.get(city)


def put_bundle(index: BackupIndex, city: str, bundle: CityForecastBundle) -> bool:
    """Store a successful, non-empty bundle. Returns False if it was rejected."""
    if not bundle.is_success:
        logger.debug("Not backing up %s: status=%s records=%d",
                     city, bundle.status_code, len(bundle.records))
        return False
    index[city] = bundle
    return True


def prune_expired(bundle: CityForecastBundle, reference_time: datetime) -> CityForecastBundle:
    """Drop records whose slot time is not strictly after `reference_time`.

    Slot times are the provider's dt_txt, read as naive UTC. Records with an
    unparsable dt_txt are dropped.
    """
    if reference_time.tzinfo is None:
        reference_time = reference_time.replace(tzinfo=UTC)

    kept = tuple(
        r for r in bundle.records
        if (slot := _parse_local_time(r.local_time_text)) is not None
        and slot > reference_time
    )
    return bundle.with_records(kept)


def _parse_local_time(text: str) -> datetime | None:
    try:
        return datetime.strptime(text, LOCAL_TIME_FORMAT).replace(tzinfo=UTC)
    except (ValueError, TypeError):
        return None

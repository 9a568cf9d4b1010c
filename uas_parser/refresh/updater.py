# ==============================================
# Updater — Refresh Coordinator
# ==============================================
#
# PURPOSE:
#   Keep the on-disk database current across restarts and across
#   sibling processes, and hand a freshly decoded Store back.
#
# STATE MACHINE (one refresh cycle):
#
#   ACQUIRE_LOCK ──failed──▶ load from disk, no network ─▶ DEGRADED
#        │
#        ▼ locked (reload disk copy: a sibling may have refreshed it)
#   STAT_FILE ──fresh──▶ FRESH
#        │   └─stat error─▶ FAILED (PersistenceError)
#        ▼ stale / missing
#   CHECK_REMOTE_VERSION ──same──▶ UP_TO_DATE
#        │   └─network error─▶ FAILED (NetworkError)
#        ▼ different / no local version
#   DOWNLOAD  (checksum + payload fetched concurrently)
#        │   └─network error─▶ FAILED (NetworkError)
#        ▼
#   VERIFY (sha1) ──mismatch──▶ FAILED (IntegrityMismatch), no write
#        ▼
#   DECODE ──malformed──▶ FAILED (MalformedDatabase), no write
#        ▼
#   WRITE_FILE ──error──▶ FAILED (PersistenceError)
#        ▼
#   UPDATED
#
#   Every terminal state releases the lock exactly once (if it was
#   acquired). A release failure is reported in release_error and
#   does not change the outcome. Any other exception ends the cycle as
#   FAILED with a UASParserError chained to it.
#
# CLASS: Updater
# --------------
#   - __init__(database_file, remote, max_age_seconds,
#              lock_stale_seconds=60, lock_suffix=".lock")
#   - refresh(current: Store | None = None) -> RefreshResult
#       Never raises for the failures above; they are returned.
#
# ==============================================

import hashlib
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from uas_parser.database import Store, decode
from uas_parser.errors import (
    IntegrityMismatch,
    LockUnavailable,
    UASParserError,
)
from uas_parser.persistence import DatabaseFile
from .lock import LockFile, DEFAULT_STALE_SECONDS
from .remote import RemoteSource

logger = logging.getLogger(__name__)


class RefreshOutcome(Enum):
    """
    How a refresh cycle ended.

    - FRESH: file younger than max age, no network activity
    - UP_TO_DATE: remote version equals the loaded one
    - UPDATED: new payload verified, written and decoded
    - DEGRADED: lock unavailable, disk copy loaded without any check
    - FAILED: cycle aborted, see error
    """
    FRESH = "fresh"
    UP_TO_DATE = "up_to_date"
    UPDATED = "updated"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass
class RefreshResult:
    outcome: RefreshOutcome
    store: Optional[Store] = None
    error: Optional[UASParserError] = None
    release_error: Optional[UASParserError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def changed(self) -> bool:
        return self.outcome is RefreshOutcome.UPDATED


def sha1_hex(payload: bytes) -> str:
    return hashlib.sha1(payload).hexdigest()


class Updater:
    """
    Runs refresh cycles for one database file.
    """

    def __init__(
        self,
        database_file: DatabaseFile,
        remote: RemoteSource,
        max_age_seconds: float,
        lock_stale_seconds: float = DEFAULT_STALE_SECONDS,
        lock_suffix: str = ".lock",
    ):
        """
        Args:
            database_file: the on-disk database (also the staleness clock)
            remote: anything with fetch_version / fetch_checksum / fetch_data
            max_age_seconds: allowed age of the file before a remote check
            lock_stale_seconds: age after which a lock is considered abandoned
            lock_suffix: appended to the database path to name the lock file
        """
        self.database_file = database_file
        self.remote = remote
        self.max_age_seconds = max_age_seconds
        self.lock_stale_seconds = lock_stale_seconds
        self.lock_path = database_file.lock_path(lock_suffix)

    def refresh(self, current: Optional[Store] = None) -> RefreshResult:
        """
        Run one refresh cycle.

        Args:
            current: the store the caller is serving right now, used when
                     the disk copy cannot be loaded

        Returns:
            RefreshResult with the best available store and any error
        """
        lock = LockFile(self.lock_path, stale_seconds=self.lock_stale_seconds)
        try:
            lock.acquire()
        except LockUnavailable as e:
            logger.warning(f"Refresh skipped, {e}")
            return RefreshResult(
                outcome=RefreshOutcome.DEGRADED,
                store=self._load_from_disk(current),
                error=e,
            )

        result = RefreshResult(outcome=RefreshOutcome.FAILED, store=current)
        try:
            current = self._load_from_disk(current)
            result.store = current
            result = self._locked_refresh(current)
        except UASParserError as e:
            result.error = e
        except Exception as e:
            logger.exception("Unexpected error during refresh")
            error = UASParserError(f"unexpected {type(e).__name__}: {e}")
            error.__cause__ = e
            result.error = error
        finally:
            try:
                lock.release()
            except UASParserError as e:
                logger.error(f"Lock release failed: {e}")
                result.release_error = e

        return result

    def _load_from_disk(self, fallback: Optional[Store]) -> Optional[Store]:
        if not self.database_file.exists():
            return fallback
        try:
            return self.database_file.load()
        except UASParserError as e:
            logger.warning(f"Cannot load {self.database_file.path}: {e}")
            return fallback

    def _locked_refresh(self, current: Optional[Store]) -> RefreshResult:
        # STAT_FILE
        if not self.database_file.is_stale(self.max_age_seconds):
            return RefreshResult(outcome=RefreshOutcome.FRESH, store=current)

        # CHECK_REMOTE_VERSION
        logger.info("Checking user-agent-string.info for new version")
        remote_version = self.remote.fetch_version()
        if current is not None and current.version and current.version == remote_version:
            logger.info("Version up to date")
            return RefreshResult(outcome=RefreshOutcome.UP_TO_DATE, store=current)

        # DOWNLOAD
        logger.info(f"Downloading new data (remote version {remote_version})")
        checksum, payload = self._download()

        # VERIFY
        actual = sha1_hex(payload)
        if actual != checksum.strip().lower():
            error = IntegrityMismatch(expected=checksum, actual=actual)
            logger.error(str(error))
            return RefreshResult(outcome=RefreshOutcome.FAILED, store=current, error=error)

        # DECODE, then WRITE_FILE: a payload that does not decode is never written
        store = decode(payload.decode("utf-8", errors="replace"))
        self.database_file.write(payload)
        logger.info(f"Installed new data (version {store.version})")
        return RefreshResult(outcome=RefreshOutcome.UPDATED, store=store)

    def _download(self):
        """Fetch checksum and payload concurrently."""
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="uas_download") as executor:
            checksum_future = executor.submit(self.remote.fetch_checksum)
            payload_future = executor.submit(self.remote.fetch_data)
            return checksum_future.result(), payload_future.result()

# ==============================================
# DatabaseFile
# ==============================================
#
# PURPOSE:
#   The on-disk copy of the provider database. It survives process
#   restarts and its modification time is the staleness clock used by
#   the updater.
#
# CLASS: DatabaseFile
# -------------------
#   Stateful — holds the path of the database file.
#
#   Methods:
#   --------
#   - read() -> str                       → full text (UTF-8)
#   - load() -> Store                     → read + decode
#   - write(payload: bytes) -> None       → full overwrite, byte-exact
#   - exists() -> bool
#   - modified_at() -> float              → mtime, seconds since epoch
#   - is_stale(max_age_seconds, now=None) -> bool
#   - lock_path(suffix) -> Path           → sibling lock file path
#
#   Every OSError surfaces as PersistenceError.
#
# KNOWN LIMITATION:
#   write() is a plain overwrite, not an atomic rename. A crash in the
#   middle leaves a truncated file, which decode() reports as
#   MalformedDatabase on the next load.
#
# FILE STRUCTURE:
# ---------------
#   data/
#   ├── uasdata.ini        → provider database
#   └── uasdata.ini.lock   → present only while a refresh runs
#
# ==============================================

import logging
import time
from pathlib import Path
from typing import Optional, Union

from uas_parser.database import Store, decode
from uas_parser.errors import PersistenceError

logger = logging.getLogger(__name__)


class DatabaseFile:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> str:
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            raise PersistenceError(f"cannot read {self.path}: {e}") from e
        return raw.decode("utf-8", errors="replace")

    def load(self) -> Store:
        """
        Read and decode the file.

        Raises:
            PersistenceError: the file cannot be read
            MalformedDatabase: the contents cannot be decoded
        """
        store = decode(self.read())
        logger.info(f"Loaded database version {store.version} from {self.path}")
        return store

    def write(self, payload: bytes) -> None:
        """
        Overwrite the file with payload, creating parent directories.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "wb") as f:
                f.write(payload)
        except OSError as e:
            raise PersistenceError(f"cannot write {self.path}: {e}") from e

        logger.info(f"Wrote {len(payload)} bytes to {self.path}")

    def modified_at(self) -> float:
        """
        Raises:
            FileNotFoundError: the file does not exist
            PersistenceError: any other stat failure
        """
        try:
            return self.path.stat().st_mtime
        except FileNotFoundError:
            raise
        except OSError as e:
            raise PersistenceError(f"cannot stat {self.path}: {e}") from e

    def is_stale(self, max_age_seconds: float, now: Optional[float] = None) -> bool:
        """
        True when the file is older than max_age_seconds.
        A missing file is always stale.
        """
        now = time.time() if now is None else now
        try:
            return self.modified_at() < now - max_age_seconds
        except FileNotFoundError:
            return True

    def lock_path(self, suffix: str = ".lock") -> Path:
        return self.path.with_name(self.path.name + suffix)

    def __repr__(self) -> str:
        return f"DatabaseFile({str(self.path)!r})"

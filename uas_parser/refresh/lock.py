# ==============================================
# LockFile
# ==============================================
#
# PURPOSE:
#   Cross-process advisory lock so only one process per database path
#   downloads a new database at a time.
#
# HOW IT WORKS:
#   acquire() creates the lock file with O_CREAT | O_EXCL and writes the
#   pid into it. If the file already exists and its mtime is older than
#   stale_seconds, the holder is assumed to have crashed: the file is
#   removed and creation is retried once. Otherwise LockUnavailable.
#   There is no waiting. The caller decides what to do without the lock.
#
#   release() removes the file only while it still carries our pid. A
#   lock that is already gone, or was stolen as stale and now names
#   another process, is left alone and is not an error.
#
# ==============================================

import logging
import os
import time
from pathlib import Path
from typing import Union

from uas_parser.errors import LockUnavailable, PersistenceError

logger = logging.getLogger(__name__)


DEFAULT_STALE_SECONDS = 60.0


class LockFile:
    def __init__(self, path: Union[str, Path], stale_seconds: float = DEFAULT_STALE_SECONDS):
        self.path = Path(path)
        self.stale_seconds = stale_seconds
        self.held = False

    def acquire(self) -> None:
        """
        Raises:
            LockUnavailable: a live lock exists, or the lock cannot be created
        """
        if self._try_create():
            return

        if self._is_stale():
            logger.warning(f"Removing stale lock {self.path}")
            try:
                self.path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                raise LockUnavailable(f"cannot remove stale lock {self.path}: {e}") from e
            if self._try_create():
                return

        raise LockUnavailable(f"lock {self.path} is held by another process")

    def release(self) -> None:
        """
        Raises:
            PersistenceError: the lock file exists but cannot be removed
        """
        if not self.held:
            return
        self.held = False

        try:
            owner = self.path.read_text().strip()
        except FileNotFoundError:
            logger.warning(f"Lock {self.path} was already gone on release")
            return
        except OSError as e:
            raise PersistenceError(f"cannot read lock {self.path}: {e}") from e

        if owner != str(os.getpid()):
            # Taken over as stale while we held it
            logger.warning(f"Lock {self.path} now belongs to {owner or 'unknown'}, leaving it")
            return

        try:
            self.path.unlink()
        except FileNotFoundError:
            logger.warning(f"Lock {self.path} was already gone on release")
        except OSError as e:
            raise PersistenceError(f"cannot release lock {self.path}: {e}") from e

    def _try_create(self) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError:
            return False
        except OSError as e:
            raise LockUnavailable(f"cannot create lock {self.path}: {e}") from e

        try:
            os.write(fd, str(os.getpid()).encode("ascii"))
        finally:
            os.close(fd)
        self.held = True
        return True

    def _is_stale(self) -> bool:
        try:
            age = time.time() - self.path.stat().st_mtime
        except FileNotFoundError:
            # Released between our create attempt and the stat
            return True
        except OSError:
            return False
        return age > self.stale_seconds

    def __enter__(self) -> "LockFile":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()

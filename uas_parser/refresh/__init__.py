# ==============================================
# TOPIC 3: REFRESH (Updater)
# ==============================================
#
# This package keeps the database file current: one process at a
# time checks the provider, downloads, verifies and installs new data.
#
# Modules:
# --------
# - lock.py     → LockFile, cross-process advisory lock with stale override
# - remote.py   → RemoteSource, the provider's three HTTP endpoints
# - updater.py  → Updater.refresh() state machine → RefreshResult
#
# ==============================================

from .lock import LockFile
from .remote import RemoteSource
from .updater import Updater, RefreshResult, RefreshOutcome, sha1_hex

__all__ = [
    "LockFile",
    "RemoteSource",
    "Updater",
    "RefreshResult",
    "RefreshOutcome",
    "sha1_hex",
]

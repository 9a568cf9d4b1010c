# ==============================================
# StoreHolder
# ==============================================
#
# PURPOSE:
#   Holds the process-wide "current" Store. A refresh publishes a whole
#   new Store with replace(); readers call get() and always receive a
#   fully built one, whichever was published last.
#
# CLASS: StoreHolder
# ------------------
#   - get() -> Store | None
#   - get_or_empty() -> Store
#   - version -> str | None
#   - replace(store)              → publish, then notify listeners
#   - on_replace(listener)
#
# ==============================================

from threading import Lock
from typing import Callable, List, Optional

from uas_parser.database import Store


class StoreHolder:
    """
    Atomic-replace reference to the current Store.
    Thread-safe for concurrent readers and a single refresher.
    """

    def __init__(self, store: Optional[Store] = None):
        self._store = store
        self._lock = Lock()
        self._listeners: List[Callable[[Store], None]] = []

    def get(self) -> Optional[Store]:
        return self._store

    def get_or_empty(self) -> Store:
        store = self._store
        return store if store is not None else Store.empty()

    @property
    def version(self) -> Optional[str]:
        store = self._store
        return store.version if store is not None else None

    def replace(self, store: Store) -> None:
        """Publish a new store and notify listeners."""
        with self._lock:
            self._store = store
            listeners = list(self._listeners)
        for listener in listeners:
            listener(store)

    def on_replace(self, listener: Callable[[Store], None]) -> None:
        with self._lock:
            self._listeners.append(listener)

# ==============================================
# UASParser — Façade
# ==============================================
#
# PURPOSE:
#   The class users interact with. Ties the 4 topics together:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                       UASParser                          │
#   │                                                          │
#   │   update_data() / scheduler                              │
#   │        │                                                 │
#   │        ▼                                                 │
#   │  TOPIC 3: Updater ──▶ TOPIC 4: DatabaseFile              │
#   │        │ RefreshResult.store                             │
#   │        ▼                                                 │
#   │  TOPIC 4: StoreHolder.replace()  ──▶ clear lookup cache  │
#   │        │                                                 │
#   │        ▼                                                 │
#   │  parse(ua) ──▶ TOPIC 2: Classifier(TOPIC 1: Store)       │
#   │  lookup(ua) ─▶ memo cache ─▶ parse(ua)                   │
#   └──────────────────────────────────────────────────────────┘
#
# CLASS: UASParser
# ----------------
#
#   Constructor:
#   ------------
#   - __init__(cache_directory=None, update_interval=None,
#              do_downloads=None, config=None, remote=None)
#       Loads the on-disk database if there is one. A missing or broken
#       file is logged and the empty store is served until a refresh.
#
#   Public Methods:
#   ---------------
#   - parse(user_agent) -> ClassificationResult
#   - lookup(user_agent) -> ClassificationResult   (memoized)
#   - update_data() -> RefreshResult
#   - start() / stop()                             (periodic refresh)
#   - get_status() -> dict
#
# ==============================================

import dataclasses
import logging
from pathlib import Path
from threading import Lock
from typing import Dict, Optional, Union

from apscheduler.schedulers.background import BackgroundScheduler

from uas_parser.config import AppConfig, get_config
from uas_parser.database import Store
from uas_parser.errors import UASParserError
from uas_parser.matching import ClassificationResult, Classifier
from uas_parser.persistence import DatabaseFile, StoreHolder
from uas_parser.refresh import RefreshResult, RemoteSource, Updater

logger = logging.getLogger(__name__)


class UASParser:
    """
    User agent classification backed by a self-refreshing provider database.
    """

    def __init__(
        self,
        cache_directory: Optional[Union[str, Path]] = None,
        update_interval: Optional[float] = None,
        do_downloads: Optional[bool] = None,
        config: Optional[AppConfig] = None,
        remote: Optional[RemoteSource] = None,
    ):
        """
        Args:
            cache_directory: directory holding the database file
            update_interval: allowed age of the database file, in seconds;
                             also the period of scheduled refreshes
            do_downloads: whether refreshes may contact the provider
            config: Optional configuration. If None, loads from environment.
            remote: Optional RemoteSource, mostly for tests
        """
        self._config = config or get_config()
        update = self._config.update

        directory = Path(cache_directory) if cache_directory else Path(update.cache_directory)
        self.database_path = directory / update.database_filename
        self.update_interval = update.update_interval_seconds if update_interval is None else update_interval
        self.do_downloads = update.do_downloads if do_downloads is None else bool(do_downloads)

        self._database_file = DatabaseFile(self.database_path)
        self._classifier = Classifier(self._config.provider)
        self._remote = remote or RemoteSource.from_config(
            self._config.provider,
            timeout=update.http_timeout_seconds,
        )
        self._updater = Updater(
            self._database_file,
            self._remote,
            max_age_seconds=self.update_interval,
            lock_stale_seconds=update.lock_stale_seconds,
            lock_suffix=update.lock_suffix,
        )

        self._holder = StoreHolder()
        self._holder.on_replace(lambda _store: self.clear_lookup_cache())

        self._lookup_cache: Dict[str, ClassificationResult] = {}
        self._lookup_lock = Lock()
        self._lookup_max_entries = self._config.lookup.max_entries

        self._scheduler: Optional[BackgroundScheduler] = None

        self._load_previous_database()

    def _load_previous_database(self) -> None:
        if not self._database_file.exists():
            logger.warning(f"No database file at {self.database_path}, serving empty store")
            return
        try:
            self._holder.replace(self._database_file.load())
        except UASParserError as e:
            logger.error(f"Cannot load {self.database_path}: {e}")

    @property
    def store(self) -> Store:
        return self._holder.get_or_empty()

    @property
    def version(self) -> Optional[str]:
        return self._holder.version

    # ------------------------------------------
    # Classification
    # ------------------------------------------

    def parse(self, user_agent: str) -> ClassificationResult:
        """Classify one user agent against the current store."""
        return self._classifier.classify(self._holder.get_or_empty(), user_agent)

    def lookup(self, user_agent: str) -> ClassificationResult:
        """
        Like parse(), but memoized. The cache is bounded and is emptied
        every time a new store is published. Callers get their own copy,
        so changing a returned result never alters the cached one.
        """
        cached = self._lookup_cache.get(user_agent)
        if cached is not None:
            return dataclasses.replace(cached)

        result = self.parse(user_agent)

        with self._lookup_lock:
            # Cache if we haven't exceeded limit (prevent memory issues)
            if len(self._lookup_cache) < self._lookup_max_entries:
                self._lookup_cache[user_agent] = dataclasses.replace(result)

        return result

    def clear_lookup_cache(self) -> None:
        with self._lookup_lock:
            self._lookup_cache.clear()

    # ------------------------------------------
    # Refresh
    # ------------------------------------------

    def update_data(self) -> RefreshResult:
        """
        Run one refresh cycle and publish its store.

        The current store stays in place unless the cycle produced a
        different one. Errors are logged and returned, never raised.
        do_downloads only controls scheduling; an explicit call always
        runs a cycle.
        """
        current = self._holder.get()
        result = self._updater.refresh(current)

        if result.store is not None and result.store is not current:
            self._holder.replace(result.store)

        if result.error is not None:
            logger.warning(f"Refresh finished with {type(result.error).__name__}: {result.error}")
        else:
            logger.info(f"Refresh finished: {result.outcome.value}, version {self.version}")
        if result.release_error is not None:
            logger.warning(f"Lock release failed: {result.release_error}")

        return result

    def start(self) -> None:
        """Refresh now and then every update_interval seconds."""
        if not self.do_downloads:
            logger.info("Downloads disabled, not scheduling refreshes")
            return
        if self._scheduler is not None:
            return

        self.update_data()

        self._scheduler = BackgroundScheduler()
        self._scheduler.add_job(
            self.update_data,
            trigger="interval",
            seconds=self.update_interval,
            id="uas_update",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        logger.info(f"Scheduled database refresh every {self.update_interval}s")

    def stop(self) -> None:
        if self._scheduler is not None:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None

    def get_status(self) -> dict:
        store = self._holder.get()
        return {
            "database_path": str(self.database_path),
            "database_exists": self._database_file.exists(),
            "version": self.version,
            "lookup_cache_size": len(self._lookup_cache),
            "scheduled": self._scheduler is not None,
            "records": store.summary() if store is not None else None,
        }

    def __enter__(self) -> "UASParser":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - ProviderConfig (dataclass)
#     data_url: str        (full ini payload)
#     version_url: str     (short version token)
#     checksum_url: str    (sha1 of the full payload)
#     info_base_url: str   (prefix for info page links)
#     ua_icon_base_url / os_icon_base_url / device_icon_base_url: str
#
# - UpdateConfig (dataclass)
#     cache_directory: str          (default "data/")
#     database_filename: str        (default "uasdata.ini")
#     update_interval_seconds: int  (default 7 days)
#     do_downloads: bool            (default True)
#     lock_stale_seconds: float     (default 60)
#     lock_suffix: str              (default ".lock")
#     http_timeout_seconds: float   (default 30)
#
# - LookupConfig (dataclass)
#     max_entries: int              (default 5000)
#
# - AppConfig (dataclass)
#     provider: ProviderConfig
#     update: UpdateConfig
#     lookup: LookupConfig
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# USAGE:
# ------
#   from uas_parser.config import get_config
#   config = get_config()
#   print(config.update.database_path)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


PROVIDER_HOST = "http://user-agent-string.info"


@dataclass
class ProviderConfig:
    """Remote endpoints and link prefixes of the data provider."""
    data_url: str = f"{PROVIDER_HOST}/rpc/get_data.php?key=free&format=ini"
    version_url: str = f"{PROVIDER_HOST}/rpc/get_data.php?key=free&format=ini&ver=y"
    checksum_url: str = f"{PROVIDER_HOST}/rpc/get_data.php?format=ini&sha1=y"
    info_base_url: str = PROVIDER_HOST
    ua_icon_base_url: str = f"{PROVIDER_HOST}/pub/img/ua/"
    os_icon_base_url: str = f"{PROVIDER_HOST}/pub/img/os/"
    device_icon_base_url: str = f"{PROVIDER_HOST}/pub/img/device/"


@dataclass
class UpdateConfig:
    """Where the database lives and how it is kept fresh."""
    cache_directory: str = "data/"
    database_filename: str = "uasdata.ini"
    update_interval_seconds: int = 7 * 24 * 60 * 60
    do_downloads: bool = True
    lock_stale_seconds: float = 60.0
    lock_suffix: str = ".lock"
    http_timeout_seconds: float = 30.0

    @property
    def database_path(self) -> Path:
        return Path(self.cache_directory) / self.database_filename


@dataclass
class LookupConfig:
    """Bounded memo cache in front of the classifier."""
    max_entries: int = 5000


@dataclass
class AppConfig:
    """Main application configuration."""
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    update: UpdateConfig = field(default_factory=UpdateConfig)
    lookup: LookupConfig = field(default_factory=LookupConfig)


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from the working directory
    load_dotenv(dotenv_path=Path.cwd() / ".env")

    defaults = ProviderConfig()
    provider_config = ProviderConfig(
        data_url=os.getenv("UAS_DATA_URL", defaults.data_url),
        version_url=os.getenv("UAS_VERSION_URL", defaults.version_url),
        checksum_url=os.getenv("UAS_CHECKSUM_URL", defaults.checksum_url),
    )

    update_config = UpdateConfig(
        cache_directory=os.getenv("UAS_CACHE_DIR", "data/"),
        database_filename=os.getenv("UAS_DATABASE_FILENAME", "uasdata.ini"),
        update_interval_seconds=int(os.getenv("UAS_UPDATE_INTERVAL_SECONDS", str(7 * 24 * 60 * 60))),
        do_downloads=_env_bool("UAS_DO_DOWNLOADS", True),
        lock_stale_seconds=float(os.getenv("UAS_LOCK_STALE_SECONDS", "60")),
        http_timeout_seconds=float(os.getenv("UAS_HTTP_TIMEOUT_SECONDS", "30")),
    )

    lookup_config = LookupConfig(
        max_entries=int(os.getenv("UAS_LOOKUP_MAX_ENTRIES", "5000"))
    )

    _config_instance = AppConfig(
        provider=provider_config,
        update=update_config,
        lookup=lookup_config,
    )

    return _config_instance

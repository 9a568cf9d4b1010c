# ==============================================
# UAS Parser
# ==============================================
#
# Package Structure (4 Topics + Façade):
#
# uas_parser/
# ├── database/         # Topic 1: Pattern/Record Store + flat-file decoder
# ├── matching/         # Topic 2: Multi-stage classifier
# ├── refresh/          # Topic 3: Lock file, remote source, updater
# ├── persistence/      # Topic 4: On-disk database file + store holder
# ├── config.py         # Configuration management
# ├── errors.py         # Error taxonomy
# ├── parser.py         # UASParser façade (lookup cache, scheduling)
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"

from .errors import (
    UASParserError,
    MalformedDatabase,
    LockUnavailable,
    NetworkError,
    IntegrityMismatch,
    PersistenceError,
)
from .database import Store, decode, load
from .matching import ClassificationResult, Classifier, classify
from .refresh import Updater, RefreshResult, RefreshOutcome
from .parser import UASParser

__all__ = [
    "UASParserError",
    "MalformedDatabase",
    "LockUnavailable",
    "NetworkError",
    "IntegrityMismatch",
    "PersistenceError",
    "Store",
    "decode",
    "load",
    "ClassificationResult",
    "Classifier",
    "classify",
    "Updater",
    "RefreshResult",
    "RefreshOutcome",
    "UASParser",
]

# ==============================================
# TOPIC 1: DATABASE (Pattern/Record Store + Decoder)
# ==============================================
#
# This package turns the provider's flat-file database into
# an immutable, order-preserving Store.
#
# Modules:
# --------
# - records.py   → OrderedCollection, typed records, Store
# - patterns.py  → "/body/flags" literal → compiled re.Pattern
# - decoder.py   → decode(raw_text) / load(path)
#
# ==============================================

from .records import (
    GENERIC_DEVICE_ID,
    DESKTOP_DEVICE_ID,
    MOBILE_DEVICE_ID,
    OrderedCollection,
    BrowserInfo,
    OperatingSystem,
    Device,
    Robot,
    Browser,
    PatternRule,
    Store,
)
from .patterns import compile_pattern
from .decoder import decode, load, canonical_section_name

__all__ = [
    "GENERIC_DEVICE_ID",
    "DESKTOP_DEVICE_ID",
    "MOBILE_DEVICE_ID",
    "OrderedCollection",
    "BrowserInfo",
    "OperatingSystem",
    "Device",
    "Robot",
    "Browser",
    "PatternRule",
    "Store",
    "compile_pattern",
    "decode",
    "load",
    "canonical_section_name",
]

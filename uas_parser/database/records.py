# ==============================================
# Records (Data Classes)
# ==============================================
#
# PURPOSE:
#   Typed, ordered collections decoded from the flat-file database.
#   Pure data, no behavior beyond lookup and iteration.
#
# WHY ORDER IS A FIELD:
#   The pattern collections are matched first-declared, first-matched.
#   OrderedCollection keeps the declaration order as an explicit list
#   next to an id → index map, instead of trusting dict ordering.
#
# CLASSES:
# --------
# - OrderedCollection          → ids in declaration order + id → value
# - BrowserInfo (dataclass)    → ua_* metadata of a browser or robot
# - OperatingSystem (dataclass)→ os_* metadata
# - Device (dataclass)         → device_* metadata
# - Robot (dataclass)          → exact user agent + metadata (+ inlined OS)
# - Browser (dataclass)        → browser type id + metadata
# - PatternRule (dataclass)    → compiled pattern + target record id
# - Store (dataclass)          → all of the above plus the provider version
#
# ==============================================

import re
from dataclasses import dataclass, field, fields
from typing import Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from uas_parser.errors import MalformedDatabase


# Reserved device ids
GENERIC_DEVICE_ID = "1"
DESKTOP_DEVICE_ID = "2"
MOBILE_DEVICE_ID = "3"

T = TypeVar("T")


class OrderedCollection(Generic[T]):
    """
    Records keyed by provider id, iterated in declaration order.
    """

    def __init__(self, items: Optional[List[Tuple[str, T]]] = None):
        self._order: List[str] = []
        self._values: List[T] = []
        self._index: Dict[str, int] = {}
        for record_id, value in items or []:
            self.add(record_id, value)

    def add(self, record_id: str, value: T) -> None:
        if record_id in self._index:
            raise MalformedDatabase(f"duplicate id {record_id!r}")
        self._index[record_id] = len(self._order)
        self._order.append(record_id)
        self._values.append(value)

    def get(self, record_id: Optional[str]) -> Optional[T]:
        if record_id is None:
            return None
        position = self._index.get(record_id)
        if position is None:
            return None
        return self._values[position]

    @property
    def ids(self) -> List[str]:
        """Ids in declaration order."""
        return list(self._order)

    def __iter__(self) -> Iterator[Tuple[str, T]]:
        return iter(zip(self._order, self._values))

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._index

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        return f"OrderedCollection({len(self)} records)"


class _Metadata:
    """Mixin for records whose attributes are merged into a result."""

    def non_empty(self) -> Dict[str, str]:
        """Attributes that carry a value. Empty attributes are never reported."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name)
        }


@dataclass(frozen=True)
class BrowserInfo(_Metadata):
    ua_family: Optional[str] = None
    ua_name: Optional[str] = None
    ua_url: Optional[str] = None
    ua_company: Optional[str] = None
    ua_company_url: Optional[str] = None
    ua_icon: Optional[str] = None
    ua_info_url: Optional[str] = None


@dataclass(frozen=True)
class OperatingSystem(_Metadata):
    os_family: Optional[str] = None
    os_name: Optional[str] = None
    os_url: Optional[str] = None
    os_company: Optional[str] = None
    os_company_url: Optional[str] = None
    os_icon: Optional[str] = None


@dataclass(frozen=True)
class Device(_Metadata):
    device_type: Optional[str] = None
    device_icon: Optional[str] = None
    device_info_url: Optional[str] = None


@dataclass(frozen=True)
class Robot:
    """
    A crawler recognised by exact string equality.

    The referenced operating system is stored on the robot itself so a
    robot classification never needs a second lookup.
    """
    user_agent: str
    info: BrowserInfo
    os: Optional[OperatingSystem] = None


@dataclass(frozen=True)
class Browser:
    type_id: Optional[str]
    info: BrowserInfo


@dataclass(frozen=True)
class PatternRule:
    pattern: "re.Pattern[str]"
    target_id: str


@dataclass(frozen=True)
class Store:
    """
    The decoded, immutable reference database.

    A refresh builds a new Store; a live one is never mutated.
    """
    version: Optional[str] = None
    robots: OrderedCollection[Robot] = field(default_factory=OrderedCollection)
    browsers: OrderedCollection[Browser] = field(default_factory=OrderedCollection)
    browser_patterns: OrderedCollection[PatternRule] = field(default_factory=OrderedCollection)
    browser_types: OrderedCollection[str] = field(default_factory=OrderedCollection)
    browser_os: OrderedCollection[str] = field(default_factory=OrderedCollection)
    operating_systems: OrderedCollection[OperatingSystem] = field(default_factory=OrderedCollection)
    os_patterns: OrderedCollection[PatternRule] = field(default_factory=OrderedCollection)
    devices: OrderedCollection[Device] = field(default_factory=OrderedCollection)
    device_patterns: OrderedCollection[PatternRule] = field(default_factory=OrderedCollection)

    @classmethod
    def empty(cls) -> "Store":
        return cls()

    def summary(self) -> Dict[str, object]:
        """Record counts per collection, for logging and the CLI."""
        return {
            "version": self.version,
            "robots": len(self.robots),
            "browsers": len(self.browsers),
            "browser_patterns": len(self.browser_patterns),
            "operating_systems": len(self.operating_systems),
            "os_patterns": len(self.os_patterns),
            "devices": len(self.devices),
            "device_patterns": len(self.device_patterns),
        }

# ==============================================
# Decoder
# ==============================================
#
# PURPOSE:
#   Turn the provider's flat-file (INI-like) text into a Store.
#
# WHY A HAND-WRITTEN SCANNER:
#   Record order inside a section decides matching precedence, and a
#   single id carries several values ("12[] = ..." repeated once per
#   field). Generic INI parsers neither keep the per-id value lists nor
#   the declaration order, so the text is scanned line by line.
#
# LINE SHAPES:
# ------------
#   [section_name]           → open a section (name canonicalized)
#   <id>[] = "<value>"       → append <value> to the field list of <id>
#   ; Version: <token>       → provider version token
#   anything else            → ignored
#
# FUNCTIONS:
# ----------
# - decode(raw_text: str, strict: bool = False) -> Store
# - load(path) -> Store
# - canonical_section_name(name: str) -> str
#
# FIELD POSITIONS (provider-defined, stable across versions):
# -----------------------------------------------------------
#   os           family, name, url, company, company_url, icon
#   robots       user_agent, family, name, url, company, company_url,
#                icon, os_id, info_url
#   browser      type_id, family, url, company, company_url, icon, info_url
#   browser_type label
#   browser_os   os_id
#   *_reg        pattern literal, target id
#   device       type, icon, info_url
#
# ==============================================

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from uas_parser.errors import MalformedDatabase, PersistenceError
from .patterns import compile_pattern
from .records import (
    Browser,
    BrowserInfo,
    Device,
    OperatingSystem,
    OrderedCollection,
    PatternRule,
    Robot,
    Store,
)

logger = logging.getLogger(__name__)


SECTION_LINE = re.compile(r"^\[(\S+)\]$")
OPTION_LINE = re.compile(r'^(\d+)\[\]\s=\s"(.*)"$')
VERSION_LINE = re.compile(r"^; Version:\s*(\S+)\s*$", re.IGNORECASE)

_CAMEL_HUMP = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SEPARATORS = re.compile(r"[\s\-_]+")


@dataclass
class _RawSection:
    """Positional field lists of one section, in declaration order."""
    name: str
    order: List[str] = field(default_factory=list)
    values: Dict[str, List[str]] = field(default_factory=dict)

    def append(self, record_id: str, value: str) -> None:
        if record_id not in self.values:
            self.values[record_id] = []
            self.order.append(record_id)
        self.values[record_id].append(value)

    def rows(self):
        for record_id in self.order:
            yield record_id, self.values[record_id]


def canonical_section_name(name: str) -> str:
    """
    Map a provider section name onto its canonical snake_case form.

    "browser_reg", "Browser Reg", "browserReg" and "browser-reg" all
    become "browser_reg".
    """
    name = _CAMEL_HUMP.sub("_", name.strip())
    return _SEPARATORS.sub("_", name).strip("_").lower()


def _field(row: List[str], position: int) -> Optional[str]:
    """Value at a field position, or None when missing or empty."""
    if position < len(row) and row[position] != "":
        return row[position]
    return None


def _scan(raw_text: str):
    """Line scan: returns (sections by canonical name, version token)."""
    sections: Dict[str, _RawSection] = {}
    current: Optional[_RawSection] = None
    version = None

    for line_number, line in enumerate(raw_text.splitlines(), start=1):
        option = OPTION_LINE.match(line)
        if option:
            if current is None:
                raise MalformedDatabase("value outside of any section", line_number)
            current.append(option.group(1), option.group(2))
            continue

        section = SECTION_LINE.match(line)
        if section:
            name = canonical_section_name(section.group(1))
            current = _RawSection(name)
            sections[name] = current
            continue

        version_match = VERSION_LINE.match(line)
        if version_match:
            version = version_match.group(1)

    return sections, version


def _rows(sections: Dict[str, _RawSection], name: str):
    section = sections.get(name)
    if section is None:
        return []
    return section.rows()


def _build_operating_systems(sections) -> OrderedCollection[OperatingSystem]:
    collection = OrderedCollection()
    for os_id, row in _rows(sections, "os"):
        collection.add(os_id, OperatingSystem(
            os_family=_field(row, 0),
            os_name=_field(row, 1),
            os_url=_field(row, 2),
            os_company=_field(row, 3),
            os_company_url=_field(row, 4),
            os_icon=_field(row, 5),
        ))
    return collection


def _build_devices(sections) -> OrderedCollection[Device]:
    collection = OrderedCollection()
    for device_id, row in _rows(sections, "device"):
        collection.add(device_id, Device(
            device_type=_field(row, 0),
            device_icon=_field(row, 1),
            device_info_url=_field(row, 2),
        ))
    return collection


def _build_robots(sections, operating_systems, strict: bool) -> OrderedCollection[Robot]:
    collection = OrderedCollection()
    for robot_id, row in _rows(sections, "robots"):
        user_agent = _field(row, 0)
        if user_agent is None:
            raise MalformedDatabase(f"robot {robot_id} has no user agent string")

        os_id = _field(row, 7)
        os_record = operating_systems.get(os_id)
        if os_id is not None and os_record is None and strict:
            raise MalformedDatabase(f"robot {robot_id} references unknown os {os_id}")

        collection.add(robot_id, Robot(
            user_agent=user_agent,
            info=BrowserInfo(
                ua_family=_field(row, 1),
                ua_name=_field(row, 2),
                ua_url=_field(row, 3),
                ua_company=_field(row, 4),
                ua_company_url=_field(row, 5),
                ua_icon=_field(row, 6),
                ua_info_url=_field(row, 8),
            ),
            os=os_record,
        ))
    return collection


def _build_browsers(sections) -> OrderedCollection[Browser]:
    collection = OrderedCollection()
    for browser_id, row in _rows(sections, "browser"):
        collection.add(browser_id, Browser(
            type_id=_field(row, 0),
            info=BrowserInfo(
                ua_family=_field(row, 1),
                ua_url=_field(row, 2),
                ua_company=_field(row, 3),
                ua_company_url=_field(row, 4),
                ua_icon=_field(row, 5),
                ua_info_url=_field(row, 6),
            ),
        ))
    return collection


def _build_single_values(sections, name: str) -> OrderedCollection[str]:
    collection = OrderedCollection()
    for record_id, row in _rows(sections, name):
        value = _field(row, 0)
        if value is None:
            raise MalformedDatabase(f"[{name}] {record_id} has no value")
        collection.add(record_id, value)
    return collection


def _build_patterns(sections, name: str, targets: OrderedCollection, strict: bool) -> OrderedCollection[PatternRule]:
    collection = OrderedCollection()
    for rule_id, row in _rows(sections, name):
        literal = _field(row, 0)
        target_id = _field(row, 1)
        if literal is None or target_id is None:
            raise MalformedDatabase(f"[{name}] {rule_id} needs a pattern and a target id")
        if strict and target_id not in targets:
            raise MalformedDatabase(f"[{name}] {rule_id} references unknown id {target_id}")

        try:
            pattern = compile_pattern(literal)
        except MalformedDatabase as e:
            raise MalformedDatabase(f"[{name}] {rule_id}: {e}") from e

        collection.add(rule_id, PatternRule(pattern=pattern, target_id=target_id))
    return collection


def _check_references(browsers, browser_types, browser_os, operating_systems) -> None:
    for browser_id, browser in browsers:
        if browser.type_id is not None and browser.type_id not in browser_types:
            raise MalformedDatabase(f"browser {browser_id} references unknown type {browser.type_id}")
    for browser_id, os_id in browser_os:
        if os_id not in operating_systems:
            raise MalformedDatabase(f"browser_os {browser_id} references unknown os {os_id}")


def decode(raw_text: str, strict: bool = False) -> Store:
    """
    Decode the provider's flat-file text into a Store.

    Args:
        raw_text: full contents of the database file
        strict: also reject references to records that do not exist.
            By default a dangling reference is kept and simply resolves
            to nothing at classification time.

    Returns:
        A fully built, immutable Store

    Raises:
        MalformedDatabase: structural problem (value outside a section,
            pattern row without target, uncompilable pattern, duplicate
            id, or a dangling reference when strict)
    """
    sections, version = _scan(raw_text)

    operating_systems = _build_operating_systems(sections)
    devices = _build_devices(sections)
    browsers = _build_browsers(sections)
    browser_types = _build_single_values(sections, "browser_type")
    browser_os = _build_single_values(sections, "browser_os")

    if strict:
        _check_references(browsers, browser_types, browser_os, operating_systems)

    store = Store(
        version=version,
        robots=_build_robots(sections, operating_systems, strict),
        browsers=browsers,
        browser_patterns=_build_patterns(sections, "browser_reg", browsers, strict),
        browser_types=browser_types,
        browser_os=browser_os,
        operating_systems=operating_systems,
        os_patterns=_build_patterns(sections, "os_reg", operating_systems, strict),
        devices=devices,
        device_patterns=_build_patterns(sections, "device_reg", devices, strict),
    )

    logger.debug(f"Decoded database: {store.summary()}")
    return store


def load(path: Union[str, Path], strict: bool = False) -> Store:
    """
    Read and decode a database file.

    Raises:
        PersistenceError: the file cannot be read
        MalformedDatabase: the contents cannot be decoded
    """
    path = Path(path)
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PersistenceError(f"cannot read {path}: {e}") from e
    return decode(raw_text, strict=strict)

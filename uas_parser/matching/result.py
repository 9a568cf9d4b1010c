# ==============================================
# ClassificationResult (Data Class)
# ==============================================
#
# PURPOSE:
#   The fixed-shape output of the classifier. Every field starts at a
#   sentinel ("unknown", icons "unknown.png") and is only overwritten
#   by a record that actually carries a value.
#
# METHODS:
# --------
# - merge(record) -> ClassificationResult
#     Copy the non-empty attributes of a typed record onto the result.
#     None and "" never overwrite anything (compaction rule).
#
# - to_dict() -> dict            → snake_case keys
# - to_camel_dict() -> dict      → the provider's camelCase keys
#
# ==============================================

from dataclasses import dataclass, asdict, fields
from typing import Dict


UNKNOWN = "unknown"
UNKNOWN_ICON = "unknown.png"
SENTINELS = frozenset({UNKNOWN, UNKNOWN_ICON})

ROBOT_TYPE = "Robot"


@dataclass
class ClassificationResult:
    """Browser, OS and device identified for one user agent string."""

    type: str = UNKNOWN

    # --- Browser ---
    ua_family: str = UNKNOWN
    ua_name: str = UNKNOWN
    ua_url: str = UNKNOWN
    ua_company: str = UNKNOWN
    ua_company_url: str = UNKNOWN
    ua_icon: str = UNKNOWN_ICON
    ua_info_url: str = UNKNOWN

    # --- Operating system ---
    os_family: str = UNKNOWN
    os_name: str = UNKNOWN
    os_url: str = UNKNOWN
    os_company: str = UNKNOWN
    os_company_url: str = UNKNOWN
    os_icon: str = UNKNOWN_ICON

    # --- Device ---
    device_type: str = UNKNOWN
    device_icon: str = UNKNOWN_ICON
    device_info_url: str = UNKNOWN

    def merge(self, record) -> "ClassificationResult":
        """
        Merge the non-empty attributes of a record into this result.

        Args:
            record: BrowserInfo, OperatingSystem or Device (anything with
                non_empty()), or None, which is a no-op

        Returns:
            self, for chaining
        """
        if record is None:
            return self
        known = {f.name for f in fields(self)}
        for name, value in record.non_empty().items():
            if name in known and value:
                setattr(self, name, value)
        return self

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    def to_camel_dict(self) -> Dict[str, str]:
        """Same fields keyed the way the provider names them (uaFamily, osIcon...)."""
        return {_camel(name): value for name, value in asdict(self).items()}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)

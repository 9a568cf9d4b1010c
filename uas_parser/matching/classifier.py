# ==============================================
# Classifier
# ==============================================
#
# PURPOSE:
#   Takes a decoded Store and a user agent string and produces a
#   ClassificationResult. Pure function of (store, user_agent):
#   never blocks, never raises, safe to call from any thread.
#
# CLASS: Classifier
# -----------------
#   Stateless — holds only the provider link prefixes.
#
#   Constructor:
#   ------------
#   - __init__(urls: ProviderConfig | None = None)
#
#   Methods:
#   --------
#   - classify(store: Store, user_agent: str) -> ClassificationResult
#       Applies the stages in order. First match wins inside a stage,
#       and a later stage never revisits an earlier one.
#
#       STAGE 1: ROBOTS
#         Exact string equality against each robot, in declaration
#         order. On a hit: type = "Robot", robot metadata (with its
#         inlined OS), generic device, finalize, return.
#
#       STAGE 2: BROWSER PATTERNS
#         First matching pattern picks the browser. Its metadata and
#         type label are merged, ua_name = family (+ " " + group 1).
#         The browser id also selects the OS through browser_os.
#
#       STAGE 3: OS PATTERNS
#         Only when stage 2 did not select an OS.
#
#       STAGE 4: DEVICE
#         Robot → generic device. Otherwise first matching device
#         pattern, else a fallback chosen by the result type.
#
#       STAGE 5: FINALIZE
#         Icons and info links become absolute URLs. Sentinels stay.
#
# ==============================================

from typing import Optional

from uas_parser.config import ProviderConfig
from uas_parser.database.records import (
    DESKTOP_DEVICE_ID,
    GENERIC_DEVICE_ID,
    MOBILE_DEVICE_ID,
    Store,
)
from .result import ClassificationResult, ROBOT_TYPE, SENTINELS


class Classifier:
    """
    Multi-stage matcher over a Store.
    """

    # Result types that fall back to the generic device
    GENERIC_DEVICE_TYPES = {"Other", "Library", "Validator", "Useragent Anonymizer"}

    # Result types that fall back to the mobile device
    MOBILE_DEVICE_TYPES = {"Mobile Browser", "Wap Browser"}

    def __init__(self, urls: ProviderConfig = None):
        """
        Args:
            urls: Optional ProviderConfig with the link prefixes used to
                  finalize icons and info pages. Defaults to the public
                  user-agent-string.info locations.
        """
        self.urls = urls or ProviderConfig()

    def classify(self, store: Store, user_agent: str) -> ClassificationResult:
        """
        Classify one user agent string.

        Args:
            store: decoded reference database
            user_agent: raw identification string; None is treated as ""

        Returns:
            ClassificationResult with every field populated
        """
        user_agent = user_agent or ""
        result = ClassificationResult()

        # STAGE 1
        for _robot_id, robot in store.robots:
            if robot.user_agent == user_agent:
                result.type = ROBOT_TYPE
                result.merge(robot.info).merge(robot.os)
                result.merge(store.devices.get(GENERIC_DEVICE_ID))
                return self.finalize(result)

        # STAGE 2
        os_id = self._match_browser(store, user_agent, result)

        # STAGE 3
        if os_id is None:
            os_id = self._first_match(store.os_patterns, user_agent)

        if os_id is not None:
            result.merge(store.operating_systems.get(os_id))

        # STAGE 4
        result.merge(self._resolve_device(store, user_agent, result.type))

        # STAGE 5
        return self.finalize(result)

    def _match_browser(self, store: Store, user_agent: str, result: ClassificationResult) -> Optional[str]:
        """
        Run the browser stage, filling result in place.

        Returns:
            The OS id associated with the matched browser, or None
        """
        for _rule_id, rule in store.browser_patterns:
            match = rule.pattern.search(user_agent)
            if not match:
                continue

            browser = store.browsers.get(rule.target_id)
            if browser is None:
                return None

            result.merge(browser.info)

            browser_type = store.browser_types.get(browser.type_id)
            if browser_type:
                result.type = browser_type

            result.ua_name = result.ua_family
            version = match.group(1) if rule.pattern.groups >= 1 else None
            if version:
                result.ua_name = f"{result.ua_name} {version}"

            return store.browser_os.get(rule.target_id)

        return None

    def _resolve_device(self, store: Store, user_agent: str, result_type: str):
        if result_type == ROBOT_TYPE:
            return store.devices.get(GENERIC_DEVICE_ID)

        device_id = self._first_match(store.device_patterns, user_agent)
        device = store.devices.get(device_id)
        if device is not None:
            return device

        if result_type in self.GENERIC_DEVICE_TYPES:
            return store.devices.get(GENERIC_DEVICE_ID)
        if result_type in self.MOBILE_DEVICE_TYPES:
            return store.devices.get(MOBILE_DEVICE_ID)
        return store.devices.get(DESKTOP_DEVICE_ID)

    @staticmethod
    def _first_match(rules, user_agent: str) -> Optional[str]:
        for _rule_id, rule in rules:
            if rule.pattern.search(user_agent):
                return rule.target_id
        return None

    def finalize(self, result: ClassificationResult) -> ClassificationResult:
        """Turn relative icon and info values into absolute URLs."""
        prefixes = {
            "ua_info_url": self.urls.info_base_url,
            "ua_icon": self.urls.ua_icon_base_url,
            "os_icon": self.urls.os_icon_base_url,
            "device_icon": self.urls.device_icon_base_url,
            "device_info_url": self.urls.info_base_url,
        }
        for name, prefix in prefixes.items():
            value = getattr(result, name)
            if value not in SENTINELS:
                setattr(result, name, prefix + value)
        return result


_default_classifier = Classifier()


def classify(store: Store, user_agent: str) -> ClassificationResult:
    """Classify with the default provider link prefixes."""
    return _default_classifier.classify(store, user_agent)

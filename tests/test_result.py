# ==============================================
# Tests for ClassificationResult
# ==============================================

from uas_parser.database import BrowserInfo, Device, OperatingSystem
from uas_parser.matching import ClassificationResult


class TestDefaults:
    def test_sentinels(self):
        result = ClassificationResult()
        assert result.type == "unknown"
        assert result.ua_family == "unknown"
        assert result.ua_icon == "unknown.png"
        assert result.os_icon == "unknown.png"
        assert result.device_icon == "unknown.png"
        assert result.device_info_url == "unknown"


class TestMerge:
    def test_merge_sets_values(self):
        result = ClassificationResult().merge(Device(device_type="Tablet", device_icon="tablet.png"))
        assert result.device_type == "Tablet"
        assert result.device_icon == "tablet.png"
        assert result.device_info_url == "unknown"

    def test_empty_values_never_overwrite(self):
        result = ClassificationResult()
        result.merge(OperatingSystem(os_family="Linux", os_name="Ubuntu"))
        result.merge(OperatingSystem(os_family="", os_name=None, os_icon="linux.png"))
        assert result.os_family == "Linux"
        assert result.os_name == "Ubuntu"
        assert result.os_icon == "linux.png"

    def test_merge_none_is_noop(self):
        assert ClassificationResult().merge(None) == ClassificationResult()

    def test_later_non_empty_value_wins(self):
        result = ClassificationResult()
        result.merge(BrowserInfo(ua_family="A")).merge(BrowserInfo(ua_family="B"))
        assert result.ua_family == "B"


class TestSerialization:
    def test_to_dict(self):
        data = ClassificationResult().to_dict()
        assert data["type"] == "unknown"
        assert data["ua_company_url"] == "unknown"
        assert len(data) == 17

    def test_to_camel_dict(self):
        data = ClassificationResult(ua_family="Firefox").to_camel_dict()
        assert data["uaFamily"] == "Firefox"
        assert data["uaCompanyUrl"] == "unknown"
        assert data["deviceInfoUrl"] == "unknown"
        assert data["type"] == "unknown"

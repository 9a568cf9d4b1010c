# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# This file contains shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - sample_ini      → a small but complete provider database (text)
# - store           → sample_ini decoded
# - database_path   → sample_ini written to tmp_path/uasdata.ini
# - make_remote     → factory for FakeRemote (counts calls, no network)
# - app_config      → AppConfig pointing at tmp_path
#
# NOTES:
# ------
# - Use tmp_path for temporary files
# - Nothing here touches the network
# ==============================================

import hashlib
from pathlib import Path

import pytest

from uas_parser.config import AppConfig, UpdateConfig
from uas_parser.database import decode
from uas_parser.errors import NetworkError


SAMPLE_VERSION = "20240101-01"
NEW_VERSION = "20240202-01"

SAMPLE_INI = r'''; Data (format ini) for UASparser - http://user-agent-string.info/download/UASparser
; Version: 20240101-01
; Checksum:
; MD5 - 0123456789abcdef
;
[robots]
1[] = "Googlebot/2.1 (+http://www.google.com/bot.html)"
1[] = "Googlebot"
1[] = "Googlebot/2.1"
1[] = "http://www.google.com/bot.html"
1[] = "Google Inc."
1[] = "http://www.google.com/"
1[] = "bot_googlebot.png"
1[] = "12"
1[] = "/list-of-ua/bot-detail?bot=Googlebot"

[os]
10[] = "Windows"
10[] = "Windows 10"
10[] = "http://en.wikipedia.org/wiki/Windows_10"
10[] = "Microsoft Corporation."
10[] = "http://www.microsoft.com/"
10[] = "windows-10.png"
11[] = "Android"
11[] = "Android"
11[] = ""
11[] = "Google Inc."
11[] = ""
11[] = "android.png"
12[] = "Linux"
12[] = "Linux"
12[] = "http://en.wikipedia.org/wiki/Linux"
12[] = ""
12[] = ""
12[] = "linux.png"

[browser]
20[] = "1"
20[] = "Firefox"
20[] = "http://www.firefox.com/"
20[] = "Mozilla Foundation"
20[] = "http://www.mozilla.org/"
20[] = "firefox.png"
20[] = "/list-of-ua/browser-detail?browser=Firefox"
21[] = "2"
21[] = "Chrome Mobile"
21[] = "http://www.google.com/chrome"
21[] = "Google Inc."
21[] = "http://www.google.com/"
21[] = "chrome.png"
21[] = ""
22[] = "1"
22[] = "Gecko Generic"
22[] = ""
22[] = ""
22[] = ""
22[] = ""
22[] = ""
23[] = "3"
23[] = "cURL"
23[] = "http://curl.haxx.se/"
23[] = ""
23[] = ""
23[] = "curl.png"
23[] = ""

[browser_type]
1[] = "Browser"
2[] = "Mobile Browser"
3[] = "Library"

[browser_reg]
30[] = "/firefox\/([\d\.]+)/si"
30[] = "20"
31[] = "/Chrome\/([\d\.]+) Mobile/si"
31[] = "21"
32[] = "/gecko/si"
32[] = "22"
33[] = "/^curl\/([\d\.]+)/si"
33[] = "23"

[browser_os]
21[] = "11"

[os_reg]
40[] = "/Windows/i"
40[] = "10"
41[] = "/Android/i"
41[] = "11"
42[] = "/Linux/i"
42[] = "12"

[device]
1[] = "Other"
1[] = "other.png"
1[] = "/list-of-ua/device-detail?device=Other"
2[] = "Personal computer"
2[] = "desktop.png"
2[] = "/list-of-ua/device-detail?device=Personal computer"
3[] = "Smartphone"
3[] = "smartphone.png"
3[] = "/list-of-ua/device-detail?device=Smartphone"
4[] = "Tablet"
4[] = "tablet.png"
4[] = "/list-of-ua/device-detail?device=Tablet"

[device_reg]
50[] = "/iPad/si"
50[] = "4"
'''

NEW_INI = SAMPLE_INI.replace(SAMPLE_VERSION, NEW_VERSION)


class FakeRemote:
    """Stand-in for RemoteSource. Records every call, never touches the network."""

    def __init__(self, version=NEW_VERSION, payload=None, checksum=None, fail_on=()):
        self.version = version
        self.payload = payload if payload is not None else NEW_INI.encode("utf-8")
        self.checksum = checksum if checksum is not None else hashlib.sha1(self.payload).hexdigest()
        self.fail_on = set(fail_on)
        self.calls = []

    def _call(self, name, value):
        self.calls.append(name)
        if name in self.fail_on:
            raise NetworkError(f"{name} failed")
        return value

    def fetch_version(self):
        return self._call("version", self.version)

    def fetch_checksum(self):
        return self._call("checksum", self.checksum)

    def fetch_data(self):
        return self._call("data", self.payload)


@pytest.fixture
def sample_ini() -> str:
    return SAMPLE_INI


@pytest.fixture
def store(sample_ini):
    return decode(sample_ini)


@pytest.fixture
def database_path(tmp_path, sample_ini) -> Path:
    path = tmp_path / "uasdata.ini"
    path.write_bytes(sample_ini.encode("utf-8"))
    return path


@pytest.fixture
def make_remote():
    return FakeRemote


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    return AppConfig(update=UpdateConfig(cache_directory=str(tmp_path)))

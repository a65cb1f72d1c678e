"""Shared fixtures: sample résumé data and a fake headless browser."""

import copy
import json
from pathlib import Path

import pytest

from vitae.contexts.templating import ResumeData

SAMPLE_DATA_FILE = Path(__file__).parent.parent / "data" / "resume-data.json"

FAKE_PDF_BYTES = b"%PDF-1.4\n% fake\n"


class FakePage:
    def __init__(self, browser):
        self.browser = browser

    async def set_content(self, html, wait_until=None, timeout=None):
        if self.browser.fail_on == "set_content":
            raise TimeoutError("Navigation timeout exceeded")
        self.browser.contents.append(html)

    async def pdf(self, **options):
        if self.browser.fail_on == "pdf":
            raise RuntimeError("Printing failed")
        self.browser.pdf_options.append(options)
        return FAKE_PDF_BYTES


class FakeBrowser:
    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.contents = []
        self.pdf_options = []

    async def new_page(self, viewport=None, device_scale_factor=None):
        return FakePage(self)


class FakeLauncher:
    """Stands in for ChromiumLauncher; counts launches and releases."""

    def __init__(self, fail_on=None, fail_launch=False, fail_release=False):
        self.browser = FakeBrowser(fail_on=fail_on)
        self.fail_launch = fail_launch
        self.fail_release = fail_release
        self.launches = 0
        self.releases = 0

    async def launch(self):
        self.launches += 1
        if self.fail_launch:
            raise RuntimeError("Executable doesn't exist")
        return self.browser

    async def release(self, browser):
        assert browser is self.browser
        self.releases += 1
        if self.fail_release:
            raise ConnectionError("Browser closed unexpectedly")


@pytest.fixture
def resume_dict():
    """Parsed sample data file (a fresh copy per test)."""
    return copy.deepcopy(json.loads(SAMPLE_DATA_FILE.read_text(encoding="utf-8")))


@pytest.fixture
def resume_data(resume_dict):
    return ResumeData.from_dict(resume_dict)


@pytest.fixture
def fake_launcher():
    return FakeLauncher()


@pytest.fixture
def make_launcher():
    """Factory for FakeLauncher with failure injection."""
    return FakeLauncher


@pytest.fixture
def events_file(tmp_path, monkeypatch):
    """Redirect the build event log into tmp_path."""
    from vitae.utils import event_logging

    path = tmp_path / "logs" / "build_events.log"
    monkeypatch.setattr(event_logging, "BUILD_EVENTS_FILE", path)
    return path

import asyncio

import pytest

from vitae import export
from vitae.config import export_filename
from vitae.export import BrowserUnavailable, ExportError, capture_cv_pdf, capture_with, export_lang


class FakePage:
    def __init__(self, calls, fail_on=None):
        self.calls = calls
        self.fail_on = fail_on

    async def goto(self, url, **kwargs):
        self.calls.append(("goto", url, kwargs))
        if self.fail_on == "goto":
            raise TimeoutError("navigation timed out")

    async def evaluate(self, script):
        self.calls.append(("evaluate", script))

    async def wait_for_selector(self, selector, **kwargs):
        self.calls.append(("wait_for_selector", selector, kwargs))

    async def pdf(self, **kwargs):
        self.calls.append(("pdf", kwargs))
        return b"%PDF-1.7 fake"


class FakeContext:
    def __init__(self, calls, page):
        self.calls = calls
        self.page = page

    async def add_cookies(self, cookies):
        self.calls.append(("add_cookies", cookies))

    async def add_init_script(self, script):
        self.calls.append(("add_init_script", script))

    async def new_page(self):
        self.calls.append(("new_page",))
        return self.page


class FakeBrowser:
    def __init__(self, calls, page):
        self.calls = calls
        self.page = page

    async def new_context(self):
        return FakeContext(self.calls, self.page)

    async def close(self):
        self.calls.append(("close",))


class FakeChromium:
    def __init__(self, calls, page, launch_error=None):
        self.calls = calls
        self.page = page
        self.launch_error = launch_error

    async def launch(self, **kwargs):
        self.calls.append(("launch", kwargs))
        if self.launch_error:
            raise self.launch_error
        return FakeBrowser(self.calls, self.page)


class FakePlaywright:
    def __init__(self, fail_on=None, launch_error=None):
        self.calls = []
        self.chromium = FakeChromium(self.calls, FakePage(self.calls, fail_on), launch_error)

    def names(self):
        return [call[0] for call in self.calls]


@pytest.mark.parametrize("raw,expected", [("en", "en"), ("de", "de"), ("fr", "de"), (None, "de"), ("", "de")])
def test_export_lang_defaults_to_german(raw, expected):
    assert export_lang(raw) == expected


def test_export_filename():
    assert export_filename("en") == "CV_Mathis_Thomsen_EN.pdf"
    assert export_filename("de") == "CV_Mathis_Thomsen_DE.pdf"


def test_capture_sequence():
    pw = FakePlaywright()
    pdf = asyncio.run(capture_with(pw, "http://localhost:3000/", "en"))

    assert pdf == b"%PDF-1.7 fake"
    assert pw.names() == [
        "launch", "add_cookies", "add_init_script", "new_page",
        "goto", "evaluate", "wait_for_selector", "evaluate", "pdf", "close",
    ]

    calls = {call[0]: call for call in pw.calls}
    assert calls["add_cookies"][1] == [{"name": "cv-lang", "value": "en", "url": "http://localhost:3000"}]
    assert "'cv-lang', 'en'" in calls["add_init_script"][1]

    _, url, goto_kwargs = calls["goto"]
    assert url == "http://localhost:3000/cv/?lang=en"
    assert goto_kwargs == {"wait_until": "networkidle", "timeout": 30000}

    assert calls["wait_for_selector"][1:] == (".cv-header__name", {"timeout": 10000})
    evaluated = [call[1] for call in pw.calls if call[0] == "evaluate"]
    assert evaluated == [export.FONTS_READY_JS, export.FORCE_FINAL_STATE_JS]

    assert calls["pdf"][1] == {
        "format": "A4",
        "print_background": True,
        "margin": {"top": "15mm", "right": "15mm", "bottom": "15mm", "left": "15mm"},
    }


def test_capture_closes_browser_on_failure():
    pw = FakePlaywright(fail_on="goto")
    with pytest.raises(TimeoutError):
        asyncio.run(capture_with(pw, "http://localhost:3000", "de"))
    assert pw.names()[-1] == "close"


def test_capture_launch_failure_propagates():
    pw = FakePlaywright(launch_error=RuntimeError("no chromium"))
    with pytest.raises(RuntimeError, match="no chromium"):
        asyncio.run(capture_with(pw, "http://localhost:3000", "de"))
    assert "close" not in pw.names()


def test_capture_cv_pdf_validates_pages(monkeypatch):
    seen = {}

    async def fake_capture(base_url, lang):
        seen["args"] = (base_url, lang)
        return b"%PDF"

    monkeypatch.setattr(export, "_capture_async", fake_capture)
    monkeypatch.setattr(export, "_count_pdf_pages", lambda pdf: 2)

    assert capture_cv_pdf("http://localhost:3000", "xx") == b"%PDF"
    assert seen["args"] == ("http://localhost:3000", "de")


def test_capture_cv_pdf_rejects_empty_pdf(monkeypatch):
    async def fake_capture(base_url, lang):
        return b"%PDF"

    monkeypatch.setattr(export, "_capture_async", fake_capture)
    monkeypatch.setattr(export, "_count_pdf_pages", lambda pdf: 0)

    with pytest.raises(ExportError, match="no pages"):
        capture_cv_pdf("http://localhost:3000", "en")


def test_capture_cv_pdf_surfaces_browser_unavailable(monkeypatch):
    async def fake_capture(base_url, lang):
        raise BrowserUnavailable("Playwright not installed")

    monkeypatch.setattr(export, "_capture_async", fake_capture)

    with pytest.raises(BrowserUnavailable):
        capture_cv_pdf("http://localhost:3000", "en")


def test_browser_unavailable_is_an_export_error():
    assert issubclass(BrowserUnavailable, ExportError)

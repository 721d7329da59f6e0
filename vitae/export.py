"""PDF export of the CV page.

Drives a fresh headless Chromium per request: pre-seed the language preference,
load the CV page, wait for network, fonts and the first render, force the
scroll-triggered states to their final values, then print to a fixed A4 PDF.
The browser is closed on every path.
"""

from __future__ import annotations

import asyncio
import io
import logging
from typing import Any, Optional

from vitae.config import (
    CV_READY_SELECTOR,
    DEFAULT_LANG,
    PDF_FORMAT,
    PDF_MARGIN,
    PDF_NAV_TIMEOUT_MS,
    PDF_RENDER_TIMEOUT_MS,
    PDF_VALIDATE_PAGES,
    STORAGE_KEY,
)
from vitae.i18n import is_supported

CV_PAGE_PATH = "/cv/"

# The capture context never scrolls, so intersection-based triggers never fire.
FORCE_FINAL_STATE_JS = """() => {
    document.querySelectorAll('.cv-skill__bar-fill, .cv-lang__bar-fill').forEach(bar => {
        bar.style.setProperty('--bar-fill', bar.dataset.level);
    });
    document.querySelectorAll('[data-reveal]').forEach(el => {
        el.classList.add('is-visible');
    });
}"""

FONTS_READY_JS = "() => document.fonts.ready.then(() => true)"


class ExportError(Exception):
    pass


class BrowserUnavailable(ExportError):
    pass


def export_lang(raw: Optional[str]) -> str:
    """Requested export language, defaulting to ``de`` for missing or unsupported codes."""
    return raw if is_supported(raw) else DEFAULT_LANG


def _count_pdf_pages(pdf_bytes: bytes) -> int:
    try:
        from PyPDF2 import PdfReader
    except ImportError as exc:
        raise ExportError(
            "PyPDF2 not installed. Install with `pip install PyPDF2` to enable page-count validation."
        ) from exc

    reader = PdfReader(io.BytesIO(pdf_bytes))
    return len(reader.pages)


def _preload_storage_js(lang: str) -> str:
    return f"try {{ window.localStorage.setItem('{STORAGE_KEY}', '{lang}'); }} catch (e) {{}}"


async def capture_with(playwright: Any, base_url: str, lang: str) -> bytes:
    """Run the capture sequence on an already started Playwright instance."""
    base_url = base_url.rstrip("/")
    browser = None
    try:
        browser = await playwright.chromium.launch(args=["--no-sandbox", "--disable-setuid-sandbox"])
        context = await browser.new_context()

        # Seed the persisted preference before any page script runs.
        await context.add_cookies([{"name": STORAGE_KEY, "value": lang, "url": base_url}])
        await context.add_init_script(_preload_storage_js(lang))

        page = await context.new_page()
        await page.goto(f"{base_url}{CV_PAGE_PATH}?lang={lang}", wait_until="networkidle",
                        timeout=PDF_NAV_TIMEOUT_MS)
        await page.evaluate(FONTS_READY_JS)
        await page.wait_for_selector(CV_READY_SELECTOR, timeout=PDF_RENDER_TIMEOUT_MS)

        await page.evaluate(FORCE_FINAL_STATE_JS)

        return await page.pdf(
            format=PDF_FORMAT,
            print_background=True,
            margin={"top": PDF_MARGIN, "right": PDF_MARGIN, "bottom": PDF_MARGIN, "left": PDF_MARGIN},
        )
    finally:
        if browser is not None:
            await browser.close()


async def _capture_async(base_url: str, lang: str) -> bytes:
    try:
        from playwright.async_api import async_playwright
    except ImportError as exc:
        raise BrowserUnavailable(
            "Playwright not installed. Install with `pip install playwright` and `playwright install chromium`."
        ) from exc

    async with async_playwright() as p:
        return await capture_with(p, base_url, lang)


def capture_cv_pdf(base_url: str, lang: str) -> bytes:
    """Produce the CV snapshot for ``lang`` by loading ``base_url`` in a headless browser."""
    lang = export_lang(lang)
    logging.info(f"[export] Capturing CV PDF lang={lang} from {base_url}")

    pdf = asyncio.run(_capture_async(base_url, lang))

    if PDF_VALIDATE_PAGES:
        pages = _count_pdf_pages(pdf)
        if pages < 1:
            raise ExportError("Captured PDF has no pages.")
        logging.info(f"[export] CV PDF lang={lang}: {pages} page(s), {len(pdf)} bytes")
    return pdf

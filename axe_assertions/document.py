from __future__ import annotations

import atexit
import logging
from typing import Any, Dict, Optional

from playwright.sync_api import Browser, ElementHandle, Error as PlaywrightError, Page, Playwright
from playwright.sync_api import sync_playwright

from .config import Settings, get_settings
from .errors import EngineError
from .utils import ensure_axe_js

logger = logging.getLogger(__name__)

BLANK_DOCUMENT = (
    '<!DOCTYPE html><html lang="en"><head><title>axe</title></head><body></body></html>'
)

_RUN_AXE = """
async ([root, options]) => {
    if (!window.axe || !axe.run) {
        return {error: 'axe not loaded'}
    }
    return await axe.run(root, options);
}
"""


class Document:
    """A live page whose ``document.body`` is the shared mount target."""

    def __init__(self, page: Page, settings: Optional[Settings] = None):
        self.page = page
        self.settings = settings or get_settings()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    @classmethod
    def launch(cls, settings: Optional[Settings] = None) -> "Document":
        settings = settings or get_settings()
        p = sync_playwright().start()
        try:
            browser = p.chromium.launch(args=["--no-sandbox"], headless=True)
            context = browser.new_context()
            page = context.new_page()
            page.set_default_timeout(settings.timeout_ms)
            page.set_content(BLANK_DOCUMENT)
        except PlaywrightError:
            p.stop()
            raise
        document = cls(page, settings)
        document._playwright = p
        document._browser = browser
        logger.debug("Launched headless chromium for axe document")
        return document

    def close(self) -> None:
        if self._browser is not None:
            self._browser.close()
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None

    def __enter__(self) -> "Document":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def inner_html(self) -> str:
        return self.page.evaluate("() => document.body.innerHTML")

    @inner_html.setter
    def inner_html(self, html: str) -> None:
        self.page.evaluate("html => { document.body.innerHTML = html }", html)

    def body(self) -> ElementHandle:
        return self.page.query_selector("body")

    def is_element(self, value: Any) -> bool:
        return isinstance(value, ElementHandle)

    def contains(self, element: ElementHandle) -> bool:
        try:
            return bool(self.page.evaluate("el => document.body.contains(el)", element))
        except PlaywrightError:
            # handle from another page or a disposed one
            return False

    def outer_html(self, element: ElementHandle) -> str:
        return element.evaluate("el => el.outerHTML")

    def ensure_axe(self) -> None:
        try:
            if self.page.evaluate("() => !!(window.axe && window.axe.run)"):
                return
            self.page.add_script_tag(path=ensure_axe_js(self.settings))
        except PlaywrightError as e:
            raise EngineError(f"Could not load axe-core into the page: {e}") from e

    def run_axe(self, root: ElementHandle, options: Dict[str, Any]) -> Dict[str, Any]:
        try:
            result = self.page.evaluate(_RUN_AXE, [root, options])
        except PlaywrightError as e:
            raise EngineError(f"axe-core run failed: {e}") from e
        if not isinstance(result, dict):
            raise EngineError(f"unexpected axe result: {result!r}")
        if result.get("error"):
            raise EngineError(str(result["error"]))
        return result


_default_document: Optional[Document] = None


def default_document() -> Document:
    """Process-wide document used by the pre-configured ``axe`` instance."""
    global _default_document
    if _default_document is None:
        _default_document = Document.launch()
        atexit.register(close_default_document)
    return _default_document


def close_default_document() -> None:
    global _default_document
    if _default_document is not None:
        _default_document.close()
        _default_document = None

"""Playwright headless-browser capability.

A session is one launched Chromium instance. Callers own it exclusively and
must close it, normally through ``scoped_session``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Protocol

from playwright.async_api import Browser, Playwright, async_playwright

logger = logging.getLogger(__name__)

# Evaluated in the page after navigation; returns the raw layout signals.
LAYOUT_SIGNALS_JS = """
() => {
    const hasViewportMeta = !!document.querySelector('meta[name="viewport"]');

    const viewportWidth = window.innerWidth;
    const documentWidth = document.documentElement.getBoundingClientRect().width;

    let usesMediaQueries = Array.from(document.querySelectorAll('style'))
        .some(el => (el.innerHTML || '').includes('@media'));
    if (!usesMediaQueries) {
        for (const sheet of Array.from(document.styleSheets)) {
            try {
                if (Array.from(sheet.cssRules || []).some(r => r.type === CSSRule.MEDIA_RULE)) {
                    usesMediaQueries = true;
                    break;
                }
            } catch (e) { /* cross-origin sheet */ }
        }
    }

    const fontSizes = Array.from(document.querySelectorAll('body *'))
        .map(el => parseInt(getComputedStyle(el).fontSize, 10))
        .filter(n => !Number.isNaN(n));
    const minFontSize = fontSizes.length ? Math.min(...fontSizes) : null;

    const targets = Array.from(document.querySelectorAll('a, button, input, select, textarea'))
        .map(el => el.getBoundingClientRect())
        .filter(r => r.width > 0 && r.height > 0);
    const minTapTarget = targets.length
        ? Math.min(...targets.map(r => Math.min(r.width, r.height)))
        : null;

    return {
        hasViewportMeta,
        viewportWidth,
        documentWidth,
        usesMediaQueries,
        minFontSize,
        minTapTarget,
        zoom: document.documentElement.style.zoom || '',
    };
}
"""


class BrowserSession(Protocol):
    async def navigate(self, url: str, viewport: dict[str, Any]) -> dict[str, Any]: ...

    async def evaluate(self, url: str, script: str, viewport: Optional[dict[str, Any]] = None) -> Any: ...

    async def close(self) -> None: ...


class HeadlessBrowser(Protocol):
    async def open(self) -> BrowserSession: ...


class PlaywrightSession:
    """One launched Chromium instance."""

    def __init__(self, playwright: Playwright, browser: Browser, user_agent: str, timeout_ms: int) -> None:
        self._playwright = playwright
        self._browser = browser
        self._user_agent = user_agent
        self._timeout_ms = timeout_ms

    async def evaluate(self, url: str, script: str, viewport: Optional[dict[str, Any]] = None) -> Any:
        """Navigate to *url* in a fresh context and evaluate *script* there."""
        viewport = viewport or {"width": 1280, "height": 800}
        context = await self._browser.new_context(
            viewport={"width": int(viewport["width"]), "height": int(viewport["height"])},
            is_mobile=bool(viewport.get("is_mobile", False)),
            user_agent=self._user_agent,
        )
        try:
            page = await context.new_page()
            page.set_default_timeout(self._timeout_ms)
            await page.goto(url, wait_until="networkidle")
            return await page.evaluate(script)
        finally:
            await context.close()

    async def navigate(self, url: str, viewport: dict[str, Any]) -> dict[str, Any]:
        """Load *url* at *viewport* and return its layout signals."""
        return await self.evaluate(url, LAYOUT_SIGNALS_JS, viewport)

    async def close(self) -> None:
        try:
            await self._browser.close()
        finally:
            await self._playwright.stop()


class PlaywrightBrowser:
    """Launch a fresh headless Chromium per ``open()`` call."""

    def __init__(
        self,
        headless: bool = True,
        timeout_ms: int = 30000,
        user_agent: str = "LeadScanBot/1.0",
        launch_args: Optional[list[str]] = None,
    ) -> None:
        self._headless = headless
        self._timeout_ms = timeout_ms
        self._user_agent = user_agent
        self._launch_args = launch_args if launch_args is not None else [
            "--no-sandbox",
            "--disable-extensions",
            "--disable-setuid-sandbox",
        ]

    async def open(self) -> PlaywrightSession:
        pw = await async_playwright().start()
        try:
            browser = await pw.chromium.launch(headless=self._headless, args=self._launch_args)
        except Exception:
            await pw.stop()
            raise
        logger.debug("Launched headless Chromium")
        return PlaywrightSession(pw, browser, self._user_agent, self._timeout_ms)


@asynccontextmanager
async def scoped_session(browser: HeadlessBrowser) -> AsyncIterator[BrowserSession]:
    """Own a browser session for the duration of the block.

    The session is closed on every exit path. A failure while closing is
    logged and never replaces the block's own outcome.
    """
    session = await browser.open()
    try:
        yield session
    finally:
        try:
            await session.close()
        except Exception as exc:
            logger.warning("Error closing headless browser session: %s", exc)

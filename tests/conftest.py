"""Shared pytest fixtures for LeadScan tests.

The fakes stand in for the network and browser capabilities so the whole
pipeline runs offline and deterministically.
"""

import sys
from pathlib import Path
from typing import Any, Optional

import pytest

# Ensure project root is on sys.path so 'leadscan' is importable.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from leadscan.integrations.http_client import ProbeResult  # noqa: E402


# ---------------------------------------------------------------------------
# Fake capabilities
# ---------------------------------------------------------------------------

class FakeFetcher:
    """Serve canned pages by URL; unknown URLs resolve to ``None``."""

    def __init__(self, pages: Optional[dict[str, str]] = None, fail: Optional[set[str]] = None):
        self.pages = dict(pages or {})
        self.fail = set(fail or ())
        self.calls: list[str] = []

    async def fetch(self, url: str, timeout: float = 5.0) -> Optional[str]:
        self.calls.append(url)
        if url in self.fail:
            raise RuntimeError(f"boom: {url}")
        return self.pages.get(url)


class FakeProbe:
    """Return a fixed status per URL (default 200)."""

    def __init__(self, statuses: Optional[dict[str, Any]] = None, default: int = 200):
        self.statuses = dict(statuses or {})
        self.default = default
        self.calls: list[str] = []

    async def probe(self, url: str, timeout: float = 5.0) -> ProbeResult:
        self.calls.append(url)
        status = self.statuses.get(url, self.default)
        if status == "timeout":
            return ProbeResult(url=url, timed_out=True, error="timeout")
        if status == "error":
            return ProbeResult(url=url, error="connection refused")
        if status == "raise":
            raise RuntimeError("probe exploded")
        return ProbeResult(url=url, status_code=status)


class FakeSession:
    def __init__(self, layout: Any = None, evaluate_result: Any = None, error: Optional[Exception] = None,
                 close_error: Optional[Exception] = None):
        self.layout = layout
        self.evaluate_result = evaluate_result
        self.error = error
        self.close_error = close_error
        self.closed = False
        self.viewports: list[dict] = []

    async def navigate(self, url: str, viewport: dict) -> dict:
        self.viewports.append(viewport)
        if self.error:
            raise self.error
        return self.layout

    async def evaluate(self, url: str, script: str, viewport: Optional[dict] = None) -> Any:
        if self.error:
            raise self.error
        return self.evaluate_result

    async def close(self) -> None:
        self.closed = True
        if self.close_error:
            raise self.close_error


class FakeBrowser:
    """Hand out a fresh ``FakeSession`` per ``open()`` built from the given kwargs."""

    def __init__(self, **session_kwargs: Any):
        self.session_kwargs = session_kwargs
        self.sessions: list[FakeSession] = []

    async def open(self) -> FakeSession:
        session = FakeSession(**self.session_kwargs)
        self.sessions.append(session)
        return session


class FakeAccessibilityEngine:
    def __init__(self, result: Optional[dict] = None, error: Optional[Exception] = None, delay: float = 0.0):
        self.result = result
        self.error = error
        self.delay = delay
        self.configs: list[dict] = []

    async def audit(self, url: str, config: dict) -> Optional[dict]:
        self.configs.append(config)
        if self.delay:
            import asyncio
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.result


# ---------------------------------------------------------------------------
# Layouts and audit payloads
# ---------------------------------------------------------------------------

RESPONSIVE_LAYOUT = {
    "hasViewportMeta": True,
    "viewportWidth": 375,
    "documentWidth": 375,
    "usesMediaQueries": True,
    "minFontSize": 14,
    "minTapTarget": 44,
    "zoom": "",
}

DESKTOP_ONLY_LAYOUT = {
    "hasViewportMeta": False,
    "viewportWidth": 375,
    "documentWidth": 1200,
    "usesMediaQueries": False,
    "minFontSize": 10,
    "minTapTarget": 18,
    "zoom": "",
}


def make_issue(kind: str = "error", code: str = "WCAG2AA.Principle1.Guideline1_1.1_1_1.H37") -> dict:
    return {
        "code": code,
        "context": "<img src=\"a.png\">",
        "message": "Img element missing an alt attribute.",
        "selector": "html > body > img",
        "type": kind,
    }


def make_audit(errors: int, warnings: int, passes: int = 0) -> dict:
    issues = [make_issue("error") for _ in range(errors)]
    issues += [
        make_issue("warning", "WCAG2AA.Principle1.Guideline1_3.1_3_1_A.G141")
        for _ in range(warnings)
    ]
    return {
        "issues": issues,
        "passes": [make_issue("pass", "WCAG2AA.Principle3.Guideline3_1.3_1_1.H57.2") for _ in range(passes)],
    }


# ---------------------------------------------------------------------------
# HTML fixtures
# ---------------------------------------------------------------------------

GOOD_HTML = """
<html lang="en">
<head>
  <title>Acme Roofing | Denver roof repair</title>
  <meta name="description" content="Family-owned roofing contractor serving Denver since 1998.">
  <meta name="keywords" content="roofing, roof repair, denver">
  <link rel="canonical" href="https://acme.com/">
  <script src="https://www.googletagmanager.com/gtag/js?id=G-1"></script>
</head>
<body>
  <h1>Acme Roofing</h1>
  <img src="/logo.png" alt="Acme logo">
  <img src="/crew.png" alt="Our crew">
  <a href="/about">About</a>
  <a href="/services">Services</a>
  <a href="https://acme.com/contact">Contact</a>
  <a href="mailto:hello@acme.com">Email</a>
  <p>Call us at (303) 555-1234 or email hello@acme.com</p>
  <footer>&copy; {year} Acme Roofing</footer>
</body>
</html>
"""

BARE_HTML = """
<html>
<body>
  <img src="/a.png">
  <img src="/b.png">
  <p>Welcome</p>
</body>
</html>
"""


@pytest.fixture()
def good_html():
    from datetime import datetime
    return GOOD_HTML.replace("{year}", str(datetime.now().year))


@pytest.fixture()
def bare_html():
    return BARE_HTML


@pytest.fixture()
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture()
def fake_probe():
    return FakeProbe()


@pytest.fixture()
def fake_browser():
    return FakeBrowser(layout=RESPONSIVE_LAYOUT)


@pytest.fixture()
def fake_engine():
    return FakeAccessibilityEngine(result=make_audit(errors=4, warnings=6, passes=3))

"""In-page WCAG2AA rule runner driven through Playwright.

The engine loads the page in a headless browser, evaluates a compact rule
set in the document and returns pa11y-shaped findings:

    {"issues": [{code, context, message, selector, type}, ...],
     "passes": [{code, context, message, selector, type: "pass"}, ...]}
"""

import logging
from typing import Any, Optional, Protocol

from leadscan.integrations.browser import HeadlessBrowser, scoped_session

logger = logging.getLogger(__name__)

WCAG2AA_STANDARD = "WCAG2AA"

# ---------------------------------------------------------------------------
# Rule set evaluated in the page
# ---------------------------------------------------------------------------

WCAG_RULES_JS = """
() => {
    const issues = [];
    const passes = [];
    const P = 'WCAG2AA.Principle';

    const selectorFor = (el) => {
        if (el.id) return `#${el.id}`;
        const parts = [];
        let node = el;
        while (node && node.nodeType === 1 && parts.length < 4) {
            let part = node.tagName.toLowerCase();
            const parent = node.parentElement;
            if (parent) {
                const same = Array.from(parent.children).filter(c => c.tagName === node.tagName);
                if (same.length > 1) part += `:nth-child(${Array.from(parent.children).indexOf(node) + 1})`;
            }
            parts.unshift(part);
            node = parent;
        }
        return parts.join(' > ');
    };
    const contextFor = (el) => (el.outerHTML || '').slice(0, 200);
    const record = (list, code, el, message, type) => list.push({
        code,
        context: el ? contextFor(el) : '',
        message,
        selector: el ? selectorFor(el) : '',
        type,
    });

    // 1.1.1 text alternatives
    document.querySelectorAll('img').forEach(img => {
        const code = `${P}1.Guideline1_1.1_1_1.H37`;
        if (img.getAttribute('alt') === null) {
            record(issues, code, img, 'Img element missing an alt attribute. Use the alt attribute to specify a short text alternative.', 'error');
        } else {
            record(passes, code, img, 'Img element has an alt attribute.', 'pass');
        }
    });

    // 3.1.1 document language
    const lang = document.documentElement.getAttribute('lang');
    const langCode = `${P}3.Guideline3_1.3_1_1.H57.2`;
    if (!lang || !lang.trim()) {
        record(issues, langCode, document.documentElement, 'The html element should have a lang or xml:lang attribute which describes the language of the document.', 'error');
    } else {
        record(passes, langCode, document.documentElement, 'The html element declares a language.', 'pass');
    }

    // 2.4.2 page title
    const titleEl = document.querySelector('head > title');
    const titleCode = `${P}2.Guideline2_4.2_4_2.H25.1.NoTitleEl`;
    if (!titleEl || !titleEl.textContent.trim()) {
        record(issues, titleCode, titleEl, 'A title should be provided for the document, using a non-empty title element in the head section.', 'error');
    } else {
        record(passes, titleCode, titleEl, 'The document has a non-empty title element.', 'pass');
    }

    // 4.1.2 name, role, value
    const accessibleName = (el) => (
        (el.textContent || '').trim()
        || el.getAttribute('aria-label')
        || el.getAttribute('aria-labelledby')
        || el.getAttribute('title')
        || Array.from(el.querySelectorAll('img[alt]')).map(i => i.getAttribute('alt')).join('').trim()
    );
    document.querySelectorAll('a[href]').forEach(a => {
        const code = `${P}4.Guideline4_1.4_1_2.H91.A.EmptyNoId`;
        if (!accessibleName(a)) {
            record(issues, code, a, 'Anchor element found with a valid href attribute, but no link content has been supplied.', 'error');
        }
    });
    document.querySelectorAll('button, [role="button"]').forEach(btn => {
        const code = `${P}4.Guideline4_1.4_1_2.H91.Button.Name`;
        if (!accessibleName(btn) && !btn.getAttribute('value')) {
            record(issues, code, btn, 'This button element does not have a name available to an accessibility API.', 'error');
        } else {
            record(passes, code, btn, 'Button has an accessible name.', 'pass');
        }
    });
    document.querySelectorAll('input:not([type=hidden]):not([type=submit]):not([type=button]), textarea, select').forEach(el => {
        const code = `${P}4.Guideline4_1.4_1_2.H91.InputText.Name`;
        const labelled = el.getAttribute('aria-label')
            || el.getAttribute('aria-labelledby')
            || el.getAttribute('title')
            || (el.id && document.querySelector(`label[for="${el.id}"]`))
            || el.closest('label');
        if (!labelled) {
            record(issues, code, el, 'This form field does not have a name available to an accessibility API.', 'error');
        } else {
            record(passes, code, el, 'Form field is labelled.', 'pass');
        }
    });

    // 1.3.1 headings
    let previous = 0;
    document.querySelectorAll('h1, h2, h3, h4, h5, h6').forEach(h => {
        const level = parseInt(h.tagName.charAt(1), 10);
        if (!h.textContent.trim()) {
            record(issues, `${P}1.Guideline1_3.1_3_1.H42.2`, h, 'Heading tag found with no content.', 'error');
        }
        if (previous && level > previous + 1) {
            record(issues, `${P}1.Guideline1_3.1_3_1_A.G141`, h, `The heading structure is not logically nested. This h${level} element appears after an h${previous}.`, 'warning');
        }
        previous = level;
    });

    return { issues, passes };
}
"""


class AccessibilityEngine(Protocol):
    async def audit(self, url: str, config: dict[str, Any]) -> Optional[dict[str, Any]]: ...


class PlaywrightAccessibilityEngine:
    """Run the WCAG2AA rule set in a freshly launched headless browser."""

    def __init__(self, browser: HeadlessBrowser) -> None:
        self._browser = browser

    async def audit(self, url: str, config: dict[str, Any]) -> Optional[dict[str, Any]]:
        standard = config.get("standard", WCAG2AA_STANDARD)
        if standard != WCAG2AA_STANDARD:
            logger.warning("Unsupported accessibility standard %s, running %s", standard, WCAG2AA_STANDARD)

        async with scoped_session(self._browser) as session:
            raw = await session.evaluate(url, WCAG_RULES_JS)

        if not isinstance(raw, dict):
            return None
        issues = [i for i in raw.get("issues", []) if _keep(i, config)]
        passes = list(raw.get("passes", []))
        logger.debug("Accessibility rules on %s: %d issues, %d passes", url, len(issues), len(passes))
        return {"issues": issues, "passes": passes}


def _keep(issue: dict[str, Any], config: dict[str, Any]) -> bool:
    kind = issue.get("type")
    if kind == "warning":
        return bool(config.get("include_warnings", True))
    if kind == "notice":
        return bool(config.get("include_notices", False))
    return True

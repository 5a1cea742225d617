"""Tests for the accessibility auditor and its scoring formula."""

import asyncio
import json

import pytest

from conftest import FakeAccessibilityEngine, FakeBrowser, make_audit
from leadscan.integrations.accessibility_engine import PlaywrightAccessibilityEngine
from leadscan.modules.accessibility import AccessibilityAuditor, guideline_name, score_accessibility


class TestScoreFormula:
    """score_accessibility stays within [0, 100]."""

    def test_worked_example(self):
        assert score_accessibility(10, 4) == 9

    def test_no_issues_is_perfect(self):
        assert score_accessibility(0, 0) == 100

    def test_only_errors(self):
        # N=E=3: weight 1, weighted 3, floor(100 * (1 - 3/4))
        assert score_accessibility(3, 3) == 25

    def test_only_warnings(self):
        assert score_accessibility(3, 0) == 25

    @pytest.mark.parametrize("errors", range(0, 40, 3))
    @pytest.mark.parametrize("warnings", range(0, 40, 5))
    def test_bounded(self, errors, warnings):
        score = score_accessibility(errors + warnings, errors)
        assert 0 <= score <= 100

    def test_many_issues_floor_at_zero(self):
        assert score_accessibility(200, 150) == 0


class TestGuidelineName:
    def test_parses_code(self):
        assert guideline_name("WCAG2AA.Principle1.Guideline1_1.1_1_1.H37") == "Guideline 1.1 (Principle1)"
        assert guideline_name("WCAG2AA.Principle4.Guideline4_1.4_1_2.H91.A.EmptyNoId") == "Guideline 4.1 (Principle4)"

    def test_unrecognised_code(self):
        assert guideline_name("custom-rule") == ""


class TestAccessibilityAuditor:
    @pytest.mark.asyncio
    async def test_builds_result(self):
        engine = FakeAccessibilityEngine(result=make_audit(errors=4, warnings=6, passes=3))
        result = await AccessibilityAuditor(engine).audit("https://acme.com")

        assert result.score == 9
        assert result.issues_count == 10
        assert result.error_count == 4
        assert result.warning_count == 6
        assert result.pass_count == 3

        issues = json.loads(result.issues)
        assert issues[0]["guideline_name"] == "Guideline 1.1 (Principle1)"
        assert set(issues[0]) == {"code", "context", "message", "selector", "type", "guideline_name"}
        passes = json.loads(result.good_features)
        assert all(p["type"] == "pass" for p in passes)

    @pytest.mark.asyncio
    async def test_passes_wcag2aa_config(self):
        engine = FakeAccessibilityEngine(result=make_audit(0, 0))
        await AccessibilityAuditor(engine).audit("https://acme.com")
        config = engine.configs[0]
        assert config["standard"] == "WCAG2AA"
        assert config["include_warnings"] is True
        assert config["include_notices"] is False

    @pytest.mark.asyncio
    async def test_engine_error_returns_sentinel(self):
        engine = FakeAccessibilityEngine(error=RuntimeError("chrome crashed"))
        result = await AccessibilityAuditor(engine).audit("https://acme.com")
        assert result.score is None
        assert result.issues is None
        assert result.good_features is None

    @pytest.mark.asyncio
    async def test_empty_result_returns_sentinel(self):
        result = await AccessibilityAuditor(FakeAccessibilityEngine(result=None)).audit("https://acme.com")
        assert not result.available

    @pytest.mark.asyncio
    async def test_timeout_returns_sentinel(self):
        engine = FakeAccessibilityEngine(result=make_audit(1, 0), delay=1.0)
        result = await AccessibilityAuditor(engine, timeout=0.05).audit("https://acme.com")
        assert result.score is None


class TestPlaywrightAccessibilityEngine:
    """The engine filters findings and always closes its session."""

    @pytest.mark.asyncio
    async def test_filters_notices_and_closes_session(self):
        raw = {
            "issues": [
                {"code": "a", "type": "error"},
                {"code": "b", "type": "warning"},
                {"code": "c", "type": "notice"},
            ],
            "passes": [{"code": "d", "type": "pass"}],
        }
        browser = FakeBrowser(evaluate_result=raw)
        engine = PlaywrightAccessibilityEngine(browser)
        out = await engine.audit("https://acme.com", {"include_warnings": True, "include_notices": False})
        assert [i["code"] for i in out["issues"]] == ["a", "b"]
        assert len(out["passes"]) == 1
        assert browser.sessions[0].closed

    @pytest.mark.asyncio
    async def test_session_closed_on_error(self):
        browser = FakeBrowser(error=RuntimeError("navigation failed"))
        with pytest.raises(RuntimeError):
            await PlaywrightAccessibilityEngine(browser).audit("https://acme.com", {})
        assert browser.sessions[0].closed

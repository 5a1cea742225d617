"""CLI smoke tests via Typer's CliRunner, with the assessor built from fakes."""

import random

import pytest
from typer.testing import CliRunner

from conftest import (
    RESPONSIVE_LAYOUT,
    FakeAccessibilityEngine,
    FakeBrowser,
    FakeFetcher,
    FakeProbe,
    make_audit,
)
from leadscan.app import LeadScanApp
from leadscan.cli import app
from leadscan.modules.assessment import SiteAssessor

runner = CliRunner()


@pytest.fixture()
def config_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("app:\n  log_level: ERROR\nassessment:\n  seo_internal_links_limit: 50\n", encoding="utf-8")
    return str(path)


@pytest.fixture()
def use_fakes(monkeypatch, good_html):
    """Route every command's assessor through offline fakes."""
    state = {
        "pages": {"https://acme.com": good_html},
        "browser": FakeBrowser(layout=RESPONSIVE_LAYOUT),
        "engine": FakeAccessibilityEngine(result=make_audit(errors=2, warnings=3, passes=1)),
    }

    def fake_get_assessor(self, seed=None, **overrides):
        return SiteAssessor(
            settings=self.settings,
            fetcher=FakeFetcher(state["pages"]),
            probe=FakeProbe(),
            browser=state["browser"],
            accessibility_engine=state["engine"],
            rng=random.Random(seed or 0),
        )

    monkeypatch.setattr(LeadScanApp, "get_assessor", fake_get_assessor)
    return state


class TestHelp:
    def test_main_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "LeadScan" in result.output

    @pytest.mark.parametrize("command", ["assess", "seo", "accessibility", "mobile", "status"])
    def test_command_help(self, command):
        result = runner.invoke(app, [command, "--help"])
        assert result.exit_code == 0, result.output


class TestStatus:
    def test_status_table(self, config_file):
        result = runner.invoke(app, ["status", "--config", config_file])
        assert result.exit_code == 0, result.output
        assert "Component Status" in result.output
        assert "Config" in result.output


class TestAssess:
    def test_invalid_url_exits_2(self, config_file):
        result = runner.invoke(app, ["assess", "http://", "--config", config_file])
        assert result.exit_code == 2
        assert "Invalid URL" in result.output

    def test_assess_table(self, config_file, use_fakes):
        result = runner.invoke(app, ["assess", "acme.com", "--config", config_file, "--seed", "3"])
        assert result.exit_code == 0, result.output
        assert "Assessment: acme.com" in result.output
        assert "Summary" in result.output

    def test_assess_json(self, config_file, use_fakes):
        result = runner.invoke(app, ["assess", "acme.com", "--quick", "--json", "--config", config_file])
        assert result.exit_code == 0, result.output
        assert '"domain": "acme.com"' in result.output
        assert '"score": -3' in result.output

    def test_fetch_failure_exits_1(self, config_file, use_fakes):
        use_fakes["pages"].clear()
        result = runner.invoke(app, ["assess", "acme.com", "--config", config_file])
        assert result.exit_code == 1
        assert "fetch failed" in result.output


class TestAudits:
    def test_seo(self, config_file, use_fakes):
        result = runner.invoke(app, ["seo", "https://acme.com", "--config", config_file])
        assert result.exit_code == 0, result.output
        assert "SEO: https://acme.com" in result.output

    def test_seo_unreachable(self, config_file, use_fakes):
        result = runner.invoke(app, ["seo", "https://elsewhere.com", "--config", config_file])
        assert result.exit_code == 1

    def test_accessibility(self, config_file, use_fakes):
        result = runner.invoke(app, ["accessibility", "https://acme.com", "--config", config_file])
        assert result.exit_code == 0, result.output
        assert "errors=2 warnings=3 passes=1" in result.output

    def test_accessibility_unavailable(self, config_file, use_fakes):
        use_fakes["engine"].result = None
        result = runner.invoke(app, ["accessibility", "https://acme.com", "--config", config_file])
        assert result.exit_code == 1

    def test_mobile(self, config_file, use_fakes):
        result = runner.invoke(app, ["mobile", "https://acme.com", "--config", config_file])
        assert result.exit_code == 0, result.output
        assert "Mobile: https://acme.com" in result.output

    def test_mobile_unreachable(self, config_file, use_fakes):
        use_fakes["browser"].session_kwargs["error"] = RuntimeError("no chrome")
        result = runner.invoke(app, ["mobile", "https://acme.com", "--config", config_file])
        assert result.exit_code == 1


class TestFilteredSites:
    def test_filtered_site_exits_1(self, config_file, use_fakes):
        result = runner.invoke(app, ["assess", "https://www.yelp.com/biz/acme", "--config", config_file])
        assert result.exit_code == 1
        assert "filtered site" in result.output

    def test_include_filtered(self, config_file, use_fakes, good_html):
        use_fakes["pages"]["https://www.yelp.com/biz/acme"] = good_html
        result = runner.invoke(
            app, ["assess", "https://www.yelp.com/biz/acme", "--include-filtered", "--quick", "--config", config_file],
        )
        assert result.exit_code == 0, result.output

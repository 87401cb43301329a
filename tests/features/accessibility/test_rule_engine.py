"""
Tests for the axe-core rule engine runner.

Axe is patched at the rule_engine module; no browser is started.
"""
from unittest.mock import MagicMock, patch

import pytest
from selenium.common.exceptions import TimeoutException, WebDriverException

from app.features.accessibility.exceptions import RuleEngineError
from app.features.accessibility.services.rule_engine import WCAG_TAGS, RuleEngineService
from app.platform.config import settings


@pytest.fixture
def page():
    page = MagicMock()
    page.driver = MagicMock()
    return page


@pytest.fixture
def axe_cls():
    with patch("app.features.accessibility.services.rule_engine.Axe") as axe_cls, \
         patch.object(settings, "AXE_CORE_PATH", None):
        axe_cls.return_value.run.return_value = {"violations": [], "passes": [], "incomplete": []}
        yield axe_cls


class TestRuleEngineService:

    def test_run_returns_axe_results(self, page, axe_cls):
        axe_cls.return_value.run.return_value = {
            "violations": [{"id": "image-alt", "impact": "critical", "nodes": []}],
            "passes": [{"id": "document-title"}],
            "incomplete": [],
            "url": "https://example.com/",
        }

        results = RuleEngineService.run(page)

        assert results["violations"][0]["id"] == "image-alt"
        assert len(results["passes"]) == 1
        assert results["incomplete"] == []
        assert "url" not in results
        axe_cls.assert_called_once_with(page.driver)
        axe_cls.return_value.inject.assert_called_once()

    def test_run_is_restricted_to_wcag_tags(self, page, axe_cls):
        RuleEngineService.run(page)

        options = axe_cls.return_value.run.call_args.kwargs["options"]
        assert options["runOnly"]["type"] == "tag"
        assert options["runOnly"]["values"] == ["wcag2a", "wcag2aa", "wcag21a", "wcag21aa"]
        assert tuple(options["runOnly"]["values"]) == WCAG_TAGS

    def test_options_render_as_javascript(self, page, axe_cls):
        RuleEngineService.run(page)

        options = axe_cls.return_value.run.call_args.kwargs["options"]
        rendered = "%s" % options
        assert "(" not in rendered
        assert "True" not in rendered

    def test_local_axe_script(self, page, axe_cls, tmp_path):
        axe_file = tmp_path / "axe.min.js"

        with patch.object(settings, "AXE_CORE_PATH", str(axe_file)):
            RuleEngineService.run(page)

        axe_cls.assert_called_once_with(page.driver, script_url=str(axe_file))

    def test_missing_lists_default_to_empty(self, page, axe_cls):
        axe_cls.return_value.run.return_value = {"violations": None}

        results = RuleEngineService.run(page)

        assert results == {"violations": [], "passes": [], "incomplete": []}

    def test_no_result_raises(self, page, axe_cls):
        axe_cls.return_value.run.return_value = None

        with pytest.raises(RuleEngineError):
            RuleEngineService.run(page)

    def test_unreadable_axe_script_raises(self, page, axe_cls):
        axe_cls.return_value.inject.side_effect = FileNotFoundError("axe.min.js")

        with pytest.raises(RuleEngineError) as exc_info:
            RuleEngineService.run(page)

        assert "Cannot read axe-core" in str(exc_info.value)
        axe_cls.return_value.run.assert_not_called()

    def test_injection_failure_raises(self, page, axe_cls):
        axe_cls.return_value.inject.side_effect = WebDriverException("javascript error")

        with pytest.raises(RuleEngineError):
            RuleEngineService.run(page)

        axe_cls.return_value.run.assert_not_called()

    @pytest.mark.parametrize("error", [
        WebDriverException("axe.run rejected"),
        TimeoutException("script timeout"),
    ])
    def test_run_failure_raises(self, page, axe_cls, error):
        axe_cls.return_value.run.side_effect = error

        with pytest.raises(RuleEngineError) as exc_info:
            RuleEngineService.run(page)

        assert "axe-core run failed" in str(exc_info.value)

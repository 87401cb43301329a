from unittest.mock import MagicMock

import pytest

from app.features.accessibility.schemas.analysis import (
    AnalysisResult,
    AutoplayMediaCheck,
    ExtendedChecks,
    FocusVisibleCheck,
    TabOrderCheck,
    TimingCheck,
    ViewportCheck,
    ViolationDetail,
)


def make_violation(rule_id: str, impact: str = "serious", **overrides) -> ViolationDetail:
    raw = {
        "id": rule_id,
        "impact": impact,
        "description": f"Description of {rule_id}",
        "help": f"Help for {rule_id}",
        "helpUrl": f"https://dequeuniversity.com/rules/axe/4.8/{rule_id}",
        "tags": ["wcag2a"],
        "nodes": [
            {
                "html": "<img src=\"logo.png\">",
                "target": ["img"],
                "failureSummary": "Fix any of the following:\n  Element does not have an alt attribute",
            }
        ],
    }
    raw.update(overrides)
    return ViolationDetail.model_validate(raw)


def make_extended_checks(
    blocks_zoom: bool = False,
    autoplay_audio: bool = False,
    autoplay_video: bool = False,
) -> ExtendedChecks:
    return ExtendedChecks(
        viewport=ViewportCheck(
            blocks_zoom=blocks_zoom,
            user_scalable=not blocks_zoom,
            issues=["zoom blocked"] if blocks_zoom else [],
        ),
        autoplay_media=AutoplayMediaCheck(
            has_autoplay_audio=autoplay_audio,
            has_autoplay_video=autoplay_video,
        ),
        tab_order=TabOrderCheck(),
        focus_visible=FocusVisibleCheck(has_focus_styles=True),
        timing=TimingCheck(has_set_timeout=True, has_set_interval=True),
    )


def make_result(violations=None, **overrides) -> AnalysisResult:
    violations = violations or []
    fields = {
        "url": "https://example.com",
        "tested_url": "https://example.com/",
        "page_title": "Example Domain",
        "total_violations": len(violations),
        "critical_count": sum(1 for v in violations if v.impact == "critical"),
        "serious_count": sum(1 for v in violations if v.impact == "serious"),
        "moderate_count": sum(1 for v in violations if v.impact == "moderate"),
        "minor_count": sum(1 for v in violations if v.impact == "minor"),
        "passed_count": 1,
        "violations": violations,
        "passes": [
            {
                "id": "document-title",
                "description": "Ensures each HTML document contains a non-empty <title> element",
                "help": "Documents must have <title> element to aid in navigation",
                "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/document-title",
                "tags": ["wcag2a"],
            }
        ],
        "incomplete": [],
        "extended_checks": make_extended_checks(),
    }
    fields.update(overrides)
    return AnalysisResult(**fields)


@pytest.fixture
def violation_factory():
    return make_violation


@pytest.fixture
def extended_checks_factory():
    return make_extended_checks


@pytest.fixture
def result_factory():
    return make_result


@pytest.fixture
def mock_page():
    page = MagicMock()
    page.current_url = "https://example.com/"
    page.title = "Example Domain"
    page.page_source = "<!DOCTYPE html><html><head><title>Example Domain</title></head><body></body></html>"
    return page

"""
Extended Checks

WCAG heuristics axe-core does not cover: zoom lock, autoplaying media,
positive tabindex, missing :focus styles and timed refresh.

A single script evaluation collects raw DOM facts (DomSnapshot): element
tags, ids and classes, attribute values, the selector text of every readable
CSS rule, and counts. The script makes no decisions. Selector naming, focus
rule matching and the five policies below all run in Python on the snapshot.
Every policy runs on every snapshot, none depends on another.

What stays in the browser is the DOM traversal itself:
- querySelectorAll over INTERACTIVE_SELECTORS
- walking nested CSS rules
- skipping stylesheets whose cssRules throw (cross-origin)
Those are only exercised against a live page.
"""
import logging
import re
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from selenium.common.exceptions import WebDriverException

from app.features.accessibility.exceptions import ExtendedChecksError
from app.features.accessibility.schemas.analysis import (
    AutoplayElement,
    AutoplayMediaCheck,
    ExtendedChecks,
    FocusVisibleCheck,
    TabindexElement,
    TabOrderCheck,
    TimingCheck,
    ViewportCheck,
)

logger = logging.getLogger(__name__)

INTERACTIVE_SELECTORS = (
    'a[href]',
    'button',
    'input:not([type="hidden"])',
    'select',
    'textarea',
    '[tabindex]:not([tabindex^="-"])',
)

# Anything below 200% zoom fails WCAG 1.4.4
MIN_MAXIMUM_SCALE = 2.0

_COLLECT_SNAPSHOT = """
const interactiveSelectors = arguments[0];

const describe = (el) => ({
    tag: el.tagName.toLowerCase(),
    id: el.id || '',
    className: el.getAttribute('class') || ''
});

const viewport = document.querySelector('meta[name="viewport"]');

const autoplay = [];
['audio', 'video'].forEach((tag) => {
    document.querySelectorAll(tag + '[autoplay]').forEach((el) => {
        autoplay.push(Object.assign(describe(el), { hasControls: el.hasAttribute('controls') }));
    });
});

const tabindex = Array.from(document.querySelectorAll('[tabindex]')).map((el) =>
    Object.assign(describe(el), { tabindex: el.getAttribute('tabindex') })
);

const styleSelectors = [];
const collectSelectors = (rules) => {
    for (const rule of Array.from(rules || [])) {
        if (rule.selectorText) {
            styleSelectors.push(rule.selectorText);
        }
        if (rule.cssRules) {
            collectSelectors(rule.cssRules);
        }
    }
};

let unreadableStylesheets = 0;
for (const sheet of Array.from(document.styleSheets)) {
    let rules;
    try {
        rules = sheet.cssRules;
    } catch (e) {
        unreadableStylesheets += 1;  // cross-origin stylesheet
        continue;
    }
    collectSelectors(rules);
}

return {
    viewportContent: viewport ? (viewport.getAttribute('content') || '') : null,
    autoplay: autoplay,
    tabindex: tabindex,
    interactiveCount: document.querySelectorAll(interactiveSelectors.join(', ')).length,
    styleSelectors: styleSelectors,
    unreadableStylesheets: unreadableStylesheets,
    refreshMeta: document.querySelector('meta[http-equiv="refresh" i]') !== null,
    hasSetTimeout: typeof window.setTimeout === 'function',
    hasSetInterval: typeof window.setInterval === 'function'
};
"""


class RawElement(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tag: str
    id: str = ""
    class_name: str = Field(default="", alias="className")

    @property
    def selector(self) -> str:
        return build_selector(self.tag, self.id, self.class_name)


class RawAutoplayElement(RawElement):
    has_controls: bool = Field(alias="hasControls")


class RawTabindexElement(RawElement):
    tabindex: Optional[str] = None


class DomSnapshot(BaseModel):
    """Raw facts the in-page script reports."""
    model_config = ConfigDict(populate_by_name=True)

    viewport_content: Optional[str] = Field(default=None, alias="viewportContent")
    autoplay: List[RawAutoplayElement] = Field(default_factory=list)
    tabindex: List[RawTabindexElement] = Field(default_factory=list)
    interactive_count: int = Field(default=0, alias="interactiveCount")
    style_selectors: List[str] = Field(default_factory=list, alias="styleSelectors")
    unreadable_stylesheets: int = Field(default=0, alias="unreadableStylesheets")
    refresh_meta: bool = Field(default=False, alias="refreshMeta")
    has_set_timeout: bool = Field(default=False, alias="hasSetTimeout")
    has_set_interval: bool = Field(default=False, alias="hasSetInterval")


class ExtendedChecksService:

    @staticmethod
    def run(page) -> ExtendedChecks:
        """
        Collect a DOM snapshot from the page and evaluate all five checks on it.

        Raises:
            ExtendedChecksError: If the script fails or returns something unusable
        """
        try:
            raw = page.evaluate(_COLLECT_SNAPSHOT, list(INTERACTIVE_SELECTORS))
        except WebDriverException as e:
            raise ExtendedChecksError(f"Extended checks failed: {e.msg or str(e)}") from e

        if not isinstance(raw, dict):
            raise ExtendedChecksError("Extended checks returned no result")

        try:
            snapshot = DomSnapshot.model_validate(raw)
        except ValidationError as e:
            raise ExtendedChecksError(f"Extended checks returned malformed data: {e}") from e

        if snapshot.unreadable_stylesheets:
            logger.info(f"Skipped {snapshot.unreadable_stylesheets} cross-origin stylesheet(s)")

        checks = ExtendedChecksService.evaluate(snapshot)
        logger.info(f"Extended checks: {checks.issue_count} issues")
        return checks

    @staticmethod
    def evaluate(snapshot: DomSnapshot) -> ExtendedChecks:
        return ExtendedChecks(
            viewport=check_viewport(snapshot.viewport_content),
            autoplay_media=check_autoplay_media(snapshot.autoplay),
            tab_order=check_tab_order(snapshot.tabindex),
            focus_visible=check_focus_visible(
                has_focus_rule(snapshot.style_selectors), snapshot.interactive_count
            ),
            timing=check_timing(
                snapshot.refresh_meta, snapshot.has_set_timeout, snapshot.has_set_interval
            ),
        )


def build_selector(tag: str, element_id: str = "", class_name: str = "") -> str:
    """tag#id, else tag.firstClass, else the bare tag."""
    tag = tag.lower()
    if element_id:
        return f"{tag}#{element_id}"
    classes = class_name.split()
    if classes:
        return f"{tag}.{classes[0]}"
    return tag


def has_focus_rule(selectors: Iterable[str]) -> bool:
    """True when any CSS rule targets a focus state (:focus, :focus-visible, :focus-within)."""
    return any(":focus" in selector for selector in selectors)


def parse_viewport_content(content: str) -> Dict[str, str]:
    """'width=device-width, user-scalable=no' -> {'width': 'device-width', 'user-scalable': 'no'}"""
    directives = {}
    for part in re.split(r"[,;]", content):
        if "=" not in part:
            continue
        key, value = part.split("=", 1)
        directives[key.strip().lower()] = value.strip()
    return directives


def parse_scale(value: Optional[str]) -> Optional[float]:
    """Leading number of a scale directive, None when there is none."""
    match = re.match(r"\s*([+-]?(?:\d+\.?\d*|\.\d+))", value or "")
    return float(match.group(1)) if match else None


def check_viewport(content: Optional[str]) -> ViewportCheck:
    if content is None:
        return ViewportCheck()

    directives = parse_viewport_content(content)
    user_scalable = directives.get("user-scalable", "").lower() != "no"
    max_scale = parse_scale(directives.get("maximum-scale"))
    issues = []

    if not user_scalable:
        issues.append(
            "Viewport meta tag sets user-scalable=no, which prevents users from zooming "
            "the page (WCAG 1.4.4)"
        )

    scale_limited = max_scale is not None and max_scale < MIN_MAXIMUM_SCALE
    if scale_limited:
        issues.append(
            f"Viewport meta tag limits maximum-scale to {max_scale:g}; users must be "
            f"able to zoom to at least 200% (WCAG 1.4.4)"
        )

    return ViewportCheck(
        blocks_zoom=not user_scalable or scale_limited,
        user_scalable=user_scalable,
        max_scale=max_scale,
        issues=tuple(issues),
    )


def check_autoplay_media(elements: List[RawAutoplayElement]) -> AutoplayMediaCheck:
    recorded = []
    issues = []

    for element in elements:
        tag = element.tag.lower()
        selector = element.selector
        recorded.append(AutoplayElement(tag=tag, has_controls=element.has_controls, selector=selector))

        if element.has_controls:
            continue
        if tag == "audio":
            issues.append(
                f"Audio element {selector} plays automatically without controls; "
                f"users must be able to pause or stop it (WCAG 1.4.2)"
            )
        elif tag == "video":
            issues.append(
                f"Video element {selector} plays automatically without controls; "
                f"moving content must be pausable (WCAG 2.2.2)"
            )

    return AutoplayMediaCheck(
        has_autoplay_audio=any(e.tag == "audio" for e in recorded),
        has_autoplay_video=any(e.tag == "video" for e in recorded),
        elements=tuple(recorded),
        issues=tuple(issues),
    )


def parse_tabindex(value: Optional[str]) -> int:
    """Leading integer of a tabindex attribute; anything non-numeric counts as 0."""
    match = re.match(r"\s*([+-]?\d+)", value or "")
    return int(match.group(1)) if match else 0


def check_tab_order(elements: List[RawTabindexElement]) -> TabOrderCheck:
    positive = []
    for element in elements:
        tabindex = parse_tabindex(element.tabindex)
        if tabindex > 0:
            positive.append(TabindexElement(selector=element.selector, tabindex=tabindex))

    if not positive:
        return TabOrderCheck()

    max_tabindex = max(e.tabindex for e in positive)
    return TabOrderCheck(
        has_positive_tabindex=True,
        max_tabindex=max_tabindex,
        elements_with_tabindex=tuple(positive),
        issues=(
            f"{len(positive)} element(s) use a positive tabindex (max {max_tabindex}), "
            f"which overrides the natural focus order (WCAG 2.4.3)",
        ),
    )


def check_focus_visible(has_focus_styles: bool, interactive_count: int) -> FocusVisibleCheck:
    missing = not has_focus_styles and interactive_count > 0

    return FocusVisibleCheck(
        has_focus_styles=has_focus_styles,
        elements_without_focus=interactive_count if missing else 0,
        checked_selectors=INTERACTIVE_SELECTORS,
        issues=(
            f"No :focus styles found in the page stylesheets for {interactive_count} interactive "
            f"element(s); keyboard focus may not be visible (WCAG 2.4.7)",
        ) if missing else (),
    )


def check_timing(refresh_meta: bool, has_set_timeout: bool, has_set_interval: bool) -> TimingCheck:
    issues = ()
    if refresh_meta:
        issues = (
            'Page uses <meta http-equiv="refresh"> to reload or redirect automatically; '
            'users cannot turn off or extend the time limit (WCAG 2.2.1)',
        )

    return TimingCheck(
        has_set_timeout=has_set_timeout,
        has_set_interval=has_set_interval,
        refresh_meta=refresh_meta,
        issues=issues,
    )

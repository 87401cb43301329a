"""
Violation categorizer and report builder.

Pure functions over a list of violations: nothing here touches the network,
the database or the violations themselves, so a report can be rebuilt from a
stored check as often as it is requested.
"""
from typing import Dict, List, NamedTuple, Optional, Sequence

from app.features.accessibility.schemas.analysis import ExtendedChecks, ViolationDetail
from app.features.accessibility.schemas.check import AccessibilityReport, CategoryAnalysis
from app.features.accessibility.services import translations


class CategoryRule(NamedTuple):
    key: str
    name: str
    keywords: Sequence[str]
    recommendations: Sequence[str]


# Order matters: a violation belongs to the first category whose keyword its rule id contains
CATEGORY_RULES = (
    CategoryRule(
        key="images",
        name="Images and alternative text",
        keywords=("image", "alt", "img"),
        recommendations=(
            "Add an alt attribute to every image that describes its content",
            'Use an empty alt="" or role="presentation" for decorative images',
            "Keep alt text short and accurate",
        ),
    ),
    CategoryRule(
        key="contrast",
        name="Color contrast",
        keywords=("color", "contrast"),
        recommendations=(
            "Raise the contrast between text and background to at least 4.5:1 for normal text",
            "Large text (18pt, or 14pt bold) needs a contrast of at least 3:1",
            "Check contrast with a contrast tool when choosing colors",
        ),
    ),
    CategoryRule(
        key="navigation",
        name="Navigation and focus",
        keywords=("focus", "tabindex", "bypass", "keyboard"),
        recommendations=(
            "Give every interactive element a visible focus indicator",
            "Avoid positive tabindex values",
            "Add a 'Skip to content' link at the top of the page",
            "Check that keyboard navigation follows a logical order",
        ),
    ),
    CategoryRule(
        key="semantics",
        name="Semantics and structure",
        keywords=("heading", "landmark", "region", "list", "html-has-lang"),
        recommendations=(
            "Use a correct heading hierarchy (h1, h2, h3...)",
            "Add HTML5 landmark elements (header, main, nav, footer)",
            "Make sure the <html> element has a lang attribute",
            "Group related items with lists (<ul>, <ol>)",
        ),
    ),
    CategoryRule(
        key="forms",
        name="Forms and controls",
        keywords=("label", "form", "input", "button-name", "select"),
        recommendations=(
            "Associate every form field with a <label>",
            "Give every button descriptive text or an aria-label",
            "Use placeholder only as a hint, never instead of a label",
            "Group related fields with <fieldset> and <legend>",
        ),
    ),
    CategoryRule(
        key="aria",
        name="ARIA attributes",
        keywords=("aria",),
        recommendations=(
            "Prefer native HTML elements over ARIA where possible",
            "Make sure ARIA attributes are applied correctly",
            "Check that every required ARIA attribute is present",
            "Avoid conflicts between ARIA and native HTML semantics",
        ),
    ),
)

OVERALL_RECOMMENDATIONS = {
    "priority": "Priority 1: fix critical and serious violations first; they have the largest impact on accessibility",
    "html_errors": "Fix HTML validation errors; invalid markup can confuse screen readers",
    "zoom": "Allow the page to be zoomed; this is essential for users with low vision",
    "autoplay": "Remove media autoplay or provide controls to pause it",
    "component_library": "Consider a UI component library with built-in accessibility support",
    "screen_reader_testing": "After fixing, test the page with screen readers (NVDA, JAWS)",
    "user_testing": "Involve users with disabilities in testing",
}

# Beyond this many violations, fixing them one by one stops scaling
MANY_VIOLATIONS_THRESHOLD = 20

DETAILED_CATEGORY_LIMIT = 3


def match_category(rule_id: str) -> Optional[CategoryRule]:
    for rule in CATEGORY_RULES:
        if any(keyword in rule_id for keyword in rule.keywords):
            return rule
    return None


def categorize_violations(
    violations: Sequence[ViolationDetail], lang: str = translations.DEFAULT_LANGUAGE
) -> List[CategoryAnalysis]:
    """
    Group violations into the fixed categories, most frequent first.

    Each violation is counted in at most one category. Violations that match
    no category are left out of the breakdown.
    """
    categories: Dict[str, CategoryAnalysis] = {}

    for violation in violations:
        rule = match_category(violation.id)
        if rule is None:
            continue

        category = categories.get(rule.key)
        if category is None:
            category = CategoryAnalysis(
                key=rule.key,
                name=translations.category_name(rule.key, rule.name, lang),
                recommendations=translations.category_recommendations(
                    rule.key, list(rule.recommendations), lang
                ),
            )
            categories[rule.key] = category

        category.count += 1
        if violation.impact in ("critical", "serious"):
            category.severity = "critical"
        elif violation.impact == "moderate" and category.severity != "critical":
            category.severity = "high"

    # sorted() is stable: equal counts keep first-seen order
    return sorted(categories.values(), key=lambda c: c.count, reverse=True)


def build_recommendations(
    violations: Sequence[ViolationDetail],
    html_error_count: int,
    extended_checks: Optional[ExtendedChecks] = None,
    lang: str = translations.DEFAULT_LANGUAGE,
) -> List[str]:
    """Overall recommendations in a fixed order, not sorted by severity."""
    keys = []

    if any(v.impact in ("critical", "serious") for v in violations):
        keys.append("priority")

    if html_error_count > 0:
        keys.append("html_errors")

    if extended_checks is not None:
        if extended_checks.viewport.blocks_zoom:
            keys.append("zoom")
        media = extended_checks.autoplay_media
        if media.has_autoplay_audio or media.has_autoplay_video:
            keys.append("autoplay")

    if len(violations) > MANY_VIOLATIONS_THRESHOLD:
        keys.append("component_library")

    keys.extend(["screen_reader_testing", "user_testing"])

    return [
        translations.overall_recommendation(key, OVERALL_RECOMMENDATIONS[key], lang)
        for key in keys
    ]


def build_report(
    violations: Sequence[ViolationDetail],
    html_error_count: int,
    html_warning_count: int,
    extended_checks: Optional[ExtendedChecks] = None,
    lang: str = translations.DEFAULT_LANGUAGE,
) -> AccessibilityReport:
    categories = categorize_violations(violations, lang)

    return AccessibilityReport(
        total_violations=len(violations),
        html_error_count=html_error_count,
        html_warning_count=html_warning_count,
        extended_issue_count=extended_checks.issue_count if extended_checks else 0,
        has_issues=bool(violations) or html_error_count > 0,
        categories=categories,
        detailed_categories=categories[:DETAILED_CATEGORY_LIMIT],
        recommendations=build_recommendations(violations, html_error_count, extended_checks, lang),
    )

from typing import Any, Dict, List, Sequence

from pydantic import ValidationError

from app.features.accessibility.exceptions import AnalysisError
from app.features.accessibility.schemas.analysis import (
    IMPACT_LEVELS,
    AnalysisResult,
    ViolationDetail,
)
from app.features.accessibility.services.extended_checks import ExtendedChecksService
from app.features.accessibility.services.html_validator import HTMLValidatorService
from app.features.accessibility.services.page_loader import PageLoaderService
from app.features.accessibility.services.rule_engine import RuleEngineService
from app.platform.logger import get_logger

logger = get_logger("accessibility_analyzer")


class AccessibilityAnalyzerService:
    """
    Runs the full accessibility analysis for one URL.

    Sequence, all against the same rendered page:
    1. Load the page (fatal on failure)
    2. Capture final URL, title and serialized HTML
    3. axe-core rule engine (fatal on failure)
    4. W3C markup validation of the captured HTML (degrades, never fatal)
    5. Extended DOM checks (fatal on failure)
    6. Tally violations by impact

    Nothing is retried. The page is closed on every exit path.
    """

    @staticmethod
    def analyze(url: str) -> AnalysisResult:
        """
        Analyze a URL and return the combined result.

        Args:
            url: Absolute http(s) URL to analyze

        Returns:
            AnalysisResult

        Raises:
            AnalysisError: If the page cannot be loaded, axe-core fails or the
                extended checks fail. No partial result is returned.
        """
        logger.info(f"Starting accessibility analysis for {url}")

        page = PageLoaderService.load_page(url)
        try:
            tested_url = page.current_url
            page_title = page.title
            html = page.page_source

            axe_results = RuleEngineService.run(page)
            html_validation = HTMLValidatorService.validate_html(html)
            extended_checks = ExtendedChecksService.run(page)

            violations = AccessibilityAnalyzerService._parse_violations(axe_results["violations"])
            counts = AccessibilityAnalyzerService.count_by_impact(violations)

            result = AnalysisResult(
                url=url,
                tested_url=tested_url,
                page_title=page_title,
                total_violations=len(violations),
                critical_count=counts["critical"],
                serious_count=counts["serious"],
                moderate_count=counts["moderate"],
                minor_count=counts["minor"],
                passed_count=len(axe_results["passes"]),
                violations=violations,
                passes=axe_results["passes"],
                incomplete=axe_results["incomplete"],
                html_error_count=html_validation.error_count,
                html_warning_count=html_validation.warning_count,
                html_validation_messages=html_validation.messages,
                html_validation_failed=html_validation.validation_failed,
                html_validation_error=html_validation.validation_error,
                extended_checks=extended_checks,
            )

            logger.info(
                f"Analysis complete for {tested_url}: {result.total_violations} violations "
                f"({result.critical_count} critical), {result.html_error_count} HTML errors"
            )
            return result

        except AnalysisError as e:
            logger.error(f"Analysis failed for {url}: {str(e)}")
            raise
        except Exception as e:
            logger.error(f"Unexpected error analyzing {url}: {str(e)}", exc_info=True)
            raise AnalysisError(f"Failed to analyze URL: {str(e)}") from e
        finally:
            page.close()

    @staticmethod
    def _parse_violations(raw_violations: List[Dict[str, Any]]) -> List[ViolationDetail]:
        try:
            return [ViolationDetail.model_validate(raw) for raw in raw_violations]
        except ValidationError as e:
            raise AnalysisError(f"axe-core returned malformed violations: {e}") from e

    @staticmethod
    def count_by_impact(violations: Sequence[ViolationDetail]) -> Dict[str, int]:
        """Violations per impact level; unknown impacts are left out of every bucket."""
        counts = {impact: 0 for impact in IMPACT_LEVELS}
        for violation in violations:
            if violation.impact in counts:
                counts[violation.impact] += 1
        return counts

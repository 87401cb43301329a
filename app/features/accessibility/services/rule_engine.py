import logging
from typing import Any, Dict

from axe_selenium_python import Axe
from selenium.common.exceptions import WebDriverException

from app.features.accessibility.exceptions import RuleEngineError
from app.platform.config import settings

logger = logging.getLogger(__name__)

# Conformance profile: only rules tagged with one of these run
WCAG_TAGS = ("wcag2a", "wcag2aa", "wcag21a", "wcag21aa")


class RuleEngineService:
    """Runs axe-core inside a rendered page"""

    @staticmethod
    def run(page) -> Dict[str, Any]:
        """
        Inject axe-core and run it restricted to the WCAG 2.0/2.1 A and AA rules.

        Args:
            page: BrowserPage (anything exposing the live WebDriver as .driver)

        Returns:
            {"violations": [...], "passes": [...], "incomplete": [...]} exactly
            as axe-core produced them

        Raises:
            RuleEngineError: If axe-core cannot be injected or fails to run
        """
        if settings.AXE_CORE_PATH:
            axe = Axe(page.driver, script_url=settings.AXE_CORE_PATH)
        else:
            axe = Axe(page.driver)

        try:
            axe.inject()
        except OSError as e:
            raise RuleEngineError(f"Cannot read axe-core script: {e}") from e
        except WebDriverException as e:
            raise RuleEngineError(f"Failed to inject axe-core: {e.msg or str(e)}") from e

        # Options are rendered into the script with %s, so lists only
        options = {"runOnly": {"type": "tag", "values": list(WCAG_TAGS)}}
        try:
            results = axe.run(options=options)
        except WebDriverException as e:
            raise RuleEngineError(f"axe-core run failed: {e.msg or str(e)}") from e

        if not isinstance(results, dict):
            raise RuleEngineError("axe-core returned no result")

        outcome = {
            "violations": results.get("violations") or [],
            "passes": results.get("passes") or [],
            "incomplete": results.get("incomplete") or [],
        }
        logger.info(
            f"axe-core: {len(outcome['violations'])} violations, "
            f"{len(outcome['passes'])} passes, {len(outcome['incomplete'])} incomplete"
        )
        return outcome

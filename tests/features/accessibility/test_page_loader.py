"""
Tests for the page loader and the BrowserPage wrapper.
"""
from unittest.mock import MagicMock, patch

import pytest
from selenium.common.exceptions import TimeoutException, WebDriverException

from app.features.accessibility.exceptions import AnalysisError, PageLoadError
from app.features.accessibility.services.page_loader import BrowserPage, PageLoaderService
from app.platform.config import settings

PAGE_LOADER = "app.features.accessibility.services.page_loader"


@pytest.fixture
def mock_driver():
    driver = MagicMock()
    driver.current_url = "https://example.com/"
    driver.title = "Example Domain"
    driver.page_source = "<html></html>"
    driver.execute_script.return_value = "complete"
    return driver


class TestBrowserPage:

    def test_properties(self, mock_driver):
        page = BrowserPage(mock_driver)

        assert page.current_url == "https://example.com/"
        assert page.title == "Example Domain"
        assert page.page_source == "<html></html>"

    def test_missing_title_is_empty_string(self, mock_driver):
        mock_driver.title = None

        assert BrowserPage(mock_driver).title == ""

    def test_evaluate_passes_arguments(self, mock_driver):
        page = BrowserPage(mock_driver)

        page.evaluate("return arguments[0]", ["a"])

        mock_driver.execute_script.assert_called_with("return arguments[0]", ["a"])

    def test_close_is_idempotent(self, mock_driver):
        page = BrowserPage(mock_driver)

        page.close()
        page.close()

        mock_driver.quit.assert_called_once()
        assert page.driver is None

    def test_close_tolerates_quit_errors(self, mock_driver):
        mock_driver.quit.side_effect = WebDriverException("session deleted")
        page = BrowserPage(mock_driver)

        page.close()

        assert page.driver is None


class TestPageLoaderService:

    def test_load_page(self, mock_driver):
        with patch.object(PageLoaderService, "build_driver", return_value=mock_driver):
            page = PageLoaderService.load_page("https://example.com")

        mock_driver.get.assert_called_once_with("https://example.com")
        assert isinstance(page, BrowserPage)
        assert page.driver is mock_driver

    def test_timeout_quits_driver(self, mock_driver):
        mock_driver.get.side_effect = TimeoutException("timed out")

        with patch.object(PageLoaderService, "build_driver", return_value=mock_driver):
            with pytest.raises(PageLoadError) as exc_info:
                PageLoaderService.load_page("https://slow.example.com")

        assert "Page load timeout" in str(exc_info.value)
        assert "https://slow.example.com" in str(exc_info.value)
        mock_driver.quit.assert_called_once()

    def test_navigation_error_quits_driver(self, mock_driver):
        mock_driver.get.side_effect = WebDriverException("net::ERR_NAME_NOT_RESOLVED")

        with patch.object(PageLoaderService, "build_driver", return_value=mock_driver):
            with pytest.raises(PageLoadError) as exc_info:
                PageLoaderService.load_page("https://nope.invalid")

        assert "ERR_NAME_NOT_RESOLVED" in str(exc_info.value)
        mock_driver.quit.assert_called_once()

    def test_browser_start_failure(self):
        with patch.object(
            PageLoaderService, "build_driver", side_effect=WebDriverException("chrome not found")
        ):
            with pytest.raises(PageLoadError) as exc_info:
                PageLoaderService.load_page("https://example.com")

        assert "Failed to start browser" in str(exc_info.value)

    def test_unexpected_error_quits_driver(self, mock_driver):
        mock_driver.get.side_effect = ConnectionRefusedError("[Errno 111] Connection refused")

        with patch.object(PageLoaderService, "build_driver", return_value=mock_driver):
            with pytest.raises(PageLoadError) as exc_info:
                PageLoaderService.load_page("https://example.com")

        assert "Unexpected error loading URL https://example.com" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ConnectionRefusedError)
        mock_driver.quit.assert_called_once()

    def test_unexpected_error_is_an_analysis_error(self, mock_driver):
        from app.features.accessibility.services.analyzer import AccessibilityAnalyzerService

        mock_driver.get.side_effect = ConnectionRefusedError("[Errno 111] Connection refused")

        with patch.object(PageLoaderService, "build_driver", return_value=mock_driver):
            with pytest.raises(AnalysisError):
                AccessibilityAnalyzerService.analyze("https://example.com")

        mock_driver.quit.assert_called_once()

    def test_unexpected_browser_start_failure(self):
        with patch.object(
            PageLoaderService, "build_driver", side_effect=ConnectionRefusedError("driver port closed")
        ):
            with pytest.raises(PageLoadError) as exc_info:
                PageLoaderService.load_page("https://example.com")

        assert "Failed to start browser" in str(exc_info.value)

    def test_timeout_setup_failure_quits_driver(self, mock_driver):
        mock_driver.set_script_timeout.side_effect = WebDriverException("invalid session id")

        with patch(f"{PAGE_LOADER}.webdriver.Chrome", return_value=mock_driver), \
             patch.object(settings, "CHROMEDRIVER_PATH", None):
            with pytest.raises(WebDriverException):
                PageLoaderService.build_driver()

        mock_driver.quit.assert_called_once()

    def test_timeout_setup_failure_is_a_page_load_error(self, mock_driver):
        mock_driver.set_page_load_timeout.side_effect = WebDriverException("invalid session id")

        with patch(f"{PAGE_LOADER}.webdriver.Chrome", return_value=mock_driver), \
             patch.object(settings, "CHROMEDRIVER_PATH", None):
            with pytest.raises(PageLoadError):
                PageLoaderService.load_page("https://example.com")

        mock_driver.quit.assert_called_once()
        mock_driver.get.assert_not_called()

    def test_ready_state_wait_gets_remaining_budget(self, mock_driver):
        with patch.object(PageLoaderService, "build_driver", return_value=mock_driver), \
             patch.object(settings, "PAGE_LOAD_TIMEOUT", 30), \
             patch(f"{PAGE_LOADER}.monotonic", side_effect=[100.0, 110.0]), \
             patch(f"{PAGE_LOADER}.WebDriverWait") as wait:
            PageLoaderService.load_page("https://example.com")

        wait.assert_called_once_with(mock_driver, 20.0)
        wait.return_value.until.assert_called_once()

    def test_navigation_using_whole_budget_times_out(self, mock_driver):
        with patch.object(PageLoaderService, "build_driver", return_value=mock_driver), \
             patch.object(settings, "PAGE_LOAD_TIMEOUT", 30), \
             patch(f"{PAGE_LOADER}.monotonic", side_effect=[100.0, 131.0]), \
             patch(f"{PAGE_LOADER}.WebDriverWait") as wait:
            with pytest.raises(PageLoadError) as exc_info:
                PageLoaderService.load_page("https://example.com")

        assert "Page load timeout after 30 seconds" in str(exc_info.value)
        wait.assert_not_called()
        mock_driver.quit.assert_called_once()


class TestLiveAnalysis:
    """
    End-to-end run against a real page.

    These are skipped by default as they require Chrome and network access.
    """

    @pytest.mark.skip(reason="Requires network access and Selenium WebDriver")
    def test_analyze_example_com(self):
        from app.features.accessibility.services.analyzer import AccessibilityAnalyzerService

        result = AccessibilityAnalyzerService.analyze("https://example.com")

        assert result.tested_url.startswith("https://example.com")
        assert result.total_violations == len(result.violations)
        assert result.passed_count > 0

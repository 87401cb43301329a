import logging
from time import monotonic
from typing import Any

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.support.ui import WebDriverWait

from app.features.accessibility.exceptions import PageLoadError
from app.platform.config import settings

logger = logging.getLogger(__name__)


class BrowserPage:
    """
    A rendered page owned by exactly one analysis.

    Wraps a Selenium WebDriver so the analysis code only sees the handful of
    operations it needs. Call close() when done; it is safe to call twice.
    """

    def __init__(self, driver: webdriver.Chrome):
        self.driver = driver

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    @property
    def title(self) -> str:
        return self.driver.title or ""

    @property
    def page_source(self) -> str:
        return self.driver.page_source

    def evaluate(self, script: str, *args) -> Any:
        """Run a synchronous script in the page and return its value."""
        return self.driver.execute_script(script, *args)

    def close(self) -> None:
        if self.driver is None:
            return
        try:
            self.driver.quit()
        except WebDriverException as e:
            logger.warning(f"Error closing browser: {str(e)}")
        finally:
            self.driver = None


class PageLoaderService:
    """Service for opening pages in headless Chrome"""

    @staticmethod
    def build_driver() -> webdriver.Chrome:
        chrome_options = Options()
        chrome_options.add_argument('--headless=new')
        chrome_options.add_argument('--no-sandbox')
        chrome_options.add_argument('--disable-dev-shm-usage')
        chrome_options.add_argument('--disable-gpu')
        chrome_options.add_argument(
            f'--window-size={settings.WINDOW_WIDTH},{settings.WINDOW_HEIGHT}'
        )

        if settings.CHROMEDRIVER_PATH:
            driver_service = Service(executable_path=settings.CHROMEDRIVER_PATH)
            driver = webdriver.Chrome(service=driver_service, options=chrome_options)
        else:
            driver = webdriver.Chrome(options=chrome_options)

        try:
            driver.set_page_load_timeout(settings.PAGE_LOAD_TIMEOUT)
            driver.set_script_timeout(settings.SCRIPT_TIMEOUT)
        except Exception:
            driver.quit()
            raise
        return driver

    @staticmethod
    def load_page(url: str) -> BrowserPage:
        """
        Open a URL and wait for the document to finish loading.

        Navigation and the readyState wait share one PAGE_LOAD_TIMEOUT budget.

        IMPORTANT: Caller MUST call page.close() when done!

        Args:
            url: The URL to load

        Returns:
            BrowserPage with the page rendered

        Raises:
            PageLoadError: On any failure; the browser is quit before raising
        """
        try:
            driver = PageLoaderService.build_driver()
        except WebDriverException as e:
            raise PageLoadError(f"Failed to start browser: {e.msg or str(e)}") from e
        except Exception as e:
            raise PageLoadError(f"Failed to start browser: {str(e)}") from e

        try:
            logger.info(f"Navigating to {url}")
            started = monotonic()
            driver.get(url)

            remaining = settings.PAGE_LOAD_TIMEOUT - (monotonic() - started)
            if remaining <= 0:
                raise TimeoutException("navigation used the whole page load budget")
            WebDriverWait(driver, remaining).until(
                lambda d: d.execute_script("return document.readyState") == "complete"
            )
            return BrowserPage(driver)
        except TimeoutException as e:
            driver.quit()
            raise PageLoadError(
                f"Page load timeout after {settings.PAGE_LOAD_TIMEOUT} seconds for URL: {url}"
            ) from e
        except WebDriverException as e:
            driver.quit()
            raise PageLoadError(f"Failed to load URL {url}: {e.msg or str(e)}") from e
        except Exception as e:
            driver.quit()
            raise PageLoadError(f"Unexpected error loading URL {url}: {str(e)}") from e

"""Behave environment hooks for the DemoQA suite.

This module starts a headless Chrome/Chromium browser before the run and
shuts it down afterwards. It is robust in DevContainers on Debian/Ubuntu:

Priority of driver resolution:
  1) Local chromedriver from system packages (chromium-driver)
  2) Selenium Manager (Selenium 4.10+)
  3) webdriver-manager (when USE_WDM=1)

Browser binary detection honors CHROME_BIN and common Linux paths.

Settings (BASE_URL, API_BASE_URL, DOWNLOADS_DIR, timeouts) are taken in
this order:
  1) env:      NAME
  2) behave:   -D NAME=...
  3) default   (see demoqa/config.py)

The objects API fallback context is created once per run so a rate limit
seen in one scenario keeps every later scenario on the mock store.
"""

from __future__ import annotations

import logging
import os
import shutil
from typing import Optional

from behave.model_core import Status
from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options as ChromeOptions

from demoqa import selectors as S
from demoqa.alerts_frames_windows import AlertsFramesWindowsPage
from demoqa.api import ApiFallbackContext, ObjectsClient
from demoqa.config import Settings
from demoqa.dynamic_properties import DynamicPropertiesPage
from demoqa.grid import WebTablesGrid
from demoqa.practice_form import PracticeFormPage
from demoqa.web_tables import WebTablesPage

logger = logging.getLogger("demoqa")


def _detect_chrome_binary() -> Optional[str]:
    """Return a likely Chrome/Chromium binary path or None."""
    env_bin = os.getenv("CHROME_BIN")
    if env_bin and os.path.exists(env_bin):
        return env_bin

    # Common paths in DevContainers (Debian/Ubuntu)
    for cand in ("/usr/bin/chromium", "/usr/bin/chromium-browser", "/usr/bin/google-chrome"):
        if os.path.exists(cand):
            return cand

    for name in ("chromium", "chromium-browser", "google-chrome", "chrome"):
        path = shutil.which(name)
        if path:
            return path
    return None


def _detect_chromedriver() -> Optional[str]:
    """Return a likely chromedriver path from system packages or PATH."""
    env_drv = os.getenv("CHROMEDRIVER")
    if env_drv and os.path.exists(env_drv):
        return env_drv

    for cand in ("/usr/bin/chromedriver", "/usr/lib/chromium/chromedriver"):
        if os.path.exists(cand):
            return cand

    return shutil.which("chromedriver")


def _chrome_options(settings: Settings) -> ChromeOptions:
    options = ChromeOptions()
    if settings.headless:
        options.add_argument("--headless=new")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--window-size=1366,768")
    options.add_experimental_option(
        "prefs",
        {
            "download.default_directory": settings.downloads_dir,
            "download.prompt_for_download": False,
            "safebrowsing.enabled": True,
        },
    )

    chrome_bin = _detect_chrome_binary()
    if chrome_bin:
        options.binary_location = chrome_bin
    return options


def _start_browser(settings: Settings):
    """Start Chrome with the first driver resolution strategy that applies."""
    options = _chrome_options(settings)
    driver_path = _detect_chromedriver()

    if driver_path:
        from selenium.webdriver.chrome.service import Service as ChromeService

        return webdriver.Chrome(service=ChromeService(executable_path=driver_path), options=options)

    if not settings.use_wdm:
        return webdriver.Chrome(options=options)

    from selenium.webdriver.chrome.service import Service as ChromeService
    from webdriver_manager.chrome import ChromeDriverManager

    return webdriver.Chrome(service=ChromeService(ChromeDriverManager().install()), options=options)


def _block_third_party(browser) -> None:
    """Drop slow ad/analytics hosts that can hold up the load event."""
    try:
        browser.execute_cdp_cmd("Network.enable", {})
        browser.execute_cdp_cmd("Network.setBlockedURLs", {"urls": S.THIRD_PARTY_URLS})
    except WebDriverException as exc:
        logger.warning("Could not block third-party hosts: %s", exc)


def before_all(context):
    """Start a headless browser and create the run-wide API fallback."""
    context.config.setup_logging()
    context.settings = Settings(context.config.userdata)
    os.makedirs(context.settings.downloads_dir, exist_ok=True)
    logger.info("Running against %s", context.settings)

    context.api_fallback = ApiFallbackContext()

    try:
        context.browser = _start_browser(context.settings)
        context.browser.set_page_load_timeout(context.settings.page_load_timeout)
        _block_third_party(context.browser)

    except Exception as exc:  # pragma: no cover  (helpful runtime messaging)
        tips = [
            "Cannot start Chrome/Chromium in headless mode. Common fixes:",
            "  1) Install OS packages (recommended in DevContainers):",
            "       sudo apt-get update && sudo apt-get install -y chromium chromium-driver fonts-liberation",
            "  2) If Chromium is at a non-standard path, set:",
            "       export CHROME_BIN=/usr/bin/chromium",
            "     If chromedriver is at a non-standard path, set:",
            "       export CHROMEDRIVER=/usr/bin/chromedriver",
            "  3) If corporate network blocks Selenium Manager downloads, try:",
            "       USE_WDM=1 behave",
            "",
            f"Original error: {type(exc).__name__}: {exc}",
        ]
        raise RuntimeError("\n".join(tips)) from exc


def before_scenario(context, scenario):
    """Fresh aliases, page helpers and API client for each scenario."""
    settings = context.settings
    context.aliases = {}
    context.last_response = None
    context.last_body = None
    context.grid = WebTablesGrid(
        context.browser, timeout=settings.wait_timeout, settle_seconds=settings.grid_settle
    )
    context.web_tables = WebTablesPage(
        context.browser, settings.base_url, grid=context.grid, timeout=settings.wait_timeout
    )
    pages = {"timeout": settings.wait_timeout, "ready_timeout": settings.ready_timeout}
    context.dynamic_properties = DynamicPropertiesPage(context.browser, settings.base_url, **pages)
    context.practice_form = PracticeFormPage(context.browser, settings.base_url, **pages)
    context.alerts_windows = AlertsFramesWindowsPage(context.browser, settings.base_url, **pages)
    context.api = ObjectsClient(settings.api_base_url, context.api_fallback, timeout=settings.api_timeout)
    logger.info("Scenario: %s", scenario.name)


def after_scenario(context, scenario):
    """Close the API session and any tab the scenario opened."""
    api = getattr(context, "api", None)
    if api is not None:
        api.session.close()
    windows = getattr(context, "alerts_windows", None)
    if windows is not None:
        windows.close_extra_windows()
    if scenario.status == Status.failed:
        logger.warning("Scenario failed: %s", scenario.name)


def after_all(context):
    """Shut down the browser if it was started."""
    browser = getattr(context, "browser", None)
    if browser:
        browser.quit()

"""Menu-driven navigation across the DemoQA sections."""

import logging
import re
from urllib.parse import urlparse

from selenium.webdriver.common.by import By

from demoqa import selectors as S
from demoqa.waits import poll_until

logger = logging.getLogger(__name__)

READY_TIMEOUT = 20


def js_click(driver, element) -> None:
    """Scroll into view and click through overlays (ads, sticky banners)."""
    driver.execute_script("arguments[0].scrollIntoView({block: 'center'});", element)
    driver.execute_script("arguments[0].click();", element)


def _by_text(driver, selector: str, label: str):
    wanted = label.strip().lower()
    for element in driver.find_elements(By.CSS_SELECTOR, selector):
        if element.text.strip().lower() == wanted:
            return element
    return None


def current_path(driver) -> str:
    return urlparse(driver.current_url).path


def wait_path(driver, pattern: str, timeout: float = READY_TIMEOUT) -> None:
    """Wait until the current URL path matches ``pattern``."""
    poll_until(
        driver,
        lambda d: re.search(pattern, current_path(d)),
        timeout,
        lambda: f'URL "{driver.current_url}" does not match {pattern}',
    )


def open_home(driver, base_url: str) -> None:
    driver.get(base_url + "/")


def open_page(driver, base_url: str, path: str, timeout: float = READY_TIMEOUT) -> None:
    """Open a page by URL and wait for the router to land on it."""
    driver.get(base_url + path)
    wait_path(driver, re.escape(path.rstrip("/")) + "/?$", timeout)


def open_section(driver, base_url: str, card: str, path: str, timeout: float = READY_TIMEOUT) -> None:
    """Home -> category card; falls back to ``path`` when the card does not navigate."""
    open_home(driver, base_url)
    element = poll_until(
        driver,
        lambda d: _by_text(d, S.HOME_CARD, card),
        timeout,
        f'Home card "{card}" not found',
    )
    js_click(driver, element)
    pattern = re.escape(path) + "/?$"
    try:
        wait_path(driver, pattern, timeout)
    except AssertionError:
        logger.info("%s card did not navigate; opening %s directly", card, path)
        driver.get(base_url + path)
        wait_path(driver, pattern, timeout)


def open_elements(driver, base_url: str, timeout: float = READY_TIMEOUT) -> None:
    open_section(driver, base_url, "Elements", "/elements", timeout)


def open_forms(driver, base_url: str, timeout: float = READY_TIMEOUT) -> None:
    open_section(driver, base_url, "Forms", "/forms", timeout)


def select_menu_item(driver, label: str, timeout: float = READY_TIMEOUT) -> None:
    """Click the left-menu entry whose text equals ``label`` (case-insensitive)."""
    item = poll_until(
        driver,
        lambda d: _by_text(d, S.LEFT_MENU_ITEM, label),
        timeout,
        f'Menu item "{label}" not found',
    )
    js_click(driver, item)

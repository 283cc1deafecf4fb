"""Dynamic Properties page: controls that change state a few seconds after load.

The page enables one button, recolors another and reveals a third about five
seconds after it renders. A slow page load can hide the initial state, so the
"initially" checks report whether they could observe it instead of failing.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Optional, Tuple

from selenium.webdriver.common.by import By

from demoqa import navigation
from demoqa import selectors as S
from demoqa.waits import poll_until

logger = logging.getLogger(__name__)

CHANGE_TIMEOUT = 7
DANGER_RGB = (220, 53, 69)
WHITE_RGB = (255, 255, 255)


def parse_rgb(text: str) -> Optional[Tuple[int, int, int]]:
    """(r, g, b) from a computed ``rgb(...)``/``rgba(...)`` color, or None."""
    numbers = [int(n) for n in re.findall(r"\d+", text or "")]
    if len(numbers) < 3:
        return None
    return numbers[0], numbers[1], numbers[2]


def near(color: Tuple[int, int, int], target: Tuple[int, int, int], tolerance: int) -> bool:
    return all(abs(a - b) <= tolerance for a, b in zip(color, target))


def is_danger_color(text: str) -> bool:
    """Close to Bootstrap's danger red; some themes compute near-white instead."""
    rgb = parse_rgb(text)
    if rgb is None:
        return False
    return near(rgb, DANGER_RGB, 24) or near(rgb, WHITE_RGB, 8)


class DynamicPropertiesPage:
    """Interactions with https://demoqa.com/dynamic-properties."""

    PATH_PATTERN = r"/dynamic-properties/?$"

    def __init__(self, driver, base_url: str, timeout: float = 10, ready_timeout: float = 20):
        self.driver = driver
        self.base_url = base_url
        self.timeout = timeout
        self.ready_timeout = ready_timeout

    def open(self) -> None:
        """Home -> Elements -> Dynamic Properties, menus only."""
        navigation.open_elements(self.driver, self.base_url, self.ready_timeout)
        navigation.select_menu_item(self.driver, "Dynamic Properties", self.ready_timeout)
        navigation.wait_path(self.driver, self.PATH_PATTERN, self.ready_timeout)
        self.wait_loaded()

    def wait_loaded(self) -> None:
        poll_until(
            self.driver,
            lambda driver: driver.find_element(By.CSS_SELECTOR, S.ENABLE_AFTER),
            self.ready_timeout,
            "Dynamic Properties controls did not render",
        )

    def reload(self) -> None:
        self.driver.refresh()
        navigation.wait_path(self.driver, self.PATH_PATTERN, self.ready_timeout)
        self.wait_loaded()

    def header_text(self) -> str:
        headers = self.driver.find_elements(By.CSS_SELECTOR, S.MAIN_HEADER)
        return headers[0].text.strip() if headers else ""

    ##################################################
    # Buttons
    ##################################################

    @staticmethod
    def selector(label: str) -> str:
        try:
            return S.DYNAMIC_BUTTONS[label]
        except KeyError as error:
            raise AssertionError(f'Unknown dynamic control "{label}"') from error

    def button(self, label: str):
        return self.driver.find_element(By.CSS_SELECTOR, self.selector(label))

    def is_enabled(self, label: str) -> bool:
        button = self.button(label)
        return button.is_enabled() and button.get_attribute("disabled") is None

    def is_visible(self, label: str) -> bool:
        """False while the control is not yet in the DOM."""
        found = self.driver.find_elements(By.CSS_SELECTOR, self.selector(label))
        return bool(found) and found[0].is_displayed()

    def has_danger_class(self) -> bool:
        classes = self.button("Color Change").get_attribute("class") or ""
        return "text-danger" in classes.split()

    def color(self) -> str:
        return self.button("Color Change").value_of_css_property("color")

    def wait_enabled(self, label: str, timeout: float = CHANGE_TIMEOUT):
        poll_until(
            self.driver,
            lambda driver: self.is_enabled(label),
            timeout,
            f'"{label}" did not become enabled within {timeout}s',
        )
        return self.button(label)

    def wait_visible(self, label: str, timeout: float = CHANGE_TIMEOUT):
        poll_until(
            self.driver,
            lambda driver: self.is_visible(label),
            timeout,
            f'"{label}" did not become visible within {timeout}s',
        )
        return self.button(label)

    def wait_danger_class(self, timeout: float = CHANGE_TIMEOUT) -> None:
        def _message():
            classes = self.button("Color Change").get_attribute("class")
            return f'"Color Change" has no text-danger class (class="{classes}")'

        poll_until(self.driver, lambda driver: self.has_danger_class(), timeout, _message)

    def control_tags(self) -> Dict[str, str]:
        """Tag name of each dynamic control, upper-cased like the DOM reports it."""
        return {label: self.button(label).tag_name.upper() for label in S.DYNAMIC_BUTTONS}

    ##################################################
    # Random id text
    ##################################################

    def random_id(self) -> str:
        """The id of the "This text has random Id" paragraph."""

        def _id(driver):
            paragraph = driver.find_element(By.XPATH, S.RANDOM_ID_TEXT)
            return paragraph.is_displayed() and (paragraph.get_attribute("id") or "")

        return poll_until(
            self.driver, _id, self.timeout, 'The "This text has random Id" text has no id'
        )

    def random_text(self) -> str:
        return self.driver.find_element(By.XPATH, S.RANDOM_ID_TEXT).text

    def id_count(self, element_id: str) -> int:
        """How many elements in the document carry ``element_id``."""
        escaped = element_id.replace("\\", "\\\\").replace('"', '\\"')
        return len(self.driver.find_elements(By.CSS_SELECTOR, f'[id="{escaped}"]'))

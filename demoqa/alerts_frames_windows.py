"""Alerts, Frames, Nested Frames and Browser Windows pages.

Browser dialogs block the page until answered, so every helper that raises
one also answers it and returns the dialog text for later assertions.
"""

from __future__ import annotations

import logging
from typing import Optional

from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC

from demoqa import navigation
from demoqa import selectors as S
from demoqa.waits import poll_until

logger = logging.getLogger(__name__)

PAGES = {
    "Alerts": "/alerts",
    "Frames": "/frames",
    "Nested Frames": "/nestedframes",
    "Browser Windows": "/browser-windows",
}
# the timer button opens its alert after five seconds
TIMER_ALERT_TIMEOUT = 10
CONFIRM_TEXT = "Do you confirm action?"


class AlertsFramesWindowsPage:
    """Dialogs, iframes and extra tabs on the Alerts, Frame & Windows section."""

    def __init__(self, driver, base_url: str, timeout: float = 10, ready_timeout: float = 20):
        self.driver = driver
        self.base_url = base_url
        self.timeout = timeout
        self.ready_timeout = ready_timeout
        self.main_window: Optional[str] = None

    def open(self, page: str) -> None:
        if page not in PAGES:
            raise AssertionError(f'Unknown page "{page}"')
        navigation.open_page(self.driver, self.base_url, PAGES[page], self.ready_timeout)

    def _visible(self, selector: str):
        def _located(driver):
            element = driver.find_element(By.CSS_SELECTOR, selector)
            return element if element.is_displayed() else None

        return poll_until(self.driver, _located, self.timeout, f'"{selector}" is not visible')

    ##################################################
    # Dialogs
    ##################################################

    def wait_alert(self, timeout: Optional[float] = None):
        return poll_until(
            self.driver, EC.alert_is_present(), timeout or self.timeout, "No browser dialog appeared"
        )

    def _answer(self, selector: str, accept: bool = True, value: Optional[str] = None,
                timeout: Optional[float] = None) -> str:
        """Click the button, then answer the dialog it raises; returns its text."""
        self._visible(selector).click()
        alert = self.wait_alert(timeout)
        text = alert.text
        logger.info("Browser dialog: %s", text)
        if value is not None:
            alert.send_keys(value)
        if accept:
            alert.accept()
        else:
            alert.dismiss()
        return text

    def click_alert_button(self, label: str) -> str:
        """Alert buttons by caption; the timer button waits for its delayed alert."""
        if label not in S.ALERT_BUTTONS:
            raise AssertionError(f'Unknown alert button "{label}"')
        timeout = TIMER_ALERT_TIMEOUT if "after 5 seconds" in label else None
        return self._answer(S.ALERT_BUTTONS[label], timeout=timeout)

    def answer_confirm(self, accept: bool) -> str:
        text = self._answer(S.CONFIRM_BUTTON, accept=accept)
        if CONFIRM_TEXT not in text:
            raise AssertionError(f'Confirm dialog reads "{text}"')
        return text

    def answer_prompt(self, value: str) -> str:
        return self._answer(S.PROMPT_BUTTON, value=value)

    def result_text(self, selector: str) -> str:
        return self._visible(selector).text.strip()

    ##################################################
    # Frames
    ##################################################

    def _body_text(self) -> str:
        return poll_until(
            self.driver,
            lambda driver: driver.find_element(By.TAG_NAME, "body").text.strip(),
            self.timeout,
            "Frame body is empty",
        )

    def frame_text(self, frame_id: str) -> str:
        """Body text of the iframe with ``frame_id``."""
        frame = self.driver.find_element(By.CSS_SELECTOR, f"iframe#{frame_id}")
        self.driver.switch_to.frame(frame)
        try:
            return self._body_text()
        finally:
            self.driver.switch_to.default_content()

    def child_frame_text(self) -> str:
        """Body text of the iframe nested inside the parent frame."""
        self.driver.switch_to.frame(self.driver.find_element(By.CSS_SELECTOR, S.PARENT_FRAME))
        try:
            children = self.driver.find_elements(By.CSS_SELECTOR, S.CHILD_FRAME)
            if not children:
                raise AssertionError("The parent frame holds no child frame")
            self.driver.switch_to.frame(children[0])
            return self._body_text()
        finally:
            self.driver.switch_to.default_content()

    ##################################################
    # Windows
    ##################################################

    def open_new_tab(self) -> None:
        """Click "New Tab" and switch to the tab it opens."""
        self.main_window = self.driver.current_window_handle
        known = list(self.driver.window_handles)
        self._visible(S.TAB_BUTTON).click()
        poll_until(
            self.driver,
            EC.number_of_windows_to_be(len(known) + 1),
            self.timeout,
            "No new tab was opened",
        )
        handle = next(h for h in self.driver.window_handles if h not in known)
        self.driver.switch_to.window(handle)
        navigation.wait_path(self.driver, r"/sample/?$", self.timeout)

    def sample_heading(self) -> str:
        return self.result_text(S.SAMPLE_HEADING)

    def close_extra_windows(self) -> None:
        """Close every tab this page opened and go back to the first one."""
        if self.main_window is None:
            return
        for handle in list(self.driver.window_handles):
            if handle != self.main_window:
                self.driver.switch_to.window(handle)
                self.driver.close()
        self.driver.switch_to.window(self.main_window)
        self.main_window = None

"""Practice Form page: HTML5 validation, submission and the result modal."""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Dict, Iterable, List, Optional

from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys

from demoqa import navigation
from demoqa import selectors as S
from demoqa.waits import poll_until

logger = logging.getLogger(__name__)

MINIMAL_USER = {
    "First Name": "John",
    "Last Name": "Doe",
    "Gender": "Male",
    "Mobile": "1234567890",
}
REQUIRED_FIELDS = ("First Name", "Last Name", "Mobile", "Gender")
ADDRESS_LENGTH = 300
RESULT_TITLE = "Thanks for submitting the form"


def normalize_label(label: str) -> str:
    return re.sub(r"\s+", " ", label.strip().lower())


def field_selector(label: str) -> str:
    """Selector for a text field by its label; unknown labels match by placeholder."""
    wanted = normalize_label(label)
    for known, selector in S.PRACTICE_FIELDS.items():
        if normalize_label(known) == wanted:
            return selector
    compact = wanted.replace(" ", "")
    for known, selector in S.PRACTICE_FIELDS.items():
        if known.lower().replace(" ", "") == compact:
            return selector
    return f'input[placeholder="{label}"], textarea[placeholder="{label}"]'


def parse_list(text: str) -> List[str]:
    """A JSON list, or comma separated values with optional brackets and quotes."""
    try:
        parsed = json.loads(text)
    except ValueError:
        parsed = None
    if isinstance(parsed, list):
        return [str(item) for item in parsed]
    items = (item.strip().strip("[]").strip().strip('"') for item in text.split(","))
    return [item for item in items if item]


def multiline_address() -> str:
    """Exactly ADDRESS_LENGTH characters over three lines."""
    return "A" * 149 + "\n" + "B" * 148 + "\n" + "C"


class PracticeFormPage:
    """Interactions with https://demoqa.com/automation-practice-form."""

    PATH_PATTERN = r"/automation-practice-form/?$"

    def __init__(self, driver, base_url: str, timeout: float = 10, ready_timeout: float = 20):
        self.driver = driver
        self.base_url = base_url
        self.timeout = timeout
        self.ready_timeout = ready_timeout

    def _find(self, selector: str, visible: bool = True, within=None):
        root = within or self.driver

        def _located(driver):
            element = root.find_element(By.CSS_SELECTOR, selector)
            return element if (element.is_displayed() or not visible) else None

        state = "visible" if visible else "present"
        return poll_until(self.driver, _located, self.timeout, f'"{selector}" is not {state}')

    def open(self) -> None:
        """Home -> Forms -> Practice Form, menus only."""
        navigation.open_forms(self.driver, self.base_url, self.ready_timeout)
        navigation.select_menu_item(self.driver, "Practice Form", self.ready_timeout)
        navigation.wait_path(self.driver, self.PATH_PATTERN, self.ready_timeout)
        self._find(S.PRACTICE_FORM, visible=False)

    def submit(self) -> None:
        navigation.js_click(self.driver, self._find(S.FORM_SUBMIT, visible=False))

    ##################################################
    # Fields
    ##################################################

    def fill(self, label: str, value: str) -> None:
        field = self._find(field_selector(label))
        if not field.is_enabled():
            raise AssertionError(f'Field "{label}" is disabled')
        field.clear()
        if value:
            field.send_keys(value)

    def field_value(self, label: str) -> str:
        return self._find(field_selector(label), visible=False).get_attribute("value") or ""

    def choose_gender(self, gender: str) -> None:
        if gender not in S.GENDER_LABELS:
            raise AssertionError(f'Unknown gender "{gender}"')
        navigation.js_click(self.driver, self._find(S.GENDER_LABELS[gender], visible=False))

    def fill_minimal(self, skip: Optional[str] = None) -> None:
        """Fill the required fields, leaving out ``skip`` (case-insensitive)."""
        skipped = normalize_label(skip or "")
        for label, value in MINIMAL_USER.items():
            if normalize_label(label) == skipped:
                logger.info("Leaving %s empty", label)
            elif label == "Gender":
                self.choose_gender(value)
            else:
                self.fill(label, value)

    def mobile_maxlength(self) -> str:
        return self._find(S.PRACTICE_FIELDS["Mobile"], visible=False).get_attribute("maxlength") or ""

    ##################################################
    # Validation
    ##################################################

    def was_validated(self) -> bool:
        form = self._find(S.PRACTICE_FORM, visible=False)
        return "was-validated" in (form.get_attribute("class") or "").split()

    def _valid(self, element) -> bool:
        return bool(self.driver.execute_script("return arguments[0].checkValidity();", element))

    def field_is_valid(self, label: str) -> bool:
        """HTML5 validity; for Gender, whether any radio is invalid."""
        if normalize_label(label) == "gender":
            radios = self.driver.find_elements(By.CSS_SELECTOR, S.GENDER_INPUTS)
            return all(self._valid(radio) for radio in radios)
        return self._valid(self._find(field_selector(label), visible=False))

    def invalid_fields(self, labels: Iterable[str] = REQUIRED_FIELDS) -> List[str]:
        return [label for label in labels if not self.field_is_valid(label)]

    ##################################################
    # Hobbies and picture
    ##################################################

    def choose_hobbies(self, names: Iterable[str]) -> None:
        for name in names:
            if name not in S.HOBBY_LABELS:
                raise AssertionError(f'Unknown hobby "{name}"')
            navigation.js_click(self.driver, self._find(S.HOBBY_LABELS[name], visible=False))

    def selected_hobbies(self) -> List[str]:
        return [
            name
            for name, selector in S.HOBBY_INPUTS.items()
            if self._find(selector, visible=False).is_selected()
        ]

    def picture_accept(self) -> str:
        return self._find(S.PICTURE_INPUT, visible=False).get_attribute("accept") or ""

    def upload_picture(self, path: str) -> None:
        self._find(S.PICTURE_INPUT, visible=False).send_keys(os.path.abspath(path))

    ##################################################
    # State and City (react-select)
    ##################################################

    def _control(self, name: str):
        selector = {"state": S.STATE_CONTROL, "city": S.CITY_CONTROL}.get(name.lower())
        if selector is None:
            raise AssertionError(f'Unknown dropdown "{name}"')
        return self._find(selector, visible=False)

    def dropdown_enabled(self, name: str) -> bool:
        return self._find(S.DROPDOWN_INPUT, visible=False, within=self._control(name)).is_enabled()

    def menu_open(self) -> bool:
        return any(menu.is_displayed() for menu in self.driver.find_elements(By.CSS_SELECTOR, S.DROPDOWN_MENU))

    def open_dropdown(self, name: str) -> None:
        """Click the arrow; fall back to focusing the input and pressing Down."""
        control = self._control(name)
        indicator = self._find(S.DROPDOWN_INDICATOR, visible=False, within=control)
        navigation.js_click(self.driver, indicator)
        if not self.menu_open():
            field = self._find(S.DROPDOWN_INPUT, visible=False, within=control)
            field.send_keys(Keys.ARROW_DOWN)
        poll_until(self.driver, lambda driver: self.menu_open(), self.timeout, f"{name} menu did not open")

    def close_dropdown(self, name: str) -> None:
        self._find(S.DROPDOWN_INPUT, visible=False, within=self._control(name)).send_keys(Keys.ESCAPE)

    def dropdown_options(self, name: str) -> List[str]:
        """Open the menu, read its options and close it again."""
        self.open_dropdown(name)
        options = [option.text.strip() for option in self.driver.find_elements(By.CSS_SELECTOR, S.DROPDOWN_OPTION)]
        self.close_dropdown(name)
        return options

    def select(self, name: str, value: str) -> None:
        """Pick the option whose text equals ``value`` (case-insensitive)."""
        if not self.dropdown_enabled(name):
            raise AssertionError(f"{name} dropdown is disabled")
        self.open_dropdown(name)
        wanted = value.strip().lower()

        def _option(driver):
            for option in driver.find_elements(By.CSS_SELECTOR, S.DROPDOWN_OPTION):
                if option.text.strip().lower() == wanted:
                    return option
            return None

        option = poll_until(self.driver, _option, self.timeout, f'{name} has no option "{value}"')
        navigation.js_click(self.driver, option)
        logger.info("Selected %s %s", name, value)

    def menu_opens(self, name: str) -> bool:
        """Whether clicking the arrow opens the menu (it does not while disabled)."""
        navigation.js_click(
            self.driver, self._find(S.DROPDOWN_INDICATOR, visible=False, within=self._control(name))
        )
        return self.menu_open()

    ##################################################
    # Result modal
    ##################################################

    def result_shown(self) -> bool:
        return bool(self.driver.find_elements(By.CSS_SELECTOR, S.SHOWN_MODAL))

    def wait_result(self) -> Dict[str, str]:
        """Title and body text of the result modal."""
        title = self._find(S.RESULT_TITLE)
        poll_until(
            self.driver,
            lambda driver: RESULT_TITLE in title.text,
            self.timeout,
            lambda: f'Result modal title reads "{title.text}"',
        )
        return {"title": title.text, "body": self._find(S.RESULT_BODY).text}

    def close_result(self) -> None:
        navigation.js_click(self.driver, self._find(S.CLOSE_RESULT))
        poll_until(
            self.driver,
            lambda driver: not self.result_shown(),
            self.timeout,
            "Result modal did not close",
        )

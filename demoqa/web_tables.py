"""Web Tables page: add / edit / search / delete users through the modal form."""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys

from demoqa import selectors as S
from demoqa.grid import WebTablesGrid, normalize_text
from demoqa.waits import poll_until

logger = logging.getLogger(__name__)

READY_TIMEOUT = 20


def user_form_is_valid(fields: Mapping[str, str]) -> bool:
    """Whether the site will accept the edit form with these values."""

    def _non_negative(value) -> bool:
        try:
            return float(value) >= 0
        except (TypeError, ValueError):
            return False

    email = fields.get("Email") or ""
    return bool(
        fields.get("First Name")
        and fields.get("Last Name")
        and "@" in email
        and _non_negative(fields.get("Age"))
        and _non_negative(fields.get("Salary"))
        and fields.get("Department")
    )


def bulk_user(index: int, department: str = "QA") -> Dict[str, str]:
    """Deterministic user record for bulk inserts."""
    if department == "QA":
        return {
            "First Name": f"User{index}",
            "Last Name": "Bulk",
            "Email": f"bulk{index}@test.com",
            "Age": str(20 + index % 10),
            "Salary": str(1000 + index),
            "Department": "QA",
        }
    return {
        "First Name": f"Dept{department}{index}",
        "Last Name": "User",
        "Email": f"dept-{department}-{index}@test.com",
        "Age": str(21 + index % 5),
        "Salary": str(2000 + index),
        "Department": department,
    }


class WebTablesPage:
    """Interactions with https://demoqa.com/webtables."""

    def __init__(self, driver, base_url: str, grid: Optional[WebTablesGrid] = None, timeout: float = 10):
        self.driver = driver
        self.base_url = base_url
        self.timeout = timeout
        self.grid = grid or WebTablesGrid(driver, timeout=timeout)

    def _find(self, selector: str, visible: bool = True, timeout: Optional[float] = None):
        def _located(driver):
            element = driver.find_element(By.CSS_SELECTOR, selector)
            return element if (element.is_displayed() or not visible) else None

        state = "visible" if visible else "present"
        return poll_until(self.driver, _located, timeout or self.timeout, f'"{selector}" is not {state}')

    def open(self) -> None:
        """Navigate directly to the Web Tables page."""
        self.driver.get(self.base_url + "/webtables")
        self.wait_ready()

    def wait_ready(self) -> None:
        """Add button and table rendered."""
        self._find(S.ADD_BUTTON, timeout=READY_TIMEOUT)
        self._find(S.TABLE, timeout=READY_TIMEOUT)

    ##################################################
    # Modal
    ##################################################

    def wait_modal_open(self) -> None:
        """Modal form shown and faded in."""
        poll_until(
            self.driver,
            lambda driver: self._find(S.USER_FORM).value_of_css_property("opacity") != "0",
            self.timeout,
            "User form modal did not open",
        )

    def wait_modal_closed(self) -> None:
        """Modal gone and body no longer locked."""

        def _closed(driver):
            if driver.find_elements(By.CSS_SELECTOR, S.OPEN_MODAL):
                return False
            body = driver.find_element(By.TAG_NAME, "body")
            return "modal-open" not in (body.get_attribute("class") or "").split()

        poll_until(self.driver, _closed, self.timeout, "User form modal did not close")

    def is_modal_visible(self) -> bool:
        forms = self.driver.find_elements(By.CSS_SELECTOR, S.USER_FORM)
        return bool(forms) and forms[0].is_displayed()

    def set_field(self, label: str, value) -> None:
        """Clear a form field and type the value when it is non-empty."""
        if label not in S.FIELDS:
            raise AssertionError(f'Unknown user form field "{label}"')
        field = self._find(S.FIELDS[label])
        field.clear()
        text = "" if value is None else str(value)
        if text:
            field.send_keys(text)

    def fill_form(self, fields: Mapping[str, str]) -> None:
        for label, value in fields.items():
            self.set_field(label, value)

    def clear_form(self) -> None:
        self._find(S.USER_FORM)
        for label in S.FIELDS:
            self.set_field(label, "")

    def field_value(self, label: str) -> str:
        return self._find(S.FIELDS[label]).get_attribute("value") or ""

    def field_is_valid(self, label: str) -> bool:
        """HTML5 validity of a form field (what drives the red icon)."""
        if label not in S.FIELDS:
            raise AssertionError(f'Unknown user form field "{label}"')
        field = self._find(S.FIELDS[label], visible=False)
        return bool(self.driver.execute_script("return arguments[0].checkValidity();", field))

    def submit(self) -> None:
        self._find(S.SUBMIT).click()

    def open_add_form(self) -> None:
        self._find(S.ADD_BUTTON).click()
        self.wait_modal_open()

    def add_user(self, fields: Mapping[str, str]) -> None:
        """Open the add form, fill it and submit (positive path)."""
        logger.info("Adding user %s", fields.get("Email", ""))
        self.open_add_form()
        self.fill_form(fields)
        self.submit()
        self.wait_modal_closed()

    ##################################################
    # Search and rows
    ##################################################

    def search(self, text: str) -> None:
        box = self._find(S.SEARCH_BOX)
        box.clear()
        if text:
            box.send_keys(text)

    def search_value(self) -> str:
        return self._find(S.SEARCH_BOX).get_attribute("value") or ""

    def cell_texts(self):
        return [normalize_text(cell.text) for cell in self.driver.find_elements(By.CSS_SELECTOR, S.ALL_CELLS)]

    def find_row_with_cell(self, text: str):
        """Row containing a cell whose text equals ``text``, or None."""
        expected = normalize_text(text)
        for row in self.driver.find_elements(By.CSS_SELECTOR, S.ROW):
            cells = row.find_elements(By.CSS_SELECTOR, S.CELL)
            if any(normalize_text(cell.text) == expected for cell in cells):
                return row
        return None

    def wait_row_with_cell(self, text: str):
        return poll_until(
            self.driver,
            lambda driver: self.find_row_with_cell(text),
            self.timeout,
            f'Expected a cell exactly equal to "{text}"',
        )

    def wait_no_row_with_cell(self, text: str) -> None:
        poll_until(
            self.driver,
            lambda driver: self.find_row_with_cell(text) is None,
            self.timeout,
            f'Expected NO cell equal to "{text}"',
        )

    def wait_cell_containing(self, text: str) -> None:
        poll_until(
            self.driver,
            lambda driver: any(text in cell for cell in self.cell_texts()),
            self.timeout,
            f'No cell contains "{text}"',
        )

    def row_values(self, email: str) -> Dict[str, str]:
        """Column label -> cell text for the row holding ``email``."""
        self.search(email)
        row = self.wait_row_with_cell(email)
        cells = [normalize_text(cell.text) for cell in row.find_elements(By.CSS_SELECTOR, S.CELL)]
        return {label: cells[index] for label, index in S.COLUMNS.items() if index < len(cells)}

    def delete_user(self, email: str) -> bool:
        """Delete the row with ``email``; absent rows are a no-op.

        Returns whether a row was deleted.
        """
        self.search(email)
        self.grid.wait_grid_stable()
        row = self.find_row_with_cell(email)
        if row is None:
            logger.info("Row with email '%s' not present (idempotent delete)", email)
        else:
            self.grid.click_row_delete(row)
            self.grid.wait_grid_stable()
        self.wait_no_row_with_cell(email)
        return row is not None

    def open_edit_form(self, email: str) -> None:
        self.search(email)
        row = self.wait_row_with_cell(email)
        row.find_element(By.CSS_SELECTOR, S.EDIT_BUTTON).click()
        self.wait_modal_open()

    def edit_user(self, email: str, fields: Mapping[str, str]) -> bool:
        """Edit the row with ``email``.

        Valid data must close the modal; invalid data must leave it open.
        Returns whether the data was considered valid.
        """
        self.open_edit_form(email)
        self.fill_form(fields)
        valid = user_form_is_valid({label: self.field_value(label) for label in S.FIELDS})
        self.submit()
        if valid:
            self.wait_modal_closed()
        else:
            self._find(S.USER_FORM)
        return valid

    def press_escape(self) -> None:
        self.driver.find_element(By.TAG_NAME, "body").send_keys(Keys.ESCAPE)

    ##################################################
    # Pagination buttons
    ##################################################

    def pagination_button(self, which: str):
        selector = S.NEXT_PAGE if which == "Next" else S.PREVIOUS_PAGE
        return self._find(selector, visible=False)

    def is_button_enabled(self, which: str) -> bool:
        button = self.pagination_button(which)
        aria = (button.get_attribute("aria-disabled") or "").lower() == "true"
        return button.is_enabled() and button.get_attribute("disabled") is None and not aria

    def click_pagination_button(self, which: str, force: bool = False) -> None:
        """Click Next/Previous; ``force`` clicks through a disabled button via script."""
        button = self.pagination_button(which)
        if force:
            self.driver.execute_script("arguments[0].click();", button)
        else:
            button.click()
            self.grid.wait_grid_stable()

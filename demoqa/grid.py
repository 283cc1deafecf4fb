"""Pagination and row deletion for the Web Tables grid (React Table).

The grid re-renders after every mutation, so rows are re-queried each time and
never cached. Reads poll the live DOM with a bounded wait; the only fixed
delay is ``wait_grid_stable``, used where no observable signal exists.
"""

from __future__ import annotations

import logging
import re
from typing import List, NamedTuple

from selenium.common.exceptions import NoSuchElementException
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys

from demoqa import selectors as S
from demoqa.waits import poll_until, settle

logger = logging.getLogger(__name__)

TOTAL_PAGES_RE = re.compile(r"of\s*(\d+)", re.IGNORECASE)

WAIT_TIMEOUT = 10
GRID_SETTLE = 0.12


class PaginatorState(NamedTuple):
    """Current page and total pages as rendered by the paginator."""

    current_page: int
    total_pages: int


class DeletionResult(NamedTuple):
    """Outcome of deleting every row on a page."""

    before: PaginatorState
    after: PaginatorState
    deleted: int
    collapsed: bool


def normalize_text(text: str) -> str:
    """Replace non-breaking spaces and trim."""
    return (text or "").replace("\u00a0", " ").strip()


def parse_total_pages(text: str):
    """Return Y from "Page X of Y", or None when the text is not ready."""
    match = TOTAL_PAGES_RE.search(normalize_text(text))
    return int(match.group(1)) if match else None


class WebTablesGrid:
    """Paginator reader, page navigator and row deletion for one browser."""

    def __init__(self, driver, timeout: float = WAIT_TIMEOUT, settle_seconds: float = GRID_SETTLE):
        self.driver = driver
        self.timeout = timeout
        self.settle_seconds = settle_seconds

    ##################################################
    # Paginator reader
    ##################################################

    def total_pages(self) -> int:
        """Parse the total page count from the paginator text."""
        seen = {"text": ""}

        def _parsed(driver):
            info = driver.find_element(By.CSS_SELECTOR, S.PAGE_INFO)
            if not info.is_displayed():
                return False
            seen["text"] = normalize_text(info.text)
            return parse_total_pages(seen["text"])

        return poll_until(
            self.driver,
            _parsed,
            self.timeout,
            lambda: f'Paginator text not ready: "{seen["text"]}"',
        )

    def current_page(self) -> int:
        """Current page from the page-jump input (blank means page 1)."""
        value = poll_until(
            self.driver,
            lambda driver: self._visible_jump_input(driver) and self._jump_value(driver),
            self.timeout,
            "Page-jump input is not visible",
        )
        if not value.isdigit():
            raise AssertionError(f'Could not parse current page from "{value}"')
        return int(value)

    def state(self) -> PaginatorState:
        """Snapshot of the paginator."""
        return PaginatorState(self.current_page(), self.total_pages())

    @staticmethod
    def _visible_jump_input(driver):
        field = driver.find_element(By.CSS_SELECTOR, S.PAGE_JUMP)
        return field if field.is_displayed() else None

    @staticmethod
    def _jump_value(driver) -> str:
        field = driver.find_element(By.CSS_SELECTOR, S.PAGE_JUMP)
        return (field.get_attribute("value") or "").strip() or "1"

    ##################################################
    # Page navigator
    ##################################################

    def go_to_page(self, page) -> None:
        """Jump to a page through the input and wait for the grid to settle."""
        target = str(page)
        logger.info("Jumping to page %s", target)
        field = poll_until(
            self.driver, self._visible_jump_input, self.timeout, "Page-jump input is not visible"
        )
        field.clear()
        field.send_keys(target)
        field.send_keys(Keys.ENTER)

        seen = {"value": ""}

        def _accepted(driver):
            seen["value"] = self._jump_value(driver)
            return seen["value"] == target

        poll_until(
            self.driver,
            _accepted,
            self.timeout,
            lambda: f'Page jump to {target} not accepted; input shows "{seen["value"]}"',
        )
        self.total_pages()
        self.wait_grid_stable()

    def go_to_last_page(self) -> None:
        """Prefer the ">>" control; otherwise jump to the parsed total."""
        buttons = self.driver.find_elements(By.CSS_SELECTOR, S.LAST_PAGE)
        if buttons:
            logger.info("Jumping to the last page with the last-page control")
            buttons[0].click()
            self.wait_grid_stable()
        else:
            self.go_to_page(self.total_pages())

    ##################################################
    # Rows
    ##################################################

    def data_rows(self) -> List:
        """Visible data rows with non-empty text (pad rows excluded)."""
        rows = self.driver.find_elements(By.CSS_SELECTOR, S.DATA_ROW)
        return [row for row in rows if row.is_displayed() and row.text.strip()]

    def count_rows_on_page(self) -> int:
        """Number of real data rows on the current page."""
        poll_until(
            self.driver,
            lambda driver: driver.find_element(By.CSS_SELECTOR, S.TABLE_BODY),
            self.timeout,
            "Table body is not rendered",
        )
        return len(self.data_rows())

    def wait_grid_stable(self) -> None:
        """Query, let the grid re-render, query again."""
        self.driver.find_elements(By.CSS_SELECTOR, S.ROW)
        settle(self.settle_seconds)
        self.driver.find_elements(By.CSS_SELECTOR, S.ROW)

    def clear_filter(self) -> None:
        """Empty the search box when the page has one."""
        boxes = self.driver.find_elements(By.CSS_SELECTOR, S.SEARCH_BOX)
        if boxes:
            boxes[0].clear()

    def wait_row_count(self, predicate, description: str) -> int:
        """Poll the row count until ``predicate(count)`` holds."""
        seen = {"count": None}

        def _matches(_driver):
            seen["count"] = len(self.data_rows())
            return predicate(seen["count"])

        poll_until(
            self.driver,
            _matches,
            self.timeout,
            lambda: f"Expected {description} rows on the current page, found {seen['count']}",
        )
        return seen["count"]

    ##################################################
    # Row deletion
    ##################################################

    @staticmethod
    def click_row_delete(row) -> None:
        """Click a row's delete control, falling back to its SVG title."""
        buttons = row.find_elements(By.CSS_SELECTOR, S.DELETE_BUTTON)
        if buttons:
            buttons[0].click()
            return
        try:
            row.find_element(By.XPATH, S.DELETE_BUTTON_SVG).click()
        except NoSuchElementException as exc:
            raise AssertionError(f'Row "{normalize_text(row.text)}" has no delete control') from exc

    def delete_last_row_on_current_page(self) -> int:
        """Delete the last data row; returns the remaining row count."""
        self.clear_filter()
        before = self.count_rows_on_page()
        if before == 0:
            logger.info("No rows on the current page; nothing to delete")
            return 0

        self.click_row_delete(self.data_rows()[-1])
        self.wait_grid_stable()
        # at most n-1: a concurrent re-render may pull in fewer rows
        return self.wait_row_count(lambda count: count <= before - 1, f"at most {before - 1}")

    def delete_all_rows_on_current_page(self) -> DeletionResult:
        """Delete every row on the page.

        The page must either end up empty or collapse backwards (total pages
        shrink or the current page moves back); any other outcome fails.
        """
        self.clear_filter()
        before = self.state()
        initial = self.count_rows_on_page()
        if initial == 0:
            logger.info("No rows on page %s; nothing to delete", before.current_page)
            return DeletionResult(before, before, 0, False)

        deleted = 0
        # the set re-indexes after each click, so always take the first row
        for _ in range(initial):
            rows = self.data_rows()
            if not rows:
                break
            self.click_row_delete(rows[0])
            deleted += 1
            self.wait_grid_stable()

        after = self.state()
        collapsed = after.total_pages < before.total_pages or after.current_page < before.current_page
        logger.info(
            "Deleted %d row(s): page %s of %s -> page %s of %s%s",
            deleted,
            before.current_page,
            before.total_pages,
            after.current_page,
            after.total_pages,
            " (collapsed)" if collapsed else "",
        )

        if collapsed:
            if after.total_pages > before.total_pages:
                raise AssertionError(
                    f"Total pages increased after deletion: {before.total_pages} -> {after.total_pages}"
                )
            self.wait_grid_stable()
            limit = max(1, before.current_page - 1)
            seen = {"page": after.current_page}

            def _moved_back(driver):
                seen["page"] = self._jump_value(driver)
                return seen["page"].isdigit() and int(seen["page"]) <= limit

            poll_until(
                self.driver,
                _moved_back,
                self.timeout,
                lambda: f"Page input should move to page {limit} or earlier after collapse, shows {seen['page']}",
            )
            after = PaginatorState(int(seen["page"]), after.total_pages)
        else:
            self.wait_row_count(lambda count: count == 0, "0")

        return DeletionResult(before, after, deleted, collapsed)

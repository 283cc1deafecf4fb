"""Step definitions for Web Tables pagination and bulk row deletion.

One phrase maps to one behavior; the regex matcher is used only where a
phrase accepts alternatives (quoted or bare numbers, "row(s)").
"""

# pylint: disable=no-member,not-callable

import logging

from behave import then, use_step_matcher, when
from selenium.webdriver.common.by import By

from demoqa import selectors as S
from demoqa.waits import poll_until, settle

logger = logging.getLogger("demoqa.steps")


######################################################################
# Navigation
######################################################################
use_step_matcher("re")


@when(r'I go to page\s+"?(?P<page>\d+)"?')
def step_go_to_page(context, page):
    """Accepts: I go to page "2"  or  I go to page 2"""
    context.grid.go_to_page(int(page))


@then(r"I should see exactly (?P<count>\d+) row\(s\) on the current page")
def step_exact_rows(context, count):
    context.grid.wait_row_count(lambda n: n == int(count), f"exactly {count}")


@then(r"I should see at least (?P<count>\d+) row\(s\) on the current page")
def step_min_rows(context, count):
    context.grid.wait_row_count(lambda n: n >= int(count), f"at least {count}")


use_step_matcher("parse")


@when("I go to the last page")
def step_go_to_last_page(context):
    context.grid.go_to_last_page()


@when("I try to go to page {page:d}")
def step_try_go_to_page(context, page):
    context.grid.go_to_page(page)


@when("I click {which} page")
@when("I go to the {which} page using the button")
def step_click_pagination(context, which):
    context.web_tables.click_pagination_button(_button_name(which))


@when("I attempt to click {which} page even if disabled")
def step_force_click_pagination(context, which):
    context.web_tables.click_pagination_button(_button_name(which), force=True)


def _button_name(which: str) -> str:
    name = which.strip().lower()
    assert name in ("next", "previous"), f'Unknown pagination button "{which}"'
    return name.capitalize()


@when("I reload the page and wait for the grid")
def step_reload(context):
    context.browser.refresh()
    if context.browser.find_elements(By.CSS_SELECTOR, S.TABLE_BODY):
        context.grid.wait_grid_stable()


@when("I wait for {millis:d} milliseconds")
def step_wait(context, millis):
    """Explicit hard wait; diagnostics only."""
    settle(millis / 1000)


######################################################################
# Paginator assertions
######################################################################
@then("I should see the pagination controls")
def step_pagination_visible(context):
    poll_until(
        context.browser,
        lambda driver: driver.find_element(By.CSS_SELECTOR, S.PAGINATION).is_displayed(),
        context.settings.wait_timeout,
        "Pagination controls are not visible",
    )


@then("the total number of pages should be {expected:d}")
def step_total_pages(context, expected):
    total = context.grid.total_pages()
    assert total == expected, f"Expected {expected} page(s), paginator shows {total}"


@then("the total number of pages should be at least {minimum:d}")
def step_total_pages_min(context, minimum):
    total = context.grid.total_pages()
    assert total >= minimum, f"Expected at least {minimum} page(s), paginator shows {total}"


@then("the total number of pages should be at most {maximum:d}")
def step_total_pages_max(context, maximum):
    total = context.grid.total_pages()
    assert total <= maximum, f"Expected at most {maximum} page(s), paginator shows {total}"


@then('I should be on page "{page}"')
@then("the current page number should be {page}")
def step_on_page(context, page):
    current = context.grid.current_page()
    assert str(current) == page, f"Expected page {page}, page input shows {current}"


@then("I should be on the first page")
def step_on_first_page(context):
    current = context.grid.current_page()
    assert current == 1, f"Expected the first page, page input shows {current}"


@then("I should be on the last page")
def step_on_last_page(context):
    total = context.grid.total_pages()
    current = context.grid.current_page()
    assert current == total, f"Expected the last page ({total}), page input shows {current}"


@then("the current page should be within valid bounds")
def step_page_in_bounds(context):
    current, total = context.grid.state()
    assert 1 <= current <= total, f"Page {current} is outside 1..{total}"


@then("the current page should be valid or Next disabled")
def step_page_valid_or_next_disabled(context):
    """Tolerant check after a collapse."""
    current, total = context.grid.state()
    if current > total:
        assert not context.web_tables.is_button_enabled("Next"), (
            f"Page {current} of {total} but Next is still enabled"
        )


@then('I should not see pagination page "{page:d}"')
def step_page_absent(context, page):
    total = context.grid.total_pages()
    assert total < page, f"Page {page} should not exist, paginator shows {total} page(s)"


@then("the {which} page button should be {state}")
def step_button_state(context, which, state):
    enabled = context.web_tables.is_button_enabled(_button_name(which))
    expected = state.strip().lower() == "enabled"
    assert enabled == expected, f"{which} page button should be {state}"


######################################################################
# Rows
######################################################################
@then("I should see no rows on the current page")
@then("the grid should be empty")
def step_no_rows(context):
    context.grid.wait_row_count(lambda n: n == 0, "0")


@then("the grid should have at least one data row")
def step_any_rows(context):
    context.grid.wait_row_count(lambda n: n >= 1, "at least 1")


@when("I delete the last row of the current page")
@when("I try to delete the last row on the current page")
def step_delete_last_row(context):
    context.grid.delete_last_row_on_current_page()


@when("I delete all rows of the current page")
@when("I try to delete all rows on the current page")
def step_delete_all_rows(context):
    result = context.grid.delete_all_rows_on_current_page()
    logger.info("Bulk deletion: %s", result)

"""Step definitions for the Web Tables CRUD scenarios.

All interactions go through the browser (Selenium) against the live
DemoQA site; see demoqa/web_tables.py for the page helpers.
"""

# pylint: disable=no-member,not-callable
# The behave decorators (@given, @when, @then) are not recognized by pylint
# but they work correctly at runtime

from behave import given, when, then
from selenium.webdriver.common.by import By

from demoqa import navigation
from demoqa import selectors as S
from demoqa.tables import first_row
from demoqa.web_tables import bulk_user


######################################################################
# Navigation
######################################################################
@given("I open the DemoQA home page")
def step_open_home(context):
    """Navigate to the home page."""
    navigation.open_home(context.browser, context.settings.base_url)


@given("I open the Elements page")
def step_open_elements(context):
    """Home -> Elements card, menus only."""
    navigation.open_elements(context.browser, context.settings.base_url, context.settings.ready_timeout)


@given("I open the Web Tables page")
def step_open_web_tables(context):
    """Navigate directly to the Web Tables page."""
    context.web_tables.open()


@when('I go to "{section}" from the left menu')
def step_go_to_section(context, section):
    """Elements opens from the home card; other sections from the left menu."""
    if section.strip().lower() == "elements":
        step_open_elements(context)
        return
    navigation.select_menu_item(context.browser, section, context.settings.ready_timeout)
    if section.strip().lower() == "web tables":
        context.web_tables.wait_ready()


@when('I select "{item}"')
def step_select_menu_item(context, item):
    navigation.select_menu_item(context.browser, item, context.settings.ready_timeout)


######################################################################
# CRUD
######################################################################
@when("I add a user with:")
def step_add_user(context):
    """Table-driven creation (first data row)."""
    row = first_row(context.table)
    fields = {label: row.get(label, "") for label in S.FIELDS}
    context.web_tables.add_user(fields)


@when("I add N users {count:d}")
@when("I add {count:d} users")
def step_add_bulk_users(context, count):
    for index in range(1, count + 1):
        context.web_tables.add_user(bulk_user(index))


@when('I add {count:d} users into department "{department}"')
def step_add_department_users(context, count, department):
    for index in range(1, count + 1):
        context.web_tables.add_user(bulk_user(index, department))


@then('I should see the row with email "{email}"')
def step_see_row(context, email):
    """Filter by email and assert the cell is shown."""
    context.web_tables.search(email)
    context.web_tables.wait_row_with_cell(email)


@when('I delete the row with email "{email}"')
def step_delete_row(context, email):
    """Idempotent: deletes when present, no-op when absent."""
    context.web_tables.delete_user(email)


@then('I should not see the row with email "{email}"')
def step_not_see_row(context, email):
    context.web_tables.search(email)
    context.web_tables.wait_no_row_with_cell(email)


@when('I edit the row with email "{email}" and update fields:')
def step_edit_row(context, email):
    """Valid data must close the modal; invalid data must keep it open."""
    context.web_tables.edit_user(email, first_row(context.table))


@then('the row with email "{email}" should have values:')
def step_row_values(context, email):
    expected = first_row(context.table)
    actual = context.web_tables.row_values(email)
    for label, value in expected.items():
        assert actual.get(label) == value, f'{label}: expected "{value}", got "{actual.get(label)}"'


@then('I should see the row with {column} "{value}"')
def step_see_cell(context, column, value):
    """Any column: the grid holds a cell exactly equal to the value."""
    assert column in S.COLUMNS, f'Unknown column "{column}"'
    context.grid.clear_filter()
    context.web_tables.wait_row_with_cell(value)


@then('I should find a cell containing text "{text}"')
def step_cell_containing(context, text):
    context.web_tables.wait_cell_containing(text)


@then('all visible rows should have Department "{department}"')
def step_rows_department(context, department):
    index = S.COLUMNS["Department"]
    for row in context.grid.data_rows():
        cells = row.find_elements(By.CSS_SELECTOR, S.CELL)
        assert cells[index].text.strip() == department, f'Row "{row.text}" is not in {department}'


######################################################################
# Search
######################################################################
@when('I search for "{text}"')
@when('I filter the table by "{text}"')
def step_search(context, text):
    context.web_tables.search(text)
    context.grid.wait_grid_stable()


@when("I clear the search filter")
@when("I clear the table filter")
def step_clear_search(context):
    context.grid.clear_filter()


@then('the search box should contain "{expected}"')
def step_search_box_value(context, expected):
    value = context.web_tables.search_value()
    assert value == expected, f'Search box shows "{value}", expected "{expected}"'


######################################################################
# Modal form (negative and edge cases)
######################################################################
@when("I open the add user modal")
def step_open_add_modal(context):
    context.web_tables.open_add_form()


@when('I open the edit modal for email "{email}"')
def step_open_edit_modal(context, email):
    context.web_tables.open_edit_form(email)


@when("I clear all user form fields")
def step_clear_form(context):
    context.web_tables.clear_form()


@when('I fill only the web table field "{field}" with "{value}"')
def step_fill_field(context, field, value):
    context.web_tables.set_field(field, value)
    actual = context.web_tables.field_value(field)
    assert actual == value, f'{field} shows "{actual}", expected "{value}"'


@when("I try to submit the user form")
def step_try_submit(context):
    context.web_tables.submit()


@when("I press Escape to close the modal")
def step_press_escape(context):
    context.web_tables.press_escape()


@then("the add user modal should still be visible")
@then("the add user modal should be open")
def step_modal_visible(context):
    assert context.web_tables.is_modal_visible(), "User form modal is not visible"


@then("the add user modal should be closed")
def step_modal_closed(context):
    context.web_tables.wait_modal_closed()


@then("I should see validation icons for all required fields")
def step_all_fields_invalid(context):
    for label in S.FIELDS:
        assert not context.web_tables.field_is_valid(label), f"Field {label} should be invalid"


@then('I should see validation icon for field "{field}"')
def step_field_invalid(context, field):
    assert not context.web_tables.field_is_valid(field), f"Field {field} should be invalid"

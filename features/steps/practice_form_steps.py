"""Step definitions for the Practice Form page.

Validation is read from the browser (checkValidity and the form's
was-validated class) rather than from the styling Bootstrap applies.
"""

# pylint: disable=no-member,not-callable

import base64
import logging
import os

from behave import given, then, use_step_matcher, when

from demoqa.practice_form import ADDRESS_LENGTH, REQUIRED_FIELDS, RESULT_TITLE, multiline_address, parse_list

logger = logging.getLogger("demoqa.steps")

# 1x1 JPEG
TINY_JPEG = base64.b64decode(
    "/9j/4AAQSkZJRgABAQEASABIAAD/2wBDAP//////////////////////////////////////"
    "////////////////////////////////////////////////wgALCAABAAEBAREA/8QAFBAB"
    "AAAAAAAAAAAAAAAAAAAAAP/aAAgBAQABPxA="
)


######################################################################
# Open and submit
######################################################################
@given("I open the Practice Form page")
def step_open_practice_form(context):
    """Home -> Forms -> Practice Form, menus only."""
    context.practice_form.open()


@when("I submit the Practice Form")
def step_submit(context):
    context.practice_form.submit()


@then("the required errors should be shown on the Practice Form")
def step_required_errors_shown(context):
    page = context.practice_form
    assert page.was_validated(), "The form was not validated on submit"
    invalid = page.invalid_fields()
    assert invalid, f"None of {list(REQUIRED_FIELDS)} is invalid"
    assert not page.result_shown(), "The result modal opened for an incomplete form"


@then("the required errors should be cleared on the Practice Form")
def step_required_errors_cleared(context):
    invalid = context.practice_form.invalid_fields()
    assert invalid == [], f"Still invalid: {invalid}"


######################################################################
# Filling fields
######################################################################
@when("I fill the Practice Form with minimal valid data")
def step_fill_minimal_valid(context):
    page = context.practice_form
    page.fill_minimal(skip="Mobile")
    page.fill("Mobile", "9999999999")


@when("I fill minimal required fields")
def step_fill_minimal(context):
    context.practice_form.fill_minimal()


@when('I fill minimal required fields except "{label}"')
def step_fill_minimal_except(context, label):
    context.practice_form.fill_minimal(skip=label)


@when('I fill only "{label}" with "{value}"')
@when('I fill "{label}" with "{value}"')
@when('I type "{value}" into "{label}"')
def step_fill_field(context, label, value):
    context.practice_form.fill(label, value)


@when('I fill "Current Address" with a 300-char multiline text')
def step_fill_address(context):
    context.practice_form.fill("Current Address", multiline_address())


@when('I choose gender "{gender}"')
def step_choose_gender(context, gender):
    context.practice_form.choose_gender(gender)


@then('the "{label}" field value should be "{expected}"')
def step_field_value(context, label, expected):
    actual = context.practice_form.field_value(label)
    assert actual == expected, f'"{label}" holds "{actual}", expected "{expected}"'


@then("the Current Address value length should be 300")
def step_address_length(context):
    length = len(context.practice_form.field_value("Current Address"))
    # browsers may report CRLF for the line breaks
    assert ADDRESS_LENGTH <= length <= ADDRESS_LENGTH + 2, f"Current Address holds {length} characters"


@then("the Current Address value should contain line breaks")
def step_address_line_breaks(context):
    value = context.practice_form.field_value("Current Address")
    assert "\n" in value, "Current Address lost its line breaks"


######################################################################
# Field validity
######################################################################
@then("the Email field should be invalid")
def step_email_invalid(context):
    assert not context.practice_form.field_is_valid("Email"), "Email passed validation"


@then("the Mobile field should be invalid")
def step_mobile_invalid(context):
    page = context.practice_form
    if page.result_shown():
        page.close_result()
        raise AssertionError("The form was submitted with an invalid Mobile")
    assert not page.field_is_valid("Mobile"), "Mobile passed validation"


@then("the Mobile field should have maxlength 10")
def step_mobile_maxlength(context):
    maxlength = context.practice_form.mobile_maxlength()
    assert maxlength == "10", f'Mobile maxlength is "{maxlength}"'


######################################################################
# Hobbies and picture
######################################################################
@when("I choose hobbies {names}")
def step_choose_hobbies(context, names):
    context.practice_form.choose_hobbies(parse_list(names))


@then("the selected hobbies should be {names}")
def step_selected_hobbies(context, names):
    expected = sorted(parse_list(names))
    actual = sorted(context.practice_form.selected_hobbies())
    assert actual == expected, f"Selected hobbies {actual}, expected {expected}"


@then('the Picture field should have accept "{accept}"')
def step_picture_accept(context, accept):
    actual = context.practice_form.picture_accept()
    if not actual:
        logger.info("Picture input has no accept attribute; nothing to compare")
        return
    assert "".join(actual.split()) == "".join(accept.split()), f'Picture accepts "{actual}", expected "{accept}"'


@when('I upload picture "{file_name}"')
def step_upload_picture(context, file_name):
    """Writes a tiny JPEG under DOWNLOADS_DIR and uploads it."""
    path = os.path.join(context.settings.downloads_dir, file_name)
    with open(path, "wb") as picture:
        picture.write(TINY_JPEG)
    context.practice_form.upload_picture(path)
    context.aliases["picture"] = path


######################################################################
# Result modal
######################################################################
@then("I should see the Practice Form success modal")
def step_result_modal(context):
    result = context.practice_form.wait_result()
    context.aliases["result"] = result
    logger.info("Result modal: %s", result["title"])
    assert RESULT_TITLE in result["title"]


@then('the submitted student name should be "{name}"')
def step_result_name(context, name):
    result = context.aliases.get("result") or context.practice_form.wait_result()
    assert name in result["body"], f'"{name}" is not in the result modal'


@then('the modal should show picture file name containing "{name}"')
def step_result_picture(context, name):
    result = context.practice_form.wait_result()
    assert name in result["body"], f'No picture named "{name}" in the result modal'


@when("I close the Practice Form success modal")
def step_close_result(context):
    context.practice_form.close_result()


######################################################################
# State and City
######################################################################
@then("the City dropdown should be disabled")
def step_city_disabled(context):
    page = context.practice_form
    assert not page.dropdown_enabled("City"), "City is enabled before a State is chosen"
    assert not page.menu_opens("City"), "City menu opened while disabled"


@then("the City dropdown should be enabled")
def step_city_enabled(context):
    assert context.practice_form.dropdown_enabled("City"), "City is still disabled"


@when('I select State "{state}"')
def step_select_state(context, state):
    context.practice_form.select("State", state)


@when('I select City "{city}"')
def step_select_city(context, city):
    context.practice_form.select("City", city)


use_step_matcher("re")


@then(r"the City options should (?P<negated>not )?include (?P<names>\[.*\])")
def step_city_options(context, names, negated=None):
    options = context.practice_form.dropdown_options("City")
    for name in parse_list(names):
        if negated:
            assert name not in options, f'City offers "{name}": {options}'
        else:
            assert name in options, f'City does not offer "{name}": {options}'


use_step_matcher("parse")

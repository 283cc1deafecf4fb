"""Step definitions for the Alerts, Frames and Browser Windows pages.

Every step that raises a browser dialog also answers it; the dialog text is
kept in the scenario aliases for the assertions that follow.
"""

# pylint: disable=no-member,not-callable

from behave import given, then, use_step_matcher, when

from demoqa import selectors as S

use_step_matcher("re")


@given(r"I open the (?P<page>Alerts|Frames|Nested Frames|Browser Windows) page")
def step_open_alerts_page(context, page):
    context.alerts_windows.open(page)


use_step_matcher("parse")


######################################################################
# Dialogs
######################################################################
@when('I click the "{label}" alert button')
def step_click_alert_button(context, label):
    context.aliases["alert_text"] = context.alerts_windows.click_alert_button(label)


@then('I should see a browser alert containing "{expected}"')
def step_alert_text(context, expected):
    text = context.aliases.get("alert_text")
    assert text is not None, "No browser alert was raised in this scenario"
    assert expected in text, f'Alert reads "{text}", expected "{expected}"'


@when("I accept the confirm dialog")
def step_accept_confirm(context):
    context.aliases["alert_text"] = context.alerts_windows.answer_confirm(accept=True)


@when("I dismiss the confirm dialog")
def step_dismiss_confirm(context):
    context.aliases["alert_text"] = context.alerts_windows.answer_confirm(accept=False)


@then('the confirm result text should be "{expected}"')
def step_confirm_result(context, expected):
    actual = context.alerts_windows.result_text(S.CONFIRM_RESULT)
    assert actual == expected, f'Confirm result reads "{actual}", expected "{expected}"'


@when('I enter "{value}" in the prompt dialog')
def step_answer_prompt(context, value):
    context.aliases["alert_text"] = context.alerts_windows.answer_prompt(value)


@then('the prompt result text should include "{value}"')
def step_prompt_result(context, value):
    actual = context.alerts_windows.result_text(S.PROMPT_RESULT)
    assert value in actual, f'Prompt result reads "{actual}", expected it to include "{value}"'


######################################################################
# Frames
######################################################################
@then('the frame "{frame_id}" should contain "{text}"')
def step_frame_text(context, frame_id, text):
    body = context.alerts_windows.frame_text(frame_id)
    assert text in body, f'Frame "{frame_id}" reads "{body}"'


@then('the parent frame should contain "{text}"')
def step_parent_frame_text(context, text):
    body = context.alerts_windows.frame_text(S.PARENT_FRAME.split("#", 1)[1])
    assert text in body, f'Parent frame reads "{body}"'


@then('the child frame should contain "{text}"')
def step_child_frame_text(context, text):
    body = context.alerts_windows.child_frame_text()
    assert text in body, f'Child frame reads "{body}"'


######################################################################
# Windows
######################################################################
@when("I open a new tab")
def step_open_new_tab(context):
    context.alerts_windows.open_new_tab()


@then('the new tab should show content containing "{snippet}"')
def step_new_tab_content(context, snippet):
    heading = context.alerts_windows.sample_heading()
    assert snippet in heading, f'New tab reads "{heading}"'

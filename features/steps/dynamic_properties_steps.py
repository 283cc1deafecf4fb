"""Step definitions for the Dynamic Properties page.

The controls flip about five seconds after load. The "initially" steps only
assert the initial state when the page was fast enough to show it.
"""

# pylint: disable=no-member,not-callable

import logging
import time

from behave import given, then, use_step_matcher, when

from demoqa import navigation
from demoqa.dynamic_properties import is_danger_color
from demoqa.waits import settle

logger = logging.getLogger("demoqa.steps")


######################################################################
# Navigation
######################################################################
@given("I open the Dynamic Properties page")
def step_open_dynamic_properties(context):
    """Home -> Elements -> Dynamic Properties, menus only."""
    context.dynamic_properties.open()


@then("the Dynamic Properties header should be visible")
def step_header_visible(context):
    """The controls are the anchor; the header is optional across layouts."""
    page = context.dynamic_properties
    page.wait_loaded()
    header = page.header_text()
    if header:
        assert "dynamic properties" in header.lower(), f'Header reads "{header}"'
    else:
        logger.info("No main header; page recognized by its controls")


@when("I reload the page")
def step_reload_dynamic_properties(context):
    context.dynamic_properties.reload()


@then('the current path should still be "{path}"')
def step_path_unchanged(context, path):
    current = navigation.current_path(context.browser)
    assert current.rstrip("/") == path.rstrip("/"), f'Expected path "{path}", browser is on "{current}"'


@when("I fast-forward {seconds:d} seconds")
def step_fast_forward(context, seconds):
    """A real browser has no fake clock, so the page timers get real time."""
    settle(seconds)


######################################################################
# Initial states
######################################################################
@then('the "Enable After" button should be disabled initially')
def step_enable_after_initially(context):
    if context.dynamic_properties.is_enabled("Enable After"):
        logger.info("Enable After already enabled at first check; initial state not observable")
        return
    assert not context.dynamic_properties.is_enabled("Enable After")


@then('the "Color Change" button should not have the danger color initially')
def step_color_change_initially(context):
    if context.dynamic_properties.has_danger_class():
        logger.info("Color Change already has text-danger at first check; initial state not observable")


@then('the "Visible After" button should not be visible initially')
def step_visible_after_initially(context):
    if context.dynamic_properties.is_visible("Visible After"):
        logger.info("Visible After already visible at first check; initial state not observable")


######################################################################
# Final states (a trailing "# comment" is accepted)
######################################################################
use_step_matcher("re")


@then(r'the "Enable After" button should (?:be enabled|become enabled)(?:\s*#.*)?')
def step_enable_after_enabled(context):
    context.dynamic_properties.wait_enabled("Enable After")


@then(r'the "Color Change" button should (?:have the danger color|change color)(?:\s*#.*)?')
def step_color_change_danger(context):
    context.dynamic_properties.wait_danger_class()


@then(r'the "Visible After" button should (?:be visible|become visible)(?:\s*#.*)?')
def step_visible_after_visible(context):
    context.dynamic_properties.wait_visible("Visible After")


use_step_matcher("parse")


@then('the "Color Change" button should have the danger CSS color')
def step_color_change_css(context):
    page = context.dynamic_properties
    page.wait_danger_class()
    color = page.color()
    assert is_danger_color(color), f"Computed color {color} should be close to red (#dc3545) or white"


@when("I click the Enable After button after it enables")
def step_click_enable_after(context):
    context.dynamic_properties.wait_enabled("Enable After").click()


@when("I click the Visible After button once visible")
def step_click_visible_after(context):
    context.dynamic_properties.wait_visible("Visible After").click()


@then("the dynamic controls should exist with correct ids and tags")
def step_controls_are_buttons(context):
    tags = context.dynamic_properties.control_tags()
    for label, tag in tags.items():
        assert tag == "BUTTON", f'"{label}" is a <{tag}>, expected a <BUTTON>'


######################################################################
# Random id
######################################################################
@then('the "This text has random Id" text with a non-empty id should exist')
@then('I should see the "This text has random Id" text with a non-empty id')
@then("I should see the text with random id")
def step_random_id_present(context):
    random_id = context.dynamic_properties.random_id()
    logger.info("Random id: %s", random_id)


@then("I log the random id text content")
def step_log_random_id(context):
    page = context.dynamic_properties
    logger.info("Random id: %s, text: %s", page.random_id(), page.random_text())


@then("the random id should be unique in the document")
def step_random_id_unique(context):
    page = context.dynamic_properties
    random_id = page.random_id()
    count = page.id_count(random_id)
    assert count == 1, f'{count} elements carry id="{random_id}"'


@when('I capture the random id as "{key}"')
def step_capture_random_id(context, key):
    context.aliases[f"rand_{key}"] = context.dynamic_properties.random_id()


@then('the random ids "{first}" and "{second}" should be different')
def step_random_ids_differ(context, first, second):
    id_a = context.aliases.get(f"rand_{first}")
    id_b = context.aliases.get(f"rand_{second}")
    assert id_a and id_b, f'Random ids "{first}" and "{second}" were not both captured'
    assert id_a != id_b, f'Random ids "{first}" and "{second}" are both "{id_a}"'


######################################################################
# Timer
######################################################################
@when("I start the timer")
def step_start_timer(context):
    context.aliases["t0"] = time.monotonic()


@then("the elapsed time should be below {limit:d} ms")
def step_elapsed_below(context, limit):
    started = context.aliases.get("t0")
    assert started is not None, "The timer was not started"
    elapsed = (time.monotonic() - started) * 1000
    assert elapsed < limit, f"elapsed {elapsed:.0f}ms should be < {limit}ms"

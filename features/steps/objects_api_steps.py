"""Step definitions for the objects REST API.

Every call goes through ``context.api`` (demoqa/api.py), which switches to
the local mock store once the API reports its request limit. Each call
stores its answer as ``context.last_response`` / ``context.last_body``.
"""

# pylint: disable=no-member,not-callable

import time
import uuid

from behave import given, then, use_step_matcher, when

from demoqa.tables import get_by_path, rows_hash

_MISSING = object()


def _remember(context, response):
    context.last_response = response
    context.last_body = response.body
    return response


def _last_response(context):
    assert context.last_response is not None, "No API call was made in this scenario"
    return context.last_response


def _saved_id(context) -> str:
    object_id = context.aliases.get("objectId")
    assert isinstance(object_id, str) and object_id, "No saved object id (alias objectId)"
    return object_id


def _alias(context, name: str):
    assert name in context.aliases, f'Unknown alias "{name}"'
    return context.aliases[name]


def _field(context, path: str):
    value = get_by_path(_last_response(context).body, path, _MISSING)
    assert value is not _MISSING, f'Missing body field "{path}" in {context.last_body!r}'
    return value


def _array(context) -> list:
    body = _last_response(context).body
    assert isinstance(body, list), f"Expected a JSON array, got {type(body).__name__}: {body!r}"
    return body


######################################################################
# Setup
######################################################################
@given('the API base url is "{base}"')
def step_api_base_url(context, base):
    context.api.base_url = base.rstrip("/")


@given("a non-existent object id is prepared")
def step_bogus_id(context):
    context.aliases["objectId"] = f"not-found-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


######################################################################
# Create
######################################################################
@when('I create an API object named "{name}" with data')
def step_create_object(context, name):
    _remember(context, context.api.create(name, rows_hash(context.table)))


@given('I have a created API object named "{name}" with data')
def step_have_object(context, name):
    """Create and keep the new id as alias objectId."""
    response = _remember(context, context.api.create(name, rows_hash(context.table)))
    context.aliases["objectId"] = str(response.body["id"])


######################################################################
# Calls by saved id
######################################################################
@when("I get the API object by saved id")
def step_get_object(context):
    _remember(context, context.api.get(_saved_id(context)))


@when('I update the API object name to "{name}"')
def step_update_name(context, name):
    _remember(context, context.api.update_name(_saved_id(context), name))


@when("I delete the API object by saved id")
def step_delete_object(context):
    _remember(context, context.api.delete(_saved_id(context)))


@when("I patch the API object with data")
def step_patch_object(context):
    _remember(context, context.api.patch(_saved_id(context), rows_hash(context.table)))


use_step_matcher("re")


@when(r"I get the API object by saved id\s*\(allowing failure\)")
def step_get_object_tolerant(context):
    _remember(context, context.api.get(_saved_id(context), allow_failure=True))


@when(r'I update the API object name to "(?P<name>[^"]+)"\s*\(allowing failure\)')
def step_update_name_tolerant(context, name):
    _remember(context, context.api.update_name(_saved_id(context), name, allow_failure=True))


@when(r"I delete the API object by saved id\s*\(allowing failure\)")
def step_delete_object_tolerant(context):
    _remember(context, context.api.delete(_saved_id(context), allow_failure=True))


use_step_matcher("parse")


######################################################################
# Listing and tolerant reads
######################################################################
@when("I list all API objects")
def step_list_objects(context):
    _remember(context, context.api.list_all())


@when('I get the mock API object with id "{object_id}"')
def step_get_mock(context, object_id):
    _remember(context, context.api.get_mock(object_id))


@when('I get the mock API object with id from alias "{alias}"')
def step_get_mock_from_alias(context, alias):
    _remember(context, context.api.get_mock(str(_alias(context, alias))))


######################################################################
# Response assertions
######################################################################
@then("the last response status should be {expected:d}")
def step_status(context, expected):
    actual = _last_response(context).status
    assert actual == expected, f"Expected status {expected}, got {actual}: {context.last_body!r}"


@then('the last response status should be one of "{csv}"')
def step_status_one_of(context, csv):
    expected = [int(code.strip()) for code in csv.split(",") if code.strip()]
    actual = _last_response(context).status
    assert actual in expected, f"Expected status in {expected}, got {actual}: {context.last_body!r}"


@then('I save the response field "{path}" as "{alias}"')
def step_save_field(context, path, alias):
    context.aliases[alias] = _field(context, path)


@then('the last response field "{path}" should equal "{expected}"')
def step_field_equals_text(context, path, expected):
    value = _field(context, path)
    assert str(value) == expected, f'{path}: expected "{expected}", got "{value}"'


@then('the last response field "{path}" should equal {expected:d}')
def step_field_equals_number(context, path, expected):
    value = _field(context, path)
    assert float(value) == expected, f"{path}: expected {expected}, got {value!r}"


@then('the last response field "{path}" should equal alias "{alias}"')
def step_field_equals_alias(context, path, alias):
    value = _field(context, path)
    expected = _alias(context, alias)
    assert str(value) == str(expected), f'{path}: expected alias {alias} "{expected}", got "{value}"'


@then('the last response header "{name}" should contain "{expected}"')
def step_header_contains(context, name, expected):
    value = _last_response(context).header(name)
    assert expected.lower() in value.lower(), f'Header {name} is "{value}", expected to contain "{expected}"'


@then("the last response should be a JSON array")
def step_is_array(context):
    _array(context)


@then("the last response array length should be greater than {count:d}")
def step_array_length(context, count):
    length = len(_array(context))
    assert length > count, f"Expected more than {count} item(s), got {length}"


@then('the last response array should not include an object with id from alias "{alias}"')
def step_array_excludes(context, alias):
    unwanted = str(_alias(context, alias))
    ids = [str(item.get("id")) for item in _array(context) if isinstance(item, dict)]
    assert unwanted not in ids, f'Object "{unwanted}" is still listed'


@then('I save the first array item field "{path}" as "{alias}"')
def step_save_first_item(context, path, alias):
    items = _array(context)
    assert items, "The response array is empty"
    value = get_by_path(items[0], path, _MISSING)
    assert value is not _MISSING, f'Missing field "{path}" in {items[0]!r}'
    context.aliases[alias] = value


@then("the last response time should be under {limit:d} ms")
def step_response_time(context, limit):
    """Synthesized (mock) responses carry no timing and always pass."""
    duration = _last_response(context).duration_ms
    if duration is None:
        return
    assert duration < limit, f"Response took {duration:.0f} ms, limit {limit} ms"

"""Step definitions for the Upload and Download page.

The download lands in DOWNLOADS_DIR (Chrome preference set in
environment.py); the same file is then uploaded back through the input.
"""

# pylint: disable=no-member,not-callable

import os

from behave import given, then, use_step_matcher, when
from selenium.webdriver.common.by import By

from demoqa import navigation
from demoqa import selectors as S
from demoqa.downloads import clear_download, download_path, wait_for_download
from demoqa.waits import poll_until


def _visible(context, selector, timeout=None):
    def _located(driver):
        element = driver.find_element(By.CSS_SELECTOR, selector)
        return element if element.is_displayed() else None

    return poll_until(
        context.browser, _located, timeout or context.settings.wait_timeout, f'"{selector}" is not visible'
    )


def _remembered_path(context) -> str:
    path = context.aliases.get("dlFilePath")
    assert path, "No download was started in this scenario"
    return path


def _uploaded_text(context) -> str:
    text = _visible(context, S.UPLOADED_PATH).text.strip()
    assert text, "Uploaded path text is empty"
    return text


@given("I open the Upload and Download page")
def step_open_upload_download(context):
    """Home -> Elements -> Upload and Download, menus only."""
    timeout = context.settings.ready_timeout
    navigation.open_elements(context.browser, context.settings.base_url, timeout)
    navigation.select_menu_item(context.browser, "Upload and Download", timeout)
    navigation.wait_path(context.browser, r"/upload-download/?$", timeout)
    _visible(context, S.DOWNLOAD_BUTTON, timeout=context.settings.ready_timeout)


@when("I click the Download button")
@when("I click to download the file")
def step_click_download(context):
    """Click download and remember where the file will land."""
    path = download_path(context.settings.downloads_dir)
    clear_download(path)
    _visible(context, S.DOWNLOAD_BUTTON).click()
    context.aliases["dlFilePath"] = path


@then("the file should be downloaded")
@then("the file should exist in the downloads folder")
def step_file_downloaded(context):
    wait_for_download(_remembered_path(context), context.settings.file_timeout)


use_step_matcher("re")


@then(r'the file\s+"?(?P<file_name>[^"]+?)"?\s+should be downloaded')
def step_named_file_downloaded(context, file_name):
    wait_for_download(download_path(context.settings.downloads_dir, file_name), context.settings.file_timeout)


@then(r'the uploaded file name should contain\s+"?(?P<name>[^"]+?)"?\s*')
def step_uploaded_name_contains(context, name):
    text = _uploaded_text(context)
    assert name.lower() in text.lower(), f'Uploaded path "{text}" does not contain "{name}"'


use_step_matcher("parse")


@when("I upload the downloaded file")
def step_upload_downloaded(context):
    path = _remembered_path(context)
    wait_for_download(path, context.settings.file_timeout)
    upload = context.browser.find_element(By.CSS_SELECTOR, S.UPLOAD_INPUT)
    upload.send_keys(os.path.abspath(path))


@then("I should see the uploaded file name displayed")
def step_uploaded_name_displayed(context):
    expected = os.path.basename(_remembered_path(context))
    text = _uploaded_text(context)
    assert expected.lower() in text.lower(), f'Uploaded path "{text}" does not name "{expected}"'


@then("the uploaded path should include fakepath and the downloaded file name")
def step_uploaded_fakepath(context):
    expected = os.path.basename(_remembered_path(context))
    text = _uploaded_text(context).lower()
    assert "fakepath" in text, f'Uploaded path "{text}" should include "fakepath"'
    assert expected.lower() in text, f'Uploaded path "{text}" should include "{expected}"'


@then("the upload input should accept a single file only")
def step_single_file_upload(context):
    upload = context.browser.find_element(By.CSS_SELECTOR, S.UPLOAD_INPUT)
    assert upload.tag_name.lower() == "input", f"Upload control is a <{upload.tag_name}>"
    assert upload.get_attribute("type") == "file", "Upload control is not a file input"
    assert not context.browser.execute_script("return arguments[0].multiple;", upload), "Upload accepts multiple files"


@then("the download button should be accessible and enabled")
def step_download_accessible(context):
    button = _visible(context, S.DOWNLOAD_BUTTON)
    assert (button.get_attribute("aria-disabled") or "").lower() != "true", "aria-disabled is true"
    assert "Download" in button.text, f'Download control reads "{button.text}"'
    assert button.get_attribute("disabled") is None, "Download control is disabled"

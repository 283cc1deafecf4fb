"""
Test cases for the Dynamic Properties page helper
"""

from unittest import TestCase

from selenium.webdriver.common.by import By

from demoqa import selectors as S
from demoqa.dynamic_properties import DynamicPropertiesPage, is_danger_color, parse_rgb
from tests.fakes import FakeBrowser, FakeElement

URL = "https://demoqa.test/dynamic-properties"


class LateButton(FakeElement):
    """A button that turns enabled after ``reads`` checks"""

    def __init__(self, reads, **kwargs):
        super().__init__(tag_name="button", enabled=False, **kwargs)
        self.reads = reads

    def is_enabled(self):
        if self.reads > 0:
            self.reads -= 1
            return False
        return True


def make_page(enable_after=None, color_change=None, visible_after=None):
    browser = FakeBrowser(URL)
    browser.add(S.ENABLE_AFTER, enable_after or FakeElement(tag_name="button", enabled=False))
    browser.add(S.COLOR_CHANGE, color_change or FakeElement(tag_name="button", attributes={"class": "mt-4 btn"}))
    if visible_after is not None:
        browser.add(S.VISIBLE_AFTER, visible_after)
    browser.add(
        S.RANDOM_ID_TEXT,
        FakeElement(text="This text has random Id", attributes={"id": "Qx7a1"}, tag_name="p"),
        by=By.XPATH,
    )
    return browser, DynamicPropertiesPage(browser, "https://demoqa.test", timeout=0.5, ready_timeout=0.5)


######################################################################
#  C O L O R S
######################################################################
class TestColors(TestCase):
    """Reading computed colors"""

    def test_parse_rgb(self):
        """It should read rgb() and rgba() values"""
        self.assertEqual(parse_rgb("rgb(220, 53, 69)"), (220, 53, 69))
        self.assertEqual(parse_rgb("rgba(255, 255, 255, 1)"), (255, 255, 255))
        self.assertIsNone(parse_rgb("red"))
        self.assertIsNone(parse_rgb(None))

    def test_danger_color(self):
        """It should accept near-danger red and near-white only"""
        self.assertTrue(is_danger_color("rgba(220, 53, 69, 1)"))
        self.assertTrue(is_danger_color("rgb(200, 70, 80)"))
        self.assertTrue(is_danger_color("rgb(250, 250, 250)"))
        self.assertFalse(is_danger_color("rgb(0, 123, 255)"))
        self.assertFalse(is_danger_color("transparent"))


######################################################################
#  C O N T R O L S
######################################################################
class TestControls(TestCase):
    """State of the delayed buttons"""

    def test_unknown_control(self):
        """It should reject a label it does not know"""
        with self.assertRaises(AssertionError):
            DynamicPropertiesPage.selector("Disappear After")

    def test_enabled(self):
        """It should treat a disabled attribute as disabled"""
        _, page = make_page()
        self.assertFalse(page.is_enabled("Enable After"))
        _, page = make_page(enable_after=FakeElement(attributes={"disabled": "true"}))
        self.assertFalse(page.is_enabled("Enable After"))
        _, page = make_page(enable_after=FakeElement())
        self.assertTrue(page.is_enabled("Enable After"))

    def test_wait_enabled(self):
        """It should wait for the button to enable and return it"""
        button = LateButton(reads=2)
        _, page = make_page(enable_after=button)
        self.assertIs(page.wait_enabled("Enable After"), button)

    def test_wait_enabled_times_out(self):
        """It should fail when the button never enables"""
        _, page = make_page()
        with self.assertRaises(AssertionError) as ctx:
            page.wait_enabled("Enable After", timeout=0.2)
        self.assertIn("did not become enabled", str(ctx.exception))

    def test_visible(self):
        """It should report a control missing from the DOM as not visible"""
        _, page = make_page()
        self.assertFalse(page.is_visible("Visible After"))
        _, page = make_page(visible_after=FakeElement(displayed=False))
        self.assertFalse(page.is_visible("Visible After"))
        button = FakeElement(tag_name="button")
        _, page = make_page(visible_after=button)
        self.assertIs(page.wait_visible("Visible After"), button)

    def test_danger_class(self):
        """It should see the text-danger class and the computed color"""
        _, page = make_page()
        self.assertFalse(page.has_danger_class())
        with self.assertRaises(AssertionError):
            page.wait_danger_class(timeout=0.2)
        red = FakeElement(attributes={"class": "mt-4 text-danger btn"}, css={"color": "rgba(220, 53, 69, 1)"})
        _, page = make_page(color_change=red)
        page.wait_danger_class()
        self.assertTrue(is_danger_color(page.color()))

    def test_control_tags(self):
        """It should report upper-case tag names"""
        _, page = make_page(visible_after=FakeElement(tag_name="button"))
        self.assertEqual(set(page.control_tags().values()), {"BUTTON"})


######################################################################
#  R A N D O M   I D
######################################################################
class TestRandomId(TestCase):
    """The paragraph with a random id"""

    def test_random_id(self):
        """It should read the id and text of the paragraph"""
        _, page = make_page()
        self.assertEqual(page.random_id(), "Qx7a1")
        self.assertEqual(page.random_text(), "This text has random Id")

    def test_missing_id(self):
        """It should fail when the paragraph has no id"""
        browser, page = make_page()
        browser.add(S.RANDOM_ID_TEXT, FakeElement(text="This text has random Id"), by=By.XPATH)
        with self.assertRaises(AssertionError):
            page.random_id()

    def test_id_count(self):
        """It should count elements by exact id"""
        browser, page = make_page()
        browser.add('[id="Qx7a1"]', FakeElement())
        self.assertEqual(page.id_count("Qx7a1"), 1)
        self.assertEqual(page.id_count("other"), 0)

    def test_reload(self):
        """It should refresh and wait for the controls again"""
        browser, page = make_page()
        page.reload()
        self.assertEqual(browser.refreshes, 1)

    def test_header(self):
        """It should read the main header when there is one"""
        browser, page = make_page()
        self.assertEqual(page.header_text(), "")
        browser.add(S.MAIN_HEADER, FakeElement(text=" Dynamic Properties "))
        self.assertEqual(page.header_text(), "Dynamic Properties")
